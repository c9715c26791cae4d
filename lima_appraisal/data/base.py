from typing import Protocol, List, Optional
from dataclasses import dataclass, field

# ----- Data shapes (thin & explicit) -----

@dataclass
class Zone:
    name: str                 # e.g., "Parque Kennedy", "Monterrico"
    price_per_sqm: float      # PEN per m² of weighted area

@dataclass
class District:
    name: str
    property_types: List[str] = field(default_factory=list)  # as listed by the source data
    zones: List[Zone] = field(default_factory=list)

# ----- Protocols (interfaces) -----

class PriceLookup(Protocol):
    def lookup(self, district: str, zone: str) -> Optional[float]: ...

class PriceCatalog(PriceLookup, Protocol):
    def districts(self) -> List[District]: ...
    def district(self, name: str) -> Optional[District]: ...

class ExchangeRateProvider(Protocol):
    async def fetch_rate(self) -> float:
        """PEN per USD. Never raises; falls back to a fixed rate instead."""
        ...
