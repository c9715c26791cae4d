import json
import logging
from pathlib import Path
from typing import Dict, List, Optional
from .base import PriceCatalog, District, Zone
from ..core.config import settings

logger = logging.getLogger(__name__)

# Asking prices per m² in Lima, PEN (August 2024)
LIMA_PRICES: Dict[str, dict] = {
    "San Isidro": {
        "types": ["Departamento", "Casa", "Terreno"],
        "zones": {
            "San Isidro Sur (Financiero)": 11781,
            "San Isidro Centro": 10850,
            "San Isidro Norte": 10200,
            "El Golf": 11500,
            "Country Club": 11200,
            "Orrantia": 10800,
            "Corpac": 9950,
        },
    },
    "Miraflores": {
        "types": ["Departamento", "Casa", "Terreno"],
        "zones": {
            "Malecon de Miraflores": 10800,
            "Parque Kennedy": 10200,
            "Reducto": 9800,
            "San Antonio": 9500,
            "Miraflores Alto": 9200,
            "28 de Julio": 8900,
            "Limite Barranco": 8700,
        },
    },
    "Santiago de Surco": {
        "types": ["Departamento", "Casa", "Terreno"],
        "zones": {
            "Monterrico": 7800,
            "Chacarilla": 7400,
            "Las Gardenias": 7200,
            "Valle Hermoso": 7000,
            "Surco Centro": 6800,
            "Surco Viejo": 6400,
            "Limite SJM": 5900,
        },
    },
}

class StaticPriceTable(PriceCatalog):
    """
    Read-only (district, zone) -> price table. Keys are matched exactly;
    a zone name only means something inside its own district.
    """
    def __init__(self, data: Dict[str, dict]):
        self._data = {
            district: {
                "types": list(entry.get("types", [])),
                "zones": {zone: float(price) for zone, price in entry["zones"].items()},
            }
            for district, entry in data.items()
        }

    def lookup(self, district: str, zone: str) -> Optional[float]:
        entry = self._data.get(district)
        if entry is None:
            return None
        return entry["zones"].get(zone)

    def district(self, name: str) -> Optional[District]:
        entry = self._data.get(name)
        if entry is None:
            return None
        return District(
            name=name,
            property_types=list(entry["types"]),
            zones=[Zone(name=z, price_per_sqm=p) for z, p in entry["zones"].items()],
        )

    def districts(self) -> List[District]:
        return [self.district(name) for name in self._data]

def load_price_table(path: str) -> StaticPriceTable:
    """
    Load a JSON file shaped like LIMA_PRICES:
    {"<district>": {"types": [...], "zones": {"<zone>": <price>}}}
    """
    with open(Path(path), encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict) or not all(isinstance(v, dict) and "zones" in v for v in data.values()):
        raise ValueError(f"{path}: expected an object of districts, each with a 'zones' object")
    logger.info("loaded price table from %s (%d districts)", path, len(data))
    return StaticPriceTable(data)

def price_lookup() -> StaticPriceTable:
    """
    Factory: the configured JSON table if PRICE_TABLE_PATH is set, else the built-in one.
    """
    if settings.PRICE_TABLE_PATH:
        return load_price_table(settings.PRICE_TABLE_PATH)
    return StaticPriceTable(LIMA_PRICES)
