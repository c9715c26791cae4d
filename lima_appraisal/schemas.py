from typing import Literal
from pydantic import BaseModel, Field
from .core.config import settings
from .core.errors import InvalidPropertyError
from .models.property import (
    PROPERTY_TYPE_REQUIRED,
    ConditionGrade,
    Currency,
    EnergyGrade,
    PropertyInput,
    PropertyType,
    validate_property,
)

_ELEVATOR = {"with": True, "without": False}

class ValuationRequest(BaseModel):
    """
    Form payload. Missing numbers default to 0 and missing text to "" so that
    every rule violation is reported together by validate_property instead of
    failing on the first absent field.
    """
    district: str = Field(default="", examples=["Miraflores"])
    zone: str = Field(default="", examples=["Parque Kennedy"])
    property_type: str = Field(default="", examples=["apartment"])
    covered_area: float = Field(default=0, description="Covered (built) area in m²")
    free_area: float = Field(default=0, description="Uncovered area in m²")
    bedrooms: int = 0
    bathrooms: int = 0
    floor: int = 0
    elevator: Literal["with", "without"] | None = None
    age_years: int = 0
    energy_grade: str | None = Field(default=None, examples=["C"])
    condition: str | None = Field(default=None, examples=["good"])
    # Unset currency falls back to the CURRENCY env setting (PEN unless overridden)
    currency: Currency = Field(default_factory=lambda: Currency(settings.DEFAULT_CURRENCY.strip().upper()))

    def to_property(self) -> PropertyInput:
        """Normalize into the engine's input; rejects unknown property types up front."""
        ptype = PropertyType.parse(self.property_type)
        prop = PropertyInput(
            district=self.district.strip(),
            zone=self.zone.strip(),
            property_type=ptype,
            covered_area=self.covered_area,
            free_area=self.free_area,
            bedrooms=self.bedrooms,
            bathrooms=self.bathrooms,
            floor=self.floor,
            has_elevator=_ELEVATOR.get(self.elevator) if self.elevator else None,
            age_years=self.age_years,
            energy_grade=EnergyGrade.parse(self.energy_grade),
            condition=ConditionGrade.parse(self.condition),
            currency=self.currency,
        )
        if ptype is None and self.property_type.strip():
            unknown = f"Unknown property type '{self.property_type.strip()}'"
            raise InvalidPropertyError(
                [unknown if e == PROPERTY_TYPE_REQUIRED else e for e in validate_property(prop)]
            )
        return prop

class Range(BaseModel):
    low: float
    high: float

class Formatted(BaseModel):
    low: str
    median: str
    high: str

class Breakdown(BaseModel):
    """PEN internals: priced area, base value and the value after each adjustment."""
    price_per_sqm: float
    weighted_area: float
    base_value: float
    stages: dict[str, float]

class ValuationResponse(BaseModel):
    summary: str
    currency: Currency
    currency_label: str
    valuation: float
    range: Range
    band: float = Field(ge=0.08, le=0.20)
    exchange_rate: float
    formatted: Formatted
    breakdown: Breakdown
    disclaimer: str
    etag: str | None = None

class ZoneOut(BaseModel):
    name: str
    price_per_sqm: float

class DistrictOut(BaseModel):
    name: str
    property_types: list[str]
    zones: list[ZoneOut]

class ExchangeRateOut(BaseModel):
    base: str = "USD"
    quote: str = "PEN"
    rate: float
