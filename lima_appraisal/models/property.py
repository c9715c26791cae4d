import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..core.utils import normalize_label


class PropertyType(str, Enum):
    APARTMENT = "apartment"
    HOUSE = "house"
    LAND = "land"
    OFFICE = "office"
    RETAIL = "retail"

    @classmethod
    def parse(cls, raw: Optional[str]) -> Optional["PropertyType"]:
        """
        Substring match against English and Spanish names, first hit wins,
        so "Departamento dúplex" resolves to APARTMENT.
        """
        if not raw:
            return None
        text = normalize_label(raw)
        for ptype, names in _TYPE_NAMES:
            if any(name in text for name in names):
                return ptype
        return None


_TYPE_NAMES = (
    (PropertyType.APARTMENT, ("apartment", "departamento")),
    (PropertyType.HOUSE, ("house", "casa")),
    (PropertyType.LAND, ("land", "terreno")),
    (PropertyType.OFFICE, ("office", "oficina")),
    (PropertyType.RETAIL, ("retail", "local")),
)


class EnergyGrade(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"

    @classmethod
    def parse(cls, raw: Optional[str]) -> Optional["EnergyGrade"]:
        if not raw:
            return None
        try:
            return cls(raw.strip().upper())
        except ValueError:
            return None


class ConditionGrade(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    REGULAR = "regular"
    NEEDS_REMODEL = "needs-remodel"

    @classmethod
    def parse(cls, raw: Optional[str]) -> Optional["ConditionGrade"]:
        if not raw:
            return None
        return _CONDITION_NAMES.get(normalize_label(raw).replace("_", "-").replace(" ", "-"))


_CONDITION_NAMES = {
    "excellent": ConditionGrade.EXCELLENT,
    "excelente": ConditionGrade.EXCELLENT,
    "good": ConditionGrade.GOOD,
    "bueno": ConditionGrade.GOOD,
    "regular": ConditionGrade.REGULAR,
    "needs-remodel": ConditionGrade.NEEDS_REMODEL,
    "remodelar": ConditionGrade.NEEDS_REMODEL,
}


class Currency(str, Enum):
    PEN = "PEN"
    USD = "USD"

    @property
    def label(self) -> str:
        # Soles are shown with the local symbol, dollars with the ISO code
        return "S/" if self is Currency.PEN else "USD"


@dataclass(frozen=True)
class PropertyInput:
    district: str
    zone: str
    property_type: Optional[PropertyType]
    covered_area: float
    free_area: float = 0.0
    bedrooms: int = 1
    bathrooms: int = 1
    floor: int = 0
    # True = "with", False = "without", None = not stated
    has_elevator: Optional[bool] = None
    age_years: int = 0
    energy_grade: Optional[EnergyGrade] = None
    condition: Optional[ConditionGrade] = None
    currency: Currency = Currency.PEN


PROPERTY_TYPE_REQUIRED = "Property type is required"


def validate_property(prop: PropertyInput) -> list[str]:
    """
    Return every rule the input breaks, in a fixed order. Empty list = valid.
    """
    errors = []
    if not prop.district or not prop.zone:
        errors.append("District and zone are required")
    if prop.property_type is None:
        errors.append(PROPERTY_TYPE_REQUIRED)
    # NaN compares False against everything, so finiteness is checked first
    if not math.isfinite(prop.covered_area):
        errors.append("Covered area must be a finite number")
    elif prop.covered_area <= 0:
        errors.append("Covered area must be greater than 0")
    if not math.isfinite(prop.free_area):
        errors.append("Free area must be a finite number")
    elif prop.free_area < 0:
        errors.append("Free area cannot be negative")
    if prop.bedrooms < 1:
        errors.append("At least 1 bedroom is required")
    if prop.bathrooms < 1:
        errors.append("At least 1 bathroom is required")
    if prop.age_years < 0:
        errors.append("Age cannot be negative")
    return errors
