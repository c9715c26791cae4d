from __future__ import annotations

from .factors import DEFAULT_FACTORS, FactorConfig
from .property import PropertyInput


def range_band(prop: PropertyInput, factors: FactorConfig = DEFAULT_FACTORS) -> float:
    """
    Half-width of the low/high range as a fraction of the point estimate.

    Older, walk-up, single-bedroom and land/commercial properties widen the
    band; elevators, larger layouts and apartments narrow it. Within each
    group only the first matching rule applies.
    """
    curve = factors.band
    band = curve.base
    band += min((prop.age_years / curve.age_step_years) * curve.age_step, curve.age_max)

    # Only an explicit "without" counts as a walk-up here
    if prop.has_elevator is False and prop.floor >= curve.walkup_floor:
        band += curve.walkup_widen
    elif prop.has_elevator:
        band -= curve.elevator_narrow

    if prop.bedrooms >= curve.many_bedrooms:
        band -= curve.many_bedrooms_narrow
    elif prop.bedrooms == 1:
        band += curve.single_bedroom_widen

    band += curve.by_type.get(prop.property_type, 0.0)
    return min(max(band, curve.min_band), curve.max_band)


def apply_band(point: float, band: float) -> tuple[float, float]:
    """(low, high) symmetric around the point estimate."""
    return point * (1 - band), point * (1 + band)
