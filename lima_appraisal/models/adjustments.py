"""
Multiplicative adjustments applied, in order, to the PEN base value.

Each function takes the running valuation plus the attribute it prices and
returns the adjusted valuation. None of them clamp: a caller that needs a
non-negative result has to check it (see ValuationService).
"""
from __future__ import annotations

from typing import Optional

from .factors import DEFAULT_FACTORS, FactorConfig, RoomCurve
from .property import ConditionGrade, EnergyGrade, PropertyType


def free_area_ratio(ptype: Optional[PropertyType], factors: FactorConfig = DEFAULT_FACTORS) -> float:
    ratios = factors.free_area_ratio
    return ratios.get(ptype, ratios[factors.free_area_default])


def weighted_area(covered_area: float, free_area: float, ptype: Optional[PropertyType],
                  factors: FactorConfig = DEFAULT_FACTORS) -> float:
    """Covered area plus the type-dependent share of free (uncovered) area."""
    return covered_area + free_area * free_area_ratio(ptype, factors)


def adjust_for_age(value: float, age_years: int, factors: FactorConfig = DEFAULT_FACTORS) -> float:
    curve = factors.age
    if age_years <= curve.new_max_age:
        return value * (1 + curve.new_premium)
    depreciation = min(age_years * curve.annual_depreciation, curve.max_depreciation)
    return value * (1 - depreciation)


def _adjust_for_rooms(value: float, count: int, curve: RoomCurve) -> float:
    if count == curve.base:
        return value
    if count > curve.base:
        increment = min((count - curve.base) * curve.increment, curve.max_increment)
        return value * (1 + increment)
    # Below base: no floor on the decrement
    return value * (1 - (curve.base - count) * curve.decrement)


def adjust_for_bedrooms(value: float, bedrooms: int, factors: FactorConfig = DEFAULT_FACTORS) -> float:
    return _adjust_for_rooms(value, bedrooms, factors.bedrooms)


def adjust_for_bathrooms(value: float, bathrooms: int, factors: FactorConfig = DEFAULT_FACTORS) -> float:
    return _adjust_for_rooms(value, bathrooms, factors.bathrooms)


def floor_band_factor(floor: int, factors: FactorConfig = DEFAULT_FACTORS) -> float:
    for low, high, factor in factors.floor.bands:
        if floor >= low and (high is None or floor <= high):
            return factor
    return 1.0


def elevator_factor(floor: int, has_elevator: Optional[bool], factors: FactorConfig = DEFAULT_FACTORS) -> float:
    curve = factors.floor
    if has_elevator:
        factor = 1 + curve.elevator_premium
        if floor >= curve.high_floor_min:
            factor *= 1 + curve.high_floor_elevator_premium
        return factor
    for from_floor, penalty in curve.walkup_penalties:
        if floor >= from_floor:
            return penalty
    return 1.0


def adjust_for_floor(value: float, floor: int, has_elevator: Optional[bool], ptype: Optional[PropertyType],
                     factors: FactorConfig = DEFAULT_FACTORS) -> float:
    """Floor band times elevator factor; apartments only."""
    if ptype is not PropertyType.APARTMENT:
        return value
    return value * floor_band_factor(floor, factors) * elevator_factor(floor, has_elevator, factors)


def adjust_for_energy(value: float, grade: Optional[EnergyGrade], factors: FactorConfig = DEFAULT_FACTORS) -> float:
    return value * factors.energy.get(grade, 1.0)


def adjust_for_condition(value: float, condition: Optional[ConditionGrade],
                         factors: FactorConfig = DEFAULT_FACTORS) -> float:
    return value * factors.condition.get(condition, 1.0)


def adjust_for_type(value: float, ptype: Optional[PropertyType], factors: FactorConfig = DEFAULT_FACTORS) -> float:
    return value * factors.property_type.get(ptype, 1.0)
