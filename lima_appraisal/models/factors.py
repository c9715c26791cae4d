"""
Appraisal coefficients for Lima residential and commercial property.

Everything here is read-only. A FactorConfig is built once at import time and
handed to the engine; alternative calibrations are new instances, never
mutations of the default.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .property import ConditionGrade, EnergyGrade, PropertyType


def _frozen(mapping: dict) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class AgeCurve:
    annual_depreciation: float = 0.01
    max_depreciation: float = 0.30
    new_premium: float = 0.05
    new_max_age: int = 1          # ages 0..1 count as new construction


@dataclass(frozen=True)
class RoomCurve:
    base: int
    increment: float              # per room above base
    max_increment: float          # cap on the total increment
    decrement: float              # per room below base, uncapped


@dataclass(frozen=True)
class FloorCurve:
    # (lowest floor, highest floor or None for open-ended, factor); unmatched floors keep 1.0
    bands: Tuple[Tuple[int, Optional[int], float], ...] = (
        (1, 2, 0.92),
        (3, 8, 1.00),
        (9, 15, 0.96),
        (16, None, 0.88),
    )
    elevator_premium: float = 0.10
    high_floor_elevator_premium: float = 0.05
    high_floor_min: int = 6
    # Walk-up penalties, checked top-down: (from floor, factor)
    walkup_penalties: Tuple[Tuple[int, float], ...] = ((7, 0.70), (4, 0.85))


@dataclass(frozen=True)
class RangeCurve:
    base: float = 0.10
    age_step_years: float = 5.0
    age_step: float = 0.005
    age_max: float = 0.05
    walkup_floor: int = 7
    walkup_widen: float = 0.05
    elevator_narrow: float = 0.02
    many_bedrooms: int = 3
    many_bedrooms_narrow: float = 0.02
    single_bedroom_widen: float = 0.03
    by_type: Mapping[PropertyType, float] = field(default_factory=lambda: _frozen({
        PropertyType.LAND: 0.05,
        PropertyType.APARTMENT: -0.02,
        PropertyType.OFFICE: 0.02,
        PropertyType.RETAIL: 0.03,
    }))
    min_band: float = 0.08
    max_band: float = 0.20


@dataclass(frozen=True)
class FactorConfig:
    age: AgeCurve = field(default_factory=AgeCurve)
    bedrooms: RoomCurve = field(default_factory=lambda: RoomCurve(
        base=2, increment=0.08, max_increment=0.25, decrement=0.12))
    bathrooms: RoomCurve = field(default_factory=lambda: RoomCurve(
        base=2, increment=0.06, max_increment=0.18, decrement=0.15))
    floor: FloorCurve = field(default_factory=FloorCurve)
    band: RangeCurve = field(default_factory=RangeCurve)

    # Share of uncovered area counted towards the priced area
    free_area_ratio: Mapping[PropertyType, float] = field(default_factory=lambda: _frozen({
        PropertyType.APARTMENT: 0.25,
        PropertyType.HOUSE: 0.40,
        PropertyType.LAND: 0.90,
    }))
    # Types without their own ratio borrow this one's
    free_area_default: PropertyType = PropertyType.APARTMENT

    property_type: Mapping[PropertyType, float] = field(default_factory=lambda: _frozen({
        PropertyType.APARTMENT: 1.0,
        PropertyType.HOUSE: 1.12,
        PropertyType.LAND: 0.80,
        PropertyType.OFFICE: 0.95,
        PropertyType.RETAIL: 0.85,
    }))
    energy: Mapping[EnergyGrade, float] = field(default_factory=lambda: _frozen({
        EnergyGrade.A: 1.10,
        EnergyGrade.B: 1.05,
        EnergyGrade.C: 1.00,
        EnergyGrade.D: 0.95,
        EnergyGrade.E: 0.90,
        EnergyGrade.F: 0.85,
    }))
    condition: Mapping[ConditionGrade, float] = field(default_factory=lambda: _frozen({
        ConditionGrade.EXCELLENT: 1.05,
        ConditionGrade.GOOD: 1.00,
        ConditionGrade.REGULAR: 0.90,
        ConditionGrade.NEEDS_REMODEL: 0.75,
    }))


DEFAULT_FACTORS = FactorConfig()
