import logging
import math
from dataclasses import dataclass, field
from typing import Callable

from ..core.errors import (
    InvalidPropertyError,
    NegativeValuationError,
    NonFiniteValuationError,
    UnknownZoneError,
)
from ..core.metrics import VALUATIONS
from ..data.base import ExchangeRateProvider, PriceLookup
from ..data.fx_client import exchange_rate_provider
from ..data.price_table import price_lookup
from ..models.adjustments import (
    adjust_for_age,
    adjust_for_bathrooms,
    adjust_for_bedrooms,
    adjust_for_condition,
    adjust_for_energy,
    adjust_for_floor,
    adjust_for_type,
    weighted_area,
)
from ..models.factors import DEFAULT_FACTORS, FactorConfig
from ..models.property import Currency, PropertyInput, validate_property
from ..models.range_band import apply_band, range_band

logger = logging.getLogger(__name__)

Stage = Callable[[float, PropertyInput, FactorConfig], float]

# Applied in this order; the property-type multiplier always goes last.
STAGES: tuple[tuple[str, Stage], ...] = (
    ("age", lambda v, p, f: adjust_for_age(v, p.age_years, f)),
    ("bedrooms", lambda v, p, f: adjust_for_bedrooms(v, p.bedrooms, f)),
    ("bathrooms", lambda v, p, f: adjust_for_bathrooms(v, p.bathrooms, f)),
    ("floor", lambda v, p, f: adjust_for_floor(v, p.floor, p.has_elevator, p.property_type, f)),
    ("energy", lambda v, p, f: adjust_for_energy(v, p.energy_grade, f)),
    ("condition", lambda v, p, f: adjust_for_condition(v, p.condition, f)),
    ("property_type", lambda v, p, f: adjust_for_type(v, p.property_type, f)),
)

@dataclass
class Appraisal:
    """PEN figures for one property, before any currency conversion."""
    price_per_sqm: float
    weighted_area: float
    base_value: float
    stages: dict[str, float] = field(default_factory=dict)  # running value after each stage
    median: float = 0.0
    band: float = 0.0
    low: float = 0.0
    high: float = 0.0

@dataclass
class ValuationResult:
    low: float
    median: float
    high: float
    currency: Currency
    currency_label: str
    band: float
    exchange_rate: float         # PEN per USD used for the conversion
    summary: str
    appraisal: Appraisal

def _check_finite(stage: str, value: float) -> None:
    if not math.isfinite(value):
        raise NonFiniteValuationError(stage, value)

class ValuationService:
    """
    Orchestrates:
      input → validation → price lookup → weighted area → adjustments
            → range band → exchange rate → currency conversion
    Prices, exchange rate and factors are injected; defaults come from settings.
    """
    def __init__(self, prices: PriceLookup | None = None, fx: ExchangeRateProvider | None = None,
                 factors: FactorConfig = DEFAULT_FACTORS):
        self.prices = prices if prices is not None else price_lookup()
        self.fx = fx if fx is not None else exchange_rate_provider()
        self.factors = factors

    def appraise(self, prop: PropertyInput) -> Appraisal:
        """
        Point estimate and range in PEN. Raises InvalidPropertyError with all
        validation messages, UnknownZoneError when the zone has no price,
        NegativeValuationError if a stage leaves the value below zero and
        NonFiniteValuationError if the figures overflow.
        """
        errors = validate_property(prop)
        if errors:
            raise InvalidPropertyError(errors)

        price = self.prices.lookup(prop.district, prop.zone)
        if price is None or price <= 0:
            raise UnknownZoneError(prop.district, prop.zone)

        area = weighted_area(prop.covered_area, prop.free_area, prop.property_type, self.factors)
        value = price * area
        _check_finite("base_value", value)
        appraisal = Appraisal(price_per_sqm=price, weighted_area=area, base_value=value)

        for name, adjust in STAGES:
            value = adjust(value, prop, self.factors)
            _check_finite(name, value)
            if value < 0:
                raise NegativeValuationError(name, value)
            appraisal.stages[name] = value

        appraisal.median = value
        appraisal.band = range_band(prop, self.factors)
        appraisal.low, appraisal.high = apply_band(value, appraisal.band)
        _check_finite("range", appraisal.high)
        return appraisal

    async def estimate(self, prop: PropertyInput) -> ValuationResult:
        appraisal = self.appraise(prop)

        rate = await self.fx.fetch_rate()
        conversion = 1 / rate if prop.currency is Currency.USD else 1.0
        _check_finite("conversion", appraisal.high * conversion)

        ptype = prop.property_type.value if prop.property_type else "property"
        VALUATIONS.labels(property_type=ptype, currency=prop.currency.value).inc()
        logger.info(
            "valued %s in %s/%s at %.0f PEN (band %.3f)",
            ptype, prop.district, prop.zone, appraisal.median, appraisal.band,
        )

        return ValuationResult(
            low=appraisal.low * conversion,
            median=appraisal.median * conversion,
            high=appraisal.high * conversion,
            currency=prop.currency,
            currency_label=prop.currency.label,
            band=appraisal.band,
            exchange_rate=rate,
            summary=f"Estimate for {ptype} in {prop.zone}, {prop.district}",
            appraisal=appraisal,
        )
