"""
Shared fixtures. Environment is pinned before the app modules are imported:
no exchange-rate network calls, no API key, and a rate limit the suite can't hit.
"""

import os

os.environ["FX_PROVIDER"] = "fixed"
os.environ["RATE_LIMIT_RPM"] = "100000"
os.environ.pop("API_KEY", None)
os.environ.pop("PRICE_TABLE_PATH", None)

import pytest

from lima_appraisal.core.cache import cache
from lima_appraisal.data.fx_client import FX_CACHE_KEY, FixedExchangeRate
from lima_appraisal.data.price_table import LIMA_PRICES, StaticPriceTable
from lima_appraisal.models.property import (
    ConditionGrade,
    Currency,
    EnergyGrade,
    PropertyInput,
    PropertyType,
)
from lima_appraisal.services.valuation_service import ValuationService


@pytest.fixture(autouse=True)
def clear_fx_cache():
    """Each test starts without a cached exchange rate."""
    cache.delete(FX_CACHE_KEY)
    yield
    cache.delete(FX_CACHE_KEY)


@pytest.fixture
def kennedy_apartment():
    """80 m² apartment, 5th floor with elevator, 5 years old, Parque Kennedy (10,200 PEN/m²)."""
    return PropertyInput(
        district="Miraflores",
        zone="Parque Kennedy",
        property_type=PropertyType.APARTMENT,
        covered_area=80,
        free_area=0,
        bedrooms=2,
        bathrooms=2,
        floor=5,
        has_elevator=True,
        age_years=5,
        energy_grade=EnergyGrade.C,
        condition=ConditionGrade.GOOD,
        currency=Currency.PEN,
    )


@pytest.fixture
def prices():
    return StaticPriceTable(LIMA_PRICES)


@pytest.fixture
def service(prices):
    """Valuation service with the built-in prices and a fixed 3.75 PEN/USD rate."""
    return ValuationService(prices=prices, fx=FixedExchangeRate(3.75))
