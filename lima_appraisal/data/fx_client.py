import logging
from .base import ExchangeRateProvider
from ..core.cache import cache
from ..core.config import settings
from ..core.metrics import FX_FALLBACKS
import httpx

logger = logging.getLogger(__name__)

FX_CACHE_KEY = "fx:PEN:USD"

class ExchangeRateError(Exception):
    """Bad or missing rate in the provider's response. Never leaves HttpExchangeRate."""

class FixedExchangeRate(ExchangeRateProvider):
    """
    Constant rate for offline/dev use and tests.
    """
    def __init__(self, rate: float):
        self.rate = rate

    async def fetch_rate(self) -> float:
        return self.rate

class HttpExchangeRate(ExchangeRateProvider):
    """
    PEN-based quote from an open.er-api.com style endpoint:
    {"result": "success", "rates": {"USD": 0.2667, ...}} -> 1 / 0.2667 PEN per USD.
    Any failure (network, non-2xx, bad JSON, missing or zero rate) returns the
    fallback immediately, without retrying. Only real quotes are cached.
    """
    def __init__(self, url: str, fallback: float = 3.75, timeout: float = 10,
                 transport: httpx.AsyncBaseTransport | None = None):
        self.url = url
        self.fallback = fallback
        self.timeout = timeout
        self.transport = transport

    async def _quote(self) -> float:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            r = await client.get(self.url)
            r.raise_for_status()
            j = r.json()
        usd = (j.get("rates") or {}).get("USD") if isinstance(j, dict) else None
        if not isinstance(usd, (int, float)) or isinstance(usd, bool) or usd <= 0:
            raise ExchangeRateError(f"no usable USD rate in response: {usd!r}")
        return 1 / usd

    async def fetch_rate(self) -> float:
        cached = cache.get(FX_CACHE_KEY)
        if cached:
            return float(cached)
        try:
            rate = await self._quote()
        except Exception as exc:
            logger.warning("exchange rate lookup failed, using fallback %.2f: %s", self.fallback, exc)
            FX_FALLBACKS.inc()
            return self.fallback
        cache.set(FX_CACHE_KEY, repr(rate))
        return rate

def exchange_rate_provider() -> ExchangeRateProvider:
    """
    Factory picks fixed or http based on env flags.
    """
    if settings.FX_PROVIDER == "fixed":
        return FixedExchangeRate(settings.FX_FIXED_RATE)
    return HttpExchangeRate(
        settings.FX_BASE_URL,
        fallback=settings.FX_FALLBACK_RATE,
        timeout=settings.FX_TIMEOUT_SECONDS,
    )
