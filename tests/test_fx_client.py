"""
Exchange-rate provider: quote parsing, fallback on every failure mode, caching.
"""

import asyncio

import httpx
import pytest

from lima_appraisal.core.cache import cache
from lima_appraisal.core.config import settings
from lima_appraisal.data.fx_client import (
    FX_CACHE_KEY,
    FixedExchangeRate,
    HttpExchangeRate,
    exchange_rate_provider,
)

URL = "https://fx.test/v6/latest/PEN"


def _provider(handler):
    return HttpExchangeRate(URL, fallback=3.75, transport=httpx.MockTransport(handler))


def _fetch(provider):
    return asyncio.run(provider.fetch_rate())


class TestHttpExchangeRate:
    def test_inverts_pen_based_quote(self):
        seen = []

        def handler(request):
            seen.append(str(request.url))
            return httpx.Response(200, json={"result": "success", "rates": {"PEN": 1, "USD": 0.25}})

        assert _fetch(_provider(handler)) == pytest.approx(4.0)
        assert seen == [URL]

    def test_successful_rate_is_cached(self):
        calls = []

        def handler(request):
            calls.append(1)
            return httpx.Response(200, json={"rates": {"USD": 0.27}})

        provider = _provider(handler)
        first = _fetch(provider)
        second = _fetch(provider)
        assert first == pytest.approx(1 / 0.27)
        assert second == first
        assert len(calls) == 1

    @pytest.mark.parametrize("response", [
        httpx.Response(500),
        httpx.Response(404, json={"error": "not found"}),
        httpx.Response(200, text="<html>maintenance</html>"),
        httpx.Response(200, json={"result": "error"}),
        httpx.Response(200, json={"rates": {"EUR": 0.24}}),
        httpx.Response(200, json={"rates": {"USD": 0}}),
        httpx.Response(200, json={"rates": {"USD": "0.27"}}),
        httpx.Response(200, json={"rates": None}),
        httpx.Response(200, json=[1, 2, 3]),
    ])
    def test_bad_responses_fall_back(self, response):
        assert _fetch(_provider(lambda request: response)) == 3.75

    def test_network_error_falls_back(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        assert _fetch(_provider(handler)) == 3.75

    def test_fallback_is_not_cached(self):
        assert _fetch(_provider(lambda request: httpx.Response(502))) == 3.75
        assert cache.get(FX_CACHE_KEY) is None

        ok = _provider(lambda request: httpx.Response(200, json={"rates": {"USD": 0.5}}))
        assert _fetch(ok) == pytest.approx(2.0)

    def test_fallback_is_logged(self, caplog):
        with caplog.at_level("WARNING", logger="lima_appraisal.data.fx_client"):
            _fetch(_provider(lambda request: httpx.Response(500)))
        assert "using fallback 3.75" in caplog.text


class TestProviderFactory:
    def test_fixed_rate(self):
        assert _fetch(FixedExchangeRate(3.8)) == 3.8

    def test_factory_honours_fixed_setting(self, monkeypatch):
        monkeypatch.setattr(settings, "FX_PROVIDER", "fixed")
        monkeypatch.setattr(settings, "FX_FIXED_RATE", 3.7)
        provider = exchange_rate_provider()
        assert isinstance(provider, FixedExchangeRate)
        assert _fetch(provider) == 3.7

    def test_factory_defaults_to_http(self, monkeypatch):
        monkeypatch.setattr(settings, "FX_PROVIDER", "http")
        provider = exchange_rate_provider()
        assert isinstance(provider, HttpExchangeRate)
        assert provider.url == settings.FX_BASE_URL
        assert provider.fallback == settings.FX_FALLBACK_RATE
