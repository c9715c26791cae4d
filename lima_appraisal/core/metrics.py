import time
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

HTTP_REQUESTS = Counter("http_requests_total", "HTTP requests served", ["path", "method", "code"])
HTTP_LATENCY = Histogram("http_request_duration_seconds", "HTTP request latency", ["path", "method"])

VALUATIONS = Counter("valuations_total", "Completed valuations", ["property_type", "currency"])
FX_FALLBACKS = Counter("fx_rate_fallback_total", "Exchange-rate lookups answered with the fallback rate")

def _route_path(request: Request) -> str:
    # Template ("/v1/districts/{district}/zones") rather than the raw path, so
    # district names don't become label values.
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)

class PromMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response: Response = await call_next(request)
        path = _route_path(request)
        HTTP_REQUESTS.labels(path=path, method=request.method, code=str(response.status_code)).inc()
        HTTP_LATENCY.labels(path=path, method=request.method).observe(time.perf_counter() - started)
        return response

async def metrics_endpoint(request: Request):
    """GET /v1/metrics in the Prometheus text format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
