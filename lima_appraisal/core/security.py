from datetime import datetime, timezone
from fastapi import Header, HTTPException, Request
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_429_TOO_MANY_REQUESTS
from .cache import cache
from .config import settings

def require_api_key(x_api_key: str | None = Header(default=None, alias="x-api-key")):
    """
    Reject requests without the configured x-api-key. No key configured = open API.
    """
    if settings.API_KEY and x_api_key != settings.API_KEY:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid API key")

def _bucket(request: Request) -> str:
    caller = request.headers.get("x-api-key") or "anon"
    host = request.client.host if request.client else "unknown"
    minute = datetime.now(timezone.utc).strftime("%Y%m%d%H%M")
    return f"rate:{caller}:{host}:{minute}"

def rate_limit(request: Request):
    """
    At most RATE_LIMIT_RPM valuation requests per caller and IP per clock minute.
    Counts are best-effort without Redis (one process, no atomic increment).
    """
    key = _bucket(request)
    raw = cache.get(key)
    try:
        count = int(raw) + 1 if raw is not None else 1
    except ValueError:
        count = 1
    if count > max(1, settings.RATE_LIMIT_RPM):
        raise HTTPException(status_code=HTTP_429_TOO_MANY_REQUESTS, detail="Rate limit exceeded")
    cache.set(key, str(count), ttl=60)
