from typing import Any
from cachetools import TTLCache
from .config import settings

try:
    import redis  # Optional dependency
except Exception:
    redis = None

class Cache:
    """
    String key/value store for exchange-rate quotes and rate-limit counters.
    Redis when USE_REDIS is on and the package is installed, else a process-local
    TTLCache (per-key ttl is ignored there; entries live CACHE_TTL_SECONDS).
    """
    def __init__(self, ttl: int = settings.CACHE_TTL_SECONDS):
        self.ttl = ttl
        self.local = TTLCache(maxsize=4096, ttl=ttl)
        self.redis = None
        if settings.USE_REDIS and redis is not None:
            self.redis = redis.Redis.from_url(settings.REDIS_URL, decode_responses=True)

    def get(self, key: str) -> Any | None:
        if self.redis is not None:
            return self.redis.get(key)
        return self.local.get(key)

    def set(self, key: str, value: str, ttl: int | None = None) -> None:
        if self.redis is not None:
            self.redis.setex(key, ttl or self.ttl, value)
        else:
            self.local[key] = value

    def delete(self, key: str) -> None:
        if self.redis is not None:
            self.redis.delete(key)
        else:
            self.local.pop(key, None)

cache = Cache()
