import os
from pydantic import BaseModel

class Settings(BaseModel):
    # Basic
    ENV: str = os.getenv("ENV", "dev")
    DEFAULT_CURRENCY: str = os.getenv("CURRENCY", "PEN")
    CACHE_TTL_SECONDS: int = int(os.getenv("CACHE_TTL_SECONDS", "43200"))

    # Price data (unset = built-in Lima table)
    PRICE_TABLE_PATH: str | None = os.getenv("PRICE_TABLE_PATH")

    # Exchange rate
    FX_PROVIDER: str = os.getenv("FX_PROVIDER", "http")            # http | fixed
    FX_BASE_URL: str = os.getenv("FX_BASE_URL", "https://open.er-api.com/v6/latest/PEN")
    FX_FALLBACK_RATE: float = float(os.getenv("FX_FALLBACK_RATE", "3.75"))
    FX_FIXED_RATE: float = float(os.getenv("FX_FIXED_RATE", "3.75"))
    FX_TIMEOUT_SECONDS: float = float(os.getenv("FX_TIMEOUT_SECONDS", "10"))

    # Security
    API_KEY: str | None = os.getenv("API_KEY")
    RATE_LIMIT_RPM: int = int(os.getenv("RATE_LIMIT_RPM", "60"))

    # CORS
    ALLOW_ORIGINS: str = os.getenv("ALLOW_ORIGINS", "*")

    # Cache
    USE_REDIS: bool = os.getenv("USE_REDIS", "false").lower() == "true"
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")

    # Metrics
    PROMETHEUS_ENABLED: bool = os.getenv("PROMETHEUS_ENABLED", "true").lower() == "true"

settings = Settings()
