from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.logging import configure_logging, CorrelationIdMiddleware
from .core.metrics import PromMiddleware, metrics_endpoint
from .routers.catalog import router as catalog_router
from .routers.valuation import router as valuation_router, validation_error_handler

API_VERSION = "1.0.0"

def _origins() -> list[str]:
    origins = [o.strip() for o in settings.ALLOW_ORIGINS.split(",") if o.strip()]
    return origins or ["*"]

def _install_middleware(app: FastAPI) -> None:
    # Added innermost first: Prometheus wraps correlation id, which wraps CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=["ETag", "X-Request-Id"],
    )
    app.add_middleware(CorrelationIdMiddleware)
    if settings.PROMETHEUS_ENABLED:
        app.add_middleware(PromMiddleware)

def create_app() -> FastAPI:
    """
    Build the API. Tests and `uvicorn lima_appraisal.main:app` both go through here.
    """
    configure_logging()

    app = FastAPI(
        title="Lima Property Appraisal API",
        version=API_VERSION,
        description="Zone price per m² with age, room, floor, efficiency, condition and type "
                    "adjustments, returned as a low/median/high range in PEN or USD.",
    )
    _install_middleware(app)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    @app.get("/v1/health", tags=["meta"])
    def health():
        return {"status": "ok", "env": settings.ENV, "version": API_VERSION}

    @app.get("/v1/ping", tags=["meta"])
    def ping():
        return {"pong": True}

    if settings.PROMETHEUS_ENABLED:
        app.add_route("/v1/metrics", metrics_endpoint, methods=["GET"])

    app.include_router(valuation_router, prefix="/v1", tags=["valuation"])
    app.include_router(catalog_router, prefix="/v1", tags=["catalog"])
    return app

app = create_app()
