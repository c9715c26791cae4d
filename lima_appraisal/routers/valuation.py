import json
from functools import lru_cache
from fastapi import APIRouter, Depends, Header, HTTPException, Request, Response
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import HTTP_304_NOT_MODIFIED, HTTP_404_NOT_FOUND
from ..schemas import ValuationRequest, ValuationResponse
from ..services.valuation_service import ValuationService, ValuationResult
from ..core.errors import InvalidPropertyError, UnknownZoneError, ValuationError
from ..core.security import require_api_key, rate_limit
from ..core.utils import format_money, weak_etag

router = APIRouter()

DISCLAIMER = "This valuation is an estimate from average zone prices and is not a formal appraisal."

@lru_cache(maxsize=1)
def service_dep() -> ValuationService:
    # Price table and rate provider are read-only, so one instance serves every request.
    return ValuationService()

def to_payload(result: ValuationResult) -> dict:
    label = result.currency_label
    appraisal = result.appraisal
    return {
        "summary": result.summary,
        "currency": result.currency.value,
        "currency_label": label,
        "valuation": round(result.median, 2),
        "range": {"low": round(result.low, 2), "high": round(result.high, 2)},
        "band": result.band,
        "exchange_rate": round(result.exchange_rate, 4),
        "formatted": {
            "low": format_money(result.low, label),
            "median": format_money(result.median, label),
            "high": format_money(result.high, label),
        },
        "breakdown": {
            "price_per_sqm": appraisal.price_per_sqm,
            "weighted_area": appraisal.weighted_area,
            "base_value": round(appraisal.base_value, 2),
            "stages": {name: round(v, 2) for name, v in appraisal.stages.items()},
        },
        "disclaimer": DISCLAIMER,
    }

VALUATION_PATH = "/v1/valuation"

def _error_message(error: dict) -> str:
    # ("body", "bedrooms") -> "bedrooms: Input should be a valid integer"
    loc = [str(part) for part in error.get("loc", ()) if part != "body"]
    return f"{'.'.join(loc) or 'body'}: {error.get('msg', 'invalid value')}"

async def validation_error_handler(request: Request, exc: RequestValidationError):
    """
    Payload type errors on the valuation endpoint use the same {"errors": [...]}
    shape as rule violations; other routes keep FastAPI's default body.
    """
    if request.url.path != VALUATION_PATH:
        return await request_validation_exception_handler(request, exc)
    return JSONResponse(
        status_code=422,
        content={"detail": {"errors": [_error_message(e) for e in exc.errors()]}},
    )

@router.post("/valuation", response_model=ValuationResponse)
async def post_valuation(
    body: ValuationRequest,
    response: Response,
    if_none_match: str | None = Header(default=None, alias="if-none-match"),
    _auth = Depends(require_api_key),     # API key guard
    _lim  = Depends(rate_limit),          # Rate limiting
    svc: ValuationService = Depends(service_dep),
):
    try:
        result = await svc.estimate(body.to_property())
    except InvalidPropertyError as exc:
        raise HTTPException(status_code=422, detail={"errors": exc.errors})
    except UnknownZoneError as exc:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail=str(exc))
    except ValuationError as exc:
        # negative or overflowing figures
        raise HTTPException(status_code=422, detail=str(exc))

    payload = to_payload(result)
    etag = weak_etag(json.dumps(payload, separators=(',',':'), sort_keys=True).encode("utf-8"))
    if if_none_match and if_none_match == etag:
        return Response(status_code=HTTP_304_NOT_MODIFIED, headers={"ETag": etag})
    payload["etag"] = etag
    response.headers["ETag"] = etag
    return payload
