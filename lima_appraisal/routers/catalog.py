from dataclasses import asdict
from fastapi import APIRouter, Depends, HTTPException
from starlette.status import HTTP_404_NOT_FOUND
from ..schemas import DistrictOut, ExchangeRateOut, ZoneOut
from ..services.valuation_service import ValuationService
from ..core.security import require_api_key
from .valuation import service_dep

router = APIRouter()

@router.get("/districts", response_model=list[DistrictOut])
def list_districts(
    _auth = Depends(require_api_key),
    svc: ValuationService = Depends(service_dep),
):
    """Districts with the property types and zones a valuation form can offer."""
    return [DistrictOut(**asdict(d)) for d in svc.prices.districts()]

@router.get("/districts/{district}/zones", response_model=list[ZoneOut])
def list_zones(
    district: str,
    _auth = Depends(require_api_key),
    svc: ValuationService = Depends(service_dep),
):
    found = svc.prices.district(district)
    if found is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail=f"Unknown district '{district}'")
    return [ZoneOut(**asdict(z)) for z in found.zones]

@router.get("/exchange-rate", response_model=ExchangeRateOut)
async def exchange_rate(
    _auth = Depends(require_api_key),
    svc: ValuationService = Depends(service_dep),
):
    """PEN per USD as used for conversions (fallback rate when the provider is down)."""
    return ExchangeRateOut(rate=await svc.fx.fetch_rate())
