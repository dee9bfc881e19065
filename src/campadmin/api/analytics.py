"""Analytics dashboard routes (read-only)"""

from fastapi import APIRouter, Depends, HTTPException, Query

from ..models.analytics import AmenityAnalytics, NpsAnalytics
from ..services.analytics import DATE_RANGES
from .deps import Services, get_services


router = APIRouter(prefix="/analytics", tags=["analytics"])


def _check_range(date_range: str) -> str:
    if date_range not in DATE_RANGES:
        raise HTTPException(status_code=400, detail=f"range must be one of {', '.join(DATE_RANGES)}")
    return date_range


@router.get("/nps", response_model=NpsAnalytics)
async def get_nps(
    date_range: str = Query("last_12_months", alias="range"),
    services: Services = Depends(get_services),
):
    return await services.analytics.nps(_check_range(date_range))


@router.get("/amenities", response_model=AmenityAnalytics)
async def get_amenities(
    date_range: str = Query("last_12_months", alias="range"),
    services: Services = Depends(get_services),
):
    return await services.analytics.amenities(_check_range(date_range))
