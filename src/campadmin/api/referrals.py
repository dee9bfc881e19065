"""Referral program routes"""

from typing import List

from fastapi import APIRouter, Depends

from ..models.referral import (
    ReferralPerformance,
    ReferralProgramForm,
    ReferralProgramUpdate,
    ReferralProgramView,
)
from ..models.toast import ActionResponse
from .deps import Services, get_services


router = APIRouter(prefix="/campgrounds/{campground_id}", tags=["referrals"])


@router.get("/referral-programs", response_model=List[ReferralProgramView])
async def list_programs(campground_id: str, services: Services = Depends(get_services)):
    return await services.referrals.list_programs(campground_id)


@router.post("/referral-programs", response_model=ActionResponse, status_code=201)
async def create_program(
    campground_id: str,
    form: ReferralProgramForm,
    services: Services = Depends(get_services),
):
    view, toast = await services.referrals.create_program(campground_id, form)
    return ActionResponse(toast=toast, data=view.to_wire())


@router.patch("/referral-programs/{program_id}", response_model=ActionResponse)
async def update_program(
    campground_id: str,
    program_id: str,
    changes: ReferralProgramUpdate,
    services: Services = Depends(get_services),
):
    """Partial update, e.g. {"isActive": false} to pause a code"""
    view, toast = await services.referrals.update_program(campground_id, program_id, changes)
    return ActionResponse(toast=toast, data=view.to_wire())


@router.get("/referral-performance", response_model=ReferralPerformance)
async def get_performance(campground_id: str, services: Services = Depends(get_services)):
    return await services.referrals.performance(campground_id)
