"""Staff schedule template routes"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..core.errors import NotFound
from ..models.schedule import (
    ApplyTemplateRequest,
    PlannedShift,
    RecurringConfig,
    ScheduleTemplate,
    ScheduleTemplateForm,
)
from ..models.toast import ActionResponse
from ..services.schedule_templates import next_sunday, plan_week
from .deps import Services, get_services


router = APIRouter(prefix="/campgrounds/{campground_id}/schedule-templates", tags=["schedule-templates"])


async def _find_template(services: Services, campground_id: str, template_id: str) -> ScheduleTemplate:
    templates = await services.schedule.list_templates(campground_id)
    template = next((t for t in templates if t.id == template_id), None)
    if template is None:
        raise NotFound(f"Template {template_id} not found")
    return template


@router.get("", response_model=List[ScheduleTemplate])
async def list_templates(campground_id: str, services: Services = Depends(get_services)):
    return await services.schedule.list_templates(campground_id)


@router.post("", response_model=ActionResponse, status_code=201)
async def create_template(
    campground_id: str,
    form: ScheduleTemplateForm,
    services: Services = Depends(get_services),
):
    template, toast = await services.schedule.save_template(campground_id, form)
    return ActionResponse(toast=toast, data=template.to_wire())


@router.patch("/{template_id}", response_model=ActionResponse)
async def update_template(
    campground_id: str,
    template_id: str,
    form: ScheduleTemplateForm,
    services: Services = Depends(get_services),
):
    template, toast = await services.schedule.save_template(campground_id, form, template_id)
    return ActionResponse(toast=toast, data=template.to_wire())


@router.delete("/{template_id}", response_model=ActionResponse)
async def delete_template(campground_id: str, template_id: str, services: Services = Depends(get_services)):
    toast = await services.schedule.delete_template(campground_id, template_id)
    return ActionResponse(toast=toast)


@router.get("/{template_id}/preview", response_model=List[PlannedShift])
async def preview_week(
    campground_id: str,
    template_id: str,
    week_start: Optional[date] = Query(None, alias="weekStart"),
    services: Services = Depends(get_services),
):
    """Shifts the template would create for a week (default: next Sunday)"""
    template = await _find_template(services, campground_id, template_id)
    return plan_week(template, week_start or next_sunday(date.today()))


@router.post("/{template_id}/apply", response_model=ActionResponse)
async def apply_template(
    campground_id: str,
    template_id: str,
    request: ApplyTemplateRequest,
    services: Services = Depends(get_services),
):
    result, toast = await services.schedule.apply_template(
        campground_id, template_id, request.created_by, week_start=request.week_start_date
    )
    return ActionResponse(toast=toast, data=result.to_wire())


@router.put("/{template_id}/recurring", response_model=ActionResponse)
async def configure_recurring(
    campground_id: str,
    template_id: str,
    config: RecurringConfig,
    services: Services = Depends(get_services),
):
    template, toast = await services.schedule.configure_auto_schedule(campground_id, template_id, config)
    return ActionResponse(toast=toast, data=template.to_wire())
