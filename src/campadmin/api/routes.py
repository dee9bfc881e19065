"""REST API routes for the admin service"""

from typing import List

from fastapi import APIRouter, Depends, Query

from ..forms.site_class_form import (
    SiteClassForm,
    defaults_for_type,
    form_from_site_class,
    same_day_cutoff_default,
    visible_sections,
)
from ..models.site import Site
from ..models.site_class import (
    DeleteImpact,
    InlineRateRequest,
    SiteClassListResponse,
    SiteType,
)
from ..models.toast import ActionResponse
from ..services.site_classes import InlineRateEditor
from . import analytics, referrals, schedule
from .deps import Services, get_services


router = APIRouter(prefix="", tags=["site-classes"])


@router.get("/campgrounds/{campground_id}/site-classes", response_model=SiteClassListResponse)
async def list_site_classes(campground_id: str, services: Services = Depends(get_services)):
    """Site classes with the number of sites assigned to each"""
    return await services.site_classes.overview(campground_id)


@router.post("/campgrounds/{campground_id}/site-classes", response_model=ActionResponse, status_code=201)
async def create_site_class(
    campground_id: str,
    form: SiteClassForm,
    services: Services = Depends(get_services),
):
    created, toast = await services.site_classes.create_class(campground_id, form)
    return ActionResponse(toast=toast, data=created.to_wire())


@router.get("/site-types/{site_type}/defaults")
async def site_type_defaults(site_type: SiteType):
    """Starting form for a new class of this type"""
    form = defaults_for_type(site_type)
    return {
        "form": form.to_wire(),
        "sections": sorted(visible_sections(site_type)),
        "sameDayCutoffHint": same_day_cutoff_default(site_type),
    }


@router.get("/campgrounds/{campground_id}/site-classes/{class_id}/form", response_model=SiteClassForm)
async def get_edit_form(campground_id: str, class_id: str, services: Services = Depends(get_services)):
    """Edit form pre-filled from the stored class"""
    site_class = await services.site_classes.get_class(campground_id, class_id)
    return form_from_site_class(site_class)


@router.patch("/campgrounds/{campground_id}/site-classes/{class_id}", response_model=ActionResponse)
async def update_site_class(
    campground_id: str,
    class_id: str,
    form: SiteClassForm,
    services: Services = Depends(get_services),
):
    updated, toast = await services.site_classes.save_class(campground_id, class_id, form)
    return ActionResponse(toast=toast, data=updated.to_wire())


@router.post("/campgrounds/{campground_id}/site-classes/{class_id}/rate", response_model=ActionResponse)
async def update_inline_rate(
    campground_id: str,
    class_id: str,
    request: InlineRateRequest,
    services: Services = Depends(get_services),
):
    """Inline rate edit. Unusable input cancels the edit (ok=false, no request)."""
    site_class = await services.site_classes.get_class(campground_id, class_id)
    editor = InlineRateEditor(services.site_classes, campground_id)
    editor.activate(site_class)
    editor.value = str(request.rate)
    toast = await editor.handle_key("Enter")
    if toast is None:
        return ActionResponse(ok=False)
    return ActionResponse(toast=toast)


@router.get(
    "/campgrounds/{campground_id}/site-classes/{class_id}/delete-impact",
    response_model=DeleteImpact,
)
async def get_delete_impact(campground_id: str, class_id: str, services: Services = Depends(get_services)):
    site_class, count, prompt = await services.site_classes.delete_impact(campground_id, class_id)
    return DeleteImpact(site_class_id=site_class.id, name=site_class.name, affected_sites=count, prompt=prompt)


@router.delete("/campgrounds/{campground_id}/site-classes/{class_id}", response_model=ActionResponse)
async def delete_site_class(
    campground_id: str,
    class_id: str,
    confirm: bool = Query(False, description="Set after the user accepted the impact prompt"),
    services: Services = Depends(get_services),
):
    toast = await services.site_classes.delete_class(campground_id, class_id, confirmed=confirm)
    return ActionResponse(toast=toast)


@router.get("/campgrounds/{campground_id}/sites", response_model=List[Site])
async def list_sites(campground_id: str, services: Services = Depends(get_services)):
    return await services.site_classes.list_sites(campground_id)


@router.post("/undo/{undo_id}", response_model=ActionResponse)
async def run_undo(undo_id: str, services: Services = Depends(get_services)):
    """Run a toast's undo action (single use)"""
    toast = await services.undo.run(undo_id)
    return ActionResponse(toast=toast)


router.include_router(schedule.router)
router.include_router(referrals.router)
router.include_router(analytics.router)
