"""Staff schedule templates: CRUD, apply to a week, auto-schedule settings"""

import logging
from datetime import date, datetime, timedelta
from typing import List, Optional

from ..core.errors import ActionFailed, FormValidationError, UpstreamError, UpstreamUnavailable
from ..data.cache import QueryCache
from ..data.client import CampreservClient
from ..models.schedule import (
    DAYS_OF_WEEK,
    ApplyTemplateResult,
    PlannedShift,
    RecurringConfig,
    ScheduleTemplate,
    ScheduleTemplateForm,
)
from ..models.toast import Toast

logger = logging.getLogger(__name__)

TEMPLATES_KEY = "schedule-templates"

UPSTREAM_ERRORS = (UpstreamError, UpstreamUnavailable)


def day_index(day: date) -> int:
    """Day of week with Sunday = 0"""
    return (day.weekday() + 1) % 7


def next_sunday(today: date) -> date:
    """Default week start: the coming Sunday, a full week ahead on Sundays"""
    return today + timedelta(days=6 - today.weekday() or 7)


def target_week_start(today: date, weeks_ahead: int) -> date:
    return next_sunday(today) + timedelta(weeks=weeks_ahead - 1)


def validate_template_form(form: ScheduleTemplateForm) -> None:
    errors = {}
    if not form.name.strip():
        errors["name"] = "is required"
    if not form.shifts:
        errors["shifts"] = "add at least one shift"
    if errors:
        raise FormValidationError(errors)


def plan_week(template: ScheduleTemplate, week_start: date) -> List[PlannedShift]:
    """Shifts the template produces for a week; unassigned slots are skipped"""
    planned = []
    for shift in template.shifts:
        if not shift.user_id:
            continue
        shift_date = week_start + timedelta(days=shift.day_of_week)
        start = datetime.combine(shift_date, datetime.strptime(shift.start_time, "%H:%M").time())
        end = datetime.combine(shift_date, datetime.strptime(shift.end_time, "%H:%M").time())
        minutes = max(0, round((end - start).total_seconds() / 60))
        planned.append(PlannedShift(
            user_id=shift.user_id,
            role_code=shift.role_code,
            shift_date=shift_date,
            start_time=start,
            end_time=end,
            scheduled_minutes=minutes,
        ))
    return planned


class ScheduleTemplateService:
    """Recurring generation runs on the backend; this only stores the settings."""

    def __init__(self, client: CampreservClient, cache: QueryCache):
        self.client = client
        self.cache = cache

    async def list_templates(self, campground_id: str) -> List[ScheduleTemplate]:
        return await self.cache.fetch(
            (TEMPLATES_KEY, campground_id),
            lambda: self.client.get_schedule_templates(campground_id),
        )

    async def save_template(
        self,
        campground_id: str,
        form: ScheduleTemplateForm,
        template_id: Optional[str] = None,
    ) -> tuple[ScheduleTemplate, Toast]:
        validate_template_form(form)
        payload = {
            "campgroundId": campground_id,
            "name": form.name.strip(),
            "description": form.description.strip() or None,
            "createdById": form.created_by_id,
            "shifts": [s.model_dump(by_alias=True, exclude_none=True) for s in form.shifts],
        }
        try:
            if template_id:
                template = await self.client.update_schedule_template(template_id, payload)
            else:
                template = await self.client.create_schedule_template(payload)
        except UPSTREAM_ERRORS as e:
            logger.warning(f"Save schedule template failed: {e}")
            raise ActionFailed("Could not save template. Please try again.", e) from e

        self.cache.invalidate((TEMPLATES_KEY, campground_id))
        return template, Toast(title="Template updated!" if template_id else "Template created!")

    async def delete_template(self, campground_id: str, template_id: str) -> Toast:
        try:
            await self.client.delete_schedule_template(template_id)
        except UPSTREAM_ERRORS as e:
            raise ActionFailed("Could not delete template.", e) from e
        self.cache.invalidate((TEMPLATES_KEY, campground_id))
        return Toast(title="Template deleted.")

    async def apply_template(
        self,
        campground_id: str,
        template_id: str,
        created_by: str,
        week_start: Optional[date] = None,
        today: Optional[date] = None,
    ) -> tuple[ApplyTemplateResult, Toast]:
        """Create the template's shifts for one week (default: next Sunday)"""
        if week_start is None:
            week_start = next_sunday(today or date.today())
        try:
            count = await self.client.apply_schedule_template(template_id, week_start, created_by)
        except UPSTREAM_ERRORS as e:
            logger.warning(f"Apply template {template_id} for {week_start} failed: {e}")
            raise ActionFailed("Could not apply template.", e) from e

        logger.info(f"Template {template_id} applied to week {week_start}: {count} shifts")
        self.cache.invalidate((TEMPLATES_KEY, campground_id))
        result = ApplyTemplateResult(template_id=template_id, week_start_date=week_start, count=count)
        return result, Toast(title=f"Created {count} shifts from template!")

    async def configure_auto_schedule(
        self, campground_id: str, template_id: str, config: RecurringConfig
    ) -> tuple[ScheduleTemplate, Toast]:
        if config.enabled:
            payload = {
                "isRecurring": True,
                "recurringDay": config.recurring_day,
                "recurringWeeksAhead": config.weeks_ahead,
            }
        else:
            payload = {"isRecurring": False, "recurringDay": None, "recurringWeeksAhead": None}
        try:
            template = await self.client.update_schedule_template(template_id, payload)
        except UPSTREAM_ERRORS as e:
            raise ActionFailed("Could not save auto-schedule settings.", e) from e

        self.cache.invalidate((TEMPLATES_KEY, campground_id))
        if config.enabled:
            weeks = "week" if config.weeks_ahead == 1 else "weeks"
            description = f"Runs every {DAYS_OF_WEEK[config.recurring_day]}, {config.weeks_ahead} {weeks} ahead"
            return template, Toast(title="Auto-schedule enabled", description=description)
        return template, Toast(title="Auto-schedule disabled")
