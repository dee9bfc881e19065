"""Staff schedule template models (DTO)"""

from datetime import date, datetime
from typing import Optional

from pydantic import Field

from .base import CamelModel


DAYS_OF_WEEK = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class TemplateShift(CamelModel):
    """One shift slot in a weekly template. day_of_week 0 = Sunday."""
    day_of_week: int = Field(..., ge=0, le=6)
    start_time: str = Field(..., pattern=TIME_PATTERN)
    end_time: str = Field(..., pattern=TIME_PATTERN)
    role_code: Optional[str] = None
    user_id: Optional[str] = None


class ScheduleTemplate(CamelModel):
    id: str
    campground_id: str
    name: str
    description: Optional[str] = None
    is_active: bool = True
    is_recurring: bool = False
    recurring_day: Optional[int] = None
    recurring_weeks_ahead: Optional[int] = None
    last_applied_at: Optional[datetime] = None
    shifts: list[TemplateShift] = Field(default_factory=list)


class ScheduleTemplateForm(CamelModel):
    """Create/edit body for a template"""
    name: str = ""
    description: str = ""
    created_by_id: Optional[str] = None
    shifts: list[TemplateShift] = Field(default_factory=list)


class ApplyTemplateRequest(CamelModel):
    week_start_date: Optional[date] = None
    created_by: str


class ApplyTemplateResult(CamelModel):
    template_id: str
    week_start_date: date
    count: int


class RecurringConfig(CamelModel):
    """Auto-schedule settings; the recurrence itself runs server-side"""
    enabled: bool
    recurring_day: int = Field(0, ge=0, le=6)
    weeks_ahead: int = Field(1, ge=1, le=4)


class PlannedShift(CamelModel):
    """Concrete shift a template would produce for a given week"""
    user_id: str
    role_code: Optional[str] = None
    shift_date: date
    start_time: datetime
    end_time: datetime
    scheduled_minutes: int
