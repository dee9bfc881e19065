"""Domain models"""

from .site_class import (
    ELECTRIC_AMPS,
    MeteredBillingMode,
    RentalType,
    RvOrientation,
    SiteClass,
    SiteClassListResponse,
    SiteClassSummary,
    SiteType,
    SlideOutPolicy,
    UtilityType,
)
from .site import Site
from .schedule import ApplyTemplateResult, RecurringConfig, ScheduleTemplate, TemplateShift
from .toast import ActionResponse, Toast, ToastAction

__all__ = [
    "ELECTRIC_AMPS",
    "MeteredBillingMode",
    "RentalType",
    "RvOrientation",
    "SiteClass",
    "SiteClassListResponse",
    "SiteClassSummary",
    "SiteType",
    "SlideOutPolicy",
    "UtilityType",
    "Site",
    "ApplyTemplateResult",
    "RecurringConfig",
    "ScheduleTemplate",
    "TemplateShift",
    "ActionResponse",
    "Toast",
    "ToastAction",
]
