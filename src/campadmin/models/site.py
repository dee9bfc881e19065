"""Site domain models (DTO)"""

from typing import Optional
from pydantic import Field

from .base import CamelModel
from .site_class import SiteType


class Site(CamelModel):
    """Physical bookable unit, optionally assigned to a site class"""

    id: str
    campground_id: str
    site_class_id: Optional[str] = None
    name: str = Field(..., min_length=1)
    site_number: str
    site_type: SiteType = SiteType.RV
    max_occupancy: int = Field(0, ge=0)
    rig_max_length: Optional[int] = None
    hookups_power: bool = False
    hookups_water: bool = False
    hookups_sewer: bool = False
    is_active: bool = True
