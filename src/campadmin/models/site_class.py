"""Site class domain models (DTO)"""

from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from pydantic import Field, field_validator

from .base import CamelModel


class SiteType(str, Enum):
    RV = "rv"
    TENT = "tent"
    CABIN = "cabin"
    GROUP = "group"
    GLAMPING = "glamping"


class RentalType(str, Enum):
    TRANSIENT = "transient"
    SEASONAL = "seasonal"
    FLEXIBLE = "flexible"


class RvOrientation(str, Enum):
    BACK_IN = "back_in"
    PULL_THROUGH = "pull_through"


class SlideOutPolicy(str, Enum):
    """Slide-out acceptance. ANY is sent to the server as null."""
    ANY = "any"
    ONE_SIDE = "one_side"
    BOTH_SIDES = "both_sides"
    NONE = "none"


class UtilityType(str, Enum):
    POWER = "power"
    WATER = "water"
    PROPANE = "propane"


class MeteredBillingMode(str, Enum):
    PER_READING = "per_reading"
    PER_NIGHT = "per_night"


ELECTRIC_AMPS = (15, 20, 30, 50, 100)

LODGING_TYPES = frozenset({SiteType.CABIN, SiteType.GLAMPING})

# Same-day booking cutoff hint, minutes before close. Display only.
SAME_DAY_CUTOFF_DEFAULTS = {
    SiteType.RV: 0,
    SiteType.TENT: 0,
    SiteType.GROUP: 0,
    SiteType.CABIN: 60,
    SiteType.GLAMPING: 60,
}


def unique_in_order(values: list) -> list:
    return list(dict.fromkeys(values))


class SiteClass(CamelModel):
    """Configuration template shared by a group of sites"""

    id: str
    campground_id: str
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    site_type: SiteType = SiteType.RV
    rental_type: RentalType = RentalType.TRANSIENT

    # Pricing (cents)
    default_rate: int = Field(..., ge=0)
    occupants_included: int = Field(2, ge=0)
    extra_adult_fee: Optional[int] = Field(None, ge=0)
    extra_child_fee: Optional[int] = Field(None, ge=0)

    # Capacity & fit
    max_occupancy: int = Field(4, ge=1)
    rig_max_length: Optional[int] = Field(None, ge=0)
    equipment_types: list[str] = Field(default_factory=list)
    rv_orientation: Optional[RvOrientation] = None
    electric_amps: list[int] = Field(default_factory=list)
    slide_outs_accepted: SlideOutPolicy = SlideOutPolicy.ANY

    # Stay constraints
    min_nights: Optional[int] = None
    max_nights: Optional[int] = None
    same_day_cutoff_minutes: Optional[int] = None

    hookups_power: bool = False
    hookups_water: bool = False
    hookups_sewer: bool = False

    pet_friendly: bool = True
    accessible: bool = False
    amenity_tags: list[str] = Field(default_factory=list)

    metered_enabled: bool = False
    metered_type: Optional[UtilityType] = None
    metered_billing_mode: Optional[MeteredBillingMode] = None

    photos: list[str] = Field(default_factory=list)
    policy_version: Optional[str] = None
    gl_code: Optional[str] = None
    client_account: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    is_active: bool = True

    @field_validator("slide_outs_accepted", mode="before")
    @classmethod
    def _null_means_any(cls, value):
        return SlideOutPolicy.ANY if value is None else value

    @field_validator("equipment_types", "electric_amps", "amenity_tags", "tags", mode="before")
    @classmethod
    def _dedupe(cls, value):
        if value is None:
            return []
        return unique_in_order(value)

    @property
    def default_rate_dollars(self) -> Decimal:
        return Decimal(self.default_rate) / 100


class SiteClassSummary(CamelModel):
    """Site class row for the admin listing"""
    site_class: SiteClass
    site_count: int = 0


class SiteClassListResponse(CamelModel):
    classes: list[SiteClassSummary]
    total: int
    active: int


class InlineRateRequest(CamelModel):
    """Inline rate edit, value as typed (dollars)"""
    rate: Union[str, float, int]


class DeleteImpact(CamelModel):
    site_class_id: str
    name: str
    affected_sites: int
    prompt: str
