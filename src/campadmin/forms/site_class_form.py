"""Site class form state and its mapping to API payloads.

The admin create and edit forms share one state model. Turning that state into
a request body differs only in how unset optional values are written:

- ``FormMode.CREATE`` leaves them out of the payload so the backend applies
  its own defaults.
- ``FormMode.EDIT`` sends them as ``null`` so a previously stored value can be
  cleared.

Money is entered in dollars and always leaves this module as integer cents.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Optional, Union

from pydantic import Field

from ..core.errors import FormValidationError
from ..models.base import CamelModel
from ..models.site_class import (
    ELECTRIC_AMPS,
    LODGING_TYPES,
    SAME_DAY_CUTOFF_DEFAULTS,
    MeteredBillingMode,
    RentalType,
    RvOrientation,
    SiteClass,
    SiteType,
    SlideOutPolicy,
    UtilityType,
    unique_in_order,
)
from .amenities import EQUIPMENT_TYPES, LODGING_AMENITIES, SITE_CLASS_AMENITIES, amenity_catalog

# Raw value of a numeric input: "" when the field is empty
FormNumber = Union[int, float, str, None]


class FormMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


class SiteClassForm(CamelModel):
    """Raw state of the site class form (money in dollars)"""

    name: str = ""
    description: str = ""
    default_rate: FormNumber = 0
    site_type: SiteType = SiteType.RV
    rental_type: RentalType = RentalType.TRANSIENT
    max_occupancy: FormNumber = 4
    occupants_included: FormNumber = 2
    extra_adult_fee: FormNumber = ""
    extra_child_fee: FormNumber = ""
    rig_max_length: FormNumber = ""
    min_nights: FormNumber = ""
    max_nights: FormNumber = ""
    same_day_cutoff_minutes: FormNumber = ""

    hookups_power: bool = False
    hookups_water: bool = False
    hookups_sewer: bool = False

    # RV only
    rv_orientation: RvOrientation = RvOrientation.BACK_IN
    electric_amps: list[int] = Field(default_factory=list)
    equipment_types: list[str] = Field(default_factory=list)
    slide_outs_accepted: SlideOutPolicy = SlideOutPolicy.ANY

    pet_friendly: bool = True
    accessible: bool = False
    amenity_tags: list[str] = Field(default_factory=list)

    metered_enabled: bool = False
    metered_type: Optional[UtilityType] = None
    metered_billing_mode: Optional[MeteredBillingMode] = None

    photos: list[str] = Field(default_factory=list)
    policy_version: str = ""
    is_active: bool = True


# ============== Number parsing ==============

def parse_number(value: FormNumber) -> Optional[Decimal]:
    """Parse a numeric input; empty input gives None.

    Raises:
        ValueError: input is not a finite number
    """
    if isinstance(value, bool):
        raise ValueError("must be a number")
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if value == "":
            return None
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        raise ValueError("must be a number")
    if not number.is_finite():
        raise ValueError("must be a number")
    return number


def dollars_to_cents(value: FormNumber) -> int:
    """Convert dollar input to cents, rounding half up to the nearest cent"""
    number = parse_number(value)
    if number is None:
        raise ValueError("is required")
    if number < 0:
        raise ValueError("must not be negative")
    try:
        cents = (number * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError("is too large")
    return int(cents)


def cents_to_dollars(cents: int) -> str:
    """Format cents as a two-decimal dollar string ("45.50")"""
    return f"{Decimal(cents) / 100:.2f}"


def _whole_number(value: FormNumber, minimum: int = 0) -> Optional[int]:
    number = parse_number(value)
    if number is None:
        return None
    if number != number.to_integral_value():
        raise ValueError("must be a whole number")
    if number < minimum:
        raise ValueError(f"must be at least {minimum}")
    return int(number)


def _optional_cents(value: FormNumber) -> Optional[int]:
    if parse_number(value) is None:
        return None
    return dollars_to_cents(value)


# ============== Validation ==============

def can_submit(form: SiteClassForm) -> bool:
    """Submit is enabled once the required fields hold usable values"""
    if not form.name.strip():
        return False
    try:
        dollars_to_cents(form.default_rate)
    except ValueError:
        return False
    return True


def _collect(errors: dict[str, str], field: str, parse, value):
    try:
        return parse(value)
    except ValueError as e:
        errors[field] = str(e)
        return None


def validate(form: SiteClassForm) -> dict:
    """Validate the form and return parsed numeric values.

    Raises:
        FormValidationError: with one message per offending field
    """
    errors: dict[str, str] = {}
    if not form.name.strip():
        errors["name"] = "is required"

    parsed = {
        "default_rate": _collect(errors, "default_rate", dollars_to_cents, form.default_rate),
        "max_occupancy": _collect(errors, "max_occupancy", lambda v: _whole_number(v, 1), form.max_occupancy),
        "occupants_included": _collect(errors, "occupants_included", _whole_number, form.occupants_included),
        "extra_adult_fee": _collect(errors, "extra_adult_fee", _optional_cents, form.extra_adult_fee),
        "extra_child_fee": _collect(errors, "extra_child_fee", _optional_cents, form.extra_child_fee),
        "rig_max_length": _collect(errors, "rig_max_length", _whole_number, form.rig_max_length),
        "min_nights": _collect(errors, "min_nights", lambda v: _whole_number(v, 1), form.min_nights),
        "max_nights": _collect(errors, "max_nights", lambda v: _whole_number(v, 1), form.max_nights),
        "same_day_cutoff_minutes": _collect(
            errors, "same_day_cutoff_minutes", _whole_number, form.same_day_cutoff_minutes
        ),
    }
    if "max_occupancy" not in errors and parsed["max_occupancy"] is None:
        errors["max_occupancy"] = "is required"
    if parsed["min_nights"] and parsed["max_nights"] and parsed["min_nights"] > parsed["max_nights"]:
        errors["max_nights"] = "must not be less than min nights"

    if form.site_type == SiteType.RV:
        bad_amps = [a for a in form.electric_amps if a not in ELECTRIC_AMPS]
        if bad_amps:
            errors["electric_amps"] = f"unsupported amperage {bad_amps[0]}"
        bad_equipment = [e for e in form.equipment_types if e not in EQUIPMENT_TYPES]
        if bad_equipment:
            errors["equipment_types"] = f"unknown equipment type {bad_equipment[0]!r}"

    known = {**SITE_CLASS_AMENITIES, **LODGING_AMENITIES}
    unknown = [t for t in form.amenity_tags if t not in known]
    if unknown:
        errors["amenity_tags"] = f"unknown amenity {unknown[0]!r}"

    if form.metered_enabled:
        if form.metered_type is None:
            errors["metered_type"] = "is required when metering is enabled"
        if form.metered_billing_mode is None:
            errors["metered_billing_mode"] = "is required when metering is enabled"

    if errors:
        raise FormValidationError(errors)
    return parsed


# ============== Payload mapping ==============

def form_to_payload(form: SiteClassForm, mode: FormMode) -> dict:
    """Map form state to a create or update payload (camelCase, cents)"""
    parsed = validate(form)
    payload: dict = {}

    def put(key: str, value):
        if value is None and mode is FormMode.CREATE:
            return
        payload[key] = value

    payload["name"] = form.name.strip()
    put("description", form.description.strip() or None)
    payload["defaultRate"] = parsed["default_rate"]
    payload["siteType"] = form.site_type.value
    payload["rentalType"] = form.rental_type.value
    payload["maxOccupancy"] = parsed["max_occupancy"]
    put("occupantsIncluded", parsed["occupants_included"])
    put("extraAdultFee", parsed["extra_adult_fee"])
    put("extraChildFee", parsed["extra_child_fee"])
    put("rigMaxLength", parsed["rig_max_length"])
    put("minNights", parsed["min_nights"])
    put("maxNights", parsed["max_nights"])
    put("sameDayCutoffMinutes", parsed["same_day_cutoff_minutes"])
    payload["hookupsPower"] = form.hookups_power
    payload["hookupsWater"] = form.hookups_water
    payload["hookupsSewer"] = form.hookups_sewer

    if form.site_type == SiteType.RV:
        payload["rvOrientation"] = form.rv_orientation.value
        payload["electricAmps"] = unique_in_order(form.electric_amps)
        payload["equipmentTypes"] = unique_in_order(form.equipment_types)
        slide_outs = form.slide_outs_accepted
        put("slideOutsAccepted", None if slide_outs == SlideOutPolicy.ANY else slide_outs.value)

    catalog = amenity_catalog(form.site_type)
    payload["amenityTags"] = [t for t in unique_in_order(form.amenity_tags) if t in catalog]
    payload["petFriendly"] = form.pet_friendly
    payload["accessible"] = form.accessible

    payload["meteredEnabled"] = form.metered_enabled
    if form.metered_enabled:
        payload["meteredType"] = form.metered_type.value
        payload["meteredBillingMode"] = form.metered_billing_mode.value
    else:
        put("meteredType", None)
        put("meteredBillingMode", None)

    payload["photos"] = [p.strip() for p in form.photos if p and p.strip()]
    put("policyVersion", form.policy_version.strip() or None)
    payload["isActive"] = form.is_active
    return payload


def _blank(value) -> FormNumber:
    return "" if value is None else value


def form_from_site_class(site_class: SiteClass) -> SiteClassForm:
    """Initialize the edit form from a stored site class"""
    return SiteClassForm(
        name=site_class.name,
        description=site_class.description or "",
        default_rate=cents_to_dollars(site_class.default_rate),
        site_type=site_class.site_type,
        rental_type=site_class.rental_type,
        max_occupancy=site_class.max_occupancy,
        occupants_included=site_class.occupants_included,
        extra_adult_fee="" if site_class.extra_adult_fee is None else cents_to_dollars(site_class.extra_adult_fee),
        extra_child_fee="" if site_class.extra_child_fee is None else cents_to_dollars(site_class.extra_child_fee),
        rig_max_length=_blank(site_class.rig_max_length),
        min_nights=_blank(site_class.min_nights),
        max_nights=_blank(site_class.max_nights),
        same_day_cutoff_minutes=_blank(site_class.same_day_cutoff_minutes),
        hookups_power=site_class.hookups_power,
        hookups_water=site_class.hookups_water,
        hookups_sewer=site_class.hookups_sewer,
        rv_orientation=site_class.rv_orientation or RvOrientation.BACK_IN,
        electric_amps=list(site_class.electric_amps),
        equipment_types=list(site_class.equipment_types),
        slide_outs_accepted=site_class.slide_outs_accepted,
        pet_friendly=site_class.pet_friendly,
        accessible=site_class.accessible,
        amenity_tags=list(site_class.amenity_tags),
        metered_enabled=site_class.metered_enabled,
        metered_type=site_class.metered_type,
        metered_billing_mode=site_class.metered_billing_mode,
        photos=list(site_class.photos),
        policy_version=site_class.policy_version or "",
        is_active=site_class.is_active,
    )


# ============== Selection helpers ==============

def toggle(values: list, value) -> list:
    """Add value if absent, otherwise remove it. Order of the rest is kept."""
    if value in values:
        return [v for v in values if v != value]
    return [*values, value]


def toggle_amenity(tags: list[str], amenity_id: str) -> list[str]:
    return toggle(tags, amenity_id)


def toggle_amp(amps: list[int], amp: int) -> list[int]:
    if amp not in ELECTRIC_AMPS:
        raise ValueError(f"unsupported amperage {amp}")
    return toggle(amps, amp)


def toggle_equipment(types: list[str], equipment_type: str) -> list[str]:
    if equipment_type not in EQUIPMENT_TYPES:
        raise ValueError(f"unknown equipment type {equipment_type!r}")
    return toggle(types, equipment_type)


def visible_sections(site_type: SiteType) -> set[str]:
    sections = {"basics", "pricing", "hookups", "amenities", "stay_rules", "metering"}
    if site_type == SiteType.RV:
        sections.add("rv_config")
    if site_type in LODGING_TYPES:
        sections.add("lodging_amenities")
    return sections


def same_day_cutoff_default(site_type: SiteType) -> int:
    return SAME_DAY_CUTOFF_DEFAULTS[site_type]


# ============== Type defaults ==============

_TYPE_DEFAULTS = {
    SiteType.RV: dict(
        electric_amps=[30], hookups_power=True, hookups_water=True, max_occupancy=6,
        pet_friendly=True, default_rate=55,
    ),
    SiteType.TENT: dict(max_occupancy=4, pet_friendly=True, default_rate=25, amenity_tags=["fire_pit"]),
    SiteType.CABIN: dict(
        hookups_power=True, hookups_water=True, hookups_sewer=True, max_occupancy=4,
        pet_friendly=False, default_rate=125,
    ),
    SiteType.GLAMPING: dict(max_occupancy=4, pet_friendly=False, default_rate=150),
    SiteType.GROUP: dict(max_occupancy=12, pet_friendly=True, default_rate=75, amenity_tags=["fire_pit"]),
}


def defaults_for_type(site_type: SiteType) -> SiteClassForm:
    """Starting form for a new class of the given type, with a suggested name"""
    form = SiteClassForm(site_type=site_type, **_TYPE_DEFAULTS[site_type])
    form.name = suggest_class_name(form)
    return form


def suggest_class_name(form: SiteClassForm) -> str:
    if form.site_type == SiteType.RV:
        orientation = "Pull-Through" if form.rv_orientation == RvOrientation.PULL_THROUGH else "Back-in"
        amps = "/".join(str(a) for a in form.electric_amps)
        hookups = []
        if amps:
            hookups.append(f"{amps}A")
        if form.hookups_water:
            hookups.append("W")
        if form.hookups_sewer:
            hookups.append("S")

        if not hookups:
            service = "Dry Camping"
        elif amps and form.hookups_water and form.hookups_sewer:
            service = f"Full Hookup ({amps}A)"
        else:
            service = "/".join(hookups)
        return f"{orientation} RV - {service}"

    if form.site_type == SiteType.TENT:
        return "Improved Tent Site" if form.hookups_water else "Primitive Tent Site"
    if form.site_type == SiteType.CABIN:
        return "Cabin"
    if form.site_type == SiteType.GLAMPING:
        return "Glamping Unit"
    return "Group Site"
