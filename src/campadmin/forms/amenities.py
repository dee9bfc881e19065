"""Fixed amenity and equipment catalogs"""

from ..models.site_class import LODGING_TYPES, SiteType

# General amenities offered on any site class
SITE_CLASS_AMENITIES = {
    "fire_pit": "Fire pit",
    "picnic_table": "Picnic table",
    "grill": "Grill",
    "shade": "Shaded",
    "waterfront": "Waterfront",
    "lake_view": "Lake view",
    "mountain_view": "Mountain view",
    "wifi": "Wi-Fi",
    "cable_tv": "Cable TV",
    "patio": "Patio",
    "level_pad": "Level pad",
    "paved_pad": "Paved pad",
    "gravel_pad": "Gravel pad",
    "grass": "Grass",
    "privacy": "Private / secluded",
    "near_bathhouse": "Near bathhouse",
}

# Only meaningful for lodging units (cabin, glamping)
LODGING_AMENITIES = {
    "kitchenette": "Kitchenette",
    "private_bathroom": "Private bathroom",
    "air_conditioning": "Air conditioning",
    "heating": "Heating",
    "linens": "Linens provided",
    "bunk_beds": "Bunk beds",
    "porch": "Covered porch",
    "mini_fridge": "Mini fridge",
    "microwave": "Microwave",
    "coffee_maker": "Coffee maker",
}

EQUIPMENT_TYPES = {
    "class_a": "Class A motorhome",
    "class_b": "Class B camper van",
    "class_c": "Class C motorhome",
    "fifth_wheel": "Fifth wheel",
    "travel_trailer": "Travel trailer",
    "toy_hauler": "Toy hauler",
    "truck_camper": "Truck camper",
    "popup": "Pop-up camper",
}


def amenity_catalog(site_type: SiteType) -> dict[str, str]:
    """Amenities selectable for a site type"""
    if site_type in LODGING_TYPES:
        return {**SITE_CLASS_AMENITIES, **LODGING_AMENITIES}
    return dict(SITE_CLASS_AMENITIES)
