from typing import Dict, List, Optional

CATEGORIES: List[str] = [
    "T-Shirts",
    "Shirts",
    "Jeans",
    "Pants",
    "Dresses",
    "Skirts",
    "Jackets",
    "Sweaters",
    "Shoes",
    "Accessories",
]

STYLES = {"casual", "business", "evening", "sporty", "formal"}

OCCASIONS: List[str] = [
    "Work/Office",
    "Casual/Weekend",
    "Date Night",
    "Gym/Workout",
    "Party/Event",
    "Travel",
    "Interview",
    "Wedding/Formal",
]

# Garment role used by the compatibility rules; distinct from the catalog category.
SLOT_TOP = "TOP"
SLOT_BOTTOM = "BOTTOM"
SLOT_SHOES = "SHOES"
SLOT_DRESS = "DRESS"
SLOT_OUTERWEAR = "JACKET/COAT"
SLOT_ACCESSORY = "ACCESSORY"

CATEGORY_SLOTS: Dict[str, str] = {
    "T-Shirts": SLOT_TOP,
    "Shirts": SLOT_TOP,
    "Sweaters": SLOT_TOP,
    "Jeans": SLOT_BOTTOM,
    "Pants": SLOT_BOTTOM,
    "Skirts": SLOT_BOTTOM,
    "Shoes": SLOT_SHOES,
    "Dresses": SLOT_DRESS,
    "Jackets": SLOT_OUTERWEAR,
    "Accessories": SLOT_ACCESSORY,
}

_CATEGORY_LOOKUP = {c.lower(): c for c in CATEGORIES}


def canonical_category(value: Optional[str]) -> Optional[str]:
    """Return the catalog spelling of ``value`` or ``None`` when it is not a known category."""
    if not value:
        return None
    return _CATEGORY_LOOKUP.get(value.strip().lower())


def category_slot(category: Optional[str]) -> Optional[str]:
    canonical = canonical_category(category)
    if canonical is None:
        return None
    return CATEGORY_SLOTS[canonical]


def get_taxonomy() -> Dict[str, List[str]]:
    return {
        "categories": list(CATEGORIES),
        "styles": sorted(STYLES),
        "occasions": list(OCCASIONS),
    }
