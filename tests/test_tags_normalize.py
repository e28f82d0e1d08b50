from dresswell.core.tags import (
    infer_style_from_tags,
    normalize_many,
    normalize_tag,
    occasion_tag,
    style_for_occasion,
)
from dresswell.core.taxonomy import canonical_category, category_slot


def test_normalize_unicode_and_case():
    assert normalize_tag("  Café   Crème ") == "cafe creme"
    assert normalize_tag("DENIM") == "denim"


def test_normalize_many_dedupes():
    assert normalize_many(["Minimal", "minimal", "  minimal  ", ""]) == ["minimal"]


def test_infer_style_from_tags():
    assert infer_style_from_tags(["Sports", "weekend"]) == "sporty"
    assert infer_style_from_tags(["formal"]) == "business"
    assert infer_style_from_tags(["Party"]) == "evening"
    assert infer_style_from_tags(["denim"]) == "casual"
    assert infer_style_from_tags([]) == "casual"
    assert infer_style_from_tags(None) == "casual"


def test_infer_style_first_rule_wins():
    assert infer_style_from_tags(["evening", "sporty"]) == "sporty"
    assert infer_style_from_tags(["casual", "business"]) == "business"


def test_style_for_occasion():
    assert style_for_occasion("Work/Office") == "business"
    assert style_for_occasion("Casual/Weekend") == "casual"
    assert style_for_occasion("Date Night") == "evening"
    assert style_for_occasion("Gym/Workout") == "sporty"
    assert style_for_occasion("Party/Event") == "evening"
    assert style_for_occasion("Travel") == "casual"
    assert style_for_occasion("Interview") == "formal"
    assert style_for_occasion("Wedding/Formal") == "formal"
    assert style_for_occasion("Picnic") == "casual"


def test_occasion_tag():
    assert occasion_tag("Work/Office") == "work_office"
    assert occasion_tag("Date Night") == "date night"


def test_category_lookup_and_slots():
    assert canonical_category("t-shirts") == "T-Shirts"
    assert canonical_category(" JEANS ") == "Jeans"
    assert canonical_category("Outfit") is None
    assert category_slot("Skirts") == "BOTTOM"
    assert category_slot("sweaters") == "TOP"
    assert category_slot("Jackets") == "JACKET/COAT"
    assert category_slot("Accessories") == "ACCESSORY"
    assert category_slot("") is None
