import asyncio
import json

import pytest

from dresswell.core.errors import ProviderUnavailable
from dresswell.services.description import (
    describe_clothing,
    fallback_description,
    normalize_description,
    normalize_suggestions,
    suggest_styling,
)
from tests.fixtures.wardrobe import ScriptedProvider


RAW_JEANS = """```json
{
  "id": "desc_1",
  "itemType": "jeans",
  "color": "dark blue",
  "pattern": "solid",
  "fit": "slim",
  "occasion": "casual",
  "season": "all-season",
  "detailedDescription": "Slim dark denim jeans.",
  "category": "jeans",
  "tags": ["Denim", "denim", "Sporty"]
}
```"""


def _without_id(desc):
    return desc.model_dump(exclude={"id"})


def test_description_parsed_and_normalized():
    desc = normalize_description(RAW_JEANS)
    assert desc.id == "desc_1"
    assert desc.item_type == "jeans"
    assert desc.fit == "slim"
    assert desc.category == "Jeans"
    assert desc.tags == ["denim", "sporty"]
    # missing style is backfilled from the tags
    assert desc.style == "sporty"


def test_missing_fields_take_defaults():
    desc = normalize_description('{"itemType": "scarf", "category": "Accessories", "style": "evening"}')
    assert desc.item_type == "scarf"
    assert desc.style == "evening"
    assert desc.color == "various"
    assert desc.season == "all-season"
    assert desc.tags == ["versatile", "casual", "comfortable"]


def test_normalize_is_idempotent():
    desc = normalize_description(RAW_JEANS)
    again = normalize_description(desc.model_dump_json(by_alias=True))
    assert again == desc


@pytest.mark.parametrize("raw", ["not json", "", "{", None, "[1, 2]"])
def test_fallback_description_is_deterministic(raw):
    desc = normalize_description(raw)
    assert desc.id.startswith("fallback_")
    assert _without_id(desc) == _without_id(fallback_description())
    assert desc.category == "T-Shirts"
    assert desc.item_type == "clothing item"


def test_suggestions_parsed_and_clamped():
    raw = json.dumps({
        "suggestions": [
            {"id": "s1", "title": "Weekend", "description": "Pair with sneakers.", "confidence": 1.7},
            {"title": "Office", "description": "Add a blazer.", "category": "Business", "confidence": 0.6},
            {"title": "missing description"},
        ]
    })
    suggestions = normalize_suggestions(raw)
    assert [s.title for s in suggestions] == ["Weekend", "Office"]
    assert suggestions[0].confidence == 1.0
    assert suggestions[0].category == "Casual"
    assert suggestions[1].category == "Business"
    assert suggestions[1].id.startswith("sugg_")


def test_suggestions_fallback_on_garbage():
    for raw in ("oops", '[{"nope": 1}]', '{"suggestions": "x"}'):
        suggestions = normalize_suggestions(raw)
        assert [s.id for s in suggestions] == ["fallback_1", "fallback_2"]
        assert [s.confidence for s in suggestions] == [0.8, 0.7]


@pytest.mark.asyncio
async def test_describe_falls_back_when_provider_fails():
    for failure in (ProviderUnavailable("down"), asyncio.TimeoutError()):
        prov = ScriptedProvider(describe_clothing=failure)
        desc = await describe_clothing(prov, "abc")
        assert _without_id(desc) == _without_id(fallback_description())
        assert prov.calls["describe_clothing"] == 1


@pytest.mark.asyncio
async def test_suggest_uses_provider_reply():
    prov = ScriptedProvider(suggest_styling=[{"title": "Layer", "description": "Under a coat.", "confidence": 0.9}])
    suggestions = await suggest_styling(prov, "abc")
    assert len(suggestions) == 1
    assert suggestions[0].title == "Layer"


def test_suggestion_non_finite_confidence_is_zero():
    suggestions = normalize_suggestions('[{"title": "Layer", "description": "Under a coat.", "confidence": NaN}]')
    assert suggestions[0].confidence == 0.0
