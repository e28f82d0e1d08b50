from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from dresswell.core.config import settings
from dresswell.core.errors import MalformedResponse, ProviderUnavailable
from dresswell.core.tags import infer_style_from_tags
from dresswell.core.taxonomy import canonical_category
from dresswell.services.vision.parsing import coerce_text, parse_fenced_json, parse_fenced_object
from dresswell.services.vision.providers.base import VisionProvider
from dresswell.services.vision.types import FALLBACK_TAGS, ClothingDescription, StylingSuggestion, new_id

logger = logging.getLogger("dresswell.vision")

_TEXT_FIELDS = (
    "id",
    "itemType",
    "color",
    "style",
    "pattern",
    "fit",
    "occasion",
    "season",
    "detailedDescription",
    "category",
)


def fallback_description() -> ClothingDescription:
    return ClothingDescription(id=new_id("fallback"))


def fallback_suggestions() -> List[StylingSuggestion]:
    return [
        StylingSuggestion(
            id="fallback_1",
            title="Versatile Styling",
            description=(
                "This item can be styled in multiple ways for different occasions. "
                "Consider pairing it with complementary pieces for a complete look."
            ),
            category="Casual",
            confidence=0.8,
        ),
        StylingSuggestion(
            id="fallback_2",
            title="Color Coordination",
            description=(
                "The color of this item works well with neutral tones and can be accessorized "
                "with bold accents for a pop of color."
            ),
            category="Casual",
            confidence=0.7,
        ),
    ]


def _coerce_tags(value: Any) -> Optional[List[str]]:
    if isinstance(value, str):
        return [t for t in value.split(",") if t.strip()]
    if isinstance(value, list):
        return [t for t in value if isinstance(t, str)]
    return None


def description_from_payload(data: Any) -> ClothingDescription:
    """Build a description from parsed provider JSON, keeping defaults for missing fields."""
    if not isinstance(data, dict):
        raise MalformedResponse(f"expected_object:{type(data).__name__}")

    fields: Dict[str, Any] = {}
    for key in _TEXT_FIELDS:
        text = coerce_text(data.get(key))
        if text is not None:
            fields[key] = text
    tags = _coerce_tags(data.get("tags"))
    if tags is not None:
        fields["tags"] = tags

    if "category" in fields:
        fields["category"] = canonical_category(fields["category"]) or fields["category"]
    if "style" not in fields:
        fields["style"] = infer_style_from_tags(fields.get("tags", FALLBACK_TAGS))
    return ClothingDescription.model_validate(fields)


def normalize_description(raw: Optional[str]) -> ClothingDescription:
    """Turn raw provider text into a description; never fails."""
    try:
        return description_from_payload(parse_fenced_object(raw))
    except MalformedResponse as e:
        logger.warning("vision:describe malformed response reason=%s", e)
        return fallback_description()


def suggestions_from_payload(data: Any) -> List[StylingSuggestion]:
    if isinstance(data, dict):
        data = data.get("suggestions")
    if not isinstance(data, list):
        raise MalformedResponse(f"expected_list:{type(data).__name__}")
    out: List[StylingSuggestion] = []
    for entry in data:
        if not isinstance(entry, dict):
            continue
        try:
            out.append(StylingSuggestion.model_validate(entry))
        except ValidationError:
            continue
    if data and not out:
        raise MalformedResponse("no_valid_suggestions")
    return out


def normalize_suggestions(raw: Optional[str]) -> List[StylingSuggestion]:
    try:
        return suggestions_from_payload(parse_fenced_json(raw))
    except MalformedResponse as e:
        logger.warning("vision:suggest malformed response reason=%s", e)
        return fallback_suggestions()


async def describe_clothing(provider: VisionProvider, image_b64: str) -> ClothingDescription:
    try:
        reply = await provider.describe_clothing(image_b64, timeout_ms=settings.VISION_TIMEOUT_MS)
    except (ProviderUnavailable, asyncio.TimeoutError) as e:
        logger.warning("vision:describe provider unavailable reason=%s", str(e) or "timeout")
        return fallback_description()
    except Exception:
        logger.exception("vision:describe provider error")
        return fallback_description()
    return normalize_description(reply.content)


async def suggest_styling(provider: VisionProvider, image_b64: str) -> List[StylingSuggestion]:
    try:
        reply = await provider.suggest_styling(image_b64, timeout_ms=settings.VISION_TIMEOUT_MS)
    except (ProviderUnavailable, asyncio.TimeoutError) as e:
        logger.warning("vision:suggest provider unavailable reason=%s", str(e) or "timeout")
        return fallback_suggestions()
    except Exception:
        logger.exception("vision:suggest provider error")
        return fallback_suggestions()
    return normalize_suggestions(reply.content)
