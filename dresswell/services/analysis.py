from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from dresswell.core.config import settings
from dresswell.core.errors import MalformedResponse, ProviderUnavailable
from dresswell.schemas.items import CandidateItem, ClothingItem
from dresswell.schemas.outfits import CaptureResult
from dresswell.services.description import (
    describe_clothing,
    description_from_payload,
    fallback_description,
    fallback_suggestions,
    suggest_styling,
    suggestions_from_payload,
)
from dresswell.services.detection import detection_from_payload, fallback_detection, manual_override_detection
from dresswell.services.matching import find_complementary_matches, rank_matches
from dresswell.services.vision.parsing import parse_fenced_object
from dresswell.services.vision.providers.base import VisionProvider
from dresswell.services.vision.types import ComprehensiveAnalysis

logger = logging.getLogger("dresswell.vision")


def fallback_analysis() -> ComprehensiveAnalysis:
    return ComprehensiveAnalysis(
        detection=fallback_detection(),
        description=fallback_description(),
        suggestions=fallback_suggestions(),
    )


def analysis_from_payload(data: dict) -> ComprehensiveAnalysis:
    """Validate each section on its own so one bad section does not spoil the others."""
    try:
        detection = detection_from_payload(data.get("detection"))
    except MalformedResponse as e:
        logger.warning("vision:analyze detection section unusable reason=%s", e)
        detection = fallback_detection()
    try:
        description = description_from_payload(data.get("description"))
    except MalformedResponse as e:
        logger.warning("vision:analyze description section unusable reason=%s", e)
        description = fallback_description()
    try:
        suggestions = suggestions_from_payload(data.get("suggestions"))
    except MalformedResponse as e:
        logger.warning("vision:analyze suggestions section unusable reason=%s", e)
        suggestions = fallback_suggestions()
    return ComprehensiveAnalysis(detection=detection, description=description, suggestions=suggestions)


async def analyze_comprehensive(provider: VisionProvider, image_b64: str) -> ComprehensiveAnalysis:
    """Detection, description and styling suggestions from a single provider call."""
    try:
        reply = await provider.analyze_comprehensive(image_b64, timeout_ms=settings.VISION_TIMEOUT_MS)
        data = parse_fenced_object(reply.content)
    except (ProviderUnavailable, asyncio.TimeoutError) as e:
        logger.warning("vision:analyze provider unavailable reason=%s", str(e) or "timeout")
        return fallback_analysis()
    except MalformedResponse as e:
        logger.warning("vision:analyze malformed response reason=%s", e)
        return fallback_analysis()
    except Exception:
        logger.exception("vision:analyze provider error")
        return fallback_analysis()
    return analysis_from_payload(data)


async def analyze_and_match(
    provider: VisionProvider,
    image_b64: str,
    items: Sequence[ClothingItem],
    *,
    bypass_detection: bool = False,
) -> CaptureResult:
    """Capture flow: analyse a photo, stop if it shows no clothing, otherwise match it against the wardrobe.

    With ``bypass_detection`` the gate is skipped and description and
    suggestions are requested with two independent calls.
    """
    if bypass_detection:
        detection = manual_override_detection()
        description = await describe_clothing(provider, image_b64)
        suggestions = await suggest_styling(provider, image_b64)
    else:
        analysis = await analyze_comprehensive(provider, image_b64)
        detection, description, suggestions = analysis.detection, analysis.description, analysis.suggestions

    if not detection.is_clothing:
        logger.info("vision:capture no clothing detected confidence=%s", detection.confidence)
        return CaptureResult(status="no_clothing_detected", detection=detection)

    candidates = [CandidateItem.from_item(i) for i in items]
    matches = rank_matches(await find_complementary_matches(provider, description, candidates))
    return CaptureResult(
        detection=detection,
        description=description,
        suggestions=suggestions,
        matches=matches,
    )
