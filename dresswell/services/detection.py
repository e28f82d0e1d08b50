from __future__ import annotations

import asyncio
import logging
import math
from typing import Any

from dresswell.core.config import settings
from dresswell.core.errors import MalformedResponse, ProviderUnavailable
from dresswell.services.vision.parsing import parse_fenced_object
from dresswell.services.vision.providers.base import VisionProvider
from dresswell.services.vision.types import ClothingDetectionResult

logger = logging.getLogger("dresswell.vision")


def fallback_detection() -> ClothingDetectionResult:
    # Fails open: detection errors never block analysis.
    return ClothingDetectionResult(
        is_clothing=True,
        confidence=0.5,
        detected_item="Clothing item (detection failed)",
        reason="AI detection failed, allowing clothing analysis to proceed",
    )


def manual_override_detection() -> ClothingDetectionResult:
    return ClothingDetectionResult(
        is_clothing=True,
        confidence=1.0,
        detected_item="Manual override",
        reason="User chose to analyze anyway",
    )


def detection_from_payload(data: Any) -> ClothingDetectionResult:
    if not isinstance(data, dict):
        raise MalformedResponse(f"expected_object:{type(data).__name__}")
    is_clothing = data.get("isClothing")
    if not isinstance(is_clothing, bool):
        raise MalformedResponse("is_clothing_not_boolean")
    confidence = data.get("confidence")
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)) or not math.isfinite(confidence):
        confidence = 0.0
    return ClothingDetectionResult(
        is_clothing=is_clothing,
        confidence=confidence,
        detected_item=str(data.get("detectedItem") or "Unknown"),
        reason=str(data.get("reason") or "No reason provided"),
    )


def normalize_detection(raw: str | None) -> ClothingDetectionResult:
    try:
        return detection_from_payload(parse_fenced_object(raw))
    except MalformedResponse as e:
        logger.warning("vision:detect malformed response reason=%s", e)
        return fallback_detection()


async def detect_clothing(provider: VisionProvider, image_b64: str) -> ClothingDetectionResult:
    try:
        reply = await provider.detect_clothing(image_b64, timeout_ms=settings.VISION_TIMEOUT_MS)
    except (ProviderUnavailable, asyncio.TimeoutError) as e:
        logger.warning("vision:detect provider unavailable reason=%s", str(e) or "timeout")
        return fallback_detection()
    except Exception:
        logger.exception("vision:detect provider error")
        return fallback_detection()
    return normalize_detection(reply.content)
