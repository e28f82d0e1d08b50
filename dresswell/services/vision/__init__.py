from __future__ import annotations

from typing import Optional

from dresswell.core.config import Settings, settings as default_settings
from dresswell.services.vision.providers.base import NullVisionProvider, VisionProvider
from dresswell.services.vision.providers.openai import OpenAIVisionProvider


def build_vision_provider(settings: Optional[Settings] = None) -> VisionProvider:
    cfg = settings or default_settings
    if not cfg.VISION_ENABLED:
        return NullVisionProvider()
    name = (cfg.VISION_PROVIDER or "openai").lower()
    if name == "openai":
        return OpenAIVisionProvider(
            model_analysis=cfg.VISION_MODEL_ANALYSIS,
            model_detect=cfg.VISION_MODEL_DETECT,
            model_describe=cfg.VISION_MODEL_DESCRIBE,
            model_suggest=cfg.VISION_MODEL_SUGGEST,
            model_match=cfg.VISION_MODEL_MATCH,
        )
    return NullVisionProvider()


__all__ = ["VisionProvider", "NullVisionProvider", "OpenAIVisionProvider", "build_vision_provider"]
