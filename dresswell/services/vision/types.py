from __future__ import annotations

import math
import uuid
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from dresswell.core.tags import normalize_many


FALLBACK_TAGS = ("versatile", "casual", "comfortable")


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def clamp_unit(value: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        return 0.0
    return max(0.0, min(1.0, value))


class CamelModel(BaseModel):
    """Provider JSON uses camelCase keys; Python code uses snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class VisionUsage(BaseModel):
    model: str = ""
    tokens_in: int = 0
    tokens_out: int = 0
    latency_ms: int = 0


class VisionReply(BaseModel):
    content: Optional[str] = None
    usage: VisionUsage = Field(default_factory=VisionUsage)


class ClothingDescription(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: new_id("desc"))
    item_type: str = "clothing item"
    color: str = "various"
    style: str = "casual"
    pattern: str = "solid"
    fit: str = "standard"
    occasion: str = "casual"
    season: str = "all-season"
    detailed_description: str = (
        "A versatile clothing item suitable for various occasions and styling options."
    )
    category: str = "T-Shirts"
    tags: List[str] = Field(default_factory=lambda: list(FALLBACK_TAGS))

    @field_validator("tags")
    @classmethod
    def _normalize_tags(cls, v: List[str]) -> List[str]:
        return normalize_many(v)


class StylingSuggestion(CamelModel):
    id: str = Field(default_factory=lambda: new_id("sugg"))
    title: str
    description: str
    category: str = "Casual"
    confidence: float = 0.0

    @field_validator("confidence")
    @classmethod
    def _clamp_confidence(cls, v: float) -> float:
        return clamp_unit(v)


class ClothingDetectionResult(CamelModel):
    is_clothing: bool
    confidence: float = 0.0
    detected_item: Optional[str] = None
    reason: Optional[str] = None

    @field_validator("confidence")
    @classmethod
    def _clamp_confidence(cls, v: float) -> float:
        return clamp_unit(v)


class ComprehensiveAnalysis(CamelModel):
    detection: ClothingDetectionResult
    description: ClothingDescription
    suggestions: List[StylingSuggestion] = Field(default_factory=list)
