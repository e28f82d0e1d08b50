from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import Field

from dresswell.schemas.items import CandidateItem, ClothingItem
from dresswell.services.vision.types import (
    CamelModel,
    ClothingDescription,
    ClothingDetectionResult,
    StylingSuggestion,
)


class MatchResult(CamelModel):
    item: CandidateItem
    score: float
    reasoning: str = ""
    style_category: str = "Casual"
    occasion: str = "Everyday"


class OutfitSuggestion(CamelModel):
    items: List[ClothingItem] = Field(default_factory=list)
    style_category: str
    occasion: str
    reasoning: str


class CaptureResult(CamelModel):
    status: Literal["ok", "no_clothing_detected"] = "ok"
    detection: ClothingDetectionResult
    description: Optional[ClothingDescription] = None
    suggestions: List[StylingSuggestion] = Field(default_factory=list)
    matches: List[MatchResult] = Field(default_factory=list)
