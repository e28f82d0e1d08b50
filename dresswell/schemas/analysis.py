from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from dresswell.schemas.items import CandidateItem
from dresswell.services.vision.types import CamelModel, ClothingDescription


class AnalysisIn(CamelModel):
    image_b64: Optional[str] = None


class MatchIn(AnalysisIn):
    bypass_detection: bool = False


class ComplementaryIn(CamelModel):
    query: ClothingDescription
    candidates: List[CandidateItem] = Field(default_factory=list)


class OutfitIdeasIn(CamelModel):
    occasion: str = Field(min_length=1)
