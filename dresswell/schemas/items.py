from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import Field, field_validator

from dresswell.core.tags import infer_style_from_tags, normalize_many
from dresswell.services.vision.types import CamelModel, ClothingDescription, StylingSuggestion, new_id


class ClothingItem(CamelModel):
    id: str = Field(default_factory=lambda: new_id("item"))
    image_ref: str = ""
    description: Optional[ClothingDescription] = None
    suggestions: List[StylingSuggestion] = Field(default_factory=list)
    category: str = ""
    style: str = ""
    date_added: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    name: str = "Unknown Item"
    tags: List[str] = Field(default_factory=list)

    @field_validator("tags")
    @classmethod
    def _normalize_tags(cls, v: List[str]) -> List[str]:
        return normalize_many(v)


class ItemCreate(CamelModel):
    name: str
    image_ref: str = ""
    description: ClothingDescription
    suggestions: List[StylingSuggestion] = Field(default_factory=list)
    category: Optional[str] = None
    style: Optional[str] = None

    def to_item(self) -> ClothingItem:
        return ClothingItem(
            image_ref=self.image_ref,
            description=self.description,
            suggestions=self.suggestions,
            category=self.category or self.description.category,
            style=self.style or self.description.style,
            name=self.name.strip(),
            tags=self.description.tags,
        )


class CandidateItem(CamelModel):
    """Read-only projection of a stored item handed to the compatibility scorer."""

    id: str
    description: ClothingDescription
    name: str = "Unknown Item"
    image_ref: str = ""

    @classmethod
    def from_item(cls, item: ClothingItem) -> "CandidateItem":
        description = item.description
        if description is None:
            description = ClothingDescription(
                id=f"{item.id}_desc",
                item_type=item.name or "clothing item",
                category=item.category,
                style=item.style or infer_style_from_tags(item.tags),
                tags=item.tags,
            )
        return cls(id=item.id, description=description, name=item.name or "Unknown Item", image_ref=item.image_ref)

    def to_item(self) -> ClothingItem:
        return ClothingItem(
            id=self.id,
            image_ref=self.image_ref,
            description=self.description,
            category=self.description.category,
            style=self.description.style,
            name=self.name,
            tags=self.description.tags,
        )
