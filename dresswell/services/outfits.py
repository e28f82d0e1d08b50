from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from dresswell.core.config import settings
from dresswell.core.errors import InsufficientInput
from dresswell.core.tags import occasion_tag, style_for_occasion
from dresswell.schemas.items import CandidateItem, ClothingItem
from dresswell.schemas.outfits import MatchResult, OutfitSuggestion
from dresswell.services.matching import DEFAULT_STYLE_CATEGORY, find_complementary_matches, rank_matches
from dresswell.services.vision.providers.base import VisionProvider
from dresswell.services.vision.types import ClothingDescription, new_id

logger = logging.getLogger("dresswell.outfits")


def group_into_outfits(
    matches: Sequence[MatchResult],
    occasion: str,
    items: Optional[Sequence[ClothingItem]] = None,
) -> List[OutfitSuggestion]:
    """Group matches into one outfit per style category.

    Groups appear in first-encounter order and keep the relative order of their
    matches. Items are resolved against ``items`` by id; a miss falls back to
    the snapshot carried by the match. The group reasoning is that of its
    first (highest-ranked) match.
    """
    lookup: Dict[str, ClothingItem] = {}
    for item in items or []:
        lookup.setdefault(item.id, item)

    groups: Dict[str, List[MatchResult]] = {}
    for match in matches:
        key = (match.style_category or "").strip() or DEFAULT_STYLE_CATEGORY
        groups.setdefault(key, []).append(match)

    suggestions: List[OutfitSuggestion] = []
    for style_category, grouped in groups.items():
        reasoning = grouped[0].reasoning or f"Perfect {style_category} outfit for {occasion}"
        suggestions.append(
            OutfitSuggestion(
                items=[lookup.get(m.item.id) or m.item.to_item() for m in grouped],
                style_category=style_category,
                occasion=occasion,
                reasoning=reasoning,
            )
        )
    return suggestions


def build_occasion_query(occasion: str) -> ClothingDescription:
    """Transient description standing in for "an outfit for this occasion"."""
    return ClothingDescription(
        id=new_id("occasion"),
        item_type="outfit",
        color="various",
        style=style_for_occasion(occasion),
        pattern="solid",
        fit="standard",
        occasion=occasion,
        season="all-season",
        detailed_description=f"Looking for outfit suggestions for {occasion}",
        category="Outfit",
        tags=[occasion_tag(occasion)],
    )


async def generate_outfit_ideas(
    provider: VisionProvider,
    items: Sequence[ClothingItem],
    occasion: str,
) -> List[OutfitSuggestion]:
    if len(items) < settings.OUTFIT_MIN_ITEMS:
        raise InsufficientInput(required=settings.OUTFIT_MIN_ITEMS, available=len(items))

    query = build_occasion_query(occasion)
    candidates = [CandidateItem.from_item(i) for i in items]
    matches = rank_matches(await find_complementary_matches(provider, query, candidates))
    outfits = group_into_outfits(matches, occasion, items)
    logger.info("outfits:ideas occasion=%s items=%s outfits=%s", occasion, len(items), len(outfits))
    return outfits
