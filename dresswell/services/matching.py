"""Complementary item selection.

The scorer asks the vision provider to rank every wardrobe candidate against a
query description. Whenever the provider is unavailable or answers with
something that is not a usable match list, a deterministic rule table over
garment slots (top, bottom, shoes, dress, outerwear) takes over, so callers
always receive a result list.

Two constraints hold on both paths:

* a candidate from the same catalog category as the query is never returned;
* matches scoring ``MIN_MATCH_SCORE`` or less are dropped.

Results are neither deduplicated nor truncated here; see ``rank_matches``.
"""
from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from dresswell.core.config import settings
from dresswell.core.errors import MalformedResponse, ProviderUnavailable
from dresswell.core.taxonomy import (
    SLOT_BOTTOM,
    SLOT_DRESS,
    SLOT_OUTERWEAR,
    SLOT_SHOES,
    SLOT_TOP,
    canonical_category,
    category_slot,
)
from dresswell.schemas.items import CandidateItem
from dresswell.schemas.outfits import MatchResult
from dresswell.services.vision.parsing import coerce_text, parse_fenced_list
from dresswell.services.vision.providers.base import VisionProvider
from dresswell.services.vision.types import ClothingDescription, clamp_unit

logger = logging.getLogger("dresswell.matching")

MIN_MATCH_SCORE = 0.3
DEFAULT_STYLE_CATEGORY = "Casual"
DEFAULT_OCCASION = "Everyday"


@dataclass(frozen=True)
class PairRule:
    score: float
    style_category: str
    occasion: str


# (query slot, candidate slot) -> rule. Pairs not listed never match.
PAIR_RULES: Dict[Tuple[str, str], PairRule] = {
    (SLOT_TOP, SLOT_BOTTOM): PairRule(0.9, "Casual", "Everyday"),
    (SLOT_BOTTOM, SLOT_TOP): PairRule(0.9, "Casual", "Everyday"),
    (SLOT_SHOES, SLOT_TOP): PairRule(0.8, "Casual", "Everyday"),
    (SLOT_SHOES, SLOT_BOTTOM): PairRule(0.8, "Casual", "Everyday"),
    (SLOT_DRESS, SLOT_SHOES): PairRule(0.9, "Evening", "Special Occasions"),
    (SLOT_OUTERWEAR, SLOT_TOP): PairRule(0.8, "Business", "Work"),
    (SLOT_OUTERWEAR, SLOT_BOTTOM): PairRule(0.8, "Business", "Work"),
}


def same_category(a: Optional[str], b: Optional[str]) -> bool:
    left = canonical_category(a) or (a or "").strip().lower()
    right = canonical_category(b) or (b or "").strip().lower()
    return bool(left) and left == right


def rank_matches(matches: Sequence[MatchResult], limit: Optional[int] = None) -> List[MatchResult]:
    """Sort by score, highest first; equal scores keep their input order."""
    ranked = sorted(matches, key=lambda m: m.score, reverse=True)
    if limit is not None:
        ranked = ranked[:limit]
    return ranked


def _rule_reasoning(query: ClothingDescription, candidate: CandidateItem) -> str:
    other = candidate.description
    return (
        f"{candidate.name} is a great complement to your {query.item_type} for a complete outfit. "
        f"The {other.color} {other.style} {other.item_type} goes well with the "
        f"{query.color} {query.style} {query.item_type}."
    )


def fallback_matches(query: ClothingDescription, candidates: Sequence[CandidateItem]) -> List[MatchResult]:
    query_slot = category_slot(query.category)
    if query_slot is None:
        return []
    out: List[MatchResult] = []
    for candidate in candidates:
        if same_category(query.category, candidate.description.category):
            continue
        rule = PAIR_RULES.get((query_slot, category_slot(candidate.description.category) or ""))
        if rule is None:
            continue
        out.append(
            MatchResult(
                item=candidate,
                score=rule.score,
                reasoning=_rule_reasoning(query, candidate),
                style_category=rule.style_category,
                occasion=rule.occasion,
            )
        )
    return rank_matches(out)


def _score_value(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        return None
    return clamp_unit(value)


def matches_from_payload(
    entries: Sequence[Any], query: ClothingDescription, candidates: Sequence[CandidateItem]
) -> List[MatchResult]:
    by_id: Dict[str, CandidateItem] = {}
    for candidate in candidates:
        by_id.setdefault(candidate.id, candidate)

    out: List[MatchResult] = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        candidate = by_id.get(coerce_text(entry.get("itemId")) or "")
        if candidate is None:
            continue
        score = _score_value(entry.get("score"))
        if score is None or score <= MIN_MATCH_SCORE:
            continue
        if same_category(query.category, candidate.description.category):
            continue
        out.append(
            MatchResult(
                item=candidate,
                score=score,
                reasoning=coerce_text(entry.get("reasoning")) or "",
                style_category=coerce_text(entry.get("styleCategory")) or DEFAULT_STYLE_CATEGORY,
                occasion=coerce_text(entry.get("occasion")) or DEFAULT_OCCASION,
            )
        )
    return out


def _candidate_payload(candidate: CandidateItem) -> Dict[str, Any]:
    return {
        "id": candidate.id,
        "name": candidate.name,
        "description": candidate.description.model_dump(by_alias=True),
    }


async def find_complementary_matches(
    provider: VisionProvider,
    query: ClothingDescription,
    candidates: Sequence[CandidateItem],
) -> List[MatchResult]:
    if not candidates:
        return []
    try:
        reply = await provider.rank_matches(
            query.model_dump(by_alias=True),
            [_candidate_payload(c) for c in candidates],
            timeout_ms=settings.VISION_TIMEOUT_MS,
        )
        entries = parse_fenced_list(reply.content, "matches")
    except (ProviderUnavailable, asyncio.TimeoutError) as e:
        logger.warning("matching:fallback provider unavailable reason=%s", str(e) or "timeout")
        return fallback_matches(query, candidates)
    except MalformedResponse as e:
        logger.warning("matching:fallback malformed response reason=%s", e)
        return fallback_matches(query, candidates)
    except Exception:
        logger.exception("matching:fallback provider error")
        return fallback_matches(query, candidates)
    matches = matches_from_payload(entries, query, candidates)
    logger.info("matching:provider candidates=%s matches=%s", len(candidates), len(matches))
    return matches
