import re
import unicodedata
from typing import Iterable

DEFAULT_STYLE = "casual"

# Checked in order; the first group with a hit wins.
STYLE_TAG_RULES = (
    ("sporty", {"sporty", "sports"}),
    ("business", {"business", "formal"}),
    ("casual", {"casual"}),
    ("evening", {"evening", "party"}),
)

OCCASION_STYLE_RULES = (
    ("work", "business"),
    ("casual", "casual"),
    ("date", "evening"),
    ("gym", "sporty"),
    ("party", "evening"),
    ("travel", "casual"),
    ("interview", "formal"),
    ("wedding", "formal"),
)


def normalize_tag(s: str) -> str:
    s = unicodedata.normalize("NFKD", s or "").encode("ascii", "ignore").decode()
    s = s.strip().lower()
    return re.sub(r"\s+", " ", s)


def normalize_many(xs: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for x in xs or []:
        t = normalize_tag(x)
        if t and t not in seen:
            seen.add(t)
            out.append(t)
    return out


def infer_style_from_tags(tags: Iterable[str] | None) -> str:
    """Backfill a missing item style from its keyword tags."""
    normalized = set(normalize_many(tags or []))
    for style, hits in STYLE_TAG_RULES:
        if normalized & hits:
            return style
    return DEFAULT_STYLE


def style_for_occasion(occasion: str) -> str:
    lowered = (occasion or "").lower()
    for needle, style in OCCASION_STYLE_RULES:
        if needle in lowered:
            return style
    return DEFAULT_STYLE


def occasion_tag(occasion: str) -> str:
    return (occasion or "").lower().replace("/", "_")
