from __future__ import annotations

import json
import re
from typing import Any, Optional

from dresswell.core.errors import MalformedResponse

_FENCE_OPEN = re.compile(r"^```[\w-]*\s*")
_FENCE_CLOSE = re.compile(r"\s*```$")


def strip_code_fence(text: str) -> str:
    """Remove a surrounding markdown code fence, with or without a language tag."""
    cleaned = (text or "").strip()
    cleaned = _FENCE_OPEN.sub("", cleaned, count=1)
    cleaned = _FENCE_CLOSE.sub("", cleaned, count=1)
    return cleaned


def coerce_text(value: Any) -> Optional[str]:
    """Return a stripped string for JSON scalars, ``None`` for anything else or blank."""
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return None
    text = str(value).strip()
    return text or None


def parse_fenced_json(raw: Optional[str]) -> Any:
    if raw is None or not raw.strip():
        raise MalformedResponse("empty_content")
    cleaned = strip_code_fence(raw)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise MalformedResponse(f"invalid_json:{e.msg}") from e


def parse_fenced_object(raw: Optional[str]) -> dict:
    data = parse_fenced_json(raw)
    if not isinstance(data, dict):
        raise MalformedResponse(f"expected_object:{type(data).__name__}")
    return data


def parse_fenced_list(raw: Optional[str], key: str) -> list:
    """Accept a bare JSON array or an object wrapping it under ``key``."""
    data = parse_fenced_json(raw)
    if isinstance(data, dict):
        data = data.get(key)
    if not isinstance(data, list):
        raise MalformedResponse(f"expected_list:{type(data).__name__}")
    return data
