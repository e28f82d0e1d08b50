from __future__ import annotations

from typing import Any, Dict, List, Protocol

from dresswell.core.errors import ProviderUnavailable
from dresswell.services.vision.types import VisionReply


class VisionProvider(Protocol):
    """Raw access to the vision model; every method returns the unparsed reply text.

    Implementations raise ``ProviderUnavailable`` (or let ``asyncio.TimeoutError``
    through) when the call fails; parsing and fallbacks live in the services.
    Any other exception is logged by the services and also takes the fallback.
    """

    async def analyze_comprehensive(self, image_b64: str, *, timeout_ms: int) -> VisionReply:
        ...

    async def detect_clothing(self, image_b64: str, *, timeout_ms: int) -> VisionReply:
        ...

    async def describe_clothing(self, image_b64: str, *, timeout_ms: int) -> VisionReply:
        ...

    async def suggest_styling(self, image_b64: str, *, timeout_ms: int) -> VisionReply:
        ...

    async def rank_matches(
        self, query: Dict[str, Any], candidates: List[Dict[str, Any]], *, timeout_ms: int
    ) -> VisionReply:
        ...


class NullVisionProvider:
    """Safety net provider used when vision is disabled; every call takes the fallback path."""

    name = "disabled"

    async def analyze_comprehensive(self, image_b64: str, *, timeout_ms: int) -> VisionReply:
        raise ProviderUnavailable("vision_disabled")

    async def detect_clothing(self, image_b64: str, *, timeout_ms: int) -> VisionReply:
        raise ProviderUnavailable("vision_disabled")

    async def describe_clothing(self, image_b64: str, *, timeout_ms: int) -> VisionReply:
        raise ProviderUnavailable("vision_disabled")

    async def suggest_styling(self, image_b64: str, *, timeout_ms: int) -> VisionReply:
        raise ProviderUnavailable("vision_disabled")

    async def rank_matches(
        self, query: Dict[str, Any], candidates: List[Dict[str, Any]], *, timeout_ms: int
    ) -> VisionReply:
        raise ProviderUnavailable("vision_disabled")
