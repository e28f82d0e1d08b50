from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI, OpenAIError

from dresswell.core.errors import ProviderUnavailable
from dresswell.services.images import image_data_url
from dresswell.services.vision.prompts import (
    build_comprehensive_prompt,
    build_describe_prompt,
    build_detect_prompt,
    build_match_prompt,
    build_suggest_prompt,
)
from dresswell.services.vision.types import VisionReply, VisionUsage

logger = logging.getLogger("uvicorn.error")


class OpenAIVisionProvider:
    def __init__(
        self,
        *,
        model_analysis: str,
        model_detect: str,
        model_describe: str,
        model_suggest: str,
        model_match: str,
        client: Optional[Any] = None,
    ):
        self.client = client
        self.model_analysis = model_analysis
        self.model_detect = model_detect
        self.model_describe = model_describe
        self.model_suggest = model_suggest
        self.model_match = model_match

    async def _chat(
        self,
        messages: List[Dict[str, Any]],
        model: str,
        *,
        max_tokens: int,
        temperature: float,
        timeout_ms: int,
        json_object: bool = False,
    ) -> VisionReply:
        start = time.perf_counter()
        logger.info("vision:openai request model=%s timeout_ms=%s", model, timeout_ms)
        kwargs: Dict[str, Any] = {
            "model": model,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        if json_object:
            kwargs["response_format"] = {"type": "json_object"}
        try:
            if self.client is None:
                # Reads OPENAI_API_KEY; raises OpenAIError when it is missing.
                self.client = AsyncOpenAI()
            resp = await asyncio.wait_for(
                self.client.chat.completions.create(**kwargs),
                timeout=timeout_ms / 1000.0,
            )
        except asyncio.TimeoutError as e:
            logger.warning("vision:openai timeout model=%s timeout_ms=%s", model, timeout_ms)
            raise ProviderUnavailable("timeout") from e
        except OpenAIError as e:
            logger.warning("vision:openai error model=%s error=%s", model, type(e).__name__)
            raise ProviderUnavailable(str(e)) from e
        latency_ms = int((time.perf_counter() - start) * 1000)
        content = resp.choices[0].message.content if resp.choices else None
        return VisionReply(
            content=content,
            usage=VisionUsage(
                model=model,
                tokens_in=getattr(resp.usage, "prompt_tokens", 0) if resp.usage else 0,
                tokens_out=getattr(resp.usage, "completion_tokens", 0) if resp.usage else 0,
                latency_ms=latency_ms,
            ),
        )

    async def analyze_comprehensive(self, image_b64: str, *, timeout_ms: int) -> VisionReply:
        messages = build_comprehensive_prompt(image_data_url(image_b64))
        return await self._chat(
            messages, self.model_analysis, max_tokens=1500, temperature=0.3, timeout_ms=timeout_ms, json_object=True
        )

    async def detect_clothing(self, image_b64: str, *, timeout_ms: int) -> VisionReply:
        messages = build_detect_prompt(image_data_url(image_b64))
        return await self._chat(
            messages, self.model_detect, max_tokens=300, temperature=0.1, timeout_ms=timeout_ms, json_object=True
        )

    async def describe_clothing(self, image_b64: str, *, timeout_ms: int) -> VisionReply:
        messages = build_describe_prompt(image_data_url(image_b64))
        return await self._chat(
            messages, self.model_describe, max_tokens=800, temperature=0.3, timeout_ms=timeout_ms, json_object=True
        )

    async def suggest_styling(self, image_b64: str, *, timeout_ms: int) -> VisionReply:
        messages = build_suggest_prompt(image_data_url(image_b64))
        return await self._chat(messages, self.model_suggest, max_tokens=1000, temperature=0.7, timeout_ms=timeout_ms)

    async def rank_matches(
        self, query: Dict[str, Any], candidates: List[Dict[str, Any]], *, timeout_ms: int
    ) -> VisionReply:
        messages = build_match_prompt(query, candidates)
        return await self._chat(messages, self.model_match, max_tokens=1000, temperature=0.3, timeout_ms=timeout_ms)
