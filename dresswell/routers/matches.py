from typing import List

from fastapi import APIRouter, Depends

from dresswell.routers.deps import get_item_store, get_vision_provider, prepared_image
from dresswell.schemas.analysis import ComplementaryIn, MatchIn
from dresswell.schemas.outfits import CaptureResult, MatchResult
from dresswell.services.analysis import analyze_and_match
from dresswell.services.matching import find_complementary_matches, rank_matches
from dresswell.services.vision.providers.base import VisionProvider
from dresswell.storage.items import ItemStore

router = APIRouter(prefix="/matches", tags=["matches"])


@router.post("", response_model=CaptureResult)
async def match_capture(
    payload: MatchIn,
    provider: VisionProvider = Depends(get_vision_provider),
    store: ItemStore = Depends(get_item_store),
):
    image_b64 = prepared_image(payload.image_b64)
    items = await store.list_items()
    return await analyze_and_match(provider, image_b64, items, bypass_detection=payload.bypass_detection)


@router.post("/complementary", response_model=List[MatchResult])
async def complementary_matches(payload: ComplementaryIn, provider: VisionProvider = Depends(get_vision_provider)):
    matches = await find_complementary_matches(provider, payload.query, payload.candidates)
    return rank_matches(matches)
