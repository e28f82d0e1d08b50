from typing import List

from fastapi import APIRouter, Depends, HTTPException

from dresswell.core.errors import InsufficientInput
from dresswell.routers.deps import get_item_store, get_vision_provider
from dresswell.schemas.analysis import OutfitIdeasIn
from dresswell.schemas.outfits import OutfitSuggestion
from dresswell.services.outfits import generate_outfit_ideas
from dresswell.services.vision.providers.base import VisionProvider
from dresswell.storage.items import ItemStore

router = APIRouter(prefix="/outfits", tags=["outfits"])


@router.post("/ideas", response_model=List[OutfitSuggestion])
async def outfit_ideas(
    payload: OutfitIdeasIn,
    provider: VisionProvider = Depends(get_vision_provider),
    store: ItemStore = Depends(get_item_store),
):
    items = await store.list_items()
    try:
        return await generate_outfit_ideas(provider, items, payload.occasion.strip())
    except InsufficientInput as e:
        raise HTTPException(status_code=400, detail="insufficient_items") from e
