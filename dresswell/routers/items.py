from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from dresswell.routers.deps import get_item_store
from dresswell.schemas.items import ClothingItem, ItemCreate
from dresswell.storage.items import ItemStore, filter_items

router = APIRouter(prefix="/items", tags=["items"])


def _parse_query_list(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [x for x in raw.split(",") if x.strip()]


@router.get("", response_model=List[ClothingItem])
async def list_items(
    category: Optional[str] = Query(None),
    style: Optional[str] = Query(None),
    tags: Optional[str] = Query(None),
    q: Optional[str] = Query(None),
    store: ItemStore = Depends(get_item_store),
):
    items = await store.list_items()
    return filter_items(items, category=category, style=style, tags=_parse_query_list(tags), q=q)


@router.post("", response_model=ClothingItem, status_code=201)
async def create_item(payload: ItemCreate, store: ItemStore = Depends(get_item_store)):
    return await store.add_item(payload.to_item())


@router.delete("/{item_id}", status_code=204)
async def delete_item(item_id: str, store: ItemStore = Depends(get_item_store)):
    if not await store.delete_item(item_id):
        raise HTTPException(status_code=404, detail="item_not_found")
