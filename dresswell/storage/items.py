from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Protocol

from dresswell.core.tags import infer_style_from_tags, normalize_many
from dresswell.core.taxonomy import canonical_category
from dresswell.schemas.items import ClothingItem


class ItemStore(Protocol):
    async def list_items(self) -> List[ClothingItem]:
        ...

    async def get_item(self, item_id: str) -> Optional[ClothingItem]:
        ...

    async def add_item(self, item: ClothingItem) -> ClothingItem:
        ...

    async def delete_item(self, item_id: str) -> bool:
        ...


class InMemoryItemStore:
    def __init__(self, items: Optional[List[ClothingItem]] = None) -> None:
        self._items: Dict[str, ClothingItem] = {}
        for item in items or []:
            self._items[item.id] = item

    async def list_items(self) -> List[ClothingItem]:
        out = []
        for item in self._items.values():
            if not item.style:
                item = item.model_copy(update={"style": item_style(item)})
            out.append(item)
        return out

    async def get_item(self, item_id: str) -> Optional[ClothingItem]:
        return self._items.get(item_id)

    async def add_item(self, item: ClothingItem) -> ClothingItem:
        self._items[item.id] = item
        return item

    async def delete_item(self, item_id: str) -> bool:
        return self._items.pop(item_id, None) is not None


def item_style(item: ClothingItem) -> str:
    return (item.style or "").strip().lower() or infer_style_from_tags(item.tags)


def filter_items(
    items: Iterable[ClothingItem],
    *,
    category: Optional[str] = None,
    style: Optional[str] = None,
    tags: Optional[Iterable[str]] = None,
    q: Optional[str] = None,
) -> List[ClothingItem]:
    """Wardrobe filters; ``None`` or ``"All"`` disables category and style.

    ``tags`` matches items carrying any of the given tags. ``q`` is a
    case-insensitive substring search over name, tags and category.
    """
    wanted_category = None
    if category and category.strip().lower() != "all":
        wanted_category = canonical_category(category) or category.strip()
    wanted_style = None
    if style and style.strip().lower() != "all":
        wanted_style = style.strip().lower()
    wanted_tags = set(normalize_many(tags or []))
    needle = (q or "").strip().lower()

    out = []
    for item in items:
        if wanted_category and (canonical_category(item.category) or item.category) != wanted_category:
            continue
        if wanted_style and item_style(item) != wanted_style:
            continue
        if wanted_tags and not wanted_tags & set(item.tags):
            continue
        if needle and not (
            needle in item.name.lower()
            or any(needle in t for t in item.tags)
            or needle in item.category.lower()
        ):
            continue
        out.append(item)
    return out
