from fastapi import HTTPException, Request

from dresswell.core.errors import InvalidImage
from dresswell.core.config import settings
from dresswell.services.images import prepare_image_b64
from dresswell.services.vision.providers.base import VisionProvider
from dresswell.storage.items import ItemStore


def get_vision_provider(request: Request) -> VisionProvider:
    return request.app.state.vision_provider


def get_item_store(request: Request) -> ItemStore:
    return request.app.state.item_store


def prepared_image(image_b64) -> str:
    if not image_b64:
        raise HTTPException(status_code=400, detail="image_required")
    try:
        return prepare_image_b64(image_b64, settings.VISION_IMAGE_MAX_SIDE)
    except InvalidImage as e:
        raise HTTPException(status_code=400, detail="invalid_image") from e
