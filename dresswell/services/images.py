import base64
import binascii
import io
from typing import Optional

from PIL import Image, UnidentifiedImageError

from dresswell.core.config import settings
from dresswell.core.errors import InvalidImage


def image_data_url(image_b64: str, content_type: Optional[str] = None) -> str:
    mime = content_type or "image/jpeg"
    return f"data:{mime};base64,{image_b64}"


def _open_image(image_b64: str) -> Image.Image:
    try:
        raw = base64.b64decode(image_b64, validate=True)
        img = Image.open(io.BytesIO(raw))
        img.load()
    except (binascii.Error, UnidentifiedImageError, OSError, ValueError) as e:
        raise InvalidImage(str(e)) from e
    return img.convert("RGB")


def prepare_image_b64(image_b64: str, max_side: Optional[int] = None) -> str:
    """Decode an uploaded image, shrink it to ``max_side`` and re-encode it as base64 JPEG."""
    if not image_b64:
        raise InvalidImage("no_image_provided")
    if image_b64.startswith("data:") and "," in image_b64:
        image_b64 = image_b64.split(",", 1)[1]
    img = _open_image(image_b64)
    limit = max_side or settings.VISION_IMAGE_MAX_SIDE
    if max(img.size) > limit:
        img.thumbnail((limit, limit))
    buf = io.BytesIO()
    img.save(buf, format="JPEG", quality=85)
    return base64.b64encode(buf.getvalue()).decode()
