import base64
import io

import pytest
from PIL import Image

from dresswell.core.errors import InvalidImage
from dresswell.services.images import image_data_url, prepare_image_b64


def _b64(img: Image.Image, fmt: str = "PNG") -> str:
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return base64.b64encode(buf.getvalue()).decode()


def _open(b64: str) -> Image.Image:
    return Image.open(io.BytesIO(base64.b64decode(b64)))


def test_prepare_downscales_and_reencodes():
    out = prepare_image_b64(_b64(Image.new("RGBA", (2000, 1000), (0, 0, 255, 128))), max_side=500)
    img = _open(out)
    assert img.format == "JPEG"
    assert img.mode == "RGB"
    assert img.size == (500, 250)


def test_prepare_keeps_small_images_and_strips_data_url(image_b64):
    out = prepare_image_b64(f"data:image/png;base64,{image_b64}", max_side=1024)
    assert _open(out).size == (64, 48)


@pytest.mark.parametrize("raw", ["", "not-an-image!!", base64.b64encode(b"hello world").decode()])
def test_prepare_rejects_bad_input(raw):
    with pytest.raises(InvalidImage):
        prepare_image_b64(raw)


def test_image_data_url():
    assert image_data_url("abc") == "data:image/jpeg;base64,abc"
    assert image_data_url("abc", "image/png") == "data:image/png;base64,abc"
