import base64
import io

import pytest
from PIL import Image


@pytest.fixture
def image_b64() -> str:
    img = Image.new("RGB", (64, 48), (200, 30, 30))
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return base64.b64encode(buf.getvalue()).decode()
