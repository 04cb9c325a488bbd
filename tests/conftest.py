import base64
import io

import pytest
from PIL import Image


def png_bytes(size=(10, 10), color=(255, 0, 0, 255)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGBA", size, color).save(buf, "png")
    return buf.getvalue()


def png_uri(size=(10, 10), color=(255, 0, 0, 255)) -> str:
    return "data:image/png;base64," + base64.b64encode(png_bytes(size, color)).decode("ascii")


@pytest.fixture
def make_png():
    return png_bytes


@pytest.fixture
def make_png_uri():
    return png_uri
