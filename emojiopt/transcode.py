import io
from PIL import Image, ImageOps

from emojiopt import config

TRANSPARENT = (0, 0, 0, 0)


def contain(img: Image.Image, size=config.CANVAS_SIZE) -> Image.Image:
    """
    Scales the image to fit inside *size* keeping its aspect ratio, and
    centres it on a transparent canvas of exactly that size.
    """
    return ImageOps.pad(img.convert("RGBA"), size, Image.LANCZOS, color=TRANSPARENT)


def to_webp(data: bytes) -> bytes:
    """Decode raw image bytes, fit them to the emoji canvas and encode as lossy WebP."""
    with Image.open(io.BytesIO(data)) as img:
        img.load()
        canvas = contain(img)

    buf = io.BytesIO()
    canvas.save(
        buf,
        "webp",
        quality=config.WEBP_QUALITY,
        alpha_quality=config.WEBP_ALPHA,
        method=config.WEBP_METHOD,
        lossless=False,
    )
    return buf.getvalue()
