"""Placeholder decoding: ThumbHash payload -> WebP data URI."""

from __future__ import annotations

import base64
import io

from PIL import Image

_DATA_URI_PREFIX = "data:image/"
_THUMBHASH_BASE_SIZE = 32


def is_data_uri(payload: str) -> bool:
    return payload.startswith(_DATA_URI_PREFIX)


def image_to_data_url(image: Image.Image, quality: int = 80) -> str:
    """Encode a PIL image as a base64 WebP data URI."""
    buf = io.BytesIO()
    if image.mode not in ("RGB", "RGBA"):
        image = image.convert("RGBA")
    image.save(buf, format="WEBP", quality=quality)
    return "data:image/webp;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


def thumbhash_to_data_url(payload: str, quality: int = 80) -> str:
    """Decode a base64 ThumbHash and render it as a small WebP data URI."""
    from thumbhash import thumbhash_to_image

    image = thumbhash_to_image(payload.strip(), _THUMBHASH_BASE_SIZE)
    return image_to_data_url(image, quality=quality)
