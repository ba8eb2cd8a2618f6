"""Snapshot loading and encoding for provider requests."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional

from filetype import guess
from PIL import Image

from .models import EncodedImage

logger = logging.getLogger("pageclone")

DEFAULT_MIME_TYPE = "image/png"


def detect_image_mime(data: bytes) -> Optional[str]:
    """Detect image type using filetype; returns the MIME type."""
    kind = guess(data)
    if kind and kind.mime.startswith("image/"):
        return kind.mime
    return None


def downscale_image(data: bytes, max_image_side: int) -> Optional[bytes]:
    """Return PNG bytes resized so the longest edge fits, or None if already small enough."""
    with Image.open(io.BytesIO(data)) as raw_image:
        width, height = raw_image.size
        longest_edge = max(width, height)
        if longest_edge <= max_image_side:
            return None
        scale = max_image_side / float(longest_edge)
        new_size = (
            max(1, int(width * scale)),
            max(1, int(height * scale)),
        )
        image = raw_image.convert("RGB").resize(new_size, Image.Resampling.LANCZOS)
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    logger.debug(
        "Downscaled snapshot from %dx%d to %dx%d",
        width,
        height,
        new_size[0],
        new_size[1],
    )
    return buffer.getvalue()


def encode_snapshot(path: Path, max_image_side: int = 0) -> EncodedImage:
    """Read a snapshot from disk, shrinking it when ``max_image_side`` is positive."""
    data = Path(path).read_bytes()
    if max_image_side > 0:
        resized = downscale_image(data, max_image_side)
        if resized is not None:
            return EncodedImage(data=resized, mime_type=DEFAULT_MIME_TYPE)
    mime_type = detect_image_mime(data) or DEFAULT_MIME_TYPE
    return EncodedImage(data=data, mime_type=mime_type)
