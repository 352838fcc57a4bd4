"""Cover-fit resizing with Pillow.

Each variant is scaled until it fully covers the target box and the centred
excess is cropped away, so the output always has the exact requested
dimensions and is never letterboxed or stretched.
"""
from __future__ import annotations

import io
import logging
from typing import Iterable

from PIL import Image, ImageOps, UnidentifiedImageError

from resizepost.config import PREDEFINED_SIZES
from resizepost.models import ResizedImage, SizeSpec

logger = logging.getLogger(__name__)

_FORMAT_CONTENT_TYPES = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "GIF": "image/gif",
}


class ResizeError(Exception):
    """Raised when the source cannot be decoded or a variant cannot be produced."""


def _open(data: bytes) -> Image.Image:
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise ResizeError(f"Cannot decode image: {exc}") from exc
    return img


def _fit(img: Image.Image, size: SizeSpec) -> ResizedImage:
    fmt = img.format if img.format in _FORMAT_CONTENT_TYPES else "PNG"
    try:
        # Animated GIFs are reduced to their first frame
        img.seek(0)
        fitted = ImageOps.fit(
            img,
            (size.width, size.height),
            method=Image.Resampling.LANCZOS,
            centering=(0.5, 0.5),
        )
        if fmt == "JPEG" and fitted.mode not in ("RGB", "L"):
            fitted = fitted.convert("RGB")
        buffer = io.BytesIO()
        fitted.save(buffer, format=fmt)
    except (OSError, ValueError) as exc:
        raise ResizeError(f"Resize to {size} failed: {exc}") from exc
    return ResizedImage(content=buffer.getvalue(), size=size, content_type=_FORMAT_CONTENT_TYPES[fmt])


def resize_image(data: bytes, size: SizeSpec) -> ResizedImage:
    """Produce a single cover-fit variant of *data*."""

    with _open(data) as img:
        return _fit(img, size)


def resize_all(data: bytes, sizes: Iterable[SizeSpec] = PREDEFINED_SIZES) -> list[ResizedImage]:
    """Resize *data* to every size in order, failing fast on the first error."""

    with _open(data) as img:
        logger.debug("Decoded %s source %dx%d", img.format, img.width, img.height)
        return [_fit(img, size) for size in sizes]
