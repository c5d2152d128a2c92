"""
Region-decoding adapters.

The analyzer only needs `width`, `height` and `crop(region)`; anything that
offers those can be scored. `crop` returns an H×W×3 uint8 RGB array, or None
when the region cannot be decoded.
"""
from __future__ import annotations
from typing import Any, Optional, Protocol, runtime_checkable
import logging
import threading

import numpy as np
from PIL import Image

from .models import Region

log = logging.getLogger(__name__)


@runtime_checkable
class PixelSource(Protocol):
    width: int
    height: int

    def crop(self, region: Region) -> Optional[np.ndarray]: ...


class PilSource:
    """Crops regions out of a PIL image, decoding lazily where PIL does.

    PIL decodes a lazily opened file on first access and that decode is not
    thread-safe, so crops are serialized.
    """

    def __init__(self, image: Image.Image):
        self.image = image
        self.width, self.height = image.size
        self._lock = threading.Lock()

    def crop(self, region: Region) -> Optional[np.ndarray]:
        try:
            with self._lock:
                part = self.image.crop(region.box)
                if part.mode != "RGB":
                    part = part.convert("RGB")
                return np.asarray(part, dtype=np.uint8)
        except (OSError, ValueError) as exc:
            log.warning("could not decode region %s (%s)", region.box, exc)
            return None


class ArraySource:
    """Wraps an in-memory array: H×W grayscale, H×W×3 RGB or H×W×4 RGBA."""

    def __init__(self, pixels: np.ndarray):
        if pixels.dtype != np.uint8:
            raise ValueError(f"expected uint8 pixels, got {pixels.dtype}")
        if pixels.ndim == 2:
            pixels = np.stack([pixels] * 3, axis=-1)
        elif pixels.ndim == 3 and pixels.shape[2] == 4:
            pixels = pixels[..., :3]
        elif pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ValueError(f"unsupported pixel array shape {pixels.shape}")

        self.pixels = pixels
        self.height, self.width = self.pixels.shape[:2]

    def crop(self, region: Region) -> Optional[np.ndarray]:
        return self.pixels[region.top:region.bottom, region.left:region.right]


def as_source(image: Any) -> Optional[PixelSource]:
    """Adapt `image` to a PixelSource, or None when it can't be read."""
    if image is None:
        return None
    if isinstance(image, Image.Image):
        return PilSource(image)
    if isinstance(image, np.ndarray):
        try:
            return ArraySource(image)
        except ValueError as exc:
            log.warning("unreadable pixel array (%s)", exc)
            return None
    try:
        # protocol check reads width/height, which a custom source may fail on
        if isinstance(image, PixelSource):
            return image
    except Exception as exc:
        log.warning("unreadable image source %s (%s)", type(image).__name__, exc)
        return None
    log.warning("unsupported image type %s", type(image).__name__)
    return None
