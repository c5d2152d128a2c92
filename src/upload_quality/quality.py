"""
Per-region quality checks.

Darkness:  share of pixels whose BT.709 luma falls below a threshold.
Blur:      variance of the Laplacian of the grayscale region.

A region that could not be decoded arrives as None: it votes dark (so an
unreadable tile pushes the image toward review) but never blurry.
"""
from typing import Optional
import logging

import cv2
import numpy as np

from .models import DEFAULT_THRESHOLDS, Thresholds

log = logging.getLogger(__name__)

# ITU-R BT.709 luma weights
LUMA_R, LUMA_G, LUMA_B = 0.2126, 0.7152, 0.0722


def _missing(pixels: Optional[np.ndarray]) -> bool:
    return pixels is None or pixels.size == 0


def luminance(pixels: np.ndarray) -> np.ndarray:
    """Integer luma per pixel for an H×W×3 RGB array (truncated, not rounded)."""
    rgb = pixels.astype(np.float64)
    luma = LUMA_R * rgb[..., 0] + LUMA_G * rgb[..., 1] + LUMA_B * rgb[..., 2]
    return luma.astype(np.int32)


def is_dark(pixels: Optional[np.ndarray], thresholds: Thresholds = DEFAULT_THRESHOLDS) -> bool:
    if _missing(pixels):
        log.error("Expected region pixels were missing")
        return True

    luma = luminance(pixels)
    dark_count = int(np.count_nonzero(luma < thresholds.dark_pixel_luminance))
    return dark_count > luma.size * thresholds.darkness_factor


def laplacian_variance(pixels: np.ndarray) -> float:
    gray = cv2.cvtColor(np.ascontiguousarray(pixels, dtype=np.uint8), cv2.COLOR_RGB2GRAY)

    # 16-bit signed response, default 3x3 aperture
    lap = cv2.Laplacian(gray, cv2.CV_16S)
    _, stddev = cv2.meanStdDev(lap)
    return float(stddev[0][0]) ** 2


def is_blurred(pixels: Optional[np.ndarray], thresholds: Thresholds = DEFAULT_THRESHOLDS) -> bool:
    if _missing(pixels):
        log.error("Expected region pixels were missing")
        return False

    variance = laplacian_variance(pixels)
    log.debug("laplacian variance = %.2f", variance)
    return variance < thresholds.laplacian_variance
