"""
Whole-image dark/blurry verdict.

The image is tiled (see `tiling`), every region is scored independently for
darkness and blur, and the region votes are aggregated:

    dark   > total * darkness_factor    -> DARK   (checked first)
    blurry > total * blurriness_factor  -> BLURRY
    otherwise                           -> OK

An image that is missing or unreadable is reported OK so that analysis can
never block an upload it was unable to evaluate.
"""
from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Optional, Tuple
import logging

import numpy as np

from .models import DEFAULT_THRESHOLDS, QualityReport, Region, Thresholds, Verdict
from .quality import is_blurred, is_dark
from .sources import PixelSource, as_source
from .tiling import tile

log = logging.getLogger(__name__)


def score_region(source: PixelSource, region: Region,
                 thresholds: Thresholds = DEFAULT_THRESHOLDS) -> Tuple[bool, bool]:
    """Return (dark, blurry) for one region of `source`."""
    log.debug("left: %d right: %d top: %d bottom: %d",
              region.left, region.right, region.top, region.bottom)
    try:
        pixels = source.crop(region)
        if pixels is not None:
            pixels = np.asarray(pixels)
    except Exception as exc:
        log.warning("region %s failed to decode (%s)", region.box, exc)
        pixels = None

    if pixels is not None and (pixels.ndim != 3 or pixels.shape[2] != 3):
        log.warning("region %s decoded to shape %s, expected RGB",
                    region.box, pixels.shape)
        pixels = None

    return is_dark(pixels, thresholds), is_blurred(pixels, thresholds)


def _verdict(total: int, dark: int, blurry: int, thresholds: Thresholds) -> Verdict:
    if dark > total * thresholds.darkness_factor:
        return Verdict.DARK
    if blurry > total * thresholds.blurriness_factor:
        return Verdict.BLURRY
    return Verdict.OK


def assess(image: Any, thresholds: Optional[Thresholds] = None,
           workers: Optional[int] = None) -> QualityReport:
    thresholds = thresholds or DEFAULT_THRESHOLDS

    source = as_source(image)
    if source is None:
        log.error("Expected image was missing or unreadable")
        return QualityReport(verdict=Verdict.OK)

    try:
        width, height = int(source.width), int(source.height)
    except Exception as exc:
        log.error("could not read image geometry (%s)", exc)
        return QualityReport(verdict=Verdict.OK)

    regions = list(tile(width, height))
    if not regions:
        log.info("empty image %dx%d, nothing to check", width, height)
        return QualityReport(verdict=Verdict.OK)

    # --- score every region ------------------------------------------------
    if workers and workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            votes: List[Tuple[bool, bool]] = list(
                executor.map(lambda r: score_region(source, r, thresholds), regions))
    else:
        votes = [score_region(source, r, thresholds) for r in regions]

    # --- aggregate ---------------------------------------------------------
    total  = len(votes)
    dark   = sum(1 for d, _ in votes if d)
    blurry = sum(1 for _, b in votes if b)

    verdict = _verdict(total, dark, blurry, thresholds)
    log.info("dark regions = %d, blurry regions = %d, total regions = %d -> %s",
             dark, blurry, total, verdict.value)

    return QualityReport(verdict=verdict, total_regions=total,
                         dark_regions=dark, blurry_regions=blurry)


def analyze(image: Any, thresholds: Optional[Thresholds] = None,
            workers: Optional[int] = None) -> Verdict:
    """Classify `image` as DARK, BLURRY or OK. Never raises for bad input."""
    return assess(image, thresholds, workers).verdict
