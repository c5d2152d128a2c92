import numpy as np
import pytest

from upload_quality.models import Thresholds
from upload_quality.quality import is_blurred, is_dark, laplacian_variance, luminance


@pytest.mark.parametrize("pixels", [None, np.zeros((0, 0, 3), dtype=np.uint8)])
def test_missing_region_votes_dark_but_not_blurry(pixels):
    assert is_dark(pixels) is True
    assert is_blurred(pixels) is False


def test_luminance_is_truncated_bt709():
    px = np.array([[[255, 0, 0], [0, 255, 0], [0, 0, 255]]], dtype=np.uint8)
    assert luminance(px).tolist() == [[54, 182, 18]]


def test_black_region_is_dark_white_is_not(solid):
    assert is_dark(solid(10, 10, (0, 0, 0)))
    assert not is_dark(solid(10, 10, (255, 255, 255)))
    assert is_dark(solid(10, 10, (49, 49, 49)))
    assert not is_dark(solid(10, 10, (60, 60, 60)))


def test_luminance_at_threshold_is_not_dark(solid):
    region = solid(8, 8, (90, 40, 20))
    luma = int(luminance(region)[0, 0])

    assert not is_dark(region, Thresholds(dark_pixel_luminance=luma))
    assert is_dark(region, Thresholds(dark_pixel_luminance=luma + 1))


def test_darkness_needs_more_than_half_the_pixels(solid):
    region = solid(10, 10, (255, 255, 255))
    flat = region.reshape(-1, 3)
    flat[:50] = 0
    assert not is_dark(region)

    flat[50] = 0
    assert is_dark(region)


def test_flat_region_has_zero_variance_and_is_blurry(solid):
    # uniform colour has no Laplacian response at all, so it always votes blurry
    region = solid(20, 20, (255, 255, 255))
    assert laplacian_variance(region) == 0.0
    assert is_blurred(region)


def test_checkerboard_is_sharp(checker):
    region = checker(20, 20)
    assert laplacian_variance(region) > 70
    assert not is_blurred(region)


def test_gentle_gradient_is_blurry():
    ramp = np.tile(np.arange(40, 80, dtype=np.uint8), (30, 1))
    region = np.stack([ramp] * 3, axis=-1)
    assert is_blurred(region)


def test_blur_threshold_is_strict(solid):
    region = solid(20, 20, (128, 128, 128))
    assert is_blurred(region, Thresholds(laplacian_variance=1))
    assert not is_blurred(region, Thresholds(laplacian_variance=0))
