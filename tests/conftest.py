import numpy as np
import pytest


def _solid(width, height, rgb):
    img = np.zeros((height, width, 3), dtype=np.uint8)
    img[...] = rgb
    return img


def _checker(width, height, lo=100, hi=255):
    cells = np.indices((height, width)).sum(axis=0) % 2
    gray = np.where(cells == 0, hi, lo).astype(np.uint8)
    return np.stack([gray] * 3, axis=-1)


@pytest.fixture
def solid():
    return _solid


@pytest.fixture
def checker():
    return _checker
