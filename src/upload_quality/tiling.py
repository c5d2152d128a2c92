"""
Geometric tiling of an image into a small, non-uniform grid.

Each axis is partitioned independently: the first span is a tenth of the
axis, after which the cursor doubles until the remainder is smaller than it,
and the final span absorbs that remainder.

    partition(100) -> (0,10) (10,20) (20,40) (40,80) (80,100)

`tile(width, height)` walks columns outermost, so every tile in a column
shares the same horizontal extent.
"""
from typing import Iterator, Tuple

from .models import Region

INITIAL_DIVISOR = 10


def partition(length: int) -> Iterator[Tuple[int, int]]:
    if length <= 0:
        return
    # axes shorter than the divisor are covered by a single span
    start, end = 0, (length // INITIAL_DIVISOR) or length
    while start < end:
        yield start, end
        start, end = end, end + min(end, length - end)


def tile(width: int, height: int) -> Iterator[Region]:
    for left, right in partition(width):
        for top, bottom in partition(height):
            yield Region(left=left, top=top, right=right, bottom=bottom)
