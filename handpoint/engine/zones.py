"""Zone geometry — vertical strips of the image plane used for directional voting.

Zones are plain values recomputed for every frame. Each strip spans the full
image height; strip ``i`` covers columns ``[start_i, end_i + 1)`` so adjacent
strips share no column and leave no gap.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from handpoint.errors import InvalidArgumentError
from handpoint.utils.intervals import Interval, interval_length, split_interval

logger = logging.getLogger(__name__)

# Full-intensity value painted inside a zone mask.
ZONE_FILL = 255


@dataclass(frozen=True)
class Zone:
    """One vertical strip: its interval, half-open rect and a 0/255 mask."""

    index: int
    interval: Interval
    # (x, y, width, height); width is 0 for an empty interval
    rect: tuple[int, int, int, int]
    mask: NDArray[np.uint8]

    @property
    def is_empty(self) -> bool:
        return self.rect[2] == 0

    @property
    def x_range(self) -> tuple[int, int]:
        """Half-open column range [x0, x1)."""
        x, _, w, _ = self.rect
        return (x, x + w)


def partition(width: int, height: int, parts: int) -> list[Zone]:
    """Split a ``width`` x ``height`` image into ``parts`` full-height strips."""
    if width <= 0 or height <= 0:
        raise InvalidArgumentError(f"image size must be positive, got {width}x{height}")
    if parts <= 0:
        raise InvalidArgumentError(f"partition count must be >= 1, got {parts}")

    zones: list[Zone] = []
    for i, interval in enumerate(split_interval(0, width - 1, parts)):
        x0 = interval[0]
        w = interval_length(interval)
        mask = np.zeros((height, width), dtype=np.uint8)
        if w > 0:
            mask[:, x0 : x0 + w] = ZONE_FILL
        zones.append(Zone(index=i, interval=interval, rect=(x0, 0, w, height), mask=mask))

    logger.debug(
        "Partitioned %dx%d into %d zones: %s",
        width,
        height,
        parts,
        [z.interval for z in zones],
    )
    return zones


def partition_like(image: NDArray, parts: int) -> list[Zone]:
    """Partition using the height/width of an existing image."""
    if image.ndim < 2:
        raise InvalidArgumentError(f"expected a 2D image, got shape {image.shape}")
    height, width = image.shape[:2]
    return partition(width, height, parts)
