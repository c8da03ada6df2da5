"""Per-zone foreground ratios over a hand mask."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from handpoint.engine.zones import Zone
from handpoint.errors import InvalidArgumentError


@dataclass(frozen=True)
class ZoneStat:
    index: int
    ratio: float
    pixels: int


def as_mask_plane(mask: NDArray) -> NDArray:
    """Return the single 2D plane of a mask; (H, W, 1) is squeezed."""
    if mask.ndim == 3 and mask.shape[2] == 1:
        mask = mask[:, :, 0]
    if mask.ndim != 2:
        raise InvalidArgumentError(f"mask must be single-channel, got shape {mask.shape}")
    if mask.size == 0:
        raise InvalidArgumentError(f"mask must be non-empty, got shape {mask.shape}")
    return mask


def foreground_count(mask: NDArray) -> int:
    """Pixels strictly greater than zero."""
    return int(np.count_nonzero(as_mask_plane(mask) > 0))


def compute_ratios(mask: NDArray, zones: Sequence[Zone]) -> list[ZoneStat]:
    """Fraction of the mask's foreground falling inside each zone, in zone order.

    With no foreground at all every ratio is 0.0; downstream classifiers read
    that as "no signal".
    """
    plane = as_mask_plane(mask)
    foreground = plane > 0
    total = int(np.count_nonzero(foreground))

    stats: list[ZoneStat] = []
    for zone in zones:
        if zone.mask.shape != plane.shape:
            raise InvalidArgumentError(
                f"zone {zone.index} mask shape {zone.mask.shape} != image shape {plane.shape}"
            )
        pixels = int(np.count_nonzero(foreground & (zone.mask > 0)))
        ratio = pixels / total if total > 0 else 0.0
        stats.append(ZoneStat(index=zone.index, ratio=ratio, pixels=pixels))

    return stats
