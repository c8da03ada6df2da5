"""FrameContext — the mutable per-frame state flowing through all transforms.

One context per image; nothing in it survives into the next frame.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from handpoint.engine.config import PipelineConfig
from handpoint.engine.direction import Direction
from handpoint.engine.statistics import ZoneStat
from handpoint.engine.zones import Zone


@dataclass
class FrameContext:
    """Shared state for one frame."""

    # Input color image (H, W, 3) or None when the caller already has a mask
    image: NDArray | None = None
    # Single-channel hand mask (non-zero = foreground)
    mask: NDArray | None = None
    config: PipelineConfig = field(default_factory=PipelineConfig)

    # --- Layer 0 ---
    smoothed: NDArray | None = None

    # --- Layer 1 ---
    zones: list[Zone] = field(default_factory=list)
    stats: list[ZoneStat] = field(default_factory=list)
    foreground_pixels: int = 0

    # --- Layer 2 ---
    direction: Direction = Direction.NEUTRAL
    largest_zone: int | None = None
    angle: float | None = None
    angle_direction: Direction = Direction.NEUTRAL

    # --- Pipeline metadata ---
    completed_transforms: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)
    timings_ms: dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_image(cls, image: NDArray) -> "FrameContext":
        return cls(image=image)

    @classmethod
    def from_mask(cls, mask: NDArray) -> "FrameContext":
        return cls(mask=mask)

    @property
    def is_mask_input(self) -> bool:
        return self.image is None

    @property
    def shape(self) -> tuple[int, int]:
        source = self.mask if self.mask is not None else self.image
        if source is None:
            return (0, 0)
        return (int(source.shape[0]), int(source.shape[1]))

    @property
    def ratios(self) -> list[float]:
        return [s.ratio for s in self.stats]

    @property
    def has_foreground(self) -> bool:
        return self.foreground_pixels > 0

    def working_image(self) -> NDArray | None:
        """Smoothed image when smoothing ran, otherwise the raw input."""
        return self.smoothed if self.smoothed is not None else self.image

    def zone_overlay(self) -> NDArray[np.uint8] | None:
        """Mask with each zone's foreground labelled 1..N (0 = background)."""
        if self.mask is None or not self.zones:
            return None
        foreground = self.mask > 0
        overlay = np.zeros(foreground.shape[:2], dtype=np.uint8)
        for zone in self.zones:
            overlay[foreground & (zone.mask > 0)] = zone.index + 1
        return overlay
