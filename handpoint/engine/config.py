"""Pipeline configuration — zone layout, smoothing and segmentation parameters."""

from __future__ import annotations

from dataclasses import dataclass

from handpoint.engine.direction import DEFAULT_ARC
from handpoint.engine.spectral import DEFAULT_KSIZE, IMAGE_BLUR_BORDER_PADDING, validate_ksize
from handpoint.errors import InvalidArgumentError


@dataclass
class PipelineConfig:
    """Controls one frame's run through the pipeline."""

    # Zone layout
    zone_count: int = 3
    arc: float = DEFAULT_ARC  # degrees spanned by the zone centres in angle mode

    # Spectral smoothing of the color image before segmentation
    smooth: bool = False
    blur_ksize: int = DEFAULT_KSIZE
    blur_margin: int = IMAGE_BLUR_BORDER_PADDING

    # Skin range in OpenCV HSV units: H 0-180, S/V 0-255
    hsv_lower: tuple[float, float, float] = (0.0, 58.0, 50.0)
    hsv_upper: tuple[float, float, float] = (30.0, 255.0, 255.0)

    # Mask cleanup
    pre_blur_ksize: int = 3
    median_size: int = 5
    dilate_size: int = 8

    def validate(self) -> None:
        if self.zone_count < 1:
            raise InvalidArgumentError(f"zone_count must be >= 1, got {self.zone_count}")
        if not 0.0 < self.arc <= 360.0:
            raise InvalidArgumentError(f"arc must be in (0, 360], got {self.arc}")
        if self.blur_margin < 0:
            raise InvalidArgumentError(f"blur_margin must be >= 0, got {self.blur_margin}")
        validate_ksize(self.blur_ksize)
        validate_ksize(self.pre_blur_ksize)
        if self.median_size < 1 or self.dilate_size < 1:
            raise InvalidArgumentError("median_size and dilate_size must be >= 1")
        if any(lo > hi for lo, hi in zip(self.hsv_lower, self.hsv_upper)):
            raise InvalidArgumentError(f"hsv_lower {self.hsv_lower} exceeds hsv_upper {self.hsv_upper}")
