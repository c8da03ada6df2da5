"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class AnalyzeRequest(BaseModel):
    image: str = Field(..., description="Base64-encoded image (PNG/JPEG), optionally a data: URL")
    is_mask: bool = Field(default=False, description="Image is already a hand mask (non-zero = hand)")
    zones: int | None = Field(default=None, ge=1, description="Zone count (defaults to settings)")
    arc: float | None = Field(default=None, gt=0, le=360, description="Angle-mode reference arc in degrees")
    smooth: bool = Field(default=False, description="Spectral Gaussian smoothing before segmentation")
    include_mask: bool = Field(default=False, description="Return the hand mask as base64 PNG")


class BlurRequest(BaseModel):
    image: str = Field(..., description="Base64-encoded image (PNG/JPEG), optionally a data: URL")
    ksize: int = Field(default=5, ge=1, description="Odd Gaussian kernel size")
    colored: bool = Field(default=True, description="Blur every channel; False returns grayscale")

    @field_validator("ksize")
    @classmethod
    def _odd_ksize(cls, v: int) -> int:
        if v % 2 == 0:
            raise ValueError("ksize must be odd")
        return v
