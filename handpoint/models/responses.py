"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    transforms_registered: int = 0


class ZoneStatModel(BaseModel):
    index: int
    ratio: float
    pixels: int
    x_start: int
    x_end: int  # inclusive; x_end < x_start for an empty zone


class AnalyzeResponse(BaseModel):
    width: int
    height: int
    zone_stats: list[ZoneStatModel] = Field(default_factory=list)
    foreground_pixels: int = 0
    direction: str = "neutral"
    largest_zone: int | None = None
    angle: float | None = None
    angle_direction: str = "neutral"
    mask: str | None = None
    processing_time_ms: float = 0.0
    transforms_completed: int = 0
    errors: dict[str, str] = Field(default_factory=dict)


class BlurResponse(BaseModel):
    image: str
    width: int
    height: int
    channels: int
    processing_time_ms: float = 0.0
