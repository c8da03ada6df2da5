"""POST /api/analyze — hand mask → zone ratios → direction and angle."""

from __future__ import annotations

import logging
import time

import numpy as np
from fastapi import APIRouter, Depends, HTTPException

from handpoint.config import Settings
from handpoint.dependencies import get_settings
from handpoint.engine.config import PipelineConfig
from handpoint.engine.context import FrameContext
from handpoint.engine.pipeline import create_pipeline
from handpoint.errors import InvalidArgumentError
from handpoint.models.requests import AnalyzeRequest
from handpoint.models.responses import AnalyzeResponse, ZoneStatModel
from handpoint.utils.imaging import decode_image, encode_png, resize_to_fit

router = APIRouter()
logger = logging.getLogger(__name__)


def _build_config(req: AnalyzeRequest, settings: Settings) -> PipelineConfig:
    return PipelineConfig(
        zone_count=req.zones or settings.default_zone_count,
        arc=req.arc or settings.default_arc,
        smooth=req.smooth,
        blur_ksize=settings.blur_ksize,
    )


def _to_response(ctx: FrameContext, elapsed_ms: float, include_mask: bool) -> AnalyzeResponse:
    height, width = ctx.shape
    zone_stats = [
        ZoneStatModel(
            index=stat.index,
            ratio=round(stat.ratio, 6),
            pixels=stat.pixels,
            x_start=zone.interval[0],
            x_end=zone.interval[1],
        )
        for stat, zone in zip(ctx.stats, ctx.zones)
    ]
    mask_png = None
    if include_mask and ctx.mask is not None:
        mask_png = encode_png(np.where(ctx.mask > 0, 255, 0).astype(np.uint8))

    return AnalyzeResponse(
        width=width,
        height=height,
        zone_stats=zone_stats,
        foreground_pixels=ctx.foreground_pixels,
        direction=ctx.direction.value,
        largest_zone=ctx.largest_zone,
        angle=None if ctx.angle is None else round(ctx.angle, 3),
        angle_direction=ctx.angle_direction.value,
        mask=mask_png,
        processing_time_ms=round(elapsed_ms, 1),
        transforms_completed=len(ctx.completed_transforms),
        errors=ctx.errors,
    )


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze(req: AnalyzeRequest, settings: Settings = Depends(get_settings)) -> AnalyzeResponse:
    start = time.perf_counter()

    try:
        pixels = decode_image(req.image, grayscale=req.is_mask)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    pixels = resize_to_fit(pixels, settings.max_image_width, settings.max_image_height, mask=req.is_mask)
    ctx = FrameContext.from_mask(pixels) if req.is_mask else FrameContext.from_image(pixels)

    try:
        ctx = create_pipeline(_build_config(req, settings)).run(ctx)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    elapsed = (time.perf_counter() - start) * 1000
    logger.info("Analyzed %dx%d frame in %.1fms", ctx.shape[1], ctx.shape[0], elapsed)
    return _to_response(ctx, elapsed, req.include_mask)
