"""POST /api/blur — Gaussian smoothing through the frequency domain."""

from __future__ import annotations

import time

from fastapi import APIRouter, HTTPException

from handpoint.engine.spectral import gaussian_blur, gaussian_blur_colored
from handpoint.errors import InvalidArgumentError
from handpoint.models.requests import BlurRequest
from handpoint.models.responses import BlurResponse
from handpoint.utils.imaging import decode_image, encode_png

router = APIRouter()


@router.post("/blur", response_model=BlurResponse)
def blur(req: BlurRequest) -> BlurResponse:
    start = time.perf_counter()

    try:
        pixels = decode_image(req.image)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    try:
        if req.colored:
            result = gaussian_blur_colored(pixels, req.ksize)
        else:
            result = gaussian_blur(pixels, req.ksize)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    elapsed = (time.perf_counter() - start) * 1000
    return BlurResponse(
        image=encode_png(result),
        width=int(result.shape[1]),
        height=int(result.shape[0]),
        channels=1 if result.ndim == 2 else int(result.shape[2]),
        processing_time_ms=round(elapsed, 1),
    )
