"""T0.01 — Spectral Smoothing.

Per-channel Gaussian blur of the color frame through the DFT, used as a
noise-reduction step ahead of segmentation. Gated off unless the config asks
for it.
"""

from __future__ import annotations

from handpoint.engine.context import FrameContext
from handpoint.engine.registry import Layer, transform
from handpoint.engine.spectral import gaussian_blur_colored


@transform(
    id="T0.01",
    layer=Layer.PREPROCESS,
    description="Gaussian-smooth the color frame via frequency-domain convolution",
)
def spectral_smoothing(ctx: FrameContext) -> None:
    if ctx.image is None:
        return
    ctx.smoothed = gaussian_blur_colored(ctx.image, ctx.config.blur_ksize, ctx.config.blur_margin)
