"""T0.02 — Hand Segmentation.

Skin-color threshold plus median/dilation cleanup turns the (optionally
smoothed) color frame into the hand mask every later layer reads.
"""

from __future__ import annotations

from handpoint.engine.context import FrameContext
from handpoint.engine.registry import Layer, transform
from handpoint.engine.segmentation import keep_hand


@transform(
    id="T0.02",
    layer=Layer.PREPROCESS,
    dependencies=["T0.01"],
    description="Isolate the hand region by HSV skin range",
)
def hand_segmentation(ctx: FrameContext) -> None:
    image = ctx.working_image()
    if image is None:
        return
    ctx.mask = keep_hand(image, ctx.config)
