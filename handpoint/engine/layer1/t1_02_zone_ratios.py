"""T1.02 — Zone Ratios.

Share of the hand's pixels inside each zone. No foreground means all-zero
ratios, not an error.
"""

from __future__ import annotations

from handpoint.engine.context import FrameContext
from handpoint.engine.registry import Layer, transform
from handpoint.engine.statistics import compute_ratios


@transform(
    id="T1.02",
    layer=Layer.ZONES,
    dependencies=["T1.01"],
    description="Compute per-zone foreground ratios",
)
def zone_ratios(ctx: FrameContext) -> None:
    ctx.stats = compute_ratios(ctx.mask, ctx.zones)
    ctx.foreground_pixels = sum(s.pixels for s in ctx.stats)
