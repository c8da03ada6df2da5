"""T2.01 — Discrete Direction.

Three zones vote WEST / NORTH / EAST; ties and empty masks are NEUTRAL.
Any other zone count is NEUTRAL as well.
"""

from __future__ import annotations

from handpoint.engine.context import FrameContext
from handpoint.engine.direction import classify_discrete, largest_zone
from handpoint.engine.registry import Layer, transform


@transform(
    id="T2.01",
    layer=Layer.DIRECTION,
    dependencies=["T1.02"],
    description="Classify the 3-zone pointing direction",
)
def discrete_direction(ctx: FrameContext) -> None:
    ctx.largest_zone = largest_zone(ctx.stats)
    ctx.direction = classify_discrete(ctx.stats)
