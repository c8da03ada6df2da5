"""T2.02 — Pointing Angle.

Ratio-weighted mean of the zone centre angles over the configured arc.
``None`` when the mask is empty.
"""

from __future__ import annotations

from handpoint.engine.context import FrameContext
from handpoint.engine.direction import direction_from_angle, pointing_angle
from handpoint.engine.registry import Layer, transform


@transform(
    id="T2.02",
    layer=Layer.DIRECTION,
    dependencies=["T1.02"],
    description="Derive the continuous pointing angle",
)
def angle_mode(ctx: FrameContext) -> None:
    ctx.angle = pointing_angle(ctx.stats, ctx.config.arc)
    ctx.angle_direction = direction_from_angle(ctx.angle)
