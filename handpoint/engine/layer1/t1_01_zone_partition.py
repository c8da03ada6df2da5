"""T1.01 — Zone Partition.

Split the mask's width into ``zone_count`` full-height strips.
"""

from __future__ import annotations

from handpoint.engine.context import FrameContext
from handpoint.engine.registry import Layer, transform
from handpoint.engine.statistics import as_mask_plane
from handpoint.engine.zones import partition


@transform(
    id="T1.01",
    layer=Layer.ZONES,
    dependencies=["T0.02"],
    description="Partition the frame into vertical zones",
)
def zone_partition(ctx: FrameContext) -> None:
    plane = as_mask_plane(ctx.mask)
    height, width = plane.shape
    ctx.zones = partition(width, height, ctx.config.zone_count)
