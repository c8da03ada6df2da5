"""Matplotlib rendering of one analyzed frame: zones, ratios and the pointing arrow.

No direction (empty mask) draws a neutral ring instead of an arrow.
"""

from __future__ import annotations

import math

import matplotlib

matplotlib.use("Agg")
import matplotlib.patches as mpatches
import matplotlib.patheffects as pe
import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap
from matplotlib.figure import Figure

from handpoint.engine.context import FrameContext

# ── Style ───────────────────────────────────────────────────────────

BG = "#0f0f1a"
TEXT = "#eee"
ACCENT = "#e94560"
ZONE_LINE = "#4ECDC4"
NEUTRAL = "#FFEAA7"
ZONE_COLORS = ["#FF6B6B", "#45B7D1", "#96CEB4", "#DDA0DD", "#F0A500", "#4ECDC4"]

# Arrow length as a fraction of the frame height.
_ARROW_FRACTION = 0.4

stroke = [pe.withStroke(linewidth=3, foreground=BG)]


def hide(ax) -> None:
    for s in ax.spines.values():
        s.set_visible(False)
    ax.tick_params(left=False, bottom=False, labelleft=False, labelbottom=False)


def _draw_zones(ax, ctx: FrameContext) -> None:
    height, _ = ctx.shape
    for zone, stat in zip(ctx.zones, ctx.stats):
        x0, x1 = zone.x_range
        if x0 > 0:
            ax.axvline(x0 - 0.5, color=ZONE_LINE, linewidth=1.5, linestyle="--")
        if x1 > x0:
            ax.text(
                (x0 + x1 - 1) / 2,
                height * 0.06,
                f"{stat.ratio * 100:.1f}%",
                color=TEXT,
                ha="center",
                fontsize=9,
                path_effects=stroke,
            )


def _draw_direction(ax, ctx: FrameContext) -> None:
    height, width = ctx.shape
    base_x, base_y = width / 2, height * 0.9

    if not ctx.has_foreground or ctx.angle is None:
        ax.add_patch(
            mpatches.Circle((base_x, base_y), radius=height * 0.05, fill=False, color=NEUTRAL, linewidth=2.5)
        )
        return

    length = height * _ARROW_FRACTION
    theta = math.radians(ctx.angle)
    ax.add_patch(
        mpatches.FancyArrow(
            base_x,
            base_y,
            length * math.sin(theta),
            -length * math.cos(theta),
            width=max(2.0, width * 0.01),
            color=ACCENT,
            length_includes_head=True,
        )
    )


def render_overlay(ctx: FrameContext, title: str = "") -> Figure:
    """Two panels: the (working) color frame and the mask coloured by zone."""
    fig, axes = plt.subplots(1, 2, figsize=(12, 5), facecolor=BG)
    source = ctx.working_image()

    ax = axes[0]
    ax.set_facecolor(BG)
    if source is not None:
        ax.imshow(source)
    elif ctx.mask is not None:
        ax.imshow(ctx.mask, cmap="gray")
    _draw_zones(ax, ctx)
    _draw_direction(ax, ctx)
    hide(ax)

    ax = axes[1]
    ax.set_facecolor(BG)
    overlay = ctx.zone_overlay()
    if overlay is not None:
        cmap = ListedColormap([BG] + [ZONE_COLORS[i % len(ZONE_COLORS)] for i in range(len(ctx.zones))])
        ax.imshow(overlay, cmap=cmap, vmin=0, vmax=len(ctx.zones), interpolation="nearest")
    _draw_zones(ax, ctx)
    hide(ax)

    angle_text = "none" if ctx.angle is None else f"{ctx.angle:+.1f}°"
    fig.suptitle(
        f"{title}  direction={ctx.direction.value}  angle={angle_text}".strip(),
        color=TEXT,
        fontsize=12,
    )
    fig.tight_layout()
    return fig
