"""Direction inference from zone ratios.

Two readings of the same statistics:

* discrete — three zones vote WEST / NORTH / EAST; a tie for the top ratio,
  or no foreground at all, is NEUTRAL.
* angle — every zone sits at the centre of its slice of a reference arc
  (default 180°, measured from straight up, clockwise positive) and the
  pointing angle is the ratio-weighted mean of those centres. No foreground
  means no direction (``None``), not 0°.
"""

from __future__ import annotations

import enum
import math
from typing import Sequence

from handpoint.engine.statistics import ZoneStat
from handpoint.errors import InvalidArgumentError

# Ratios closer than this are treated as a tie.
_TIE_TOLERANCE = 1e-12

DEFAULT_ARC = 180.0
_FULL_TURN = 360.0

# Half-width of each compass sector (90° sectors centred on N/E/S/W).
_SECTOR_HALF_WIDTH = 45.0


class Direction(enum.Enum):
    NEUTRAL = "neutral"
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"


# Zone index -> direction for the 3-zone layout, left to right.
_THREE_ZONE_DIRECTIONS = (Direction.WEST, Direction.NORTH, Direction.EAST)


def largest_zone(stats: Sequence[ZoneStat]) -> int | None:
    """Index of the zone with the largest ratio.

    Returns None when several zones share the maximum, when there are no
    zones, or when the maximum is zero.
    """
    if not stats:
        return None

    best = max(s.ratio for s in stats)
    if best <= 0.0:
        return None

    winners = [s.index for s in stats if math.isclose(s.ratio, best, rel_tol=0.0, abs_tol=_TIE_TOLERANCE)]
    if len(winners) != 1:
        return None
    return winners[0]


def classify_discrete(stats: Sequence[ZoneStat]) -> Direction:
    if len(stats) != len(_THREE_ZONE_DIRECTIONS):
        return Direction.NEUTRAL

    index = largest_zone(stats)
    if index is None:
        return Direction.NEUTRAL
    return _THREE_ZONE_DIRECTIONS[index]


def zone_angles(count: int, arc: float = DEFAULT_ARC) -> list[float]:
    """Nominal angle (degrees) of each zone centre, spread evenly over ``arc``."""
    if count < 1:
        raise InvalidArgumentError(f"zone count must be >= 1, got {count}")
    if not 0.0 < arc <= _FULL_TURN:
        raise InvalidArgumentError(f"arc must be in (0, 360], got {arc}")
    step = arc / count
    return [-arc / 2.0 + step * (i + 0.5) for i in range(count)]


def pointing_angle(stats: Sequence[ZoneStat], arc: float = DEFAULT_ARC) -> float | None:
    """Ratio-weighted mean of the zone centre angles; None without foreground."""
    angles = zone_angles(len(stats), arc)
    total = sum(s.ratio for s in stats)
    if total <= 0.0:
        return None

    weighted = sum(s.ratio * a for s, a in zip(stats, angles))
    # Normalised in case the ratios do not sum to 1.
    return weighted / total


def direction_from_angle(angle: float | None) -> Direction:
    """Quantize an angle into one of four 90° compass sectors."""
    if angle is None:
        return Direction.NEUTRAL

    wrapped = -((-angle + 180.0) % _FULL_TURN - 180.0)
    if abs(wrapped) <= _SECTOR_HALF_WIDTH:
        return Direction.NORTH
    if _SECTOR_HALF_WIDTH < wrapped <= 180.0 - _SECTOR_HALF_WIDTH:
        return Direction.EAST
    if -(180.0 - _SECTOR_HALF_WIDTH) <= wrapped < -_SECTOR_HALF_WIDTH:
        return Direction.WEST
    return Direction.SOUTH
