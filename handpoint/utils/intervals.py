"""Integer interval splitting. No engine imports."""

from __future__ import annotations

from handpoint.errors import InvalidArgumentError

Interval = tuple[int, int]


def split_interval(start: int, end: int, parts: int) -> list[Interval]:
    """Split the inclusive range [start, end] into `parts` contiguous intervals.

    Lengths are ``L // parts`` with the remainder handed out one unit at a time
    to the leftmost intervals. When ``parts`` exceeds the range length the
    trailing intervals come back empty as ``(s, s - 1)``.

    Example: ``split_interval(0, 9, 3) -> [(0, 3), (4, 6), (7, 9)]``
    """
    if parts < 1:
        raise InvalidArgumentError(f"parts must be >= 1, got {parts}")
    if end < start:
        raise InvalidArgumentError(f"end ({end}) must be >= start ({start})")

    length = end - start + 1
    base, remainder = divmod(length, parts)

    intervals: list[Interval] = []
    cursor = start
    for i in range(parts):
        size = base + (1 if i < remainder else 0)
        intervals.append((cursor, cursor + size - 1))
        cursor += size

    return intervals


def interval_length(interval: Interval) -> int:
    """Number of integer positions covered; 0 for an empty interval."""
    return max(0, interval[1] - interval[0] + 1)
