"""Error kinds raised by handpoint. Every failure is local to one call."""

from __future__ import annotations


class HandPointError(Exception):
    """Base class for engine errors."""


class InvalidArgumentError(HandPointError, ValueError):
    """Bad partition count, degenerate image size, bad kernel size, wrong mask shape."""


class InvariantViolationError(HandPointError, RuntimeError):
    """Internal sizing defect (e.g. spectrum shapes disagree). Fatal to the call."""
