"""Transform registry — every per-frame step is a function registered via decorator.

Usage:
    @transform(id="T1.02", layer=Layer.ZONES, dependencies=["T1.01"])
    def zone_ratios(ctx: FrameContext) -> None:
        ctx.stats = compute_ratios(ctx.mask, ctx.zones)
"""

from __future__ import annotations

import enum
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from handpoint.engine.context import FrameContext

logger = logging.getLogger(__name__)


class Layer(enum.IntEnum):
    PREPROCESS = 0
    ZONES = 1
    DIRECTION = 2


@dataclass
class TransformSpec:
    id: str
    layer: Layer
    fn: Callable[["FrameContext"], None]
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class TransformRegistry:
    """Holds transforms by ID and orders them by dependency."""

    def __init__(self) -> None:
        self._transforms: dict[str, TransformSpec] = {}

    def register(self, spec: TransformSpec) -> None:
        if spec.id in self._transforms:
            raise ValueError(f"Duplicate transform ID: {spec.id}")
        self._transforms[spec.id] = spec
        logger.debug("Registered transform %s (%s)", spec.id, spec.layer.name)

    def get(self, transform_id: str) -> TransformSpec:
        return self._transforms[transform_id]

    def get_layer(self, layer: Layer) -> list[TransformSpec]:
        return sorted((s for s in self._transforms.values() if s.layer == layer), key=lambda s: s.id)

    def all(self) -> list[TransformSpec]:
        return sorted(self._transforms.values(), key=lambda s: (s.layer, s.id))

    def dependents(self, transform_id: str) -> set[str]:
        """Every transform that needs ``transform_id``, directly or transitively."""
        found: set[str] = set()
        stack = [transform_id]
        while stack:
            current = stack.pop()
            for spec in self._transforms.values():
                if current in spec.dependencies and spec.id not in found:
                    found.add(spec.id)
                    stack.append(spec.id)
        return found

    def resolve_order(self, requested_ids: set[str] | None = None) -> list[TransformSpec]:
        """Topological order (Kahn). Dependencies outside the requested set are ignored."""
        pool = self._transforms
        if requested_ids is not None:
            pool = {tid: spec for tid, spec in pool.items() if tid in requested_ids}

        pending = {tid: sum(1 for dep in spec.dependencies if dep in pool) for tid, spec in pool.items()}
        ready = deque(sorted(tid for tid, count in pending.items() if count == 0))
        ordered: list[TransformSpec] = []

        while ready:
            tid = ready.popleft()
            ordered.append(pool[tid])
            unlocked = []
            for other_id, other in pool.items():
                if tid in other.dependencies:
                    pending[other_id] -= 1
                    if pending[other_id] == 0:
                        unlocked.append(other_id)
            ready.extend(sorted(unlocked))

        if len(ordered) != len(pool):
            stuck = set(pool) - {s.id for s in ordered}
            raise ValueError(f"Circular dependency detected among: {stuck}")

        return ordered

    @property
    def count(self) -> int:
        return len(self._transforms)


# Module-level singleton
_registry = TransformRegistry()


def get_registry() -> TransformRegistry:
    return _registry


def transform(
    *,
    id: str,
    layer: Layer,
    dependencies: list[str] | None = None,
    description: str = "",
):
    """Decorator to register a transform function."""

    def decorator(fn: Callable[["FrameContext"], None]):
        _registry.register(
            TransformSpec(
                id=id,
                layer=layer,
                fn=fn,
                dependencies=dependencies or [],
                description=description,
            )
        )
        return fn

    return decorator
