"""Pipeline orchestrator — runs frame transforms in dependency order with input gating."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time

from numpy.typing import NDArray

from handpoint.engine.config import PipelineConfig
from handpoint.engine.context import FrameContext
from handpoint.engine.registry import TransformRegistry, get_registry
from handpoint.errors import HandPointError, InvalidArgumentError

logger = logging.getLogger(__name__)

_LAYER_PACKAGES = ("layer0", "layer1", "layer2")

# Transform IDs used by the gate
_SMOOTHING = "T0.01"
_SEGMENTATION = "T0.02"


def register_transforms() -> None:
    """Import all transform modules so @transform decorators fire."""
    for layer_name in _LAYER_PACKAGES:
        package = importlib.import_module(f"handpoint.engine.{layer_name}")
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package.__name__}.{module_name}")


class Pipeline:
    """Orchestrates the per-frame transform pipeline."""

    def __init__(
        self,
        registry: TransformRegistry | None = None,
        config: PipelineConfig | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.config = config or PipelineConfig()

    def run(self, ctx: FrameContext) -> FrameContext:
        """Run the pipeline on one frame.

        Config and input are checked before any transform runs. A transform
        that raises a HandPointError aborts the run; any other failure is
        recorded in ``ctx.errors`` and its dependents are skipped.
        """
        self.config.validate()
        self._check_input(ctx)
        ctx.config = self.config

        start = time.perf_counter()
        skip_ids = self._adaptive_gate(ctx)
        requested = {s.id for s in self.registry.all()} - skip_ids
        ordered = self.registry.resolve_order(requested)

        logger.info(
            "Pipeline: %d transforms queued (%d skipped)",
            len(ordered),
            len(skip_ids),
        )

        blocked: set[str] = set()
        for spec in ordered:
            if spec.id in blocked:
                logger.debug("  %s skipped (upstream failure)", spec.id)
                continue

            t0 = time.perf_counter()
            try:
                spec.fn(ctx)
            except HandPointError:
                logger.warning("  %s aborted the run", spec.id)
                raise
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                blocked |= self.registry.dependents(spec.id)
                logger.warning("  %s FAILED: %s", spec.id, e)
                continue

            ctx.completed_transforms.add(spec.id)
            elapsed = (time.perf_counter() - t0) * 1000
            ctx.timings_ms[spec.id] = round(elapsed, 3)
            logger.debug("  %s completed in %.1fms", spec.id, elapsed)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d/%d transforms in %.0fms, direction=%s angle=%s",
            len(ctx.completed_transforms),
            len(ordered),
            total,
            ctx.direction.name,
            "none" if ctx.angle is None else f"{ctx.angle:.1f}",
        )
        return ctx

    def _check_input(self, ctx: FrameContext) -> None:
        if ctx.image is None and ctx.mask is None:
            raise InvalidArgumentError("frame has neither an image nor a mask")
        height, width = ctx.shape
        if height <= 0 or width <= 0:
            raise InvalidArgumentError(f"image size must be positive, got {width}x{height}")

    def _adaptive_gate(self, ctx: FrameContext) -> set[str]:
        """Determine which transforms to skip for this frame.

        - Mask input skips all preprocessing (smoothing + segmentation)
        - Smoothing runs only when the config asks for it
        """
        skip: set[str] = set()
        if ctx.is_mask_input:
            skip.update({_SMOOTHING, _SEGMENTATION})
        elif not self.config.smooth:
            skip.add(_SMOOTHING)
        return skip


def create_pipeline(config: PipelineConfig | None = None) -> Pipeline:
    """Factory function for creating a pipeline over the registered transforms."""
    register_transforms()
    return Pipeline(config=config)


def analyze_mask(mask: NDArray, config: PipelineConfig | None = None) -> FrameContext:
    """Zone statistics and direction for a ready-made hand mask."""
    return create_pipeline(config).run(FrameContext.from_mask(mask))


def analyze_image(image: NDArray, config: PipelineConfig | None = None) -> FrameContext:
    """Segment the hand in an RGB image, then classify its pointing direction."""
    return create_pipeline(config).run(FrameContext.from_image(image))
