"""HandPoint zone/direction engine."""

from handpoint.engine.registry import transform, Layer, get_registry
from handpoint.engine.context import FrameContext
from handpoint.engine.config import PipelineConfig
from handpoint.engine.direction import Direction
from handpoint.engine.pipeline import Pipeline, analyze_image, analyze_mask, create_pipeline

__all__ = [
    "transform",
    "Layer",
    "get_registry",
    "FrameContext",
    "PipelineConfig",
    "Direction",
    "Pipeline",
    "analyze_image",
    "analyze_mask",
    "create_pipeline",
]
