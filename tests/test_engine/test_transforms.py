"""Tests for the registered frame transforms — full pipeline through Layer 0+1+2."""

from __future__ import annotations

import numpy as np
import pytest

from handpoint.engine.config import PipelineConfig
from handpoint.engine.direction import Direction
from handpoint.engine.pipeline import analyze_image, analyze_mask, register_transforms
from handpoint.engine.registry import Layer, get_registry
from handpoint.errors import InvalidArgumentError


def test_layers_register_expected_transforms():
    register_transforms()
    reg = get_registry()
    assert [s.id for s in reg.get_layer(Layer.PREPROCESS)] == ["T0.01", "T0.02"]
    assert [s.id for s in reg.get_layer(Layer.ZONES)] == ["T1.01", "T1.02"]
    assert [s.id for s in reg.get_layer(Layer.DIRECTION)] == ["T2.01", "T2.02"]


def test_register_transforms_is_idempotent():
    register_transforms()
    count = get_registry().count
    register_transforms()
    assert get_registry().count == count


def test_mask_pointing_east(hand_mask):
    ctx = analyze_mask(hand_mask)

    assert ctx.ratios == [0.0, 0.0, 1.0]
    assert ctx.direction == Direction.EAST
    assert ctx.largest_zone == 2
    assert ctx.angle == pytest.approx(60.0)
    assert ctx.angle_direction == Direction.EAST
    assert ctx.completed_transforms == {"T1.01", "T1.02", "T2.01", "T2.02"}
    assert ctx.errors == {}
    assert ctx.has_foreground


def test_mask_pointing_west(hand_mask):
    ctx = analyze_mask(hand_mask[:, ::-1])
    assert ctx.direction == Direction.WEST
    assert ctx.angle == pytest.approx(-60.0)


def test_empty_mask_has_no_direction(empty_mask):
    ctx = analyze_mask(empty_mask)
    assert ctx.foreground_pixels == 0
    assert not ctx.has_foreground
    assert ctx.direction == Direction.NEUTRAL
    assert ctx.angle is None
    assert ctx.angle_direction == Direction.NEUTRAL


def test_symmetric_mask_is_neutral_and_centred(empty_mask):
    mask = empty_mask.copy()
    mask[10:20, 5:15] = 255
    mask[10:20, 105:115] = 255
    ctx = analyze_mask(mask)
    assert ctx.direction == Direction.NEUTRAL
    assert ctx.angle == pytest.approx(0.0)


def test_five_zones_angle_only(hand_mask):
    ctx = analyze_mask(hand_mask, PipelineConfig(zone_count=5))
    assert len(ctx.stats) == 5
    assert ctx.direction == Direction.NEUTRAL
    assert ctx.angle is not None and ctx.angle > 0
    assert sum(ctx.ratios) == pytest.approx(1.0)


def test_zone_overlay_labels(hand_mask):
    ctx = analyze_mask(hand_mask)
    overlay = ctx.zone_overlay()
    assert set(np.unique(overlay)) == {0, 3}


def test_invalid_zone_count_fails_fast(hand_mask):
    with pytest.raises(InvalidArgumentError):
        analyze_mask(hand_mask, PipelineConfig(zone_count=0))


def test_multichannel_mask_fails_fast(hand_mask):
    with pytest.raises(InvalidArgumentError):
        analyze_mask(np.dstack([hand_mask] * 3))


def test_image_pointing_east(hand_image):
    ctx = analyze_image(hand_image)
    assert ctx.mask is not None and ctx.mask.shape == hand_image.shape[:2]
    assert "T0.02" in ctx.completed_transforms
    assert "T0.01" not in ctx.completed_transforms
    assert ctx.smoothed is None
    assert ctx.direction == Direction.EAST


def test_image_with_spectral_smoothing(hand_image):
    ctx = analyze_image(hand_image, PipelineConfig(smooth=True))
    assert "T0.01" in ctx.completed_transforms
    assert ctx.smoothed.shape == hand_image.shape
    assert ctx.smoothed.dtype == np.uint8
    assert ctx.direction == Direction.EAST
