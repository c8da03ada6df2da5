"""Tests for skin-color hand segmentation."""

from __future__ import annotations

import numpy as np
import pytest

from handpoint.engine.config import PipelineConfig
from handpoint.engine.segmentation import elliptical_footprint, keep_hand, skin_range_mask
from handpoint.errors import InvalidArgumentError
from tests.conftest import BACKGROUND_RGB, SKIN_RGB


def test_keep_hand_isolates_skin_block(hand_image):
    mask = keep_hand(hand_image)
    assert mask.shape == hand_image.shape[:2]
    assert mask.dtype == np.uint8
    assert set(np.unique(mask)) <= {0, 255}
    assert np.all(mask[20:40, 95:110] == 255)
    assert not mask[:, :85].any()
    assert not mask[:5, :].any()


def test_keep_hand_accepts_rgba(hand_image):
    rgba = np.dstack([hand_image, np.full(hand_image.shape[:2], 255, dtype=np.uint8)])
    assert np.array_equal(keep_hand(rgba), keep_hand(hand_image))


def test_keep_hand_without_skin(hand_image):
    config = PipelineConfig(hsv_lower=(100.0, 0.0, 0.0), hsv_upper=(100.0, 0.0, 0.0))
    assert not keep_hand(hand_image, config).any()


def test_keep_hand_rejects_grayscale(hand_image):
    with pytest.raises(InvalidArgumentError):
        keep_hand(hand_image[:, :, 0])


def test_skin_range_mask():
    pixels = np.array([[SKIN_RGB, BACKGROUND_RGB]], dtype=np.float64) / 255.0
    mask = skin_range_mask(pixels, (0.0, 58.0, 50.0), (30.0, 255.0, 255.0))
    assert mask.tolist() == [[255, 0]]


def test_elliptical_footprint():
    footprint = elliptical_footprint(8)
    assert footprint.shape == (8, 8)
    assert footprint[4].all()
    assert footprint[:, 4].sum() == 8
    assert footprint[0].sum() == 1
    assert not footprint[0, 0]


def test_elliptical_footprint_degenerate():
    assert elliptical_footprint(1).tolist() == [[True]]
    with pytest.raises(InvalidArgumentError):
        elliptical_footprint(0)
