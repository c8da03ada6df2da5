"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest

# Synthetic frame: 60 x 120, three 40-px zones. The hand block sits well
# inside the right zone so blur/median/dilation margins never cross x=80.
FRAME_H, FRAME_W = 60, 120
HAND_ROWS = slice(15, 46)
HAND_COLS = slice(92, 113)

# RGB colors: skin sits inside the default HSV range, background does not.
SKIN_RGB = (200, 60, 40)
BACKGROUND_RGB = (20, 120, 160)


def make_hand_mask() -> np.ndarray:
    mask = np.zeros((FRAME_H, FRAME_W), dtype=np.uint8)
    mask[HAND_ROWS, HAND_COLS] = 255
    return mask


def make_hand_image() -> np.ndarray:
    image = np.empty((FRAME_H, FRAME_W, 3), dtype=np.uint8)
    image[:, :] = BACKGROUND_RGB
    image[HAND_ROWS, HAND_COLS] = SKIN_RGB
    return image


@pytest.fixture
def hand_mask() -> np.ndarray:
    return make_hand_mask()


@pytest.fixture
def hand_image() -> np.ndarray:
    return make_hand_image()


@pytest.fixture
def empty_mask() -> np.ndarray:
    return np.zeros((FRAME_H, FRAME_W), dtype=np.uint8)


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)
