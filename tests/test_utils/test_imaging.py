"""Tests for image I/O and resizing helpers."""

from __future__ import annotations

import base64

import numpy as np
import pytest

from handpoint.errors import InvalidArgumentError
from handpoint.utils.imaging import decode_image, encode_png, load_image, resize_to_fit, save_image
from tests.conftest import make_hand_image, make_hand_mask


def test_png_roundtrip_keeps_pixels():
    image = make_hand_image()
    decoded = decode_image(encode_png(image))
    assert decoded.dtype == np.uint8
    assert np.array_equal(decoded, image)


def test_decode_data_url_grayscale():
    mask = make_hand_mask()
    decoded = decode_image("data:image/png;base64," + encode_png(mask), grayscale=True)
    assert decoded.ndim == 2
    assert np.array_equal(decoded, mask)


def test_decode_rejects_bad_base64():
    with pytest.raises(InvalidArgumentError):
        decode_image("not base64 !!")


def test_decode_rejects_non_image_bytes():
    with pytest.raises(InvalidArgumentError):
        decode_image(base64.b64encode(b"hello world").decode())


def test_load_and_save(tmp_path):
    path = tmp_path / "hand.png"
    image = make_hand_image()
    save_image(image, path)
    assert np.array_equal(load_image(path), image)
    assert load_image(path, grayscale=True).ndim == 2


def test_resize_scales_down_to_fit():
    image = np.zeros((100, 200, 3), dtype=np.uint8)
    resized = resize_to_fit(image, 50, 50)
    assert resized.shape == (25, 50, 3)
    assert resized.dtype == np.uint8


def test_resize_never_upscales():
    image = make_hand_image()
    resized = resize_to_fit(image, 1000, 1000)
    assert resized.shape == image.shape
    assert resized is not image
    assert np.array_equal(resized, image)


def test_resize_rejects_empty_box():
    with pytest.raises(InvalidArgumentError):
        resize_to_fit(make_hand_image(), 0, 10)


def test_resize_mask_keeps_exact_foreground():
    mask = np.zeros((200, 400), dtype=np.uint8)
    mask[20:120, 40:100] = 255
    resized = resize_to_fit(mask, 200, 100, mask=True)
    assert resized.shape == (100, 200)
    assert set(np.unique(resized)) == {0, 255}
    assert np.count_nonzero(resized) == 50 * 30
