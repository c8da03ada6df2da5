"""Tests for API endpoints."""

from __future__ import annotations

import numpy as np
from fastapi.testclient import TestClient

from handpoint.main import app
from handpoint.utils.imaging import decode_image, encode_png
from tests.conftest import make_hand_image, make_hand_mask


client = TestClient(app)


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["transforms_registered"] == 6


def test_analyze_mask():
    response = client.post("/api/analyze", json={"image": encode_png(make_hand_mask()), "is_mask": True})
    assert response.status_code == 200
    data = response.json()
    assert data["width"] == 120 and data["height"] == 60
    assert [z["ratio"] for z in data["zone_stats"]] == [0.0, 0.0, 1.0]
    assert data["zone_stats"][2]["x_start"] == 80
    assert data["zone_stats"][2]["x_end"] == 119
    assert data["direction"] == "east"
    assert data["largest_zone"] == 2
    assert data["angle"] == 60.0
    assert data["transforms_completed"] == 4
    assert data["mask"] is None


def test_analyze_color_image_with_mask():
    response = client.post(
        "/api/analyze",
        json={"image": encode_png(make_hand_image()), "include_mask": True, "smooth": True},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["direction"] == "east"
    assert data["transforms_completed"] == 6
    mask = decode_image(data["mask"], grayscale=True)
    assert mask.shape == (60, 120)
    assert not mask[:, :80].any()


def test_analyze_empty_mask_has_null_angle():
    empty = np.zeros((60, 120), dtype=np.uint8)
    response = client.post("/api/analyze", json={"image": encode_png(empty), "is_mask": True})
    assert response.status_code == 200
    data = response.json()
    assert data["direction"] == "neutral"
    assert data["angle"] is None
    assert data["foreground_pixels"] == 0


def test_analyze_custom_zones_and_arc():
    response = client.post(
        "/api/analyze",
        json={"image": encode_png(make_hand_mask()), "is_mask": True, "zones": 5, "arc": 90},
    )
    data = response.json()
    assert len(data["zone_stats"]) == 5
    assert data["direction"] == "neutral"
    assert 0 < data["angle"] <= 45


def test_analyze_large_mask_downscale_keeps_foreground_binary():
    mask = np.zeros((1080, 1920), dtype=np.uint8)
    mask[100:600, 1200:1500] = 255
    response = client.post("/api/analyze", json={"image": encode_png(mask), "is_mask": True})
    assert response.status_code == 200
    data = response.json()
    assert (data["width"], data["height"]) == (960, 540)
    assert data["foreground_pixels"] == 250 * 150
    assert data["direction"] == "east"


def test_analyze_bad_image():
    response = client.post("/api/analyze", json={"image": "not an image"})
    assert response.status_code == 400


def test_analyze_invalid_zone_count():
    response = client.post("/api/analyze", json={"image": encode_png(make_hand_mask()), "zones": 0})
    assert response.status_code == 422


def test_blur_colored():
    response = client.post("/api/blur", json={"image": encode_png(make_hand_image()), "ksize": 5})
    assert response.status_code == 200
    data = response.json()
    assert (data["width"], data["height"], data["channels"]) == (120, 60, 3)
    assert decode_image(data["image"]).shape == (60, 120, 3)


def test_blur_grayscale():
    response = client.post(
        "/api/blur",
        json={"image": encode_png(make_hand_image()), "ksize": 3, "colored": False},
    )
    assert response.status_code == 200
    assert response.json()["channels"] == 1


def test_blur_even_ksize_rejected():
    response = client.post("/api/blur", json={"image": encode_png(make_hand_image()), "ksize": 4})
    assert response.status_code == 422
