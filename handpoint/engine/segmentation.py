"""Skin-color hand segmentation — color image in, 0/255 hand mask out.

Algorithm:
1. Light Gaussian pre-blur (separable, reflect-101 borders)
2. RGB → HSV, inclusive range test against the skin bounds
3. Median filter to drop speckle
4. Dilation with an elliptical structuring element to close the silhouette

Bounds are given in OpenCV HSV units (H 0-180, S/V 0-255) and converted to
scikit-image's [0, 1] HSV.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray
from scipy.ndimage import convolve1d
from skimage.color import rgb2hsv
from skimage.filters import median
from skimage.morphology import dilation

from handpoint.engine.config import PipelineConfig
from handpoint.engine.spectral import gaussian_kernel_1d
from handpoint.errors import InvalidArgumentError

logger = logging.getLogger(__name__)

# OpenCV HSV unit maxima for H, S, V.
_HSV_SCALE = np.array([180.0, 255.0, 255.0])

MASK_ON = 255


def elliptical_footprint(size: int) -> NDArray[np.bool_]:
    """Filled ellipse inscribed in a ``size`` x ``size`` box (OpenCV MORPH_ELLIPSE layout)."""
    if size < 1:
        raise InvalidArgumentError(f"footprint size must be >= 1, got {size}")
    footprint = np.zeros((size, size), dtype=bool)
    r = size // 2
    c = size // 2
    if r == 0:
        footprint[:] = True
        return footprint

    for i in range(size):
        dy = i - r
        if abs(dy) > r:
            continue
        dx = int(round(c * np.sqrt((r * r - dy * dy) / (r * r))))
        j1 = max(c - dx, 0)
        j2 = min(c + dx + 1, size)
        footprint[i, j1:j2] = True
    return footprint


def pre_blur(image: NDArray, ksize: int) -> NDArray[np.float64]:
    """Separable Gaussian blur over the two spatial axes."""
    kernel = gaussian_kernel_1d(ksize)
    blurred = convolve1d(image.astype(np.float64), kernel, axis=0, mode="mirror")
    return convolve1d(blurred, kernel, axis=1, mode="mirror")


def skin_range_mask(
    image: NDArray,
    lower: tuple[float, float, float],
    upper: tuple[float, float, float],
) -> NDArray[np.uint8]:
    """0/255 mask of pixels whose HSV value lies inside [lower, upper]."""
    hsv = rgb2hsv(image)
    lo = np.asarray(lower, dtype=np.float64) / _HSV_SCALE
    hi = np.asarray(upper, dtype=np.float64) / _HSV_SCALE
    inside = np.all((hsv >= lo) & (hsv <= hi), axis=-1)
    return np.where(inside, MASK_ON, 0).astype(np.uint8)


def keep_hand(image: NDArray, config: PipelineConfig | None = None) -> NDArray[np.uint8]:
    """Segment the hand region of an RGB image into a new 0/255 uint8 mask."""
    config = config or PipelineConfig()
    if image.ndim != 3 or image.shape[2] not in (3, 4):
        raise InvalidArgumentError(f"expected an RGB(A) image, got shape {image.shape}")
    if image.shape[0] == 0 or image.shape[1] == 0:
        raise InvalidArgumentError(f"image size must be positive, got shape {image.shape}")

    rgb = image[:, :, :3]
    if np.issubdtype(rgb.dtype, np.integer):
        scale = float(np.iinfo(rgb.dtype).max)
    else:
        scale = 1.0

    blurred = pre_blur(rgb, config.pre_blur_ksize) / scale
    mask = skin_range_mask(np.clip(blurred, 0.0, 1.0), config.hsv_lower, config.hsv_upper)

    mask = median(mask, footprint=np.ones((config.median_size, config.median_size), dtype=bool))
    mask = dilation(mask, footprint=elliptical_footprint(config.dilate_size))

    logger.debug(
        "keep_hand: %d/%d foreground pixels",
        int(np.count_nonzero(mask)),
        mask.size,
    )
    return mask.astype(np.uint8)
