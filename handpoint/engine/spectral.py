"""Frequency-domain convolution — Gaussian smoothing via the 2D DFT.

One call runs PREPARE → TRANSFORM_IMAGE → BUILD_KERNEL → TRANSFORM_KERNEL →
MULTIPLY → INVERSE_TRANSFORM → NORMALIZE_CROP and keeps no state between calls.

Layout of one call (per axis, ``n`` = original size, ``r = ksize // 2``)::

    | margin (replicated) | image (n) | replicated up to the FFT-friendly size |
    ^ 0                   ^ margin                                          ^ working

The kernel sits in the top-left corner of a zero matrix of the working size,
so the circular product is shifted by ``r``; the crop starts at
``margin + r`` to undo that. ``margin >= r`` keeps wraparound out of the crop.
All of that arithmetic lives in :func:`spectral_geometry`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from scipy.fft import next_fast_len
from skimage.color import rgb2gray

from handpoint.errors import InvalidArgumentError, InvariantViolationError

logger = logging.getLogger(__name__)

# Replicated border added on every side before the transform.
IMAGE_BLUR_BORDER_PADDING = 25

DEFAULT_KSIZE = 5

# Fixed small-kernel coefficients (same values OpenCV's getGaussianKernel uses
# when sigma is not given).
_SMALL_GAUSSIAN_TABLES: dict[int, tuple[float, ...]] = {
    1: (1.0,),
    3: (0.25, 0.5, 0.25),
    5: (0.0625, 0.25, 0.375, 0.25, 0.0625),
    7: (0.03125, 0.109375, 0.21875, 0.28125, 0.21875, 0.109375, 0.03125),
}

# Relative spread below which the inverse plane counts as flat.
_FLAT_RANGE_EPS = 1e-9


@dataclass(frozen=True)
class SpectralGeometry:
    """Sizes and offsets for one convolution call."""

    height: int
    width: int
    ksize: int
    margin: int
    working_height: int
    working_width: int

    @property
    def shape(self) -> tuple[int, int]:
        return (self.height, self.width)

    @property
    def working_shape(self) -> tuple[int, int]:
        return (self.working_height, self.working_width)

    @property
    def pad_before(self) -> tuple[int, int]:
        return (self.margin, self.margin)

    @property
    def pad_after(self) -> tuple[int, int]:
        return (
            self.working_height - self.height - self.margin,
            self.working_width - self.width - self.margin,
        )

    @property
    def crop_origin(self) -> tuple[int, int]:
        """(row, col) of the original image inside the inverse plane."""
        offset = self.margin + self.ksize // 2
        return (offset, offset)


def validate_ksize(ksize: int) -> None:
    if ksize < 1 or ksize % 2 == 0:
        raise InvalidArgumentError(f"kernel size must be odd and >= 1, got {ksize}")


def spectral_geometry(
    shape: tuple[int, ...],
    ksize: int,
    margin: int = IMAGE_BLUR_BORDER_PADDING,
) -> SpectralGeometry:
    """Compute working size, padding and crop origin for an image shape."""
    validate_ksize(ksize)
    if len(shape) < 2 or shape[0] <= 0 or shape[1] <= 0:
        raise InvalidArgumentError(f"image size must be positive, got shape {shape}")
    if margin < 0:
        raise InvalidArgumentError(f"border margin must be >= 0, got {margin}")

    height, width = int(shape[0]), int(shape[1])
    effective_margin = max(margin, ksize // 2)

    geometry = SpectralGeometry(
        height=height,
        width=width,
        ksize=ksize,
        margin=effective_margin,
        working_height=next_fast_len(height + 2 * effective_margin),
        working_width=next_fast_len(width + 2 * effective_margin),
    )
    logger.debug(
        "Spectral geometry: %dx%d ksize=%d margin=%d working=%dx%d",
        width,
        height,
        ksize,
        effective_margin,
        geometry.working_width,
        geometry.working_height,
    )
    return geometry


# ---------------------------------------------------------------------------
# PREPARE
# ---------------------------------------------------------------------------

def sample_range(dtype: np.dtype) -> tuple[float, float]:
    """Valid sample range: full iinfo range for integers, [0, 1] for floats."""
    dtype = np.dtype(dtype)
    if np.issubdtype(dtype, np.integer):
        info = np.iinfo(dtype)
        return (float(info.min), float(info.max))
    if np.issubdtype(dtype, np.floating):
        return (0.0, 1.0)
    raise InvalidArgumentError(f"unsupported sample type {dtype}")


def to_single_channel(image: NDArray) -> NDArray[np.float64]:
    """Luminance plane in the image's own units (no rescaling to [0, 1])."""
    if image.ndim == 2:
        return image.astype(np.float64)
    if image.ndim == 3 and image.shape[2] == 1:
        return image[:, :, 0].astype(np.float64)
    if image.ndim == 3 and image.shape[2] in (3, 4):
        # Alpha is dropped; float input keeps its units through rgb2gray.
        return rgb2gray(image[:, :, :3].astype(np.float64))
    raise InvalidArgumentError(f"unsupported image shape {image.shape}")


def prepare_image(plane: NDArray, geometry: SpectralGeometry) -> NDArray[np.float64]:
    """Pad a single-channel plane to the working size by edge replication."""
    if plane.shape != geometry.shape:
        raise InvariantViolationError(
            f"plane shape {plane.shape} does not match geometry {geometry.shape}"
        )
    (top, left), (bottom, right) = geometry.pad_before, geometry.pad_after
    return np.pad(plane.astype(np.float64), ((top, bottom), (left, right)), mode="edge")


# ---------------------------------------------------------------------------
# BUILD_KERNEL
# ---------------------------------------------------------------------------

def gaussian_kernel_1d(ksize: int, sigma: float = 0.0) -> NDArray[np.float64]:
    """1D Gaussian summing to 1. ``sigma <= 0`` derives sigma from ksize."""
    validate_ksize(ksize)
    if sigma <= 0 and ksize in _SMALL_GAUSSIAN_TABLES:
        return np.array(_SMALL_GAUSSIAN_TABLES[ksize], dtype=np.float64)

    if sigma <= 0:
        sigma = 0.3 * ((ksize - 1) * 0.5 - 1) + 0.8
    x = np.arange(ksize, dtype=np.float64) - (ksize - 1) / 2.0
    weights = np.exp(-(x**2) / (2.0 * sigma**2))
    return weights / weights.sum()


def gaussian_kernel(ksize: int, sigma: float = 0.0) -> NDArray[np.float64]:
    """Separable 2D Gaussian: outer product of the 1D kernel with its transpose."""
    k = gaussian_kernel_1d(ksize, sigma).reshape(-1, 1)
    product = k @ k.T
    return product / product.sum()


def embed_kernel(kernel: NDArray, working_shape: tuple[int, int]) -> NDArray[np.float64]:
    """Zero-pad ``kernel`` into the top-left corner of a working-size matrix."""
    kh, kw = kernel.shape
    h, w = working_shape
    if kh > h or kw > w:
        raise InvariantViolationError(
            f"kernel {kernel.shape} does not fit working size {working_shape}"
        )
    return np.pad(kernel.astype(np.float64), ((0, h - kh), (0, w - kw)), mode="constant")


# ---------------------------------------------------------------------------
# TRANSFORM / MULTIPLY / INVERSE
# ---------------------------------------------------------------------------

def forward_transform(plane: NDArray) -> NDArray[np.complex128]:
    return np.fft.fft2(plane.astype(np.float64))


def multiply_spectra(
    image_spectrum: NDArray[np.complex128],
    kernel_spectrum: NDArray[np.complex128],
) -> NDArray[np.complex128]:
    """Complex element-wise product, i.e. circular convolution in space."""
    if image_spectrum.shape != kernel_spectrum.shape:
        raise InvariantViolationError(
            f"spectrum shapes differ: image {image_spectrum.shape} vs kernel {kernel_spectrum.shape}"
        )
    return image_spectrum * kernel_spectrum


def inverse_transform(spectrum: NDArray[np.complex128], dtype: np.dtype) -> NDArray[np.float64]:
    """Real plane of the inverse DFT, min-max stretched to the dtype's range.

    A flat plane has no range to stretch and is only clipped, so a constant
    image comes back unchanged.
    """
    real = np.fft.ifft2(spectrum).real
    lo, hi = sample_range(dtype)

    smin, smax = float(real.min()), float(real.max())
    if smax - smin > _FLAT_RANGE_EPS * (hi - lo):
        real = (real - smin) * ((hi - lo) / (smax - smin)) + lo
    return np.clip(real, lo, hi)


def crop_to_original(plane: NDArray[np.float64], geometry: SpectralGeometry, dtype: np.dtype) -> NDArray:
    """Cut the original footprint out of the inverse plane and cast back."""
    row, col = geometry.crop_origin
    region = plane[row : row + geometry.height, col : col + geometry.width]
    if region.shape != geometry.shape:
        raise InvariantViolationError(
            f"crop {region.shape} at {geometry.crop_origin} does not match {geometry.shape}"
        )

    dtype = np.dtype(dtype)
    if np.issubdtype(dtype, np.integer):
        lo, hi = sample_range(dtype)
        region = np.clip(np.rint(region), lo, hi)
    return region.astype(dtype)


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def convolve(
    image: NDArray,
    kernel: NDArray,
    margin: int = IMAGE_BLUR_BORDER_PADDING,
) -> NDArray:
    """Convolve a (grayscale-converted) image with an odd square kernel via the DFT."""
    if kernel.ndim != 2 or kernel.shape[0] != kernel.shape[1]:
        raise InvalidArgumentError(f"kernel must be square, got shape {kernel.shape}")

    dtype = image.dtype
    sample_range(dtype)
    plane = to_single_channel(image)
    geometry = spectral_geometry(plane.shape, kernel.shape[0], margin)

    prepared = prepare_image(plane, geometry)
    image_spectrum = forward_transform(prepared)

    kernel_ex = embed_kernel(kernel, geometry.working_shape)
    kernel_spectrum = forward_transform(kernel_ex)

    product = multiply_spectra(image_spectrum, kernel_spectrum)
    restored = inverse_transform(product, dtype)
    return crop_to_original(restored, geometry, dtype)


def gaussian_blur(
    image: NDArray,
    ksize: int = DEFAULT_KSIZE,
    margin: int = IMAGE_BLUR_BORDER_PADDING,
) -> NDArray:
    """Gaussian smoothing of the grayscale plane; returns an (H, W) image.

    Float input is expected in [0, 1]; samples outside it are clipped, so a
    flat float field only survives unchanged when it lies in that range.
    """
    return convolve(image, gaussian_kernel(ksize), margin)


def gaussian_blur_colored(
    image: NDArray,
    ksize: int = DEFAULT_KSIZE,
    margin: int = IMAGE_BLUR_BORDER_PADDING,
) -> NDArray:
    """Blur each channel on its own and stack them back; channel count is kept."""
    if image.ndim == 2:
        return gaussian_blur(image, ksize, margin)
    if image.ndim != 3:
        raise InvalidArgumentError(f"unsupported image shape {image.shape}")

    kernel = gaussian_kernel(ksize)
    channels = [convolve(image[:, :, c], kernel, margin) for c in range(image.shape[2])]
    return np.stack(channels, axis=-1)
