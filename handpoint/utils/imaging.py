"""Image I/O and resizing helpers. No engine imports."""

from __future__ import annotations

import base64
import binascii
import io
from pathlib import Path

import numpy as np
from numpy.typing import NDArray
from PIL import Image, UnidentifiedImageError
from skimage.transform import resize

from handpoint.errors import InvalidArgumentError

VALID_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".bmp", ".tif", ".tiff"}


def load_image(path: str | Path, *, grayscale: bool = False) -> NDArray[np.uint8]:
    """Read an image file into an RGB (or L) uint8 array."""
    with Image.open(Path(path)) as img:
        return np.array(img.convert("L" if grayscale else "RGB"))


def save_image(pixels: NDArray, path: str | Path) -> None:
    Image.fromarray(np.ascontiguousarray(pixels)).save(Path(path))


def decode_image(data: str, *, grayscale: bool = False) -> NDArray[np.uint8]:
    """Decode a base64 string (optionally a ``data:`` URL) into a uint8 array."""
    if data.startswith("data:"):
        data = data.split(",", 1)[-1]
    try:
        raw = base64.b64decode(data, validate=True)
        with Image.open(io.BytesIO(raw)) as img:
            return np.array(img.convert("L" if grayscale else "RGB"))
    except (binascii.Error, UnidentifiedImageError, OSError) as e:
        raise InvalidArgumentError(f"could not decode image: {e}") from e


def encode_png(pixels: NDArray) -> str:
    """PNG-encode an (H, W) or (H, W, C) uint8 array as base64."""
    buf = io.BytesIO()
    Image.fromarray(np.ascontiguousarray(pixels)).save(buf, format="PNG")
    return base64.b64encode(buf.getvalue()).decode("ascii")


def resize_to_fit(image: NDArray, max_width: int, max_height: int, *, mask: bool = False) -> NDArray:
    """Scale down so the image fits in max_width x max_height; never upscales.

    Masks are resampled nearest-neighbour so no blended edge values appear
    and the foreground stays binary.
    """
    if max_width <= 0 or max_height <= 0:
        raise InvalidArgumentError(f"bounding box must be positive, got {max_width}x{max_height}")
    height, width = image.shape[:2]
    scale = min(max_width / width, max_height / height, 1.0)
    if scale >= 1.0:
        return image.copy()

    new_shape = (max(1, round(height * scale)), max(1, round(width * scale))) + image.shape[2:]
    if mask:
        resized = resize(image, new_shape, order=0, preserve_range=True, anti_aliasing=False)
    else:
        resized = resize(image, new_shape, order=1, preserve_range=True, anti_aliasing=True)
    if np.issubdtype(image.dtype, np.integer):
        resized = np.rint(resized)
    return resized.astype(image.dtype)
