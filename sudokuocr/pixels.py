"""Loading and saving images as arrays, and grey-level helpers.

Colour images are ``(height, width, 3)`` arrays of ``uint8``; grey images
are ``(height, width)`` arrays of ``uint8``.
"""

from __future__ import annotations

import os

import numpy as np
from PIL import Image


def _gray(gray) -> np.ndarray:
    values = np.asarray(gray)
    if values.ndim != 2:
        raise ValueError(f"expected a two-dimensional grey image, got shape {values.shape}")
    return values


def load_image(path: str | os.PathLike[str]) -> np.ndarray:
    """Read an image file as an RGB array."""
    with Image.open(path) as picture:
        return np.array(picture.convert("RGB"), dtype=np.uint8)


def save_image(image, path: str | os.PathLike[str]) -> None:
    """Write a grey or RGB array; the file format follows the extension."""
    values = np.asarray(image)
    if values.ndim == 3 and values.shape[2] >= 3:
        values = values[..., :3]
    elif values.ndim != 2:
        raise ValueError(f"cannot save an array of shape {values.shape}")
    Image.fromarray(np.ascontiguousarray(values.astype(np.uint8))).save(path)


def to_grayscale(image) -> np.ndarray:
    """Weighted grey level 0.3 R + 0.59 G + 0.11 B, truncated to an integer."""
    values = np.asarray(image)
    if values.ndim == 2:
        return values.astype(np.uint8, copy=True)
    if values.ndim != 3 or values.shape[2] < 3:
        raise ValueError(f"expected an RGB image, got shape {values.shape}")
    rgb = values[..., :3].astype(np.float64)
    weighted = 0.3 * rgb[..., 0] + 0.59 * rgb[..., 1] + 0.11 * rgb[..., 2]
    return weighted.astype(np.uint8)


def gray_bounds(gray) -> tuple[int, int]:
    """The darkest and brightest grey levels; (255, 0) for an empty image."""
    values = _gray(gray)
    if values.size == 0:
        return 255, 0
    return int(values.min()), int(values.max())


def gray_average(gray) -> int:
    """The mean grey level, rounded down."""
    values = _gray(gray)
    if values.size == 0:
        raise ValueError("the average of an empty image is undefined")
    return int(values.astype(np.int64).sum()) // values.size