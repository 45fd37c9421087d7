"""The Hough transform for straight lines in a binary edge image."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from sudokuocr.geometry import create_array, degrees_to_rad

_THETA_MIN = -90.0
_THETA_MAX = 90.0
_EDGE = 255


def _spaced(count: int, low: float, high: float) -> np.ndarray:
    step = (high - low) / (count - 1)
    values = create_array(count, low, high, step)
    values.extend([high] * (count - len(values)))
    return np.array(values, dtype=np.float64)


@dataclass(frozen=True, eq=False)
class HoughSpace:
    """Sampling of distances and angles for an image of a given size.

    Distances run from minus to plus the image diagonal and angles from
    -90 to 90 degrees, each in ``count + 1`` samples where count is the
    doubled diagonal truncated to an integer.
    """

    width: int
    height: int
    diagonal: float
    rho_count: int
    theta_count: int
    rhos: np.ndarray
    thetas: np.ndarray
    theta_degrees: np.ndarray

    @classmethod
    def for_size(cls, width: int, height: int) -> HoughSpace:
        """The sampling used for an image of width x height pixels."""
        if width <= 0 or height <= 0:
            raise ValueError("the image must have a positive width and height")
        diagonal = math.sqrt(width * width + height * height)
        count = int(diagonal * 2)
        rhos = _spaced(count + 1, -diagonal, diagonal)
        theta_degrees = _spaced(count + 1, _THETA_MIN, _THETA_MAX)
        thetas = np.array([degrees_to_rad(value) for value in theta_degrees])
        return cls(width, height, diagonal, count, count, rhos, thetas, theta_degrees)


def hough_transform(binary) -> np.ndarray:
    """Votes indexed by (distance, angle) from every pixel whose level is 255.

    For RGB images the red channel is read.
    """
    values = np.asarray(binary)
    if values.ndim == 3:
        channel = values[..., 0]
    elif values.ndim == 2:
        channel = values
    else:
        raise ValueError(f"expected a grey or RGB image, got shape {values.shape}")
    height, width = channel.shape
    space = HoughSpace.for_size(width, height)
    rows = space.rho_count + 1
    accumulator = np.zeros((rows, space.theta_count + 1), dtype=np.int64)

    ys, xs = np.nonzero(channel == _EDGE)
    if xs.size == 0:
        return accumulator
    xs = xs.astype(np.float64)
    ys = ys.astype(np.float64)
    for index, theta in enumerate(space.thetas):
        rho = xs * math.cos(theta) + ys * math.sin(theta)
        bins = np.clip((rho + space.diagonal).astype(np.int64), 0, rows - 1)
        accumulator[:, index] = np.bincount(bins, minlength=rows)
    return accumulator