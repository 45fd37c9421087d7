"""Rotating images, points and segments about the image centre."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

import numpy as np

from sudokuocr.geometry import Segment, degrees_to_rad
from sudokuocr.hough import HoughSpace

_MIN_VOTES = 255


def rotate_point(angle: float, x, y, center_x, center_y):
    """Rotate (x, y) by angle radians about the centre; works on arrays too."""
    cosine = math.cos(angle)
    sine = math.sin(angle)
    rx = (x - center_x) * cosine - (y - center_y) * sine + center_x
    ry = (x - center_x) * sine + (y - center_y) * cosine + center_y
    return rx, ry


def is_pixel_black(rgb: Sequence[int], tolerance: int, minimum: int) -> bool:
    """Whether a pixel is not a light grey.

    True when two channels differ by more than tolerance or any channel
    lies below minimum.
    """
    red, green, blue = (int(value) for value in rgb[:3])
    spread = max(abs(red - green), abs(red - blue), abs(green - blue))
    return spread > tolerance or min(red, green, blue) < minimum


def automatic_rotation(accumulator, width: int, height: int) -> float:
    """The size of the angle, in degrees, with the most strong Hough votes.

    Only cells with at least 255 votes count. The first angle is never
    chosen; when no later angle beats it the result is 0.
    """
    space = HoughSpace.for_size(width, height)
    size = space.theta_count + 1
    votes_grid = np.asarray(accumulator)
    if votes_grid.ndim != 2 or votes_grid.shape[0] < size or votes_grid.shape[1] < size:
        raise ValueError(f"the accumulator must cover at least {size} x {size} cells")
    block = votes_grid[:size, :size]
    votes = np.where(block >= _MIN_VOTES, block, 0).sum(axis=0)

    best_theta = 0.0
    best_votes = votes[0]
    for index in range(1, size):
        if votes[index] > best_votes:
            best_theta = float(space.theta_degrees[index])
            best_votes = votes[index]
    return abs(best_theta)


def rotate_segment(width: int, height: int, angle: float, segment: Segment) -> Segment:
    """Rotate a segment by angle degrees about the centre, truncating to integers."""
    radians = degrees_to_rad(angle)
    center_x, center_y = width // 2, height // 2
    x1, y1, x2, y2 = segment
    rx1, ry1 = rotate_point(radians, x1, y1, center_x, center_y)
    rx2, ry2 = rotate_point(radians, x2, y2, center_x, center_y)
    return int(rx1), int(ry1), int(rx2), int(ry2)


def rotate_segments(
    width: int, height: int, angle: float, segments: Iterable[Segment]
) -> list[Segment]:
    """Rotate every segment by angle degrees."""
    return [rotate_segment(width, height, angle, segment) for segment in segments]


def rotate(image, angle: float) -> np.ndarray:
    """A rotated copy of a grey or RGB image; uncovered pixels are black.

    Each destination pixel takes the source pixel its position maps to
    when rotated by angle degrees about the centre.
    """
    values = np.asarray(image)
    if values.ndim not in (2, 3):
        raise ValueError(f"expected a grey or RGB image, got shape {values.shape}")
    height, width = values.shape[:2]
    radians = degrees_to_rad(angle)
    ys, xs = np.mgrid[0:height, 0:width]
    rx, ry = rotate_point(
        radians, xs.astype(np.float64), ys.astype(np.float64), width // 2, height // 2
    )
    inside = (rx >= 0) & (rx < width) & (ry >= 0) & (ry < height)
    source_x = np.where(inside, rx, 0).astype(np.int64)
    source_y = np.where(inside, ry, 0).astype(np.int64)
    result = np.zeros_like(values)
    result[inside] = values[source_y[inside], source_x[inside]]
    return result