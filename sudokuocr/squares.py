"""Choosing the largest square formed by four detected lines, and cropping to it."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from sudokuocr.geometry import Line, Point, corner_points, dist, intersection_point

_PERPENDICULAR_TOLERANCE = 0.4
_MAX_SIDE_DIFFERENCE = 30
_HORIZONTAL_MARGIN = 120
_VERTICAL_MARGIN = 40


class NoSquareFound(ValueError):
    """No four lines make a square that fits the image."""


def is_perpendicular(first: Line, second: Line) -> bool:
    """Whether two lines are close to a right angle.

    A vertical line is perpendicular to a line whose slope is within 0.4
    of zero; two sloped lines are when the product of their slopes is
    within 0.4 of -1. Two vertical lines never are.
    """
    if first.vertical and second.vertical:
        return False
    tolerance = _PERPENDICULAR_TOLERANCE
    if first.vertical:
        return -tolerance <= second.slope <= tolerance
    if second.vertical:
        return -tolerance <= first.slope <= tolerance
    product = first.slope * second.slope
    return -1 - tolerance <= product <= -1 + tolerance


def square_perimeter(lines: Sequence[Line], i: int, j: int, k: int, l: int) -> float:
    """Length around the crossings of lines i-j, j-k, k-l and l-i."""
    crossings = [
        intersection_point(lines[i], lines[j]),
        intersection_point(lines[j], lines[k]),
        intersection_point(lines[k], lines[l]),
        intersection_point(lines[l], lines[i]),
    ]
    return sum(dist(crossings[n], crossings[(n + 1) % 4]) for n in range(4))


def _fits(width: int, height: int, corners: tuple[Point, Point, Point, Point]) -> bool:
    top_left, bottom_left, top_right, _ = corners
    side_down = dist(top_left, bottom_left)
    side_across = dist(top_left, top_right)
    if abs(int(side_across) - int(side_down)) > _MAX_SIDE_DIFFERENCE:
        return False

    margin = _HORIZONTAL_MARGIN
    if (top_left[0] >= margin and top_right[0] > width - margin) or (
        top_left[0] < margin and top_right[0] <= width - margin
    ):
        return False

    margin = _VERTICAL_MARGIN
    if (top_left[1] >= margin and bottom_left[1] > height - margin) or (
        top_left[1] < margin and bottom_left[1] <= height - margin
    ):
        return False
    return True


def detect_square(width: int, height: int, lines: Sequence[Line]) -> tuple[int, int, int, int]:
    """Indices (i, j, k, l) of the four lines making the largest acceptable square.

    Consecutive lines must be perpendicular; the square's sides may differ
    by at most 30 pixels, and it must reach across the image, not sit
    entirely inside or outside its margins.
    """
    count = len(lines)
    if count < 4:
        raise NoSquareFound("no square found: fewer than four lines")
    perpendicular = [[is_perpendicular(a, b) for b in lines] for a in lines]

    best_length = -1.0
    best: tuple[int, int, int, int] | None = None
    for i in range(count):
        for j in range(count):
            if i == j or not perpendicular[i][j]:
                continue
            for k in range(count):
                if k in (i, j) or not perpendicular[j][k]:
                    continue
                for l in range(count):
                    if (
                        l in (i, j, k)
                        or not perpendicular[k][l]
                        or not perpendicular[l][i]
                    ):
                        continue
                    perimeter = square_perimeter(lines, i, j, k, l)
                    if perimeter <= best_length:
                        continue
                    if not _fits(width, height, corner_points(lines, i, j, k, l)):
                        continue
                    best_length = perimeter
                    best = (i, j, k, l)
    if best is None:
        raise NoSquareFound("no square found")
    return best


def sort_corners(
    lines: Sequence[Line], square: Sequence[int]
) -> tuple[Point, Point, Point, Point]:
    """Top left, bottom left, top right and bottom right corners of a square."""
    i, j, k, l = square
    return corner_points(lines, i, j, k, l)


def crop_square(image, lines: Sequence[Line], square: Sequence[int]) -> np.ndarray:
    """The part of the image from the top left corner, as wide and high as the square."""
    top_left, bottom_left, top_right, _ = sort_corners(lines, square)
    crop_width = int(dist(top_left, top_right))
    crop_height = int(dist(top_left, bottom_left))
    x, y = int(top_left[0]), int(top_left[1])
    values = np.asarray(image)
    if values.ndim not in (2, 3):
        raise ValueError(f"expected a grey or RGB image, got shape {values.shape}")
    height, width = values.shape[:2]
    if (
        crop_width <= 0
        or crop_height <= 0
        or x < 0
        or y < 0
        or x + crop_width > width
        or y + crop_height > height
    ):
        raise ValueError(
            f"square of {crop_width} x {crop_height} at ({x}, {y}) "
            f"does not fit an image of {width} x {height}"
        )
    return values[y:y + crop_height, x:x + crop_width].copy()