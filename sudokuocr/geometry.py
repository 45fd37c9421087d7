"""Plane geometry used by the grid detection: lines, segments and corners.

A segment is a tuple ``(x1, y1, x2, y2)`` of integers. A point is a
tuple ``(x, y)``. Images drawn on are ``(height, width, 3)`` arrays.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np

_VERTICAL_TOLERANCE = 5
_STEEP_SLOPE = 60
_MARKER_HALF_SIZE = 20

_RED = (255, 0, 0)
_GREEN = (0, 255, 0)
_BLUE = (0, 0, 255)

Point = tuple[float, float]
Segment = tuple[int, int, int, int]

# Index triples (a, b, c) tested for each corner candidate.
_TOP_LEFT_TRIPLES = (
    ((0, 1, 2), (0, 1, 3), (0, 2, 3)),
    ((1, 0, 2), (1, 0, 3), (1, 1, 3)),
    ((2, 0, 1), (2, 0, 3), (2, 1, 3)),
    ((3, 0, 1), (3, 0, 2), (3, 1, 2)),
)
_OTHER_TRIPLES = (
    ((0, 1, 2), (0, 1, 3), (0, 2, 3)),
    ((1, 0, 2), (1, 0, 3), (1, 1, 3)),
    ((2, 1, 0), (2, 0, 3), (2, 1, 3)),
    ((3, 1, 2), (3, 0, 2), (3, 1, 2)),
)


@dataclass(frozen=True)
class Line:
    """A line ``y = slope * x + intercept``, or when vertical ``x = slope``.

    Vertical lines keep an intercept of -1.
    """

    slope: float
    intercept: float
    vertical: bool

    @classmethod
    def from_segment(cls, x1: int, y1: int, x2: int, y2: int) -> Line:
        """The line through a segment.

        Segments whose ends lie within 5 pixels horizontally, and lines
        whose truncated slope exceeds 60 in size, become vertical lines.
        """
        if x2 - _VERTICAL_TOLERANCE <= x1 <= x2 + _VERTICAL_TOLERANCE:
            return cls(float(x1), -1.0, True)
        slope = (y1 - y2) / (x1 - x2)
        intercept = -slope * x1 + y1
        if abs(int(slope)) > _STEEP_SLOPE:
            return cls(-intercept / slope, -1.0, True)
        return cls(slope, intercept, False)


def clamp(value: int, low: int, high: int) -> int:
    """Value limited to the range low..high."""
    if value < low:
        return low
    if value > high:
        return high
    return value


def create_array(size: int, low: float, high: float, step: float) -> list[float]:
    """Up to size values from low in steps of step, none beyond high."""
    values: list[float] = []
    current = low
    while len(values) < size and current <= high:
        values.append(current)
        current += step
    return values


def degrees_to_rad(degrees: float) -> float:
    """Convert degrees to radians."""
    return degrees * (math.pi / 180)


def inside_coords(
    width: int, height: int, x0: int, y0: int, x1: int, y1: int
) -> tuple[int, int, int, int]:
    """First and last points of a segment lying inside a width x height area.

    The segment is walked with Bresenham's algorithm; missing points are -1.
    """
    first_x = first_y = last_x = last_y = -1
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    error = dx + dy

    while True:
        if 0 <= x0 < width and 0 <= y0 < height:
            if first_x == -1 and first_y == -1:
                first_x, first_y = x0, y0
            else:
                last_x, last_y = x0, y0
        if x0 == x1 and y0 == y1:
            break
        doubled = 2 * error
        if doubled >= dy:
            error += dy
            x0 += sx
        if doubled <= dx:
            error += dx
            y0 += sy
    return first_x, first_y, last_x, last_y


def _rgb(image) -> np.ndarray:
    if not isinstance(image, np.ndarray) or image.ndim != 3 or image.shape[2] < 3:
        raise ValueError("expected an RGB image array of shape (height, width, 3)")
    return image


def _paint_flat(image: np.ndarray, index: int, colour: tuple[int, int, int]) -> None:
    height, width = image.shape[:2]
    if 0 <= index < height * width:
        y, x = divmod(index, width)
        image[y, x, :3] = colour


def draw_line(image: np.ndarray, line: Line) -> np.ndarray:
    """Draw a line in place: red if vertical, green if shallow, blue if steep."""
    pixels = _rgb(image)
    height, width = pixels.shape[:2]
    total = height * width
    if line.vertical:
        start = int(line.slope)
        if start >= 0:
            for index in range(start, total, width):
                _paint_flat(pixels, index, _RED)
    elif -1 <= line.slope <= 1:
        for x in range(width):
            y = int(line.slope * x + line.intercept)
            if 0 <= y < height:
                pixels[y, x, :3] = _GREEN
    else:
        for y in range(height):
            x = int((y - line.intercept) / line.slope)
            _paint_flat(pixels, y * width + x, _BLUE)
    return pixels


def draw_points(image: np.ndarray, point: Point) -> np.ndarray:
    """Draw a red square of 41 x 41 pixels centred on a point, in place."""
    pixels = _rgb(image)
    height, width = pixels.shape[:2]
    x, y = int(point[0]), int(point[1])
    span = range(-_MARKER_HALF_SIZE, _MARKER_HALF_SIZE + 1)
    for i in span:
        row = clamp(y + i, 0, height)
        for j in span:
            column = clamp(x + j, 0, width)
            _paint_flat(pixels, row * width + column, _RED)
    return pixels


def append_segment(segments: Iterable[Segment], segment: Segment) -> list[Segment]:
    """A new list of segments with segment added unless present in either direction."""
    result = [tuple(item) for item in segments]
    x1, y1, x2, y2 = segment
    if (x1, y1, x2, y2) in result or (x2, y2, x1, y1) in result:
        return result
    result.append((x1, y1, x2, y2))
    return result


def intersection_point(first: Line, second: Line) -> Point:
    """Where two lines cross; ValueError if they are parallel."""
    if first.vertical and second.vertical:
        raise ValueError("no intersection point between two vertical lines")
    if first.vertical:
        x = first.slope
        return x, second.slope * x + second.intercept
    if second.vertical:
        x = second.slope
        return x, first.slope * x + first.intercept
    denominator = second.slope - first.slope
    if denominator == 0:
        raise ValueError("no intersection point between parallel lines")
    x = (first.intercept - second.intercept) / denominator
    y = (first.intercept * second.slope - second.intercept * first.slope) / denominator
    return x, y


def _candidates(values: Sequence[int], triples, better) -> list[int]:
    return [
        index
        for index, tests in enumerate(triples)
        if any(better(values[a], values[b], values[c]) for a, b, c in tests)
    ]


def _is_min(i: int, j: int, k: int) -> bool:
    return i <= j and i <= k


def _is_max(i: int, j: int, k: int) -> bool:
    return i >= j and i >= k


def _truncated(points: Sequence[Point], axis: int) -> list[int]:
    if len(points) != 4:
        raise ValueError(f"expected four points, got {len(points)}")
    return [int(point[axis]) for point in points]


def top_left(points: Sequence[Point]) -> int:
    """Index of the top left corner among four points."""
    found = _candidates(_truncated(points, 1), _TOP_LEFT_TRIPLES, _is_min)
    if len(found) == 1:
        return found[0]
    first, second = found[:2]
    return first if points[first][0] < points[second][0] else second


def bottom_left(points: Sequence[Point]) -> int:
    """Index of the bottom left corner among four points."""
    found = _candidates(_truncated(points, 0), _OTHER_TRIPLES, _is_min)
    if len(found) == 1:
        return found[0]
    first, second = found[:2]
    return second if points[first][1] < points[second][1] else first


def top_right(points: Sequence[Point]) -> int:
    """Index of the top right corner among four points."""
    found = _candidates(_truncated(points, 0), _OTHER_TRIPLES, _is_max)
    if len(found) == 1:
        return found[0]
    first, second = found[:2]
    return second if points[first][1] > points[second][1] else first


def bottom_right(points: Sequence[Point]) -> int:
    """Index of the bottom right corner among four points."""
    found = _candidates(_truncated(points, 1), _OTHER_TRIPLES, _is_max)
    if len(found) == 1:
        return found[0]
    first, second = found[:2]
    return first if points[first][0] > points[second][0] else second


def corner_points(
    lines: Sequence[Line], i: int, j: int, k: int, l: int
) -> tuple[Point, Point, Point, Point]:
    """Top left, bottom left, top right and bottom right corners of four lines.

    The corners are where lines i-j, j-k, k-l and l-i cross.
    """
    crossings = [
        intersection_point(lines[i], lines[j]),
        intersection_point(lines[j], lines[k]),
        intersection_point(lines[k], lines[l]),
        intersection_point(lines[l], lines[i]),
    ]
    return (
        crossings[top_left(crossings)],
        crossings[bottom_left(crossings)],
        crossings[top_right(crossings)],
        crossings[bottom_right(crossings)],
    )


def dist(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return math.sqrt((p1[0] - p2[0]) ** 2 + (p1[1] - p2[1]) ** 2)