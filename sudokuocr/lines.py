"""Finding straight lines from Hough votes and merging near duplicates."""

from __future__ import annotations

import math
from collections.abc import Iterable

import numpy as np

from sudokuocr.geometry import Line, Segment, append_segment
from sudokuocr.hough import HoughSpace

_THRESHOLD_RATIO = 30 / 100.0
_WINDOWS = 60
_SLOPE_TOLERANCE = 0.5
_DISTANCE_TOLERANCE = 40.0
_STEEP_SLOPE = 50


def find_lines(accumulator, width: int, height: int) -> list[Segment]:
    """Segments for the local vote maxima reaching 30% of the overall maximum.

    The vote space is scanned in square windows of a sixtieth of its
    size; each window contributes the line of its first strongest cell,
    drawn as a segment a diagonal long on each side of its foot point.
    """
    space = HoughSpace.for_size(width, height)
    rows = space.rho_count + 1
    cols = space.theta_count + 1
    votes = np.asarray(accumulator)
    if votes.ndim != 2 or votes.shape[0] < rows or votes.shape[1] < cols:
        raise ValueError(f"the accumulator must cover at least {rows} x {cols} cells")
    votes = votes[:rows, :cols]

    step = int(space.diagonal * 2 / _WINDOWS)
    if step < 1:
        raise ValueError(f"an image of {width} x {height} pixels is too small to search")
    peak = max(float(votes.max()), 0.0)
    line_threshold = int(peak * _THRESHOLD_RATIO)
    diagonal = space.diagonal

    segments: list[Segment] = []
    for r in range(0, rows, step):
        for t in range(0, cols, step):
            window = votes[r:r + step, t:t + step]
            dr, dt = divmod(int(np.argmax(window)), window.shape[1])
            if window[dr, dt] < line_threshold:
                continue
            rho = float(space.rhos[r + dr])
            theta = float(space.thetas[t + dt])
            ax = math.cos(theta)
            ay = math.sin(theta)
            x0 = int(rho * ax)
            y0 = int(rho * ay)
            segment = (
                int(x0 + diagonal * (-ay)),
                int(y0 + diagonal * ax),
                int(x0 - diagonal * (-ay)),
                int(y0 - diagonal * ax),
            )
            if segment != (-1, -1, -1, -1):
                segments = append_segment(segments, segment)
    return segments


def line_equations(segments: Iterable[Segment]) -> list[Line]:
    """The line through each segment."""
    return [Line.from_segment(*segment) for segment in segments]


def _near(value: float, reference: float, tolerance: float) -> bool:
    return reference - tolerance <= value <= reference + tolerance


def _duplicates(first: Line, second: Line) -> bool:
    if first.vertical and second.vertical:
        return _near(first.slope, second.slope, _DISTANCE_TOLERANCE)
    if first.vertical and abs(int(second.slope)) >= _STEEP_SLOPE:
        return _near(first.slope, second.intercept, _DISTANCE_TOLERANCE)
    if second.vertical and abs(int(first.slope)) >= _STEEP_SLOPE:
        return _near(second.slope, first.intercept, _DISTANCE_TOLERANCE)
    return _near(first.slope, second.slope, _SLOPE_TOLERANCE) and _near(
        first.intercept, second.intercept, _DISTANCE_TOLERANCE
    )


def average_lines(lines: Iterable[Line]) -> list[Line]:
    """The lines left after dropping each line close to an earlier kept one.

    Vertical lines within 40 pixels of each other, and other lines whose
    slopes are within 0.5 and intercepts within 40, count as the same.
    """
    candidates = list(lines)
    deleted: set[int] = set()
    for i, first in enumerate(candidates):
        if i in deleted:
            continue
        for j, second in enumerate(candidates):
            if j == i or j in deleted:
                continue
            if _duplicates(first, second):
                deleted.add(j)
    return [line for index, line in enumerate(candidates) if index not in deleted]