"""Cutting the straightened grid into 81 cell images of 28 x 28 pixels."""

from __future__ import annotations

import os

import numpy as np

CELL_SIZE = 28
GRID_SIDE = 9
MARGIN_RATIO = 0.10
INK = 255


def _ink_mask(image) -> np.ndarray:
    values = np.asarray(image)
    if values.ndim == 2:
        rgb = np.repeat(values[..., None], 3, axis=2)
    elif values.ndim == 3 and values.shape[2] >= 3:
        rgb = values[..., :3]
    else:
        raise ValueError(f"expected a grey or RGB image, got shape {values.shape}")
    rgb = rgb.astype(np.float64)
    return 0.3 * rgb[..., 0] + 0.59 * rgb[..., 1] + 0.11 * rgb[..., 2] < 128


def cut_cells(image) -> list[np.ndarray]:
    """Cells in row order, each scaled to 28 x 28: 255 where dark, 0 elsewhere.

    Each cell is a square of a ninth of the image width, with a tenth of
    that trimmed from its top and left sides.
    """
    ink = _ink_mask(image)
    height, width = ink.shape
    length = width // GRID_SIDE
    margin = int(length * MARGIN_RATIO)
    side = length - margin
    if side <= 0:
        raise ValueError(f"an image {width} pixels wide is too narrow to cut into cells")
    if GRID_SIDE * length > height:
        raise ValueError(f"an image {height} pixels high is too short for cells of {length}")

    samples = ((2 * np.arange(CELL_SIZE) + 1) * side) // (2 * CELL_SIZE)
    cells = []
    for row in range(GRID_SIDE):
        top = margin + row * length
        for col in range(GRID_SIDE):
            left = margin + col * length
            patch = ink[np.ix_(top + samples, left + samples)]
            cells.append(np.where(patch, INK, 0).astype(np.uint8))
    return cells


def write_cells(image, path: str | os.PathLike[str]) -> list[np.ndarray]:
    """Write each cell as a row ``0,p1,...,p784`` and return the cells."""
    cells = cut_cells(image)
    with open(path, "w", encoding="ascii") as handle:
        for cell in cells:
            handle.write("0," + ",".join(str(int(value)) for value in cell.flat) + "\n")
    return cells