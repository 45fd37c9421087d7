"""Digit images stored as comma-separated rows, and the recognised grid file."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from sudokuocr.grid_format import format_grid

IMAGE_SIZE = 28
PIXEL_COUNT = IMAGE_SIZE * IMAGE_SIZE
INK = 255 / 256.0

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class LabelledImage:
    """A 28 x 28 image of ink levels together with the digit it shows."""

    data: np.ndarray
    label: int


def _leading_int(token: str) -> int:
    match = _LEADING_INT.match(token)
    return int(match.group(1)) if match else 0


def parse_image_row(row: str) -> LabelledImage:
    """Parse ``label,p1,...,p784``; positive pixels become ink, others blank."""
    tokens = [token for token in row.rstrip("\r\n").split(",") if token]
    if not tokens:
        raise ValueError("an image row needs at least a label")
    pixels = tokens[1:]
    if len(pixels) > PIXEL_COUNT:
        raise ValueError(
            f"an image row holds at most {PIXEL_COUNT} pixels, got {len(pixels)}"
        )
    flat = np.zeros(PIXEL_COUNT, dtype=float)
    for index, token in enumerate(pixels):
        if _leading_int(token) > 0:
            flat[index] = INK
    return LabelledImage(flat.reshape(IMAGE_SIZE, IMAGE_SIZE), _leading_int(tokens[0]))


def load_images(
    path: str | os.PathLike[str], count: int, cycle: bool = False
) -> list[LabelledImage]:
    """Read up to count images; with cycle, start over at the end of the file."""
    if count < 0:
        raise ValueError("count must not be negative")
    images: list[LabelledImage] = []
    with open(path, encoding="ascii") as handle:
        while len(images) < count:
            line = handle.readline()
            if not line:
                if not cycle:
                    break
                if not images:
                    raise ValueError(f"{os.fspath(path)}: no image rows to cycle over")
                handle.seek(0)
                continue
            if not line.strip("\r\n"):
                continue
            images.append(parse_image_row(line))
    return images


def save_recognised_grid(path: str | os.PathLike[str], digits: Iterable[int]) -> str:
    """Write 81 recognised digits as a grid file, 0 as an empty cell; return the text."""
    text = format_grid(digits)
    with open(path, "w", encoding="ascii", newline="") as handle:
        handle.write(text)
    return text