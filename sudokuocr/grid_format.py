"""Reading and writing the fixed 110-character text layout of a sudoku grid.

A grid file holds nine rows of three groups of three cells, groups
separated by a space, rows ended by a newline, and an empty line after
the third and sixth rows. Empty cells are written as ``.``.
"""

from __future__ import annotations

import os
from collections.abc import Iterable

GRID_TEXT_LENGTH = 110
CELL_COUNT = 81

_SPACE_POSITIONS = frozenset(
    {3, 7, 15, 19, 27, 31, 40, 44, 52, 56, 64, 68, 77, 81, 89, 93, 101, 105}
)
_NEWLINE_POSITIONS = frozenset({11, 23, 35, 36, 48, 60, 72, 73, 85, 97, 109})


class GridSyntaxError(ValueError):
    """The text does not follow the grid layout."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(message)
        self.position = position


def _check_cells(cells: Iterable[int]) -> list[int]:
    values = [int(value) for value in cells]
    if len(values) != CELL_COUNT:
        raise ValueError(f"a grid has {CELL_COUNT} cells, got {len(values)}")
    for value in values:
        if not 0 <= value <= 9:
            raise ValueError(f"cell value {value} is outside 0..9")
    return values


def parse_grid(text: str) -> list[int]:
    """Return the 81 cell values of a grid text, 0 standing for an empty cell."""
    if len(text) < GRID_TEXT_LENGTH:
        raise GridSyntaxError(
            f"grid text is {len(text)} characters long, "
            f"expected {GRID_TEXT_LENGTH}",
            len(text),
        )
    cells: list[int] = []
    for position, char in enumerate(text[:GRID_TEXT_LENGTH]):
        if position in _SPACE_POSITIONS:
            if char != " ":
                raise GridSyntaxError(
                    f"invalid syntax: expected ' ' at {position}", position
                )
        elif position in _NEWLINE_POSITIONS:
            if char != "\n":
                raise GridSyntaxError(
                    f"invalid syntax: expected a newline at {position}", position
                )
        elif char in " \n":
            raise GridSyntaxError(
                f"invalid syntax: expected a cell at {position}", position
            )
        elif char == ".":
            cells.append(0)
        elif char.isdigit() and char.isascii():
            cells.append(int(char))
        else:
            raise GridSyntaxError(
                f"invalid syntax: {char!r} is not a cell at {position}", position
            )
    return cells


def format_grid(cells: Iterable[int]) -> str:
    """Return the grid text for 81 cell values."""
    values = _check_cells(cells)
    symbols = ["." if value == 0 else str(value) for value in values]

    def row_text(row: list[str]) -> str:
        return " ".join("".join(row[start:start + 3]) for start in (0, 3, 6))

    rows = [row_text(symbols[start:start + 9]) for start in range(0, CELL_COUNT, 9)]
    bands = ["\n".join(rows[start:start + 3]) + "\n" for start in (0, 3, 6)]
    return "\n".join(bands)


def read_grid(path: str | os.PathLike[str]) -> list[int]:
    """Read and parse a grid file."""
    with open(path, encoding="ascii", newline="") as handle:
        return parse_grid(handle.read(GRID_TEXT_LENGTH))


def write_grid(path: str | os.PathLike[str], cells: Iterable[int]) -> None:
    """Write cell values to a grid file."""
    text = format_grid(cells)
    with open(path, "w", encoding="ascii", newline="") as handle:
        handle.write(text)


def render_grid(cells: Iterable[int]) -> str:
    """Return the grid as nine lines of space-separated numbers and a blank line."""
    values = _check_cells(cells)
    lines = [
        "".join(f"{value} " for value in values[start:start + 9]) + "\n"
        for start in range(0, CELL_COUNT, 9)
    ]
    return "".join(lines) + "\n"