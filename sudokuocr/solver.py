"""Backtracking sudoku solver with candidate pre-filtering."""

from __future__ import annotations

import os
from collections.abc import Iterable

from sudokuocr.grid_format import read_grid, write_grid

_DIGITS = range(1, 10)


def _row_indices(index: int) -> range:
    start = (index // 9) * 9
    return range(start, start + 9)


def _column_indices(index: int) -> range:
    return range(index % 9, 81, 9)


def _box_indices(index: int) -> list[int]:
    corner = (index // 27) * 27 + ((index % 9) // 3) * 3
    return [corner + row * 9 + col for row in range(3) for col in range(3)]


_PEERS = [
    tuple(_row_indices(i)) + tuple(_column_indices(i)) + tuple(_box_indices(i))
    for i in range(81)
]


class Board:
    """A sudoku board whose empty cells carry the candidates left by the givens.

    On creation each empty cell gets the digits not present in its row,
    column and box; cells left with a single candidate are filled at once.
    """

    def __init__(self, cells: Iterable[int]) -> None:
        values = [int(value) for value in cells]
        if len(values) != 81:
            raise ValueError(f"a board has 81 cells, got {len(values)}")
        if any(not 0 <= value <= 9 for value in values):
            raise ValueError("cell values must be within 0..9")
        self._cells = values
        self._candidates: list[tuple[int, ...]] = [
            () if value else tuple(d for d in _DIGITS if self.is_valid(i, d))
            for i, value in enumerate(values)
        ]
        for index, options in enumerate(self._candidates):
            if not self._cells[index] and len(options) == 1:
                self._cells[index] = options[0]

    def candidates(self, index: int) -> tuple[int, ...]:
        """Digits computed for an initially empty cell; empty for a given."""
        return self._candidates[index]

    def is_valid(self, index: int, value: int) -> bool:
        """Whether value appears nowhere in the row, column and box of index."""
        return all(self._cells[peer] != value for peer in _PEERS[index])

    def solve(self) -> bool:
        """Fill the empty cells in order; return whether a solution was found."""
        empties = [i for i, value in enumerate(self._cells) if not value]
        return self._fill(empties, 0)

    def _fill(self, empties: list[int], position: int) -> bool:
        if position == len(empties):
            return True
        index = empties[position]
        for value in self._candidates[index]:
            if self.is_valid(index, value):
                self._cells[index] = value
                if self._fill(empties, position + 1):
                    return True
                self._cells[index] = 0
        return False

    def cells(self) -> list[int]:
        """A copy of the current cell values."""
        return list(self._cells)


def solve(cells: Iterable[int]) -> list[int]:
    """Return the solved cells; raise ValueError when there is no solution."""
    board = Board(cells)
    if not board.solve():
        raise ValueError("the grid has no solution")
    return board.cells()


def solve_file(path: str | os.PathLike[str]) -> bool:
    """Solve a grid file, write the board to ``<path>.result``, report success."""
    board = Board(read_grid(path))
    solved = board.solve()
    write_grid(os.fspath(path) + ".result", board.cells())
    return solved