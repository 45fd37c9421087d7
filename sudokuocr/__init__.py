"""Sudoku grid location in edge images, digit recognition and solving."""

__version__ = "0.1.0"