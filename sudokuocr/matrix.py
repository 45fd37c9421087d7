"""Matrix helpers and activation functions for the digit network."""

from __future__ import annotations

import math
import os
import random

import numpy as np

_SCALE = 10000
_default_rng = random.Random()


def uniform_distribution(low: float, high: float, rng: random.Random | None = None) -> float:
    """Draw from [low, high) in steps of 1/10000."""
    scaled_difference = int((high - low) * _SCALE)
    if scaled_difference <= 0:
        raise ValueError("high must exceed low by at least 1/10000")
    generator = _default_rng if rng is None else rng
    return low + generator.randrange(scaled_difference) / _SCALE


def randomized(rows: int, cols: int, n: int, rng: random.Random | None = None) -> np.ndarray:
    """A rows x cols matrix drawn uniformly from [-1/sqrt(n), 1/sqrt(n))."""
    if n <= 0:
        raise ValueError("n must be positive")
    bound = 1.0 / math.sqrt(n)
    return np.array(
        [[uniform_distribution(-bound, bound, rng) for _ in range(cols)] for _ in range(rows)],
        dtype=float,
    ).reshape(rows, cols)


def argmax(column) -> int:
    """Index of the largest positive entry of a column, 0 if none is positive."""
    values = np.asarray(column, dtype=float)
    if values.ndim == 2:
        values = values[:, 0]
    best_index = 0
    best_score = 0.0
    for index, score in enumerate(values):
        if score > best_score:
            best_score = score
            best_index = index
    return best_index


def flatten(matrix, axis: int) -> np.ndarray:
    """Flatten row by row into a column vector (axis 0) or a row vector (axis 1)."""
    values = np.asarray(matrix, dtype=float)
    if axis == 0:
        return values.reshape(-1, 1)
    if axis == 1:
        return values.reshape(1, -1)
    raise ValueError("axis must be 0 or 1")


def save_matrix(matrix, path: str | os.PathLike[str]) -> None:
    """Write rows, columns, then every entry with six decimals, one per line."""
    values = np.asarray(matrix, dtype=float)
    if values.ndim != 2:
        raise ValueError("only two-dimensional matrices can be saved")
    rows, cols = values.shape
    with open(path, "w", encoding="ascii") as handle:
        handle.write(f"{rows}\n{cols}\n")
        handle.writelines(f"{value:.6f}\n" for value in values.flat)


def load_matrix(path: str | os.PathLike[str]) -> np.ndarray:
    """Read a matrix written by save_matrix."""
    with open(path, encoding="ascii") as handle:
        lines = iter(handle)
        try:
            rows = int(next(lines))
            cols = int(next(lines))
            values = [float(next(lines)) for _ in range(rows * cols)]
        except StopIteration:
            raise ValueError(f"{os.fspath(path)}: truncated matrix file") from None
    return np.array(values, dtype=float).reshape(rows, cols)


def sigmoid(values):
    """The logistic function, elementwise."""
    return 1.0 / (1.0 + np.exp(-np.asarray(values, dtype=float)))


def sigmoid_prime(matrix) -> np.ndarray:
    """Derivative of the logistic function given its outputs: m * (1 - m)."""
    values = np.asarray(matrix, dtype=float)
    return values * (1.0 - values)


def softmax(matrix) -> np.ndarray:
    """Exponentials of all entries divided by their total."""
    values = np.asarray(matrix, dtype=float)
    exponentials = np.exp(values - values.max())
    return exponentials / exponentials.sum()