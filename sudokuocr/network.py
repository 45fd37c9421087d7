"""A fully connected network with one hidden layer and sigmoid activations."""

from __future__ import annotations

import os
import random
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from sudokuocr.images import LabelledImage
from sudokuocr.matrix import (
    argmax,
    flatten,
    load_matrix,
    randomized,
    save_matrix,
    sigmoid,
    sigmoid_prime,
    softmax,
)

DEFAULT_LEARNING_RATE = 0.1


def _column(values, size: int, name: str) -> np.ndarray:
    array = np.asarray(values, dtype=float)
    if array.ndim == 1:
        array = array.reshape(-1, 1)
    if array.shape != (size, 1):
        raise ValueError(f"{name} must be a column of {size} values, got shape {array.shape}")
    return array


def _matrix_text(matrix: np.ndarray) -> str:
    rows, cols = matrix.shape
    lines = [f"Rows: {rows} Columns: {cols}\n"]
    lines.extend("".join(f"{value:1.3f} " for value in row) + "\n" for row in matrix)
    return "".join(lines)


@dataclass
class NeuralNetwork:
    """Layer sizes, learning rate and the two weight matrices."""

    inputs: int
    hidden: int
    outputs: int
    learning_rate: float
    hidden_weights: np.ndarray
    output_weights: np.ndarray

    @classmethod
    def create(
        cls,
        inputs: int,
        hidden: int,
        outputs: int,
        learning_rate: float = DEFAULT_LEARNING_RATE,
        rng: random.Random | None = None,
    ) -> NeuralNetwork:
        """A network with weights drawn from +-1/sqrt(size of the receiving layer)."""
        return cls(
            inputs,
            hidden,
            outputs,
            learning_rate,
            randomized(hidden, inputs, hidden, rng),
            randomized(outputs, hidden, outputs, rng),
        )

    def _forward(self, inputs: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        hidden_outputs = sigmoid(self.hidden_weights @ inputs)
        final_outputs = sigmoid(self.output_weights @ hidden_outputs)
        return hidden_outputs, final_outputs

    def train(self, inputs, expected) -> None:
        """One backpropagation step towards the expected output column."""
        x = _column(inputs, self.inputs, "input")
        target = _column(expected, self.outputs, "expected output")
        hidden_outputs, final_outputs = self._forward(x)

        output_errors = target - final_outputs
        hidden_errors = self.output_weights.T @ output_errors

        self.output_weights = self.output_weights + self.learning_rate * (
            (output_errors * sigmoid_prime(final_outputs)) @ hidden_outputs.T
        )
        self.hidden_weights = self.hidden_weights + self.learning_rate * (
            (hidden_errors * sigmoid_prime(hidden_outputs)) @ x.T
        )

    def train_batch(self, images: Iterable[LabelledImage]) -> int:
        """Train once on each image with its label as target; return the count."""
        trained = 0
        for image in images:
            if not 0 <= image.label < self.outputs:
                raise ValueError(f"label {image.label} is outside 0..{self.outputs - 1}")
            target = np.zeros((self.outputs, 1))
            target[image.label, 0] = 1.0
            self.train(flatten(image.data, 0), target)
            trained += 1
        return trained

    def predict(self, inputs) -> np.ndarray:
        """Softmax of the output layer for one input column."""
        x = _column(inputs, self.inputs, "input")
        _, final_outputs = self._forward(x)
        return softmax(final_outputs)

    def predict_image(self, image: LabelledImage) -> np.ndarray:
        """Prediction for an image flattened row by row."""
        return self.predict(flatten(image.data, 0))

    def accuracy(self, images: Iterable[LabelledImage]) -> float:
        """Fraction of images whose most likely digit equals their label."""
        results = [argmax(self.predict_image(image)) == image.label for image in images]
        if not results:
            raise ValueError("accuracy needs at least one image")
        return sum(results) / len(results)

    def save(self, directory: str | os.PathLike[str]) -> None:
        """Write ``descriptor``, ``hidden`` and ``output`` into directory."""
        folder = Path(directory)
        folder.mkdir(parents=True, exist_ok=True)
        (folder / "descriptor").write_text(
            f"{self.inputs}\n{self.hidden}\n{self.outputs}\n", encoding="ascii"
        )
        save_matrix(self.hidden_weights, folder / "hidden")
        save_matrix(self.output_weights, folder / "output")

    @classmethod
    def load(cls, directory: str | os.PathLike[str]) -> NeuralNetwork:
        """Read a network written by save."""
        folder = Path(directory)
        lines = (folder / "descriptor").read_text(encoding="ascii").split()
        if len(lines) < 3:
            raise ValueError(f"{folder / 'descriptor'}: expected three layer sizes")
        inputs, hidden, outputs = (int(value) for value in lines[:3])
        hidden_weights = load_matrix(folder / "hidden")
        output_weights = load_matrix(folder / "output")
        if hidden_weights.shape != (hidden, inputs) or output_weights.shape != (outputs, hidden):
            raise ValueError(f"{folder}: weight shapes do not match the descriptor")
        return cls(inputs, hidden, outputs, DEFAULT_LEARNING_RATE, hidden_weights, output_weights)

    def describe(self) -> str:
        """Layer sizes followed by both weight matrices."""
        return (
            f"# of Inputs: {self.inputs}\n"
            f"# of Hidden: {self.hidden}\n"
            f"# of Output: {self.outputs}\n"
            "Hidden Weights: \n"
            + _matrix_text(self.hidden_weights)
            + "Output Weights: \n"
            + _matrix_text(self.output_weights)
        )