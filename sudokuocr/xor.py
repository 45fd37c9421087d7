"""A two-input, two-hidden-node network trained on the XOR truth table."""

from __future__ import annotations

import math
import os
import random
from pathlib import Path

_SAMPLES: tuple[tuple[tuple[float, float], float], ...] = (
    ((0.0, 0.0), 0.0),
    ((1.0, 0.0), 1.0),
    ((0.0, 1.0), 1.0),
    ((1.0, 1.0), 0.0),
)


def _sigmoid(value: float) -> float:
    return 1.0 / (1.0 + math.exp(-value))


def _sigmoid_slope(output: float) -> float:
    return output * (1.0 - output)


class XorNetwork:
    """Weights start uniform in [0, 1]; hidden biases start at zero."""

    def __init__(self, rng: random.Random | None = None, learning_rate: float = 0.1) -> None:
        self._rng = rng if rng is not None else random.Random()
        self.learning_rate = learning_rate
        draw = self._rng.random
        # hidden_weights[input][hidden]
        self.hidden_weights = [[draw(), draw()], [draw(), draw()]]
        self.output_weights = [draw(), draw()]
        self.hidden_bias = [0.0, 0.0]
        self.output_bias = draw()

    def _activate(self, inputs: tuple[float, float]) -> tuple[list[float], float]:
        hidden = [
            _sigmoid(
                self.hidden_bias[j]
                + sum(inputs[k] * self.hidden_weights[k][j] for k in range(2))
            )
            for j in range(2)
        ]
        output = _sigmoid(
            self.output_bias + sum(h * w for h, w in zip(hidden, self.output_weights))
        )
        return hidden, output

    def forward(self, inputs) -> float:
        """The network's output for a pair of inputs."""
        first, second = inputs
        return self._activate((float(first), float(second)))[1]

    def train(self, epochs: int = 100000) -> dict[tuple[float, float], float]:
        """Run shuffled epochs of stochastic gradient descent.

        Returns the outputs seen for each input during the last epoch,
        taken before that sample's update.
        """
        if epochs < 0:
            raise ValueError("epochs must not be negative")
        order = list(range(len(_SAMPLES)))
        seen: dict[tuple[float, float], float] = {}
        rate = self.learning_rate
        for _ in range(epochs):
            self._rng.shuffle(order)
            seen = {}
            for sample in order:
                inputs, target = _SAMPLES[sample]
                hidden, output = self._activate(inputs)
                seen[inputs] = output

                delta_output = (target - output) * _sigmoid_slope(output)
                delta_hidden = [
                    delta_output * self.output_weights[j] * _sigmoid_slope(hidden[j])
                    for j in range(2)
                ]

                self.output_bias += delta_output * rate
                for k in range(2):
                    self.output_weights[k] += hidden[k] * delta_output * rate
                for j in range(2):
                    self.hidden_bias[j] += delta_hidden[j] * rate
                    for k in range(2):
                        self.hidden_weights[k][j] += inputs[k] * delta_hidden[j] * rate
        return seen

    def save(self, directory: str | os.PathLike[str]) -> None:
        """Write the weights and biases to four files in directory."""
        folder = Path(directory)
        folder.mkdir(parents=True, exist_ok=True)
        contents = {
            "FinalHiddenWeights": [
                self.hidden_weights[k][j] for j in range(2) for k in range(2)
            ],
            "FinalHiddenBias": list(self.hidden_bias),
            "FinalOutputWeight": list(self.output_weights),
            "FinalOutputBias": [self.output_bias],
        }
        for name, values in contents.items():
            text = f"{name}:\n" + "".join(f"{value:f}\n" for value in values)
            (folder / name).write_text(text, encoding="ascii")