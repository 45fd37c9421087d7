"""Training the digit network and reading a grid of cell images into digits."""

from __future__ import annotations

import os
import random
from collections.abc import Iterable

from sudokuocr.images import PIXEL_COUNT, LabelledImage, load_images, save_recognised_grid
from sudokuocr.matrix import argmax
from sudokuocr.network import NeuralNetwork

DATASET_PATH = "neuralNetwork/data_set_final6.txt"
NETWORK_DIR = "neuralNetwork/testing_net"
CELLS_PATH = "grid_result/grid.txt"
GRID_PATH = "grid_result/grid.save"
TRAINING_IMAGES = 15000
HIDDEN_NODES = 300
DIGITS = 10
LEARNING_RATE = 0.1
CELL_COUNT = 81


def train_network(
    dataset: str | os.PathLike[str] = DATASET_PATH,
    network_dir: str | os.PathLike[str] = NETWORK_DIR,
    count: int = TRAINING_IMAGES,
    rng: random.Random | None = None,
) -> NeuralNetwork:
    """Train a fresh network on count images of the dataset and save it."""
    images = load_images(dataset, count, cycle=True)
    network = NeuralNetwork.create(PIXEL_COUNT, HIDDEN_NODES, DIGITS, LEARNING_RATE, rng)
    network.train_batch(images)
    network.save(network_dir)
    return network


def recognise_digits(network: NeuralNetwork, images: Iterable[LabelledImage]) -> list[int]:
    """The most likely digit for each image."""
    return [argmax(network.predict_image(image)) for image in images]


def recognise_grid(
    cells_path: str | os.PathLike[str] = CELLS_PATH,
    network_dir: str | os.PathLike[str] = NETWORK_DIR,
    output_path: str | os.PathLike[str] = GRID_PATH,
) -> list[int]:
    """Recognise the 81 cell images and write them as a grid file."""
    images = load_images(cells_path, CELL_COUNT)
    if len(images) < CELL_COUNT:
        raise ValueError(
            f"{os.fspath(cells_path)}: expected {CELL_COUNT} cell images, got {len(images)}"
        )
    network = NeuralNetwork.load(network_dir)
    digits = recognise_digits(network, images)
    save_recognised_grid(output_path, digits)
    return digits