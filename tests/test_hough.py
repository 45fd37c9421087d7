import math

import numpy as np
import pytest

from sudokuocr.hough import HoughSpace, hough_transform


def test_space_for_three_by_four():
    space = HoughSpace.for_size(3, 4)
    assert space.diagonal == 5.0
    assert space.rho_count == 10
    assert space.theta_count == space.rho_count
    assert len(space.thetas) == space.theta_count + 1
    assert len(space.rhos) == space.rho_count + 1
    assert space.rhos[0] == -space.diagonal
    assert space.thetas[0] == pytest.approx(-math.pi / 2)
    assert space.theta_degrees[-1] == pytest.approx(90.0)
    assert (np.diff(space.thetas) > 0).all()


def test_space_rejects_empty_size():
    with pytest.raises(ValueError):
        HoughSpace.for_size(0, 5)


def test_empty_image_has_no_votes():
    image = np.zeros((4, 3), dtype=np.uint8)
    space = HoughSpace.for_size(3, 4)
    accumulator = hough_transform(image)
    assert accumulator.shape == (space.rho_count + 1, space.theta_count + 1)
    assert not accumulator.any()


def test_pixel_at_origin_votes_for_zero_distance():
    image = np.zeros((4, 3), dtype=np.uint8)
    image[0, 0] = 255
    space = HoughSpace.for_size(3, 4)
    accumulator = hough_transform(image)
    assert (accumulator[int(space.diagonal)] == 1).all()
    assert accumulator.sum() == space.theta_count + 1


def test_every_angle_counts_each_pixel_once():
    image = np.zeros((10, 10), dtype=np.uint8)
    image[1, 2] = image[5, 7] = image[9, 9] = 255
    accumulator = hough_transform(image)
    assert (accumulator.sum(axis=0) == 3).all()


def test_levels_below_white_are_ignored():
    image = np.full((6, 6), 254, dtype=np.uint8)
    assert not hough_transform(image).any()


def test_rgb_uses_red_channel():
    image = np.zeros((6, 6, 3), dtype=np.uint8)
    image[2, 3, 0] = 255
    image[4, 4, 1] = 255
    accumulator = hough_transform(image)
    assert (accumulator.sum(axis=0) == 1).all()


def test_rejects_one_dimensional_input():
    with pytest.raises(ValueError):
        hough_transform(np.zeros(9))