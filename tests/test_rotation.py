import math

import numpy as np
import pytest

from sudokuocr.hough import HoughSpace
from sudokuocr.rotation import (
    automatic_rotation,
    is_pixel_black,
    rotate,
    rotate_point,
    rotate_segment,
    rotate_segments,
)


def test_rotate_point_by_zero_is_identity():
    assert rotate_point(0.0, 3.0, 7.0, 1.0, 2.0) == (3.0, 7.0)


def test_rotate_point_round_trip():
    rx, ry = rotate_point(0.7, 3.0, 7.0, 1.0, 2.0)
    back = rotate_point(-0.7, rx, ry, 1.0, 2.0)
    assert back == pytest.approx((3.0, 7.0))


def test_rotate_point_keeps_distance_to_centre():
    rx, ry = rotate_point(1.3, 9.0, -4.0, 2.0, 5.0)
    assert math.hypot(rx - 2.0, ry - 5.0) == pytest.approx(math.hypot(7.0, -9.0))


@pytest.mark.parametrize(
    "rgb, expected",
    [
        ((100, 100, 100), False),
        ((100, 105, 100), False),
        ((200, 0, 0), True),
        ((30, 30, 30), True),
    ],
)
def test_is_pixel_black(rgb, expected):
    assert is_pixel_black(rgb, 10, 50) is expected


def test_automatic_rotation_without_votes_is_zero():
    space = HoughSpace.for_size(3, 4)
    accumulator = np.zeros((space.rho_count + 1, space.theta_count + 1), dtype=int)
    assert automatic_rotation(accumulator, 3, 4) == 0.0


def test_automatic_rotation_picks_strongest_angle():
    space = HoughSpace.for_size(3, 4)
    accumulator = np.zeros((space.rho_count + 1, space.theta_count + 1), dtype=int)
    accumulator[3, 2] = 300
    accumulator[4, 7] = 200
    assert automatic_rotation(accumulator, 3, 4) == pytest.approx(
        abs(space.theta_degrees[2])
    )


def test_automatic_rotation_ignores_weak_votes():
    space = HoughSpace.for_size(3, 4)
    accumulator = np.zeros((space.rho_count + 1, space.theta_count + 1), dtype=int)
    accumulator[:, 4] = 254
    assert automatic_rotation(accumulator, 3, 4) == 0.0


def test_automatic_rotation_rejects_small_accumulator():
    with pytest.raises(ValueError):
        automatic_rotation(np.zeros((2, 2)), 3, 4)


def test_rotate_segment_by_zero_is_identity():
    assert rotate_segment(10, 10, 0.0, (2, 3, 7, 8)) == (2, 3, 7, 8)


def test_rotate_segment_keeps_centre_fixed():
    assert rotate_segment(10, 10, 90.0, (5, 5, 5, 5)) == (5, 5, 5, 5)


def test_rotate_segments_maps_each_segment():
    segments = [(1, 2, 8, 9), (0, 0, 9, 0)]
    rotated = rotate_segments(10, 12, 30.0, segments)
    assert rotated == [rotate_segment(10, 12, 30.0, segment) for segment in segments]


def test_rotate_image_by_zero_is_identity():
    rng = np.random.default_rng(1)
    image = rng.integers(0, 256, size=(6, 7), dtype=np.uint8)
    assert (rotate(image, 0.0) == image).all()


def test_rotate_image_keeps_centre_pixel():
    image = np.arange(25, dtype=np.uint8).reshape(5, 5)
    rotated = rotate(image, 37.0)
    assert rotated[2, 2] == image[2, 2]


def test_rotate_image_blackens_uncovered_corners():
    image = np.full((5, 5, 3), 200, dtype=np.uint8)
    rotated = rotate(image, 45.0)
    assert rotated.shape == image.shape
    assert not rotated[0, 0].any()
    assert (rotated[2, 2] == image[2, 2]).all()


def test_rotate_rejects_one_dimensional_input():
    with pytest.raises(ValueError):
        rotate(np.zeros(4), 10.0)