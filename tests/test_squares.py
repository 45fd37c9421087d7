import numpy as np
import pytest

from sudokuocr.geometry import Line
from sudokuocr.squares import (
    NoSquareFound,
    crop_square,
    detect_square,
    is_perpendicular,
    sort_corners,
    square_perimeter,
)

LEFT = Line(10.0, -1.0, True)
TOP = Line(0.0, 20.0, False)
RIGHT = Line(110.0, -1.0, True)
BOTTOM = Line(0.0, 120.0, False)
LINES = [LEFT, TOP, RIGHT, BOTTOM]


def test_two_vertical_lines_are_not_perpendicular():
    assert is_perpendicular(LEFT, RIGHT) is False


def test_vertical_and_flat_lines_are_perpendicular():
    assert is_perpendicular(LEFT, Line(0.3, 5.0, False)) is True
    assert is_perpendicular(Line(-0.3, 5.0, False), RIGHT) is True


def test_vertical_and_sloped_line_are_not_perpendicular():
    assert is_perpendicular(LEFT, Line(0.5, 5.0, False)) is False


def test_sloped_lines_with_product_minus_one():
    assert is_perpendicular(Line(2.0, 0.0, False), Line(-0.5, 3.0, False)) is True
    assert is_perpendicular(Line(1.0, 0.0, False), Line(1.0, 3.0, False)) is False


def test_perimeter_of_axis_square():
    assert square_perimeter(LINES, 0, 1, 2, 3) == pytest.approx(400.0)


def test_perimeter_does_not_depend_on_starting_line():
    assert square_perimeter(LINES, 1, 2, 3, 0) == pytest.approx(
        square_perimeter(LINES, 0, 1, 2, 3)
    )


def test_detect_square_picks_the_four_lines():
    square = detect_square(200, 150, LINES)
    assert sorted(square) == [0, 1, 2, 3]
    assert square == (0, 1, 2, 3)


def test_detect_square_needs_four_lines():
    with pytest.raises(NoSquareFound):
        detect_square(200, 150, LINES[:3])


def test_detect_square_rejects_square_inside_margins():
    with pytest.raises(NoSquareFound):
        detect_square(1000, 1000, LINES)


def test_no_square_found_is_a_value_error():
    with pytest.raises(ValueError):
        detect_square(200, 150, [LEFT, RIGHT, Line(30.0, -1.0, True), Line(60.0, -1.0, True)])


def test_sort_corners_orders_corners():
    top_left, bottom_left, top_right, bottom_right = sort_corners(LINES, (0, 1, 2, 3))
    assert top_left == pytest.approx((10.0, 20.0))
    assert bottom_left == pytest.approx((10.0, 120.0))
    assert top_right == pytest.approx((110.0, 20.0))
    assert bottom_right == pytest.approx((110.0, 120.0))


def test_crop_square_takes_region_from_top_left():
    image = np.arange(150 * 200, dtype=np.int64).reshape(150, 200) % 256
    cropped = crop_square(image.astype(np.uint8), LINES, (0, 1, 2, 3))
    assert cropped.shape == (100, 100)
    assert np.array_equal(cropped, image[20:120, 10:110].astype(np.uint8))


def test_crop_square_outside_image_raises():
    image = np.zeros((50, 50), dtype=np.uint8)
    with pytest.raises(ValueError):
        crop_square(image, LINES, (0, 1, 2, 3))