import numpy as np
import pytest

from sudokuocr.cut import cut_cells, write_cells
from sudokuocr.images import load_images


def _marked_grid() -> np.ndarray:
    image = np.full((90, 90, 3), 255, dtype=np.uint8)
    image[0:10, 10:20] = 0
    return image


def test_white_image_has_no_ink():
    cells = cut_cells(np.full((90, 90, 3), 255, dtype=np.uint8))
    assert len(cells) == 81
    assert all(cell.shape == (28, 28) for cell in cells)
    assert all(not cell.any() for cell in cells)


def test_black_image_is_all_ink():
    cells = cut_cells(np.zeros((90, 90), dtype=np.uint8))
    assert all(np.all(cell == 255) for cell in cells)


def test_ink_lands_in_the_right_cell():
    cells = cut_cells(_marked_grid())
    assert np.all(cells[1] == 255)
    assert not cells[0].any()
    assert not cells[9].any()
    assert sum(int(cell.any()) for cell in cells) == 1


def test_too_small_image_raises():
    with pytest.raises(ValueError):
        cut_cells(np.zeros((5, 5), dtype=np.uint8))


def test_too_short_image_raises():
    with pytest.raises(ValueError):
        cut_cells(np.zeros((40, 90), dtype=np.uint8))


def test_written_rows_have_label_and_pixels(tmp_path):
    path = tmp_path / "grid.txt"
    write_cells(_marked_grid(), path)
    lines = path.read_text(encoding="ascii").splitlines()
    assert len(lines) == 81
    assert all(line.startswith("0,") for line in lines)
    assert all(len(line.split(",")) == 785 for line in lines)


def test_written_cells_round_trip_through_image_loader(tmp_path):
    path = tmp_path / "grid.txt"
    cells = write_cells(_marked_grid(), path)
    images = load_images(path, 81)
    assert len(images) == 81
    for image, cell in zip(images, cells):
        assert image.label == 0
        assert np.array_equal(image.data > 0, cell > 0)