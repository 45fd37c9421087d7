import pytest

from sudokuocr.grid_format import read_grid, write_grid
from sudokuocr.solver import Board, solve, solve_file

PUZZLE = (
    "53..7...."
    "6..195..."
    ".98....6."
    "8...6...3"
    "4..8.3..1"
    "7...2...6"
    ".6....28."
    "...419..5"
    "....8..79"
)
CELLS = [0 if c == "." else int(c) for c in PUZZLE]

UNSOLVABLE = [0, 1, 2, 3, 4, 5, 6, 7, 8, 9] + [0] * 71


def assert_complete(cells):
    digits = set(range(1, 10))
    for r in range(9):
        assert set(cells[r * 9:(r + 1) * 9]) == digits
    for c in range(9):
        assert set(cells[c::9]) == digits
    for br in range(3):
        for bc in range(3):
            box = {
                cells[(br * 3 + r) * 9 + bc * 3 + c]
                for r in range(3)
                for c in range(3)
            }
            assert box == digits


def test_solve_gives_valid_completion():
    result = solve(CELLS)
    assert_complete(result)
    assert all(g == 0 or g == v for g, v in zip(CELLS, result))


def test_solve_empty_grid():
    assert_complete(solve([0] * 81))


def test_solved_grid_stays_the_same():
    solved = solve(CELLS)
    assert solve(solved) == solved


def test_unsolvable_raises():
    with pytest.raises(ValueError):
        solve(UNSOLVABLE)


def test_board_solve_reports_failure():
    board = Board(UNSOLVABLE)
    assert board.solve() is False
    assert board.cells() == UNSOLVABLE


def test_no_candidates_for_blocked_cell():
    assert Board(UNSOLVABLE).candidates(0) == ()


def test_single_candidate_filled_on_creation():
    cells = [0, 1, 2, 3, 4, 5, 6, 7, 8] + [0] * 72
    board = Board(cells)
    assert board.candidates(0) == (9,)
    assert board.cells()[0] == 9


def test_candidates_exclude_peers():
    board = Board(CELLS)
    options = board.candidates(2)
    for digit in options:
        assert digit not in CELLS[0:9]
        assert digit not in CELLS[2::9]
    assert board.candidates(0) == ()


def test_is_valid_checks_row_column_box():
    board = Board(CELLS)
    assert not board.is_valid(2, 5)
    assert not board.is_valid(2, 8)
    assert not board.is_valid(2, 9)


def test_cells_returns_copy():
    board = Board(CELLS)
    copy = board.cells()
    copy[0] = 0
    assert board.cells()[0] == CELLS[0]


def test_bad_board_length():
    with pytest.raises(ValueError):
        Board([0] * 80)


def test_bad_cell_value():
    with pytest.raises(ValueError):
        Board([0] * 80 + [11])


def test_solve_file_writes_result(tmp_path):
    path = tmp_path / "grid.save"
    write_grid(path, CELLS)
    assert solve_file(path) is True
    result = read_grid(tmp_path / "grid.save.result")
    assert result == solve(CELLS)


def test_solve_file_unsolvable(tmp_path):
    path = tmp_path / "grid.save"
    write_grid(path, UNSOLVABLE)
    assert solve_file(path) is False
    assert read_grid(tmp_path / "grid.save.result") == UNSOLVABLE