import pytest

from chainfall.components.board import Board
from chainfall.components.cell import Cell
from chainfall.errors import BoardBoundsError
from chainfall.utils.singletons import get_board
from chainfall.world import create_world

from tests.helpers import board_from_strings


def test_board_component_exists():
    world = create_world()
    boards = list(world.get_component(Board))
    assert boards, 'Board component missing'
    _, comp = boards[0]
    assert comp.rows == 12 and comp.cols == 6
    assert comp.filled_count() == 0


def test_get_set_and_is_empty():
    board = Board(rows=3, cols=2)
    assert board.is_empty(2, 1)
    board.set(2, 1, Cell.RED)
    assert board.get(2, 1) is Cell.RED
    assert not board.is_empty(2, 1)
    board.set(2, 1, Cell.EMPTY)
    assert board.is_empty(2, 1)


@pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (3, 0), (0, 2)])
def test_out_of_bounds_access_raises(row, col):
    board = Board(rows=3, cols=2)
    with pytest.raises(BoardBoundsError):
        board.get(row, col)
    with pytest.raises(IndexError):
        board.set(row, col, Cell.RED)
    assert not board.is_open(row, col)


def test_cells_must_match_dimensions():
    with pytest.raises(ValueError):
        Board(rows=2, cols=2, cells=[[Cell.EMPTY, Cell.EMPTY]])


def test_copy_and_snapshot_are_independent():
    board = board_from_strings(["R.", "GB"])
    clone = board.copy()
    snap = board.snapshot()
    board.set(1, 0, Cell.YELLOW)
    assert clone.get(1, 0) is Cell.GREEN
    assert snap[1][0] is Cell.GREEN
    assert isinstance(snap, tuple) and isinstance(snap[0], tuple)


def test_load_replaces_contents_in_place():
    world = create_world()
    board = get_board(world)
    other = board_from_strings(["RG"], rows=board.rows, cols=board.cols)
    board.load(other)
    assert get_board(world) is board
    assert board.get(11, 0) is Cell.RED and board.get(11, 1) is Cell.GREEN
    with pytest.raises(ValueError):
        board.load(Board(rows=2, cols=2))


def test_clear_empties_every_cell():
    board = board_from_strings(["RGB", "YPR"])
    board.clear()
    assert board.filled_count() == 0
