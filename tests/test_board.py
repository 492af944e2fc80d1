"""Tests for the board state machine."""

import numpy as np
import pytest

from connect4_rules.errors import ColumnFull, ColumnOutOfRange, GameAlreadyOver, NoMoveToUndo
from connect4_rules.game import Board, new_board
from connect4_rules.utils import Player


def assert_same_state(before, after):
    """Two snapshots describe the same board."""
    assert np.array_equal(before.grid, after.grid)
    assert before.occupied == after.occupied
    assert before.current_player == after.current_player
    assert before.last_move == after.last_move
    assert before.game_over == after.game_over


def test_new_board():
    """Test empty board creation."""
    board = new_board()

    assert board.columns == 7
    assert board.rows == 6
    assert board.grid.shape == (6, 7)
    assert not board.grid.any()
    assert list(board.occupied) == [0] * 7
    assert board.current_player == Player.RED
    assert board.last_move is None
    assert board.game_over is False


def test_new_board_rejects_small_dimensions():
    """Boards narrower or shorter than four slots are rejected."""
    with pytest.raises(ValueError):
        new_board(3, 6)
    with pytest.raises(ValueError):
        new_board(7, 3)
    with pytest.raises(ValueError):
        new_board(7, 6, first_player=Player.EMPTY)


def test_first_player_is_configurable():
    board = new_board(first_player=Player.BLACK)
    board.apply_move(0)
    assert board.occupant(0, 0) == Player.BLACK


def test_apply_move_stacks_discs():
    """Each move lands on the row given by the column's occupancy."""
    board = new_board()

    for expected_row in range(board.rows):
        before = int(board.occupied[2])
        row = board.apply_move(2)
        assert row == before == expected_row
        assert board.occupied[2] == before + 1
        assert board.last_move == (2, row)
        assert board.occupant(2, row) == Player.RED


def test_apply_move_does_not_switch_player():
    board = new_board()
    board.apply_move(0)
    assert board.current_player == Player.RED


def test_full_column_is_rejected():
    """A full column raises ColumnFull and leaves state unchanged."""
    board = new_board(4, 4)
    for _ in range(4):
        board.apply_move(1)
        board.switch_player()

    before = board.snapshot()
    with pytest.raises(ColumnFull) as excinfo:
        board.apply_move(1)
    assert excinfo.value.column == 1
    assert_same_state(before, board.snapshot())
    assert not board.is_valid_move(1)


@pytest.mark.parametrize("column", [-1, 7, 100, "A", 1.5, None, True])
def test_out_of_range_column_is_rejected(column):
    """Columns outside the board are rejected without touching state."""
    board = new_board()
    board.apply_move(3)
    before = board.snapshot()

    with pytest.raises(ColumnOutOfRange):
        board.apply_move(column)
    assert_same_state(before, board.snapshot())


def test_moves_rejected_after_game_over():
    board = new_board()
    board.apply_move(0)
    board.mark_won()
    before = board.snapshot()

    with pytest.raises(GameAlreadyOver):
        board.apply_move(1)
    assert_same_state(before, board.snapshot())
    assert board.valid_moves() == []


def test_undo_restores_previous_state():
    """apply_move followed by undo restores grid and occupancy."""
    board = new_board()
    board.apply_move(4)
    board.switch_player()
    before = board.snapshot()

    board.apply_move(4)
    board.undo_last_move()
    after = board.snapshot()

    assert np.array_equal(before.grid, after.grid)
    assert before.occupied == after.occupied


def test_second_undo_is_rejected():
    """Only the latest move can be undone."""
    board = new_board()
    board.apply_move(0)
    board.switch_player()
    board.apply_move(1)
    board.undo_last_move()

    # last_move still points at the cleared slot
    assert board.last_move == (1, 0)
    before = board.snapshot()
    with pytest.raises(NoMoveToUndo):
        board.undo_last_move()
    assert_same_state(before, board.snapshot())
    assert board.occupant(0, 0) == Player.RED


def test_undo_without_moves_is_rejected():
    board = new_board()
    with pytest.raises(NoMoveToUndo):
        board.undo_last_move()


def test_undo_keeps_turn_and_allows_replay():
    """Undo does not hand the turn back; replaying lands on the freed row."""
    board = new_board()
    board.apply_move(5)
    board.switch_player()
    board.apply_move(5)
    board.undo_last_move()

    assert board.current_player == Player.BLACK
    assert board.apply_move(5) == 1
    assert board.occupant(5, 1) == Player.BLACK


def test_switch_player_toggles():
    board = new_board()
    board.switch_player()
    assert board.current_player == Player.BLACK
    board.switch_player()
    assert board.current_player == Player.RED


def test_valid_moves_and_full_board():
    board = new_board(4, 4)
    assert board.valid_moves() == [0, 1, 2, 3]
    for column in range(4):
        for _ in range(4):
            board.apply_move(column)
    assert board.valid_moves() == []
    assert board.is_full()


def test_snapshot_is_read_only_and_detached():
    """Snapshots cannot be written and do not follow later moves."""
    board = new_board()
    board.apply_move(3)
    snapshot = board.snapshot()

    with pytest.raises(ValueError):
        snapshot.grid[0, 0] = Player.BLACK.value

    board.switch_player()
    board.apply_move(3)
    assert snapshot.occupant(3, 1) == Player.EMPTY
    assert snapshot.occupied[3] == 1
    assert snapshot.last_move == (3, 0)


def test_copy_is_independent():
    board = new_board()
    board.apply_move(0)
    clone = board.copy()
    clone.apply_move(0)

    assert board.occupied[0] == 1
    assert clone.occupied[0] == 2
    assert clone.last_move == (0, 1)


def test_render_shows_labels_and_marks():
    board = new_board()
    board.apply_move(0)
    board.switch_player()
    board.apply_move(1)

    lines = board.render().splitlines()
    assert lines[0].startswith(" 6 |")
    assert lines[5] == " 1 | R | B |   |   |   |   |   |"
    assert lines[-1] == "   | A | B | C | D | E | F | G |"


def test_snapshots_compare_by_value():
    """Snapshots of the same state are equal and hash alike; a move changes them."""
    board = new_board()
    first = board.snapshot()
    second = board.snapshot()

    assert first == second
    assert hash(first) == hash(second)
    assert len({first, second}) == 1

    board.apply_move(2)
    after = board.snapshot()
    assert first != after
    assert first != "not a snapshot"


def test_undo_rejected_after_game_over():
    """A won game stays over: the winning disc cannot be taken back."""
    board = new_board()
    board.apply_move(0)
    board.mark_won()
    before = board.snapshot()

    with pytest.raises(NoMoveToUndo):
        board.undo_last_move()
    assert board.snapshot() == before
    assert board.occupant(0, 0) == Player.RED
