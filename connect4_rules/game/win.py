"""
win.py - Win detection for Connect Four

A win is checked only around the last disc played: along each of the four
axes the detector walks outwards in both directions, counting the acting
player's discs until it leaves the board or meets another slot. A total of
CONNECT_N (the anchor included) on any axis wins.
"""

from typing import List, Optional

from connect4_rules.debug import debug
from connect4_rules.game.board import BoardSnapshot
from connect4_rules.utils import CONNECT_N, Axis, Player, Position, is_valid_position

# Axes are checked in this order and the first win short-circuits
AXIS_ORDER = (Axis.HORIZONTAL, Axis.VERTICAL, Axis.ACUTE_DIAGONAL, Axis.OBTUSE_DIAGONAL)


class WinDetector:
    """
    Evaluates one anchor slot of a board snapshot.

    Holds no state beyond the snapshot it was built from and is meant to be
    discarded after producing its verdict.
    """

    def __init__(self, snapshot: BoardSnapshot, anchor: Optional[Position] = None,
                 player: Optional[Player] = None, connect_n: int = CONNECT_N):
        anchor = anchor if anchor is not None else snapshot.last_move
        if anchor is None:
            raise ValueError("Win detection needs an anchor; no move has been made")

        self.snapshot = snapshot
        self.column, self.row = anchor
        self.player = player if player is not None else snapshot.current_player
        self.connect_n = connect_n

    def _scan(self, step: Position) -> List[Position]:
        """Matching slots walking from the anchor along one step vector."""
        d_col, d_row = step
        found = []
        for k in range(1, self.connect_n):
            col = self.column + d_col * k
            row = self.row + d_row * k
            if not is_valid_position(col, row, self.snapshot.columns, self.snapshot.rows):
                break
            if self.snapshot.grid[row, col] != self.player.value:
                break
            found.append((col, row))
        return found

    def line(self, axis: Axis) -> List[Position]:
        """Contiguous run through the anchor along an axis, sorted by column then row."""
        forward, backward = axis.steps
        positions = [(self.column, self.row)] + self._scan(forward) + self._scan(backward)
        return sorted(positions)

    def line_length(self, axis: Axis) -> int:
        count = len(self.line(axis))
        debug.trace(f"{axis.name} count {count} from ({self.column}, {self.row})", "win")
        return count

    def winning_axis(self) -> Optional[Axis]:
        for axis in AXIS_ORDER:
            if self.line_length(axis) >= self.connect_n:
                return axis
        return None

    def run(self) -> bool:
        return self.winning_axis() is not None


def _has_anchor(snapshot: BoardSnapshot) -> bool:
    if snapshot.last_move is None:
        return False
    column, row = snapshot.last_move
    return snapshot.occupant(column, row) == snapshot.current_player


def evaluate_win(snapshot: BoardSnapshot) -> bool:
    """
    Check whether the last move in a snapshot completed a line.

    A board with no move yet, or whose last move was undone, has no winner.

    Args:
        snapshot: Board state with last_move set by the acting player

    Returns:
        True if the current player has CONNECT_N in a row through last_move
    """
    if not _has_anchor(snapshot):
        debug.trace("No anchor to evaluate", "win")
        return False

    debug.start_timer("win_check")
    won = WinDetector(snapshot).run()
    debug.end_timer("win_check", "win")
    return won


def count_line(snapshot: BoardSnapshot, axis: Axis, anchor: Optional[Position] = None) -> int:
    """Length of the run through an anchor (default: last move) along one axis."""
    return WinDetector(snapshot, anchor=anchor).line_length(axis)


def winning_line(snapshot: BoardSnapshot) -> List[Position]:
    """
    Get the positions of the winning line through the last move.

    Returns:
        List of (column, row) positions forming the line, or empty list if no win
    """
    if not _has_anchor(snapshot):
        return []

    detector = WinDetector(snapshot)
    axis = detector.winning_axis()
    if axis is None:
        return []
    return detector.line(axis)
