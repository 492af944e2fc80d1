"""
board.py - Board state machine for Connect Four

This module implements the Board class, the only mutator of game state. It
places discs under gravity, reverses the latest move, switches turns and
records the end of the game. Checking for a win is left to connect4_rules.game.win
so that the driver sequences apply -> evaluate -> switch/end explicitly.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from connect4_rules.debug import debug
from connect4_rules.errors import ColumnFull, ColumnOutOfRange, GameAlreadyOver, NoMoveToUndo
from connect4_rules.utils import (DEFAULT_COLUMNS, DEFAULT_ROWS, MIN_DIMENSION,
                                  Player, Position, render_board_ascii)


@dataclass(frozen=True, eq=False)
class BoardSnapshot:
    """
    Read-only view of a board handed to renderers and win detection.

    The grid is a copy with writes disabled, indexed grid[row, column] with
    row 0 the lowest row.
    """

    columns: int
    rows: int
    grid: np.ndarray = field(compare=False)
    occupied: Tuple[int, ...]
    current_player: Player
    last_move: Optional[Position]
    game_over: bool

    def _key(self) -> tuple:
        return (self.columns, self.rows, self.occupied, self.current_player,
                self.last_move, self.game_over)

    def __eq__(self, other):
        if not isinstance(other, BoardSnapshot):
            return NotImplemented
        return self._key() == other._key() and np.array_equal(self.grid, other.grid)

    def __hash__(self):
        return hash((self._key(), self.grid.tobytes()))

    def occupant(self, column: int, row: int) -> Player:
        """Player holding the slot at (column, row)."""
        return Player(int(self.grid[row, column]))

    def render(self) -> str:
        return render_board_ascii(self.grid)


class Board:
    """
    Represents a Connect Four game board.

    Moves fill the lowest free row of a column. A successful move does not
    switch turns or check for a win; the caller does both. Undo reverses only
    the latest move and leaves the turn where it is.
    """

    def __init__(self, columns: int = DEFAULT_COLUMNS, rows: int = DEFAULT_ROWS,
                 first_player: Player = Player.RED):
        if columns < MIN_DIMENSION or rows < MIN_DIMENSION:
            raise ValueError(
                f"Board must be at least {MIN_DIMENSION}x{MIN_DIMENSION}, got {columns}x{rows}"
            )
        if first_player == Player.EMPTY:
            raise ValueError("first_player must be RED or BLACK")

        debug.debug(f"Initializing new {columns}x{rows} Board", "board")
        self.columns = columns
        self.rows = rows
        self.first_player = first_player
        self.reset()

    def reset(self) -> None:
        """Reset the board to an empty state."""
        self.grid = np.zeros((self.rows, self.columns), dtype=np.int8)
        self.occupied = np.zeros(self.columns, dtype=int)
        self.current_player = self.first_player
        self.last_move: Optional[Position] = None
        self.game_over = False

    def copy(self) -> 'Board':
        """Create an independent copy of the current board."""
        new_board = Board(self.columns, self.rows, self.first_player)
        new_board.grid = self.grid.copy()
        new_board.occupied = self.occupied.copy()
        new_board.current_player = self.current_player
        new_board.last_move = self.last_move
        new_board.game_over = self.game_over
        return new_board

    def _check_column(self, column) -> None:
        if isinstance(column, (bool, np.bool_)) or not isinstance(column, (int, np.integer)):
            raise ColumnOutOfRange(column, self.columns)
        if not 0 <= column < self.columns:
            raise ColumnOutOfRange(column, self.columns)
        if self.occupied[column] >= self.rows:
            raise ColumnFull(int(column))

    def is_valid_move(self, column) -> bool:
        """
        Check if a move is valid.

        Args:
            column: The column to place a piece (0-indexed)

        Returns:
            True if the move would be accepted, False otherwise
        """
        if self.game_over:
            return False
        try:
            self._check_column(column)
        except (ColumnOutOfRange, ColumnFull):
            return False
        return True

    def valid_moves(self) -> List[int]:
        """Columns that can currently be played."""
        if self.game_over:
            return []
        return [col for col in range(self.columns) if self.occupied[col] < self.rows]

    def is_full(self) -> bool:
        return bool(np.all(self.occupied >= self.rows))

    def occupant(self, column: int, row: int) -> Player:
        return Player(int(self.grid[row, column]))

    def apply_move(self, column: int) -> int:
        """
        Drop the current player's disc into a column.

        Args:
            column: The column to place a piece (0-indexed)

        Returns:
            The row the disc landed on (0 is the lowest row)

        Raises:
            GameAlreadyOver: The game has been marked as won
            ColumnOutOfRange: The column is not a valid index
            ColumnFull: The column has no free slot
        """
        debug.debug(f"Attempting move in column {column} for player {self.current_player}", "board")

        if self.game_over:
            debug.debug("Rejected move: game is over", "board")
            raise GameAlreadyOver()
        try:
            self._check_column(column)
        except (ColumnOutOfRange, ColumnFull) as e:
            debug.debug(f"Rejected move: {e}", "board")
            raise

        column = int(column)
        row = int(self.occupied[column])
        self.grid[row, column] = self.current_player.value
        self.occupied[column] = row + 1
        self.last_move = (column, row)
        debug.trace(f"Placed {self.current_player} at ({column}, {row})", "board")
        return row

    def undo_last_move(self) -> None:
        """
        Remove the disc placed by the latest move.

        Only one move can be undone: the cleared slot stays recorded as the
        last move, so a second call finds it empty and is rejected. The turn
        is not handed back.

        Raises:
            NoMoveToUndo: No move was made yet, it was already undone, or the
                game is over
        """
        if self.game_over:
            debug.debug("Rejected undo: game is over", "board")
            raise NoMoveToUndo("The game is over, the winning move can't be undone")

        if self.last_move is None:
            debug.debug("Rejected undo: no moves made", "board")
            raise NoMoveToUndo("You can't undo when no moves were made")

        column, row = self.last_move
        if self.grid[row, column] == Player.EMPTY.value:
            debug.debug(f"Rejected undo: ({column}, {row}) already cleared", "board")
            raise NoMoveToUndo("You already undid your last move")

        debug.debug(f"Undoing move at ({column}, {row})", "board")
        self.grid[row, column] = Player.EMPTY.value
        self.occupied[column] = row

    def switch_player(self) -> None:
        """Hand the turn to the other player."""
        self.current_player = self.current_player.other()
        debug.debug(f"Switching to player {self.current_player}", "board")

    def mark_won(self) -> None:
        """Record that the current player has won; no further moves are accepted."""
        self.game_over = True
        debug.info(f"Player {self.current_player} wins after move at {self.last_move}", "board")

    def snapshot(self) -> BoardSnapshot:
        """
        Get a read-only view of the current state.

        Returns:
            BoardSnapshot detached from further mutation of this board
        """
        grid = self.grid.copy()
        grid.flags.writeable = False
        return BoardSnapshot(
            columns=self.columns,
            rows=self.rows,
            grid=grid,
            occupied=tuple(int(n) for n in self.occupied),
            current_player=self.current_player,
            last_move=self.last_move,
            game_over=self.game_over,
        )

    def render(self) -> str:
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        return self.render()


def new_board(columns: int = DEFAULT_COLUMNS, rows: int = DEFAULT_ROWS,
              first_player: Player = Player.RED) -> Board:
    """Create an empty board; both dimensions must be at least 4."""
    return Board(columns, rows, first_player)
