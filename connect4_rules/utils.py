"""
utils.py - Constants, enumerations and helpers for the Connect Four rules engine

This module holds the board dimensions, the player identities, the four scan
axes with their step vectors, the mapping between column indices and the
letter labels shown to players, and ASCII rendering of a board snapshot.
"""

from enum import Enum, auto
from typing import Dict, List, Optional, Tuple

import numpy as np

# Game constants
DEFAULT_COLUMNS = 7
DEFAULT_ROWS = 6
CONNECT_N = 4  # Number of pieces in a row to win
MIN_DIMENSION = CONNECT_N

# Terminal commands
COLUMN_LABELS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
UNDO_COMMAND = "<"
QUIT_COMMAND = "q"

TABLE_SEPARATOR = "-" * 33

Position = Tuple[int, int]  # (column, row)


class Player(Enum):
    """Enumeration representing players and slot states."""
    EMPTY = 0
    RED = 1    # Moves first
    BLACK = 2

    def other(self) -> "Player":
        """Get the other player."""
        if self == Player.RED:
            return Player.BLACK
        elif self == Player.BLACK:
            return Player.RED
        return Player.EMPTY

    def __str__(self):
        if self == Player.EMPTY:
            return " "
        elif self == Player.RED:
            return "R"
        else:
            return "B"


class Axis(Enum):
    """Enumeration representing the four line directions checked for a win."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    ACUTE_DIAGONAL = auto()   # Bottom-left to top-right
    OBTUSE_DIAGONAL = auto()  # Bottom-right to top-left

    @property
    def steps(self) -> Tuple[Position, Position]:
        """Unit (column, row) step vectors for both scan directions."""
        return AXIS_STEPS[self]


# Unit step vectors (column delta, row delta): positive direction first
AXIS_STEPS: Dict[Axis, Tuple[Position, Position]] = {
    Axis.HORIZONTAL: ((1, 0), (-1, 0)),
    Axis.VERTICAL: ((0, 1), (0, -1)),
    Axis.ACUTE_DIAGONAL: ((1, 1), (-1, -1)),
    Axis.OBTUSE_DIAGONAL: ((-1, 1), (1, -1)),
}


def is_valid_position(column: int, row: int, columns: int, rows: int) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        column: Column index
        row: Row index (0 is the lowest row)
        columns: Number of columns on the board
        rows: Number of rows on the board

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= column < columns and 0 <= row < rows


def column_label(column: int) -> str:
    """Letter shown to players for a 0-based column index."""
    if not 0 <= column < len(COLUMN_LABELS):
        raise ValueError(f"No label for column {column}")
    return COLUMN_LABELS[column]


def column_index(label: str, columns: int) -> Optional[int]:
    """
    Map a player-typed column label to a 0-based index.

    Args:
        label: Text typed by the player, case-insensitive
        columns: Number of columns on the board

    Returns:
        The column index, or None if the label does not name a column
    """
    label = label.strip().upper()
    if len(label) != 1:
        return None
    index = COLUMN_LABELS[:columns].find(label)
    return index if index >= 0 else None


def footer_labels(columns: int) -> List[str]:
    """
    One-character label per column for the board footer.

    Boards wider than the alphabet fall back to the last digit of each
    0-based index so the footer stays aligned with the rows.
    """
    if columns <= len(COLUMN_LABELS):
        return [column_label(col) for col in range(columns)]
    return [str(col % 10) for col in range(columns)]


def render_board_ascii(grid: np.ndarray, colors: Optional[Dict[Player, str]] = None) -> str:
    """
    Render a grid as ASCII art, top row first.

    Args:
        grid: Array of shape (rows, columns) holding Player values, row 0 lowest
        colors: Optional ANSI prefix per player used to colour the marks

    Returns:
        ASCII representation of the board
    """
    rows, columns = grid.shape
    reset = "\033[0m" if colors else ""
    result: List[str] = []

    for row in range(rows - 1, -1, -1):
        line = f" {row + 1} |"
        for col in range(columns):
            player = Player(int(grid[row, col]))
            mark = str(player)
            if colors and player in colors:
                mark = f"{colors[player]}{mark}{reset}"
            line += f" {mark} |"
        result.append(line)

    result.append(TABLE_SEPARATOR)
    result.append("   | " + " | ".join(footer_labels(columns)) + " |")

    return "\n".join(result)
