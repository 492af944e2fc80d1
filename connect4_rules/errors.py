"""
Exceptions raised by the Connect Four rules engine.

Every error here is a recoverable, user-facing rejection: the board is left
exactly as it was and the driver is expected to re-prompt.
"""


class Connect4Error(Exception):
    """Base class for rejected game commands."""

    pass


class MoveError(Connect4Error):
    """Raised when a move cannot be applied."""

    pass


class ColumnOutOfRange(MoveError):
    """Raised when the chosen column is not a valid index."""

    def __init__(self, column, columns: int):
        self.column = column
        self.columns = columns
        super().__init__(f"Column {column!r} is outside 0..{columns - 1}")


class ColumnFull(MoveError):
    """Raised when the chosen column has no free slot."""

    def __init__(self, column: int):
        self.column = column
        super().__init__(f"Column {column} has no available slots")


class GameAlreadyOver(MoveError):
    """Raised when a move is attempted after the game has been won."""

    def __init__(self):
        super().__init__("The game is already over")


class UndoError(Connect4Error):
    """Raised when an undo cannot be applied."""

    pass


class NoMoveToUndo(UndoError):
    """Raised when there is no move left to undo."""

    def __init__(self, message: str = "There is no move to undo"):
        super().__init__(message)
