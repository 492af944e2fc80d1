"""
cli.py - Command-line interface for playing Connect Four in a terminal

Two players share the keyboard. Columns are chosen by letter, "<" takes back
the latest move and "q" quits. All game decisions are made by the core; this
module only turns typed text into commands and prints the board.
"""

import argparse
import sys
from typing import Callable, List, Optional

from connect4_rules.debug import debug
from connect4_rules.errors import ColumnFull, ColumnOutOfRange, Connect4Error, GameAlreadyOver
from connect4_rules.game.board import Board
from connect4_rules.game.rules import Command, MoveCommand, UndoCommand, play_turn
from connect4_rules.utils import (COLUMN_LABELS, DEFAULT_COLUMNS, DEFAULT_ROWS, MIN_DIMENSION,
                                  QUIT_COMMAND, UNDO_COMMAND, Player, column_index,
                                  render_board_ascii)

# ANSI color codes for terminal output
COLORS = {
    "GREEN": "\033[32m",
    "RED": "\033[31m",
    "RESET": "\033[0m",
}

PLAYER_COLORS = {
    Player.RED: "\033[31m",
    Player.BLACK: "\033[34m",
}

INVALID_INPUT_MESSAGE = "Invalid move, you chose an invalid command or column, try again"


def parse_command(text: str, columns: int) -> Optional[Command]:
    """
    Turn typed text into a command for the core.

    Args:
        text: Raw input line
        columns: Number of columns on the board

    Returns:
        MoveCommand or UndoCommand, or None if the text names neither
    """
    text = text.strip()
    if text == UNDO_COMMAND:
        return UndoCommand()
    column = column_index(text, columns)
    if column is None:
        return None
    return MoveCommand(column)


def error_message(error: Connect4Error) -> str:
    """Message shown to the player for a rejected command."""
    if isinstance(error, ColumnFull):
        return "Column doesn't have any available slots, please choose another column"
    if isinstance(error, ColumnOutOfRange):
        return INVALID_INPUT_MESSAGE
    if isinstance(error, GameAlreadyOver):
        return "The game is over, no more moves can be made"
    return str(error)


class SimpleCLI:
    """Hot-seat terminal game for two players."""

    def __init__(self, input_func: Callable[[str], str] = input):
        self.input_func = input_func
        self.args = None
        self.board: Optional[Board] = None

    def parse_args(self, argv: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse command-line arguments and apply logging settings."""
        parser = argparse.ArgumentParser(description='Connect Four')
        parser.add_argument('--columns', type=int, default=DEFAULT_COLUMNS,
                            help=f'Number of columns ({MIN_DIMENSION}-{len(COLUMN_LABELS)})')
        parser.add_argument('--rows', type=int, default=DEFAULT_ROWS,
                            help=f'Number of rows (at least {MIN_DIMENSION})')
        parser.add_argument('--debug-level', default='warning',
                            choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
                            help='Logging verbosity')
        parser.add_argument('--log-file', default=None, help='Append log records to this file')
        parser.add_argument('--no-color', action='store_true', help='Disable ANSI colours')

        args = parser.parse_args(argv)
        if not MIN_DIMENSION <= args.columns <= len(COLUMN_LABELS):
            parser.error(f"--columns must be between {MIN_DIMENSION} and {len(COLUMN_LABELS)}")
        if args.rows < MIN_DIMENSION:
            parser.error(f"--rows must be at least {MIN_DIMENSION}")

        debug.set_from_string(args.debug_level)
        if args.log_file:
            debug.configure(log_file=args.log_file)

        self.args = args
        return args

    def _color(self, text: str, color: str) -> str:
        if self.args is not None and self.args.no_color:
            return text
        return f"{COLORS[color]}{text}{COLORS['RESET']}"

    def render(self) -> str:
        colors = None if (self.args is not None and self.args.no_color) else PLAYER_COLORS
        return render_board_ascii(self.board.grid, colors)

    def run(self, argv: Optional[List[str]] = None) -> Optional[Player]:
        """Parse arguments if needed and play one game."""
        if self.args is None:
            self.parse_args(argv)
        return self.play_game()

    def play_game(self) -> Optional[Player]:
        """
        Play until someone wins, the board fills up or a player quits.

        Returns:
            The winner, or None for a draw or a quit
        """
        self.board = Board(self.args.columns, self.args.rows)
        debug.info(f"Starting {self.args.columns}x{self.args.rows} game", "cli")

        while True:
            print(self.render())
            if self.board.is_full():
                print(self._color("The board is full, it's a draw!", "GREEN"))
                return None

            prompt = f"Player {self.board.current_player}, type a column name:"
            try:
                text = self.input_func(self._color(prompt, "GREEN") + " ")
            except EOFError:
                print("\nQuitting game.")
                return None

            if text.strip().lower() == QUIT_COMMAND:
                print("Quitting game.")
                return None

            command = parse_command(text, self.board.columns)
            if command is None:
                debug.debug(f"Rejected input {text!r}", "cli")
                print(self._color(INVALID_INPUT_MESSAGE, "RED"))
                continue

            try:
                result = play_turn(self.board, command)
            except Connect4Error as e:
                print(self._color(error_message(e), "RED"))
                continue

            if result.won:
                print(self.render())
                print(self._color(f"GAME WON BY {result.winner}", "GREEN"))
                return result.winner


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    try:
        cli.run(argv)
    except KeyboardInterrupt:
        print("\nQuitting game.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
