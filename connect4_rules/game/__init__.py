"""
connect4_rules.game - Core game mechanics for Connect Four

This package contains the board state machine, win detection and the
turn processing that sequences them.
"""

from connect4_rules.game.board import Board, BoardSnapshot, new_board
from connect4_rules.game.rules import (ConnectFourEnv, MoveCommand, TurnResult,
                                       UndoCommand, play_turn)
from connect4_rules.game.win import WinDetector, count_line, evaluate_win, winning_line

__all__ = [
    'Board', 'BoardSnapshot', 'new_board',
    'WinDetector', 'evaluate_win', 'count_line', 'winning_line',
    'MoveCommand', 'UndoCommand', 'TurnResult', 'play_turn', 'ConnectFourEnv',
]
