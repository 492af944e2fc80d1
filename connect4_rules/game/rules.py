"""
rules.py - Turn processing and Gymnasium environment for Connect Four

This module provides:
1. The two commands a driver may send to the core and play_turn, which runs
   one command against a caller-owned Board
2. A gymnasium-compatible environment built on the same turn processing
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from connect4_rules.debug import debug
from connect4_rules.errors import Connect4Error
from connect4_rules.game.board import Board
from connect4_rules.game.win import evaluate_win, winning_line
from connect4_rules.utils import DEFAULT_COLUMNS, DEFAULT_ROWS, Player


@dataclass(frozen=True)
class MoveCommand:
    """Drop a disc into a 0-based column."""
    column: int


@dataclass(frozen=True)
class UndoCommand:
    """Take back the latest move."""
    pass


Command = Union[MoveCommand, UndoCommand]


@dataclass
class TurnResult:
    board: Board
    command: Command
    row: Optional[int] = None
    won: bool = False
    winner: Optional[Player] = None


def play_turn(board: Board, command: Command) -> TurnResult:
    """
    Run one command against the board.

    A move is applied, then checked for a win: a win ends the game, anything
    else hands the turn to the other player. An undo keeps the turn.

    Args:
        board: Game state owned by the caller
        command: MoveCommand or UndoCommand

    Returns:
        TurnResult carrying the same board

    Raises:
        MoveError / UndoError: The command was rejected; the board is unchanged
        TypeError: The command is neither a move nor an undo
    """
    if isinstance(command, MoveCommand):
        player = board.current_player
        row = board.apply_move(command.column)
        if evaluate_win(board.snapshot()):
            board.mark_won()
            return TurnResult(board, command, row=row, won=True, winner=player)
        board.switch_player()
        return TurnResult(board, command, row=row)

    if isinstance(command, UndoCommand):
        board.undo_last_move()
        return TurnResult(board, command)

    raise TypeError(f"Unsupported command: {command!r}")


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    Both players act through step(); rewards are from the point of view of
    the player who made the move.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, columns: int = DEFAULT_COLUMNS, rows: int = DEFAULT_ROWS,
                 render_mode: Optional[str] = None):
        debug.debug("Initializing ConnectFourEnv", "env")
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.columns = columns
        self.rows = rows
        self.action_space = spaces.Discrete(columns)
        # Observation space: rows x columns with 3 possible values (0, 1, 2)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(rows, columns), dtype=np.int8
        )
        self.board = Board(columns, rows)
        self.render_mode = render_mode

        self.reward_win = 1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)
        self.board = Board(self.columns, self.rows)

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Drop the current player's disc into the column given by action.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        debug.debug(f"Environment step with action {action}", "env")

        try:
            result = play_turn(self.board, MoveCommand(int(action)))
        except Connect4Error as e:
            debug.warning(f"Invalid action {action}: {e}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            info['error'] = type(e).__name__
            return self._get_observation(), self.reward_invalid_move, False, True, info

        reward = self.reward_step
        terminated = False
        if result.won:
            debug.info(f"Game over: player {result.winner} wins", "env")
            reward = self.reward_win
            terminated = True
        elif self.board.is_full():
            debug.info("Game over: draw", "env")
            reward = self.reward_draw
            terminated = True

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return self.board.render()
        if self.render_mode == "human":
            print(self.board.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.board.grid.copy()

    def _get_info(self) -> Dict:
        snapshot = self.board.snapshot()
        valid_moves = self.board.valid_moves()
        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': snapshot.current_player.value,
            'game_over': snapshot.game_over,
            'moves_made': int(sum(snapshot.occupied)),
            'winning_line': winning_line(snapshot),
            'last_move': snapshot.last_move,
        }
