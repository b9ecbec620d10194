"""
rules.py - Turn enforcement and Gymnasium environment for Connect Four

This module provides:
1. GameEngine, which layers turn order and win/draw resolution on a Board
2. A gymnasium-compatible environment that drives a GameEngine
"""

import threading
from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from connect4.debug import debug
from connect4.game.board import Board
from connect4.game.player import Player
from connect4.utils import (Tile, GameStatus, MOVE_VALID, MOVE_NOT_YOUR_TURN,
                            MOVE_COLUMN_BLOCKED, GAME_INACTIVE, GAME_DRAW,
                            winner_message)


class GameEngine:
    """
    Connect Four game manager for two fixed players.

    Every request goes through make_move, which returns one of the result
    messages from connect4.utils. Rejected requests leave the game untouched.
    A finished game stays finished; start a new engine for a new game.
    """

    def __init__(self, player1: Player, player2: Player, board: Optional[Board] = None):
        """
        Initialize a new game.

        Args:
            player1: The player who moves first
            player2: The player who moves second
            board: Optional board to continue from, a fresh one otherwise
        """
        for player in (player1, player2):
            if not isinstance(player.tile, Tile):
                raise ValueError(f"Player {player.id} has no tile: {player.tile!r}")
        if player1.tile == player2.tile:
            raise ValueError(f"Players must use different tiles, both use {player1.tile.name}")

        self._player1 = player1
        self._player2 = player2
        self._current = player1
        self._status = GameStatus.IN_PROGRESS
        self._winner: Optional[Player] = None
        self._board = board if board is not None else Board()
        self._lock = threading.Lock()
        debug.debug(f"Initializing GameEngine: {player1} vs {player2}", "engine")

    def make_move(self, player: Player, column: int) -> str:
        """
        Play a tile for a player.

        Args:
            player: The player making the move
            column: Column to drop the tile in (0-indexed)

        Returns:
            The result message describing what happened
        """
        with self._lock:
            if self._status.is_game_over():
                debug.debug(f"{player} moved after the game ended", "engine")
                return GAME_INACTIVE

            if player != self._current:
                debug.debug(f"{player} moved out of turn, expected {self._current}", "engine")
                return MOVE_NOT_YOUR_TURN

            move = self._board.make_move(player.tile, column)
            if not move.success:
                return MOVE_COLUMN_BLOCKED

            # A move that fills the board with four in a row is a win, not a draw
            if self._board.check_win(move):
                self._status = GameStatus.WIN
                self._winner = self._current
                debug.info(f"{self._current} wins with move at {move.position}", "engine")
                return winner_message(self._current.id)

            if self._board.check_draw():
                self._status = GameStatus.DRAW
                debug.info("Game ends in a draw", "engine")
                return GAME_DRAW

            self._current = self._player2 if self._current == self._player1 else self._player1
            debug.debug(f"Switching to {self._current}", "engine")
            return MOVE_VALID

    def get_current_player(self) -> Player:
        return self._current

    def get_status(self) -> GameStatus:
        return self._status

    def get_player1(self) -> Player:
        return self._player1

    def get_player2(self) -> Player:
        return self._player2

    def get_winner(self) -> Optional[Player]:
        """
        Get the winner of the game.

        Returns:
            The winning player, or None if the game is not won
        """
        if self._status == GameStatus.WIN:
            return self._winner
        return None

    def get_board(self) -> Board:
        return self._board

    def is_game_over(self) -> bool:
        return self._status.is_game_over()

    def render(self) -> str:
        return self._board.render()


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    Each step plays one tile for whichever player's turn it is, so a single
    agent (or two alternating agents) can drive a full game.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None, board: Optional[Board] = None):
        """
        Initialize the Connect Four environment.

        Args:
            render_mode: Mode for rendering the environment
            board: Optional pre-filled board for the first episode
        """
        debug.debug("Initializing ConnectFourEnv", "env")

        self.player1 = Player(1, Tile.GOLD)
        self.player2 = Player(2, self.player1.tile.other())
        self.engine = GameEngine(self.player1, self.player2, board)
        self.render_mode = render_mode

        rows, cols = self.engine.get_board().rows, self.engine.get_board().cols
        self.action_space = spaces.Discrete(cols)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(rows, cols), dtype=np.int8
        )

        self.reward_win = 1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01
        self._last_message: Optional[str] = None

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Start a new episode with a fresh game.

        Args:
            seed: Random seed for reproducibility
            options: Additional options for reset (unused)

        Returns:
            Initial observation and info dictionary
        """
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)

        self.engine = GameEngine(self.player1, self.player2)
        self._last_message = None

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Drop a tile for the current player.

        Args:
            action: Column to place a tile in (0-indexed)

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        player = self.engine.get_current_player()
        message = self.engine.make_move(player, int(action))
        self._last_message = message
        debug.debug(f"Step {player} column {action}: {message}", "env")

        reward = self.reward_step
        terminated = False
        truncated = False

        if message == GAME_INACTIVE:
            reward = 0.0
            terminated = True
        elif message == MOVE_COLUMN_BLOCKED:
            reward = self.reward_invalid_move
            truncated = True
        elif self.engine.get_status() == GameStatus.WIN:
            reward = self.reward_win
            terminated = True
        elif self.engine.get_status() == GameStatus.DRAW:
            reward = self.reward_draw
            terminated = True

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[str]:
        """
        Render the current state of the environment.

        Returns:
            The ASCII board for "ascii" mode, None otherwise
        """
        if self.render_mode == "ascii":
            return self.engine.render()
        if self.render_mode == "human":
            print(self.engine.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.engine.get_board().get_state()

    def _get_info(self) -> Dict[str, Any]:
        board = self.engine.get_board()
        winner = self.engine.get_winner()
        return {
            'message': self._last_message,
            'current_player': self.engine.get_current_player().id,
            'status': self.engine.get_status().name,
            'winner': winner.id if winner else None,
            'valid_moves': board.get_valid_moves(),
            'filled_count': board.filled_count,
        }
