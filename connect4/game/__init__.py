"""
connect4.game - Core game mechanics for Connect Four

This package contains the board representation, the move and player
value types, and the turn-enforcing game engine.
"""

from connect4.game.board import Board
from connect4.game.move import Move
from connect4.game.player import Player
from connect4.game.rules import GameEngine, ConnectFourEnv

__all__ = ['Board', 'Move', 'Player', 'GameEngine', 'ConnectFourEnv']
