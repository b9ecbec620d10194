"""
utils.py - Constants, enumerations and helpers for the Connect Four engine

This module holds the default board geometry, the tile and status enums,
the four win axes, the result messages returned by the game engine, and the
ASCII renderer shared by the board and the console shell.
"""

from enum import Enum
from typing import Tuple

import numpy as np

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of tiles in a row to win

EMPTY = 0  # Grid value of a cell without a tile


class Tile(Enum):
    """The mark a player drops into the grid."""
    GOLD = 1
    RED = 2

    def other(self) -> 'Tile':
        """Get the opposing tile."""
        return Tile.RED if self == Tile.GOLD else Tile.GOLD

    def __str__(self):
        return "G" if self == Tile.GOLD else "R"


class GameStatus(Enum):
    """Enumeration representing the state of a game."""
    IN_PROGRESS = "IN_PROGRESS"
    WIN = "WIN"
    DRAW = "DRAW"

    def is_game_over(self) -> bool:
        """Check if the game has reached a terminal state."""
        return self != GameStatus.IN_PROGRESS


class Direction(Enum):
    """The four axes a line of tiles can run along, as (row, col) steps."""
    HORIZONTAL = (0, 1)
    VERTICAL = (1, 0)
    DIAGONAL_DOWN = (1, 1)  # Top-left to bottom-right
    DIAGONAL_UP = (-1, 1)  # Bottom-left to top-right

    @property
    def vector(self) -> Tuple[int, int]:
        return self.value


# Result messages returned by GameEngine.make_move
MOVE_VALID = "Move was valid"
MOVE_NOT_YOUR_TURN = "Player cannot make a move."
MOVE_COLUMN_BLOCKED = "Cannot place tile in column."
GAME_INACTIVE = "Game is no longer ACTIVE"
GAME_DRAW = "Game Ended in Draw."
GAME_WON_PREFIX = "Game Ended. Winner is "


def winner_message(player_id: int) -> str:
    """Build the result message announcing the winning player."""
    return GAME_WON_PREFIX + str(player_id)


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render a grid as ASCII art.

    Args:
        grid: 2D array of tile values, EMPTY for vacant cells

    Returns:
        ASCII representation of the grid with column numbers underneath
    """
    rows, cols = grid.shape
    border = "|" + "-" * (cols * 2 - 1) + "|"

    result = [border]
    for row in range(rows):
        cells = []
        for col in range(cols):
            value = int(grid[row, col])
            cells.append(" " if value == EMPTY else str(Tile(value)))
        result.append("|" + " ".join(cells) + "|")
    result.append(border)

    # Column numbers past 9 only show their last digit
    result.append("|" + " ".join(str(i % 10) for i in range(cols)) + "|")

    return "\n".join(result)
