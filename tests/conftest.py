"""Shared fixtures and board layouts for the Connect Four tests."""

import sys
from pathlib import Path

import pytest

# Add the project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from connect4.debug import debug, DebugLevel
from connect4.game.player import Player
from connect4.utils import Tile

CELLS = {'G': Tile.GOLD, 'R': Tile.RED, '.': None}

# Full board with no line of four: a cell is gold when (row + col // 2) is even
DRAW_ROWS = [
    "GGRRGGR",
    "RRGGRRG",
    "GGRRGGR",
    "RRGGRRG",
    "GGRRGGR",
    "RRGGRRG",
]

# Column order that builds DRAW_ROWS with gold and red strictly alternating,
# gold first. The 42nd move fills the board.
DRAW_SEQUENCE = (
    [2, 0, 0, 2] * 3
    + [3, 1, 1, 3] * 3
    + [6, 4, 4, 5, 5, 6] * 3
)


def grid_from_rows(rows):
    """Build a grid of Tile/None from strings of 'G', 'R' and '.' (top row first)."""
    return [[CELLS[c] for c in row] for row in rows]


@pytest.fixture
def player1():
    return Player(1, Tile.GOLD)


@pytest.fixture
def player2():
    return Player(2, Tile.RED)


@pytest.fixture(autouse=True)
def restore_debug():
    """Put the shared debug manager back to its defaults after each test."""
    yield
    debug.configure(level=DebugLevel.INFO, enabled=True, log_file="", components=[])
