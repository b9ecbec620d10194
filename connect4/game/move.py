"""
move.py - The record of a single tile placement attempt
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from connect4.utils import Tile


@dataclass(frozen=True)
class Move:
    """
    Outcome of dropping a tile into a column.

    A failed attempt has no landing cell, so its row is -1 while the
    column keeps the value that was requested.
    """
    tile: Optional[Tile]
    row: int
    column: int
    success: bool

    @property
    def position(self) -> Tuple[int, int]:
        """The (row, column) landing cell."""
        return (self.row, self.column)
