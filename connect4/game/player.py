"""
player.py - Player identity for the Connect Four engine
"""

from dataclasses import dataclass

from connect4.utils import Tile


@dataclass(frozen=True)
class Player:
    """A player is its id and the tile it drops. Equal ids and tiles mean the same player."""
    id: int
    tile: Tile

    def __str__(self):
        return f"Player {self.id} ({getattr(self.tile, 'name', self.tile)})"
