"""
board.py - Board representation and core grid mechanics for Connect Four

This module implements the Board class which owns the grid, drops tiles
under gravity, and answers the win and draw questions for the game engine.
Invalid columns are never raised as errors: they come back as -1 or as an
unsuccessful Move so callers only ever inspect return values.
"""

from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from connect4.debug import debug
from connect4.game.move import Move
from connect4.utils import (ROWS, COLS, CONNECT_N, EMPTY, Tile, Direction,
                            render_board_ascii)

GridLike = Union[np.ndarray, Sequence[Sequence[Union[Tile, int, None]]]]

_VALID_CELLS = {EMPTY} | {tile.value for tile in Tile}


def _cell_value(cell) -> int:
    if cell is None:
        return EMPTY
    if isinstance(cell, Tile):
        return cell.value
    value = int(cell)
    if value != cell or value not in _VALID_CELLS:
        raise ValueError(f"Invalid cell value {cell!r}")
    return value


def _to_grid(grid: GridLike) -> np.ndarray:
    """Copy a caller-supplied grid into a validated int8 array."""
    rows = [[_cell_value(cell) for cell in row] for row in grid]
    if not rows or not rows[0]:
        raise ValueError("Grid must have at least one row and one column")
    if any(len(row) != len(rows[0]) for row in rows):
        raise ValueError("Grid rows must all have the same length")

    array = np.array(rows, dtype=np.int8)

    # Filled cells must sit on filled cells: top to bottom a column goes empty -> filled
    filled = (array != EMPTY).astype(np.int8)
    floating = np.diff(filled, axis=0) < 0
    if floating.any():
        row, col = np.argwhere(floating)[0]
        raise ValueError(f"Tile at ({row}, {col}) has an empty cell below it")

    return array


class Board:
    """
    Represents a Connect Four game board.

    The grid is indexed with row 0 at the top, so tiles land first in the
    last row. The board knows nothing about players or turns.
    """

    def __init__(self, grid: Optional[GridLike] = None):
        """
        Create a board.

        Args:
            grid: Optional pre-filled grid (rows of Tile/None or tile values).
                It is copied, and the fill count is recomputed from it.
        """
        if grid is None:
            self._grid = np.full((ROWS, COLS), EMPTY, dtype=np.int8)
        else:
            self._grid = _to_grid(grid)
        self._filled = int(np.count_nonzero(self._grid))
        debug.debug(f"Initializing {self.rows}x{self.cols} board with {self._filled} tiles", "board")

    @property
    def rows(self) -> int:
        return self._grid.shape[0]

    @property
    def cols(self) -> int:
        return self._grid.shape[1]

    @property
    def filled_count(self) -> int:
        return self._filled

    def make_move(self, tile: Tile, column: int) -> Move:
        """
        Drop a tile into the specified column.

        Args:
            tile: The tile to place
            column: The column to place it in (0-indexed)

        Returns:
            A successful Move with the landing cell, or an unsuccessful Move
            with row -1 when the column is full, out of range, or the tile
            is not a Tile
        """
        if not isinstance(tile, Tile):
            debug.warning(f"Rejected move with invalid tile {tile!r}", "board")
            return Move(tile, -1, column, False)

        row = self.get_last_available(column)
        if row == -1:
            debug.debug(f"No room for {tile.name} in column {column}", "board")
            return Move(tile, -1, column, False)

        debug.trace(f"Placing {tile.name} at ({row}, {column})", "board")
        self._grid[row, column] = tile.value
        self._filled += 1
        return Move(tile, row, column, True)

    def get_last_available(self, column: int) -> int:
        """
        Find the landing row for a column.

        Returns:
            The lowest empty row in the column, or -1 if the column is
            full or outside the board
        """
        if column < 0 or column >= self.cols:
            return -1

        for row in range(self.rows - 1, -1, -1):
            if self._grid[row, column] == EMPTY:
                return row
        return -1

    def check_win(self, move: Move) -> bool:
        """
        Check if a move completed a line of CONNECT_N or more tiles.

        Args:
            move: The move returned by make_move

        Returns:
            True if any axis through the landing cell holds a winning run
        """
        if not move.success:
            return False

        for direction in Direction:
            count = 1
            count += self.get_tile_count(direction, move.tile, True, move.position)
            count += self.get_tile_count(direction, move.tile, False, move.position)
            if count >= CONNECT_N:
                debug.debug(f"{direction.name} run of {count} through {move.position}", "board")
                return True
        return False

    def get_tile_count(self, direction: Union[Direction, Sequence[int]], tile: Tile,
                       positive: bool, position: Tuple[int, int]) -> int:
        """
        Count consecutive cells holding ``tile`` next to ``position``.

        Args:
            direction: A Direction or a (row step, col step) pair
            tile: The tile to match
            positive: Walk along the direction if True, against it otherwise
            position: The (row, col) cell to start from (not counted)

        Returns:
            Number of matching cells, at most CONNECT_N
        """
        row_step, col_step = direction.vector if isinstance(direction, Direction) else direction
        if not positive:
            row_step, col_step = -row_step, -col_step

        if not isinstance(tile, Tile):
            return 0

        row, col = position
        count = 0
        for _ in range(CONNECT_N):
            row += row_step
            col += col_step
            if not self.is_valid_position(row, col) or self._grid[row, col] != tile.value:
                break
            count += 1

        return count

    def check_draw(self) -> bool:
        """Check if every cell of the board is filled."""
        return self._filled == self.rows * self.cols

    def is_valid_position(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def get_tile(self, row: int, col: int) -> Optional[Tile]:
        """Get the tile in a cell, or None if the cell is empty."""
        value = int(self._grid[row, col])
        return None if value == EMPTY else Tile(value)

    def get_valid_moves(self) -> List[int]:
        """Get the columns that still have room for a tile."""
        return [col for col in range(self.cols) if self._grid[0, col] == EMPTY]

    def get_state(self) -> np.ndarray:
        """
        Get the current grid as a numpy array.

        Returns:
            A copy of the grid; writing to it does not affect the board
        """
        return self._grid.copy()

    def render(self) -> str:
        """Render the board as a string."""
        return render_board_ascii(self._grid)

    def __str__(self) -> str:
        return self.render()
