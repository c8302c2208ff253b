"""
board.py - Board representation and core game mechanics for Connect Four

This module implements the Board class: a fixed 6x7 grid of cell states plus
a height counter per column. Moves only ever fill the lowest empty cell of a
column, and the search explores hypothetical futures by cloning the board
rather than undoing moves.
"""

import numpy as np
from typing import Iterable, List, Tuple

from connectfour.debug import debug
from connectfour.exceptions import InvalidStateError, OutOfRangeError
from connectfour.utils import (ROWS, COLS, CONNECT_N, Player, DIRECTION_VECTORS,
                               is_valid_position, render_board_ascii)

_SYMBOL_OFFSET = ord('0')


class Board:
    """
    Represents a Connect Four game board.

    Row 0 is the bottom row, so `heights[column]` is both the number of
    pieces in that column and the row where the next piece lands. The board
    does not track whose turn it is; every move names its player.
    """

    def __init__(self):
        """Initialize an empty Connect Four board."""
        debug.trace("Initializing new Board", "board")
        self.reset()

    def reset(self):
        """Reset the board to an empty state."""
        self.grid = np.zeros((ROWS, COLS), dtype=np.int8)
        self.heights = np.zeros(COLS, dtype=np.int8)

    @staticmethod
    def is_valid_position(row: int, column: int) -> bool:
        """Pure bounds check for a cell."""
        return is_valid_position(row, column)

    def clone(self) -> 'Board':
        """
        Create an independent copy of the board.

        Returns:
            A new Board with identical cells and heights
        """
        new_board = Board.__new__(Board)
        new_board.grid = self.grid.copy()
        new_board.heights = self.heights.copy()
        return new_board

    copy = clone

    def get_space(self, row: int, column: int) -> Player:
        """
        Get the occupant of a cell.

        Raises:
            OutOfRangeError: If the cell is outside the grid
        """
        if not is_valid_position(row, column):
            raise OutOfRangeError(f"Position ({row}, {column}) is outside the board")
        return Player(int(self.grid[row, column]))

    def get_column_height(self, column: int) -> int:
        """
        Get the number of pieces in a column.

        Raises:
            OutOfRangeError: If the column is outside the grid
        """
        if not 0 <= column < COLS:
            raise OutOfRangeError(f"Column {column} is outside the board")
        return int(self.heights[column])

    def can_make_move(self, column: int) -> bool:
        """Check whether a piece can still be dropped into a column."""
        return self.get_column_height(column) < ROWS

    def get_valid_moves(self) -> List[int]:
        """
        Get a list of columns that still have room.

        Returns:
            List of valid column indices, left to right
        """
        return [col for col in range(COLS) if self.heights[col] < ROWS]

    def make_move(self, player: Player, column: int) -> int:
        """
        Drop a piece for `player` into `column`.

        Args:
            player: The player making the move (not EMPTY)
            column: The column to place a piece (0-indexed)

        Returns:
            The row the piece landed in

        Raises:
            InvalidStateError: If the column is already full
            OutOfRangeError: If the column is outside the grid
        """
        if player == Player.EMPTY:
            raise ValueError("EMPTY cannot make a move")
        if not self.can_make_move(column):
            raise InvalidStateError(f"Column {column} is full")

        row = int(self.heights[column])
        self.grid[row, column] = player.value
        self.heights[column] += 1
        return row

    def _count_run(self, row: int, column: int, dr: int, dc: int, value: int) -> int:
        """Length of the run of `value` through (row, column) along one axis."""
        count = 1  # The cell itself
        for sign in (1, -1):
            r, c = row + sign * dr, column + sign * dc
            steps = 1
            while (steps < CONNECT_N and is_valid_position(r, c)
                   and self.grid[r, c] == value):
                count += 1
                steps += 1
                r += sign * dr
                c += sign * dc
        return count

    def check_victory(self, player: Player, column: int) -> bool:
        """
        Check whether the top piece of `column` completes a run for `player`.

        Only runs through the most recently dropped piece are examined, since
        that piece is the only one that can have created a new win.

        Raises:
            ValueError: If player is EMPTY
        """
        if player == Player.EMPTY:
            raise ValueError("EMPTY cannot win")

        row = self.get_column_height(column) - 1
        if row < 0 or self.grid[row, column] != player.value:
            return False

        for dr, dc in DIRECTION_VECTORS.values():
            if self._count_run(row, column, dr, dc, player.value) >= CONNECT_N:
                return True
        return False

    def is_winning_move(self, player: Player, column: int) -> bool:
        """
        Check whether dropping a piece for `player` into `column` would win.

        The board is not modified. Full columns are never winning moves.
        """
        row = self.get_column_height(column)
        if row >= ROWS:
            return False

        for dr, dc in DIRECTION_VECTORS.values():
            if self._count_run(row, column, dr, dc, player.value) >= CONNECT_N:
                return True
        return False

    def get_winning_line(self, player: Player, column: int) -> List[Tuple[int, int]]:
        """
        Get the positions of a winning run through the top piece of `column`.

        Returns:
            List of (row, col) positions forming the run, or empty list if no win
        """
        row = self.get_column_height(column) - 1
        if row < 0 or self.grid[row, column] != player.value:
            return []

        for dr, dc in DIRECTION_VECTORS.values():
            positions = [(row, column)]
            for sign in (1, -1):
                r, c = row + sign * dr, column + sign * dc
                while is_valid_position(r, c) and self.grid[r, c] == player.value:
                    positions.append((r, c))
                    r += sign * dr
                    c += sign * dc
            if len(positions) >= CONNECT_N:
                return sorted(positions)

        return []

    def is_full(self) -> bool:
        """Check whether every column is full."""
        return bool((self.heights == ROWS).all())

    def piece_count(self) -> int:
        """Total number of pieces on the board."""
        return int(self.heights.sum())

    def canonical_encoding(self) -> str:
        """
        Serialize the cells row-major from the bottom row, one digit per cell.

        Two boards with the same cells always encode identically, whatever
        order the moves were made in.
        """
        return (self.grid + _SYMBOL_OFFSET).astype(np.uint8).tobytes().decode('ascii')

    @classmethod
    def from_encoding(cls, encoding: str) -> 'Board':
        """
        Rebuild a board from canonical_encoding output.

        Raises:
            InvalidStateError: On a malformed string or a floating piece
        """
        if len(encoding) != ROWS * COLS:
            raise InvalidStateError(
                f"Encoding must have {ROWS * COLS} cells, got {len(encoding)}")
        if any(symbol not in '012' for symbol in encoding):
            raise InvalidStateError("Encoding may only contain 0, 1 and 2")

        cells = np.array([int(symbol) for symbol in encoding], dtype=np.int8).reshape(ROWS, COLS)
        board = cls()
        for col in range(COLS):
            filled = cells[:, col] != Player.EMPTY.value
            height = int(filled.sum())
            if not filled[:height].all():
                raise InvalidStateError(f"Column {col} has a floating piece")
            board.heights[col] = height
        board.grid = cells
        return board

    @classmethod
    def from_moves(cls, columns: Iterable[int], first_player: Player = Player.ONE) -> 'Board':
        """Build a board by alternating players through a column sequence."""
        board = cls()
        player = first_player
        for column in columns:
            board.make_move(player, column)
            player = player.other()
        return board

    def get_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            Copy of the grid, row 0 at the bottom
        """
        return self.grid.copy()

    def render(self, highlight: List[Tuple[int, int]] = None) -> str:
        """Render the board as a string, top row first."""
        return render_board_ascii(self.grid.tolist(), highlight)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self.grid, other.grid))

    __hash__ = None

    def __str__(self) -> str:
        """String representation of the board."""
        return self.render()
