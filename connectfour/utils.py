"""
utils.py - Constants, enumerations and small helpers for Connect Four

The grid is stored with row 0 at the bottom, so a column's height is also
the row index of the next free cell in that column.
"""

from enum import Enum, auto
from typing import List, Optional, Sequence, Tuple

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    ONE = 1    # First player
    TWO = 2    # Second player

    def other(self) -> 'Player':
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    def __str__(self):
        if self == Player.EMPTY:
            return " "
        elif self == Player.ONE:
            return "X"
        else:
            return "O"


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS

    @staticmethod
    def win_for(player: Player) -> 'GameResult':
        """Get the winning result for a player."""
        if player == Player.ONE:
            return GameResult.PLAYER_ONE_WIN
        if player == Player.TWO:
            return GameResult.PLAYER_TWO_WIN
        raise ValueError("EMPTY cannot win a game")


class Direction(Enum):
    """Enumeration representing the four axes a run can lie on."""
    VERTICAL = auto()
    HORIZONTAL = auto()
    DIAGONAL_UP = auto()  # Bottom-left to top-right
    DIAGONAL_DOWN = auto()  # Top-left to bottom-right


# Direction vectors (row, col) for each axis; row grows upwards
DIRECTION_VECTORS = {
    Direction.VERTICAL: (1, 0),
    Direction.HORIZONTAL: (0, 1),
    Direction.DIAGONAL_UP: (1, 1),
    Direction.DIAGONAL_DOWN: (1, -1),
}


def is_valid_position(row: int, col: int) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index (0 is the bottom row)
        col: Column index

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= row < ROWS and 0 <= col < COLS


def parse_moves(text: str) -> List[int]:
    """
    Parse a comma separated list of columns, e.g. "3,3,2,4".

    Raises:
        ValueError: If an entry is not an integer column index
    """
    text = text.strip()
    if not text:
        return []
    columns = [int(part) for part in text.split(',')]
    for column in columns:
        if not 0 <= column < COLS:
            raise ValueError(f"Column {column} is outside 0..{COLS - 1}")
    return columns


def render_board_ascii(cells: Sequence[Sequence[int]],
                       highlight: Optional[List[Tuple[int, int]]] = None) -> str:
    """
    Render a grid as ASCII art, top row first.

    Args:
        cells: ROWS x COLS cell values, row 0 at the bottom
        highlight: Positions to mark with '*' (e.g. a winning line)

    Returns:
        ASCII representation of the board
    """
    marked = set(highlight or [])
    result = ["|" + "-" * (COLS * 2 - 1) + "|"]

    for row in range(ROWS - 1, -1, -1):
        symbols = []
        for col in range(COLS):
            if (row, col) in marked:
                symbols.append("*")
            else:
                symbols.append(str(Player(int(cells[row][col]))))
        result.append("|" + " ".join(symbols) + "|")

    result.append("|" + "-" * (COLS * 2 - 1) + "|")
    result.append("|" + " ".join(str(i) for i in range(COLS)) + "|")

    return "\n".join(result)
