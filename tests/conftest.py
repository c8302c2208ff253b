"""
Shared fixtures and board builders for the Connect Four tests.

Boards are written as lists of rows from the bottom up, one digit per
cell (0 empty, 1 Player.ONE, 2 Player.TWO); missing rows are empty.
"""

import pytest

from connectfour.debug import debug, DebugLevel
from connectfour.game.board import Board
from connectfour.utils import ROWS, COLS

# Five full rows with no four anywhere. Every window that reaches into
# rows 2-5 vertically or diagonally holds both colors, so only the top
# row's horizontal windows are still alive.
FILLER_ROWS = [
    [1, 2, 1, 2, 1, 2, 1],
    [2, 1, 2, 1, 2, 1, 2],
    [2, 1, 2, 1, 2, 1, 2],
    [1, 2, 1, 2, 1, 2, 1],
    [1, 2, 1, 2, 1, 2, 1],
]


def build_board(rows) -> Board:
    """Build a board from bottom-up rows of cell values."""
    padded = [list(row) for row in rows] + [[0] * COLS] * (ROWS - len(rows))
    encoding = ''.join(str(value) for row in padded for value in row)
    return Board.from_encoding(encoding)


def filler_board(top_row) -> Board:
    """The filler rows with `top_row` as row 5."""
    return build_board(FILLER_ROWS + [top_row])


class FixedRandom:
    """Deterministic random source: integers() returns its lower bound, shuffle() does nothing."""

    def __init__(self):
        self.integer_calls = 0
        self.shuffle_calls = 0

    def integers(self, low, high=None):
        self.integer_calls += 1
        return low if high is not None else 0

    def shuffle(self, seq):
        self.shuffle_calls += 1


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep the package logger at warning level between tests."""
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[])
    yield
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[], log_file="")


@pytest.fixture
def board():
    return Board()


@pytest.fixture
def fixed_random():
    return FixedRandom()
