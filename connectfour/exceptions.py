"""
exceptions.py - Error types raised by the Connect Four engine

Board misuse is a programmer error, so these are raised rather than
returned as status codes. Callers that take untrusted input (the CLI,
the game session) pre-check with can_make_move / is_valid_position.
"""


class ConnectFourError(Exception):
    """Base class for all engine errors."""


class InvalidStateError(ConnectFourError):
    """A move or position that the board cannot hold (e.g. a full column)."""


class OutOfRangeError(ConnectFourError, IndexError):
    """A row or column outside the grid."""


class InvalidDifficultyError(ConnectFourError, ValueError):
    """A difficulty level outside the supported range."""
