"""
connectfour.game - Core game mechanics for Connect Four

This package contains the board representation, the game session that
pairs a human with the engine, and the Gymnasium environment.
"""

from connectfour.game.board import Board
from connectfour.game.rules import ConnectFourGame, ConnectFourEnv

__all__ = ['Board', 'ConnectFourGame', 'ConnectFourEnv']
