"""
connectfour - Move-selection engine for Connect Four

This package provides the board model, a heuristic evaluator and a
depth-limited negamax search with a tunable 1-10 difficulty, plus a game
session, a Gymnasium environment and a small command-line front end.
"""

# Version number
__version__ = '0.1.0'
