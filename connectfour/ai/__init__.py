"""
connectfour/ai/__init__.py - Move selection for the Connect Four opponent

This package holds the negamax search engine, the heuristic evaluator,
the transposition cache and the difficulty model they share.
"""

from connectfour.ai.difficulty import (DifficultyConfig, MIN_DIFFICULTY, MAX_DIFFICULTY,
                                       DEFAULT_DIFFICULTY)
from connectfour.ai.evaluator import Evaluator, EvaluationWeights, WIN_SCORE
from connectfour.ai.negamax import NegamaxAI, NO_MOVE
from connectfour.ai.transposition import TranspositionCache, BoundType

__all__ = ['NegamaxAI', 'NO_MOVE', 'Evaluator', 'EvaluationWeights', 'WIN_SCORE',
           'DifficultyConfig', 'MIN_DIFFICULTY', 'MAX_DIFFICULTY', 'DEFAULT_DIFFICULTY',
           'TranspositionCache', 'BoundType']
