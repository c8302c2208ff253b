"""
negamax.py - Negamax search with alpha-beta pruning for Connect Four

This module provides the NegamaxAI class, which picks the column for the
side to move. It searches as many plies as the difficulty level, scores the
frontier with the heuristic Evaluator and caches results per board encoding.

Below maximum difficulty the engine deliberately misplays: evaluations get a
random error, cached scores are "misremembered" by a small amount, and at
the lowest levels the move ordering is shuffled. All of it comes from the
injected random source, so a fixed seed reproduces every decision.
"""

import math
from typing import Optional

from connectfour.ai.difficulty import DifficultyConfig, DEFAULT_DIFFICULTY
from connectfour.ai.evaluator import Evaluator, EvaluationWeights, WIN_SCORE
from connectfour.ai.transposition import TranspositionCache, BoundType
from connectfour.ai.utils import create_random_source, ordered_columns
from connectfour.debug import debug
from connectfour.utils import Player

# Returned by get_best_move when the board has no legal column
NO_MOVE = -1


class NegamaxAI:
    """
    A Connect Four opponent built on negamax with alpha-beta pruning.

    Each instance owns its transposition cache and random source, so an
    instance must not be shared between concurrently running games.
    """

    def __init__(self, difficulty: int = DEFAULT_DIFFICULTY, rng=None,
                 weights: Optional[EvaluationWeights] = None):
        """
        Initialize the engine.

        Args:
            difficulty: Level from 1 (weakest) to 10 (strongest)
            rng: Seed (int), random source with integers/shuffle, or None
            weights: Evaluator constants (defaults to EvaluationWeights())
        """
        self.rng = create_random_source(rng)
        self.evaluator = Evaluator(weights)
        self.cache = TranspositionCache()
        self._config = DifficultyConfig.from_level(difficulty)
        self.nodes_evaluated = 0  # For performance tracking
        self.last_score: Optional[int] = None

    @property
    def difficulty(self) -> int:
        return self._config.level

    @difficulty.setter
    def difficulty(self, level: int):
        # Cached scores were produced under the old weights and noise
        self._config = DifficultyConfig.from_level(level)
        self.cache.clear()
        debug.info(f"Difficulty set to {level}; transposition cache cleared", "ai")

    @property
    def config(self) -> DifficultyConfig:
        return self._config

    def reset(self, rng=None):
        """
        Prepare for a new game.

        Args:
            rng: Optional replacement random source or seed
        """
        if rng is not None:
            self.rng = create_random_source(rng)
        self.cache.clear()
        self.last_score = None
        debug.debug("Engine reset; transposition cache cleared", "ai")

    def evaluate_board(self, board, player: Player) -> int:
        """Heuristic score of `board` for `player` at the current difficulty."""
        return self.evaluator.evaluate(board, player, self._config, self.rng)

    def get_best_move(self, board, player: Player) -> int:
        """
        Choose a column for `player`.

        Any immediately winning column is returned without searching.
        Otherwise every legal column is searched to the difficulty's depth
        and the first column with the strictly highest score wins.

        Args:
            board: The current game board (not modified)
            player: The side to move

        Returns:
            The chosen column, or NO_MOVE if the board has no room left
        """
        if player == Player.EMPTY:
            raise ValueError("EMPTY cannot move")

        self.nodes_evaluated = 0
        columns = ordered_columns(board, self.rng, self._config.shuffle_moves)
        if not columns:
            debug.warning("get_best_move called on a full board", "ai")
            return NO_MOVE

        for column in columns:
            if board.is_winning_move(player, column):
                debug.debug(f"{player.name} wins immediately in column {column}", "ai")
                self.last_score = WIN_SCORE
                return column

        opponent = player.other()
        best_column = NO_MOVE
        best_score = -math.inf

        debug.start_timer("get_best_move")
        for column in columns:
            child = board.clone()
            child.make_move(player, column)
            score = -self.search(child, self._config.depth, -math.inf, math.inf, opponent)

            if score > best_score:
                best_score = score
                best_column = column
        elapsed = debug.end_timer("get_best_move", "ai")

        self.last_score = int(best_score)
        debug.debug(f"{player.name} plays column {best_column} (score {best_score}, "
                    f"nodes {self.nodes_evaluated}, cache {len(self.cache)}, "
                    f"{elapsed or 0:.3f}s)", "ai")
        return best_column

    def search(self, board, depth: int, alpha: float, beta: float, player: Player) -> int:
        """
        Negamax with alpha-beta pruning.

        Args:
            board: Current board state
            depth: Remaining search depth
            alpha: Best score `player` is already guaranteed elsewhere
            beta: Best score the opponent is already guaranteed elsewhere
            player: The side to move at this node

        Returns:
            The best score `player` can reach from this position
        """
        self.nodes_evaluated += 1
        config = self._config

        key = board.canonical_encoding()
        cached = self.cache.probe(key, depth, player, alpha, beta)
        if cached is not None:
            # Misremembers cached analysis at lower difficulty; never at the top
            return cached + int(self.rng.integers(1, config.error_bound)
                                * (1 - config.weight_modifier))

        if depth <= 0 or board.is_full():
            return self.evaluate_board(board, player)

        columns = ordered_columns(board, self.rng, config.shuffle_moves)

        # A win now beats anything deeper, faster wins score higher
        for column in columns:
            if board.is_winning_move(player, column):
                return WIN_SCORE + depth

        opponent = player.other()
        original_alpha = alpha
        max_score = -math.inf

        for column in columns:
            child = board.clone()
            child.make_move(player, column)

            score = -self.search(child, depth - 1, -beta, -alpha, opponent)

            max_score = max(max_score, score)
            alpha = max(alpha, score)

            # Cutoff: the opponent will never allow this line
            if alpha >= beta:
                break

        if max_score <= original_alpha:
            bound = BoundType.UPPER
        elif max_score >= beta:
            bound = BoundType.LOWER
        else:
            bound = BoundType.EXACT
        self.cache.store(key, depth, player, max_score, bound)

        return max_score
