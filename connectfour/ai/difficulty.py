"""
difficulty.py - The single difficulty knob and the parameters derived from it

One level from 1 to 10 sets the search depth, how strongly the heuristic
terms count, and how much noise is mixed into evaluations. Keeping all of
them on one immutable object means a difficulty change has exactly one
trigger point (NegamaxAI.difficulty), which is also where the
transposition cache gets cleared.
"""

from dataclasses import dataclass

from connectfour.exceptions import InvalidDifficultyError

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 10
DEFAULT_DIFFICULTY = 5

# Levels at or below this also shuffle the move ordering inside the search
SHUFFLE_THRESHOLD = 3


@dataclass(frozen=True)
class DifficultyConfig:
    """
    Parameters derived from a difficulty level.

    Attributes:
        level: The level itself (1..10)
        depth: Search depth in plies below the root move (= level)
        weight_modifier: 0.1 at level 1 up to 1.0 at level 10; scales how much
            the heuristic counts and how unreliable cached scores are
        error_bound: Largest evaluation noise added below maximum difficulty
        shuffle_moves: Whether search orderings are shuffled
    """
    level: int
    depth: int
    weight_modifier: float
    error_bound: int
    shuffle_moves: bool

    @classmethod
    def from_level(cls, level: int) -> 'DifficultyConfig':
        """
        Derive the configuration for a level.

        Raises:
            InvalidDifficultyError: If level is not an int in 1..10
        """
        if isinstance(level, bool) or not isinstance(level, int):
            raise InvalidDifficultyError(f"Difficulty must be an integer, got {level!r}")
        if not MIN_DIFFICULTY <= level <= MAX_DIFFICULTY:
            raise InvalidDifficultyError(
                f"Difficulty must be between {MIN_DIFFICULTY} and {MAX_DIFFICULTY}, got {level}")

        return cls(
            level=level,
            depth=level,
            weight_modifier=level / MAX_DIFFICULTY,
            error_bound=102 - level * 10,
            shuffle_moves=level <= SHUFFLE_THRESHOLD,
        )

    @property
    def is_maximum(self) -> bool:
        """True at the top level, where no noise is injected."""
        return self.level == MAX_DIFFICULTY

    @property
    def heuristic_scale(self) -> float:
        """Multiplier applied to the heuristic terms (0.6 .. 1.5)."""
        return 0.5 + self.weight_modifier
