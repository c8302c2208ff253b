"""
utils.py - Helpers shared by the search engine

The engine's only source of non-determinism is a random source with two
operations: `integers(lo, hi)` for a uniform integer in [lo, hi) and
`shuffle(seq)` to permute a list in place. numpy's Generator provides
both, and tests can pass any object with the same two methods.
"""

import numpy as np
from typing import Any, List, Optional, Sequence, Union

# Two center-out orderings; picking one at random per node varies play
# between otherwise equal lines
STANDARD_COLUMN_ORDER = (3, 2, 4, 1, 5, 0, 6)
ALTERNATE_COLUMN_ORDER = (3, 4, 2, 5, 1, 6, 0)

RandomSource = Any  # anything exposing integers(lo, hi) and shuffle(seq)


def create_random_source(seed: Optional[Union[int, RandomSource]] = None) -> RandomSource:
    """
    Build the engine's random source.

    Args:
        seed: None for fresh entropy, an int seed, or an existing
            source (returned unchanged)

    Returns:
        An object with integers(lo, hi) and shuffle(seq)
    """
    if seed is None or isinstance(seed, (int, np.integer)):
        return np.random.default_rng(seed)
    if not (hasattr(seed, "integers") and hasattr(seed, "shuffle")):
        raise TypeError("Random source must provide integers(lo, hi) and shuffle(seq)")
    return seed


def ordered_columns(board, rng: RandomSource, shuffle: bool = False) -> List[int]:
    """
    Legal columns of `board` in one of the two center-out orders.

    Args:
        board: The board to move on
        rng: Random source choosing the order
        shuffle: Additionally shuffle the result

    Returns:
        Columns that still have room
    """
    order: Sequence[int] = (STANDARD_COLUMN_ORDER if rng.integers(0, 2) == 0
                            else ALTERNATE_COLUMN_ORDER)
    columns = [column for column in order if board.can_make_move(column)]
    if shuffle and len(columns) > 1:
        rng.shuffle(columns)
    return columns
