"""
transposition.py - Per-engine cache of search results keyed by board encoding

Scores found under alpha-beta are only exact when they fall strictly inside
the search window; otherwise they are a lower bound (fail-high) or an upper
bound (fail-low). Each entry records which, along with the depth and side to
move that produced it, so a probe only answers when reusing the score cannot
change the search result.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from connectfour.utils import Player


class BoundType(Enum):
    """Type of bound stored in a cache entry."""
    EXACT = 0   # Searched with the score inside the window
    LOWER = 1   # Beta cutoff, true value >= score
    UPPER = 2   # Failed low, true value <= score


@dataclass
class CacheEntry:
    score: int
    depth: int
    player: Player
    bound: BoundType


class TranspositionCache:
    """
    Unbounded mapping from canonical board encodings to search results.

    Entries live until clear(); the engine clears on difficulty change and
    on new-game reset, because scores are only meaningful under the weights
    and noise that produced them.
    """

    def __init__(self):
        self.table: Dict[str, CacheEntry] = {}
        self.hits = 0
        self.misses = 0

    def probe(self, key: str, depth: int, player: Player,
              alpha: float, beta: float) -> Optional[int]:
        """
        Look up a usable score for this node.

        Returns:
            The cached score, or None when there is no entry for this
            depth/side or its bound does not settle the current window
        """
        entry = self.table.get(key)
        if entry is None or entry.depth != depth or entry.player != player:
            self.misses += 1
            return None

        if (entry.bound == BoundType.EXACT
                or (entry.bound == BoundType.LOWER and entry.score >= beta)
                or (entry.bound == BoundType.UPPER and entry.score <= alpha)):
            self.hits += 1
            return entry.score

        self.misses += 1
        return None

    def store(self, key: str, depth: int, player: Player, score: int, bound: BoundType):
        """Record a search result, replacing any previous entry for the key."""
        self.table[key] = CacheEntry(score, depth, player, bound)

    def clear(self):
        self.table.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self.table)

    def __contains__(self, key: str) -> bool:
        return key in self.table
