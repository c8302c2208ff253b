"""
evaluator.py - Heuristic scoring of non-terminal Connect Four positions

The evaluation is designed to:
1. Return exactly +/-WIN_SCORE whenever a four-in-a-row is on the board
2. Score every line by its most promising 4-cell window, so that a line
   holding one threat is not counted several times
3. Only count empty cells that could actually be filled to complete the
   window (a cell hanging above an unfilled gap is unusable)
4. Favor pieces near the center column, which take part in more lines
5. Below maximum difficulty, add a small random error to the final score
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from connectfour.ai.difficulty import DifficultyConfig
from connectfour.utils import ROWS, COLS, CONNECT_N, Player, DIRECTION_VECTORS, Direction

# Forced win; its negation is a forced loss. Heuristic totals stay far below it.
WIN_SCORE = 1000000

Window = Tuple[Tuple[int, int], ...]


@dataclass(frozen=True)
class EvaluationWeights:
    """
    Tunable evaluator constants.

    Window values score a window held by one side only; threat weights
    scale them for the evaluating player and for the opponent; center
    weights scale the per-column bonus table.
    """
    near_win: int = 100      # 3 pieces and an open cell
    potential: int = 10      # 2 pieces and two open cells
    developing: int = 1      # 1 piece and three open cells
    player_threat_weight: int = 6
    opponent_threat_weight: int = 5
    player_center_weight: int = 3
    opponent_center_weight: int = 2
    column_weights: Tuple[int, ...] = (0, 1, 2, 3, 2, 1, 0)

    def window_value(self, pieces: int, open_cells: int) -> int:
        """Value of a window held by one side with `pieces` and `open_cells`."""
        if pieces >= CONNECT_N:
            return WIN_SCORE
        if pieces == 3 and open_cells >= 1:
            return self.near_win
        if pieces == 2 and open_cells >= 2:
            return self.potential
        if pieces == 1 and open_cells >= 3:
            return self.developing
        return 0


def _build_lines() -> List[Tuple[bool, List[Window]]]:
    """Every row, column and diagonal of length >= 4, split into windows."""
    lines = []
    for direction, (dr, dc) in DIRECTION_VECTORS.items():
        for row in range(ROWS):
            for col in range(COLS):
                # Only start at cells whose predecessor is off the board
                if 0 <= row - dr < ROWS and 0 <= col - dc < COLS:
                    continue
                cells = []
                r, c = row, col
                while 0 <= r < ROWS and 0 <= c < COLS:
                    cells.append((r, c))
                    r += dr
                    c += dc
                if len(cells) < CONNECT_N:
                    continue
                windows = [tuple(cells[i:i + CONNECT_N])
                           for i in range(len(cells) - CONNECT_N + 1)]
                lines.append((direction == Direction.VERTICAL, windows))
    return lines


LINES = _build_lines()


def classify_window(cells: Sequence[Sequence[int]], heights: Sequence[int],
                    window: Window, vertical: bool,
                    player_value: int, opponent_value: int) -> Tuple[int, int, int]:
    """
    Count a window's cells.

    An empty cell is open when it could be filled without first playing
    outside the window: it sits right on its column's stack, or, for a
    vertical window, the stack already reaches the window's bottom cell.

    Returns:
        (player pieces, opponent pieces, open cells)
    """
    mine = theirs = open_cells = 0
    for row, col in window:
        value = cells[row][col]
        if value == player_value:
            mine += 1
        elif value == opponent_value:
            theirs += 1
        elif row == heights[col] or (vertical and heights[col] >= window[0][0]):
            open_cells += 1
    return mine, theirs, open_cells


class Evaluator:
    """Scores a board from one player's point of view."""

    def __init__(self, weights: EvaluationWeights = None):
        self.weights = weights or EvaluationWeights()

    def threat_score(self, board, player: Player) -> int:
        """
        Sum over all lines of each line's strongest window.

        Windows held by `player` count positive and windows held by the
        opponent negative, each scaled by its side's threat weight. Windows
        holding both colors can never be completed and score zero.

        Returns:
            The unscaled threat total, or +/-WIN_SCORE if a four exists
        """
        weights = self.weights
        cells = board.grid.tolist()
        heights = board.heights.tolist()
        player_value = player.value
        opponent_value = player.other().value

        total = 0
        for vertical, windows in LINES:
            best = 0
            for window in windows:
                mine, theirs, open_cells = classify_window(
                    cells, heights, window, vertical, player_value, opponent_value)
                if mine and theirs:
                    continue
                if mine == CONNECT_N:
                    return WIN_SCORE
                if theirs == CONNECT_N:
                    return -WIN_SCORE
                if mine:
                    score = weights.window_value(mine, open_cells) * weights.player_threat_weight
                elif theirs:
                    score = -weights.window_value(theirs, open_cells) * weights.opponent_threat_weight
                else:
                    continue
                if abs(score) > abs(best):
                    best = score
            total += best
        return total

    def center_score(self, board, player: Player) -> int:
        """Column-weighted piece count: player's pieces minus opponent's."""
        weights = self.weights
        player_value = player.value
        opponent_value = player.other().value

        score = 0
        for row in board.grid.tolist():
            for col, value in enumerate(row):
                if value == player_value:
                    score += weights.column_weights[col] * weights.player_center_weight
                elif value == opponent_value:
                    score -= weights.column_weights[col] * weights.opponent_center_weight
        return score

    def evaluate(self, board, player: Player, config: DifficultyConfig, rng) -> int:
        """
        Heuristic evaluation of a board position.

        Args:
            board: The board to evaluate
            player: The player we're evaluating for
            config: Difficulty parameters (heuristic scale and noise)
            rng: Random source for the noise term

        Returns:
            Positive when `player` stands better; exactly +/-WIN_SCORE when
            either side already has four in a row
        """
        threats = self.threat_score(board, player)
        if abs(threats) == WIN_SCORE:
            return threats

        score = int((threats + self.center_score(board, player)) * config.heuristic_scale)

        # Weaker levels misjudge positions by a bounded non-negative amount
        if not config.is_maximum:
            score += int(rng.integers(1, config.error_bound + 1))

        return score
