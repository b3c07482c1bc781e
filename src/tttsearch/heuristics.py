"""
Static board evaluation for depth-limited search.

Scores each player from the line counts gathered in a single board scan:

  score[p] = sum of p's marks over every row, column and diagonal
           + sum over lines holding only p's marks of line_weight(count)

line_weight is 10**N for a line one mark short of completion and
2**count * count / N otherwise. The weights are tunable; any weighting that
grows with a line's fill and lets near-wins dominate works with the search.
"""

from dataclasses import dataclass
from typing import List

from .game import EMPTY, O, X, LineCounter, Outcome, win_outcome

WIN_SCORE = 100_000


@dataclass(frozen=True)
class HeuristicWeights:
    """Evaluator weights."""

    # Weight of an unblocked line one mark away from completion: base**N
    near_win_base: float = 10.0

    # Weight of other unblocked lines: base**count * (count / N)
    growth_base: float = 2.0

    # Smallest terminal score; grown with N so wins outrank any heuristic sum
    win_score: int = WIN_SCORE

    def terminal_score(self, size: int) -> float:
        return max(self.win_score, 100 * self.near_win_base ** size)

    def line_weight(self, size: int, count: int) -> float:
        if count == size - 1:
            return self.near_win_base ** size
        return self.growth_base ** count * (count / size)


DEFAULT_WEIGHTS = HeuristicWeights()


@dataclass
class Evaluation:
    """Heuristic scores per player plus the outcome found during the scan."""
    score_x: float
    score_o: float
    outcome: Outcome

    @property
    def differential(self) -> float:
        """Score from X's (the maximizer's) point of view."""
        return self.score_x - self.score_o


def win_score(size: int, weights: HeuristicWeights = DEFAULT_WEIGHTS) -> float:
    return weights.terminal_score(size)


def line_weight(size: int, count: int, weights: HeuristicWeights = DEFAULT_WEIGHTS) -> float:
    return weights.line_weight(size, count)


def _unblocked_bonus(own: List[int], other: List[int], size: int, weights: HeuristicWeights) -> float:
    bonus = 0.0
    for mine, theirs in zip(own, other):
        if mine and not theirs:
            bonus += weights.line_weight(size, mine)
    return bonus


def evaluate_board(board: List[int], size: int, weights: HeuristicWeights = DEFAULT_WEIGHTS) -> Evaluation:
    """
    Evaluate a board in one scan.

    Terminal boards return immediately: a win scores +/- terminal_score for
    the winner/loser, a draw scores 0 for both. Open boards return the
    heuristic scores with Outcome.UNDECIDED.
    """
    counter = LineCounter(size)
    has_empty = False
    for i, v in enumerate(board):
        if v == EMPTY:
            has_empty = True
            continue
        if counter.add(i, v):
            big = weights.terminal_score(size)
            sign = 1 if v == X else -1
            return Evaluation(sign * big, -sign * big, win_outcome(v))

    if not has_empty:
        return Evaluation(0.0, 0.0, Outcome.DRAW)

    x_lines = counter.lines(X)
    o_lines = counter.lines(O)
    score_x = sum(x_lines) + _unblocked_bonus(x_lines, o_lines, size, weights)
    score_o = sum(o_lines) + _unblocked_bonus(o_lines, x_lines, size, weights)
    return Evaluation(score_x, score_o, Outcome.UNDECIDED)
