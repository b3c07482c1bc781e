"""
Minimax search for N x N TicTacToe.

One engine covers every variant through SearchConfig:
  - alpha-beta pruning on/off
  - depth limit with heuristic cutoff (see heuristics.py)
  - fixed or depth-weighted terminal scores

Values are always from X's point of view: X maximizes, O minimizes.
The search mutates a private working board in place and restores every
cell it touches before returning.
"""

import logging
import math
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .config import SCORING_DEPTH, SearchConfig
from .game import (
    EMPTY,
    O,
    X,
    Outcome,
    check_board,
    check_player,
    detect_outcome,
    legal_moves,
)
from .heuristics import evaluate_board

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = SearchConfig()


@dataclass
class SearchStats:
    """Node and depth counters owned by one top-level search call."""
    nodes: int = 0
    max_depth: int = 0

    def visit(self, depth: int):
        self.nodes += 1
        if depth > self.max_depth:
            self.max_depth = depth

    def merge(self, nodes: int, max_depth: int):
        self.nodes += nodes
        self.max_depth = max(self.max_depth, max_depth)


@dataclass
class SearchResult:
    """Chosen move (-1 when the board is full) and search statistics."""
    move: int
    iterations: int = 0
    max_depth: int = 0


@contextmanager
def placed(board: List[int], index: int, mark: int):
    """Put `mark` on `board[index]` for the duration of the block."""
    board[index] = mark
    try:
        yield board
    finally:
        board[index] = EMPTY


def terminal_value(outcome: Outcome, depth: int, size: int, config: SearchConfig) -> float:
    """Value of a finished game for the maximizer."""
    if outcome is Outcome.DRAW:
        return 0.0
    value = config.weights.terminal_score(size)
    if config.scoring == SCORING_DEPTH:
        # Prefer quick wins and slow losses
        value -= depth
    return value if outcome is Outcome.X_WINS else -value


def search(
    board: List[int],
    depth: int,
    maximizing: bool,
    size: int,
    alpha: float = -math.inf,
    beta: float = math.inf,
    config: SearchConfig = DEFAULT_CONFIG,
    stats: Optional[SearchStats] = None,
) -> float:
    """
    Minimax value of `board` with `maximizing` telling whose turn it is.

    Args:
        board: Working board, mutated during the call and restored on return
        depth: Plies already played below the root move
        maximizing: True when X is to move
        size: Board side length N
        alpha, beta: Alpha-beta window (ignored without pruning)
        config: Search flags
        stats: Accumulator for visited nodes and deepest ply

    Returns:
        Value from X's perspective
    """
    if stats is not None:
        stats.visit(depth)

    limited = config.max_depth is not None
    if limited:
        evaluation = evaluate_board(board, size, config.weights)
        outcome = evaluation.outcome
    else:
        outcome = detect_outcome(board, size)

    if outcome.is_terminal:
        return terminal_value(outcome, depth, size, config)

    if limited and depth >= config.max_depth:
        return evaluation.differential

    mark = X if maximizing else O
    best = -math.inf if maximizing else math.inf

    for i in range(len(board)):
        if board[i] != EMPTY:
            continue
        with placed(board, i, mark):
            value = search(board, depth + 1, not maximizing, size, alpha, beta, config, stats)

        if maximizing:
            best = max(best, value)
            alpha = max(alpha, value)
        else:
            best = min(best, value)
            beta = min(beta, value)

        if config.pruning and beta <= alpha:
            break

    return best


def select_move(player: int, scored: Iterable[Tuple[int, float]]) -> Tuple[int, float]:
    """
    Pick the best (index, value) for `player` from candidates in index order.

    Only a strictly better value replaces the current choice, so ties keep
    the lowest index.
    """
    best_index = -1
    best_value = -math.inf if player == X else math.inf
    for index, value in scored:
        if (player == X and value > best_value) or (player == O and value < best_value):
            best_index, best_value = index, value
    return best_index, best_value


def best_move(
    board: List[int],
    size: int,
    player: int,
    config: Optional[SearchConfig] = None,
) -> SearchResult:
    """
    Choose a move for `player` by searching every empty cell.

    The caller's board is never modified.

    Returns:
        SearchResult with move -1 when no empty cell remains
    """
    config = (config or DEFAULT_CONFIG).validate()
    check_board(board, size)
    check_player(player)

    work = list(board)
    stats = SearchStats()

    def scored():
        for i in legal_moves(work):
            with placed(work, i, player):
                value = search(work, 0, player == O, size, -math.inf, math.inf, config, stats)
            logger.debug("candidate %d -> %s (nodes so far: %d)", i, value, stats.nodes)
            yield i, value

    move, value = select_move(player, scored())
    logger.debug("best move %d value %s after %d nodes, max depth %d", move, value, stats.nodes, stats.max_depth)
    return SearchResult(move=move, iterations=stats.nodes, max_depth=stats.max_depth)


def choose_move(
    board: List[int],
    size: int,
    player: int,
    config: Optional[SearchConfig] = None,
) -> SearchResult:
    """Run `best_move` or the parallel dispatcher depending on `config.parallel`."""
    config = config or DEFAULT_CONFIG
    if config.parallel:
        from .parallel import best_move_parallel
        return best_move_parallel(board, size, player, config)
    return best_move(board, size, player, config)
