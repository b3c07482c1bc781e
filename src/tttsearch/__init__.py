"""
tttsearch - Minimax move search for N x N TicTacToe.

One parameterized engine (plain minimax, alpha-beta, depth-limited with a
heuristic evaluator, parallel candidate search) plus benchmarking helpers
for playing the variants against each other.
"""

from .game import (
    X,
    O,
    EMPTY,
    Outcome,
    GameState,
    IllegalMoveError,
    detect_outcome,
    is_terminal,
    legal_moves,
    apply_move,
    side_to_move,
    new_board,
    format_board,
)
from .heuristics import Evaluation, HeuristicWeights, evaluate_board, line_weight, win_score
from .config import SearchConfig, VARIANTS, get_config
from .minimax import SearchResult, SearchStats, search, best_move, choose_move
from .parallel import SearchWorkerError, best_move_parallel, best_move_parallel_async
from .arena import (
    GameStats,
    BenchmarkResult,
    play_game,
    run_benchmark,
    summarize,
    results_frame,
    eval_vs_random,
)

__version__ = "0.1.0"
__all__ = [
    "X",
    "O",
    "EMPTY",
    "Outcome",
    "GameState",
    "IllegalMoveError",
    "detect_outcome",
    "is_terminal",
    "legal_moves",
    "apply_move",
    "side_to_move",
    "new_board",
    "format_board",
    "Evaluation",
    "HeuristicWeights",
    "evaluate_board",
    "line_weight",
    "win_score",
    "SearchConfig",
    "VARIANTS",
    "get_config",
    "SearchResult",
    "SearchStats",
    "search",
    "best_move",
    "choose_move",
    "SearchWorkerError",
    "best_move_parallel",
    "best_move_parallel_async",
    "GameStats",
    "BenchmarkResult",
    "play_game",
    "run_benchmark",
    "summarize",
    "results_frame",
    "eval_vs_random",
]
