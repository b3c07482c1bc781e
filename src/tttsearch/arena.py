"""
Computer-vs-computer games and benchmarks.

Plays the engine against itself (or against a random opponent) and
collects per-game statistics: winner, moves, search iterations, duration.
"""

import random
import time
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional

import numpy as np
import pandas as pd
from tqdm.auto import trange

from .config import SearchConfig
from .game import O, X, GameState, Outcome, legal_moves
from .minimax import choose_move


@dataclass
class GameStats:
    """Result of one computer-vs-computer game."""
    winner: Outcome
    moves: int
    total_iterations: int
    duration: float  # seconds


@dataclass
class BenchmarkResult:
    size: int
    config: SearchConfig
    results: List[GameStats] = field(default_factory=list)
    total_time: float = 0.0

    @property
    def games(self) -> int:
        return len(self.results)


def play_game(
    size: int,
    config: SearchConfig,
    opening_moves: int = 0,
    rng: Optional[np.random.Generator] = None,
) -> GameStats:
    """
    Play one game with the engine moving for both sides, X first.

    Args:
        opening_moves: Number of leading plies played uniformly at random
        rng: numpy Generator for the random openings
    """
    if opening_moves and rng is None:
        rng = np.random.default_rng()

    t0 = time.perf_counter()
    state = GameState(size=size)
    outcome = Outcome.UNDECIDED
    moves = 0
    total_iterations = 0

    while not outcome.is_terminal:
        if moves < opening_moves:
            lm = legal_moves(state.board)
            action = int(lm[rng.integers(0, len(lm))])
        else:
            result = choose_move(state.board, size, state.player, config)
            total_iterations += result.iterations
            if result.move == -1:
                break
            action = result.move

        outcome = state.play(action)
        moves += 1

    return GameStats(
        winner=outcome,
        moves=moves,
        total_iterations=total_iterations,
        duration=time.perf_counter() - t0,
    )


def run_benchmark(
    games: int,
    size: int,
    config: SearchConfig,
    opening_moves: int = 0,
    seed: int = 0,
    progress: bool = True,
) -> BenchmarkResult:
    """Play `games` computer-vs-computer games and collect their stats."""
    rng = np.random.default_rng(seed)
    bench = BenchmarkResult(size=size, config=config)

    t0 = time.perf_counter()
    for _ in trange(games, desc="Games", disable=not progress):
        bench.results.append(play_game(size, config, opening_moves=opening_moves, rng=rng))
    bench.total_time = time.perf_counter() - t0
    return bench


def result_label(outcome: Outcome) -> str:
    return outcome.value if outcome in (Outcome.X_WINS, Outcome.O_WINS) else "Draw"


def results_frame(bench: BenchmarkResult) -> pd.DataFrame:
    """One row per game: game, winner, moves, total_iterations, duration."""
    rows = []
    for g, stats in enumerate(bench.results):
        row = asdict(stats)
        row["winner"] = result_label(stats.winner)
        row["game"] = g
        rows.append(row)
    return pd.DataFrame(rows, columns=["game", "winner", "moves", "total_iterations", "duration"])


def summarize(bench: BenchmarkResult) -> Dict[str, object]:
    """
    Aggregate a benchmark.

    Returns:
        Dict with 'games', 'total_time', 'avg_moves', 'avg_duration',
        'avg_iterations', 'wins' (label -> count) and 'win_pct' (label -> %)
    """
    n = bench.games
    if n == 0:
        return {
            "games": 0, "total_time": bench.total_time,
            "avg_moves": float("nan"), "avg_duration": float("nan"), "avg_iterations": float("nan"),
            "wins": {}, "win_pct": {},
        }

    moves = np.array([s.moves for s in bench.results], dtype=np.float64)
    durations = np.array([s.duration for s in bench.results], dtype=np.float64)
    iterations = np.array([s.total_iterations for s in bench.results], dtype=np.float64)

    wins: Dict[str, int] = {}
    for s in bench.results:
        label = result_label(s.winner)
        wins[label] = wins.get(label, 0) + 1

    return {
        "games": n,
        "total_time": bench.total_time,
        "avg_moves": float(moves.mean()),
        "avg_duration": float(durations.mean()),
        "avg_iterations": float(iterations.mean()),
        "wins": wins,
        "win_pct": {label: 100.0 * count / n for label, count in wins.items()},
    }


def eval_vs_random(
    config: SearchConfig,
    size: int = 3,
    games: int = 100,
    seed: int = 0,
) -> Dict[str, float]:
    """
    Evaluate the engine vs a uniformly random opponent.

    The engine plays X in even games and O in odd games.

    Returns:
        Dict with 'games', 'engine_w', 'engine_d', 'engine_l'
    """
    rnd = random.Random(seed)
    wins = draws = losses = 0

    for g in range(games):
        state = GameState(size=size)
        engine_side = X if g % 2 == 0 else O
        outcome = Outcome.UNDECIDED

        while not outcome.is_terminal:
            if state.player == engine_side:
                action = choose_move(state.board, size, state.player, config).move
            else:
                action = rnd.choice(legal_moves(state.board))
            outcome = state.play(action)

        if outcome is Outcome.DRAW:
            draws += 1
        elif (outcome is Outcome.X_WINS) == (engine_side == X):
            wins += 1
        else:
            losses += 1

    total = wins + draws + losses
    return {
        "games": total,
        "engine_w": wins / total,
        "engine_d": draws / total,
        "engine_l": losses / total,
    }
