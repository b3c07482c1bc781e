"""
Parallel move selection.

Each candidate move is committed on its own board copy and searched by a
worker process. Results are joined once every worker has finished and
merged in index order, so the chosen move matches best_move for the same
configuration whatever order the workers finish in.
"""

import asyncio
import functools
import logging
import math
from concurrent.futures import FIRST_EXCEPTION, Executor, Future, ProcessPoolExecutor, wait
from typing import Dict, List, Optional, Tuple

from .config import SearchConfig, parallel as parallel_config
from .game import O, apply_move, check_board, check_player, legal_moves
from .minimax import SearchResult, SearchStats, search, select_move

logger = logging.getLogger(__name__)


class SearchWorkerError(RuntimeError):
    """A candidate-move search failed in a worker; the move choice is void."""

    def __init__(self, move: int, message: str):
        super().__init__(message)
        self.move = move


def search_candidate(
    candidate: List[int],
    size: int,
    maximizing: bool,
    config: SearchConfig,
) -> Tuple[float, int, int]:
    """
    Worker entry: full search of a board with the candidate move already on it.

    Returns:
        (value, nodes, max_depth)
    """
    stats = SearchStats()
    value = search(candidate, 0, maximizing, size, -math.inf, math.inf, config, stats)
    return value, stats.nodes, stats.max_depth


def _cancel_all(futures: Dict[int, Future]):
    for future in futures.values():
        future.cancel()


def _first_failure(futures: Dict[int, Future]) -> Optional[Tuple[int, BaseException]]:
    for move, future in futures.items():
        if future.done() and not future.cancelled() and future.exception() is not None:
            return move, future.exception()
    return None


def best_move_parallel(
    board: List[int],
    size: int,
    player: int,
    config: Optional[SearchConfig] = None,
    max_workers: Optional[int] = None,
    executor: Optional[Executor] = None,
) -> SearchResult:
    """
    Same contract as minimax.best_move, with candidates searched concurrently.

    Args:
        board: Current board (not modified)
        size: Board side length N
        player: Side to move
        config: Search flags (defaults to the "parallel" variant)
        max_workers: Pool size when no executor is given (defaults to config.workers)
        executor: Executor to submit to; left running after the call

    Raises:
        SearchWorkerError: a worker raised; outstanding searches are cancelled
    """
    config = (config or parallel_config()).validate()
    check_board(board, size)
    check_player(player)

    moves = legal_moves(board)
    if not moves:
        return SearchResult(move=-1)

    owned = executor is None
    if owned:
        executor = ProcessPoolExecutor(max_workers=max_workers or config.workers)

    futures: Dict[int, Future] = {}
    try:
        for i in moves:
            candidate = apply_move(board, player, i)
            futures[i] = executor.submit(search_candidate, candidate, size, player == O, config)

        wait(futures.values(), return_when=FIRST_EXCEPTION)

        failure = _first_failure(futures)
        if failure is not None:
            move, exc = failure
            _cancel_all(futures)
            logger.debug("search of candidate %d failed: %r", move, exc)
            raise SearchWorkerError(move, f"Search of candidate move {move} failed: {exc!r}") from exc

        stats = SearchStats()
        scored = []
        for i in moves:
            value, nodes, depth = futures[i].result()
            stats.merge(nodes, depth)
            scored.append((i, value))
            logger.debug("candidate %d -> %s (%d nodes)", i, value, nodes)
    except BaseException:
        _cancel_all(futures)
        raise
    finally:
        if owned:
            executor.shutdown(wait=True, cancel_futures=True)

    move, value = select_move(player, scored)
    logger.debug("best move %d value %s after %d nodes", move, value, stats.nodes)
    return SearchResult(move=move, iterations=stats.nodes, max_depth=stats.max_depth)


async def best_move_parallel_async(
    board: List[int],
    size: int,
    player: int,
    config: Optional[SearchConfig] = None,
    max_workers: Optional[int] = None,
) -> SearchResult:
    """Awaitable best_move_parallel; the join runs off the event loop."""
    loop = asyncio.get_running_loop()
    call = functools.partial(best_move_parallel, list(board), size, player, config, max_workers)
    return await loop.run_in_executor(None, call)
