import asyncio
from concurrent.futures import ThreadPoolExecutor

import pytest

import tttsearch.parallel as parallel
from tttsearch.config import SearchConfig, depth_limit, get_config
from tttsearch.game import EMPTY, O, X, new_board
from tttsearch.minimax import best_move, choose_move
from tttsearch.parallel import (
    SearchWorkerError,
    best_move_parallel,
    best_move_parallel_async,
    search_candidate,
)

CASES = [
    ("XO_XO____", 3, X, 4),
    ("X___O____", 3, X, 3),
    ("XX__O____", 3, O, 5),
    ("X___O___________", 4, X, 2),
    ("XO__" "_X__" "__O_" "____", 4, O, 2),
    ("X_O_" "_X__" "____" "O___", 4, X, 2),
]


@pytest.fixture
def threads():
    with ThreadPoolExecutor(max_workers=4) as pool:
        yield pool


@pytest.mark.parametrize("text, size, player, depth", CASES)
def test_matches_sequential_depth_limited(board_from, threads, text, size, player, depth):
    board = board_from(text)
    sequential = best_move(board, size, player, depth_limit(depth))
    concurrent = best_move_parallel(board, size, player, SearchConfig(max_depth=depth, parallel=True),
                                    executor=threads)
    assert concurrent.move == sequential.move
    assert concurrent.iterations == sequential.iterations
    assert concurrent.max_depth == sequential.max_depth


def test_process_pool_matches_sequential(board_from):
    board = board_from("X___O____")
    config = get_config("parallel", max_depth=3, workers=2)
    assert best_move_parallel(board, 3, X, config).move == best_move(board, 3, X, depth_limit(3)).move


def test_choose_move_dispatches_parallel(board_from):
    board = board_from("XO_XO____")
    result = choose_move(board, 3, X, get_config("parallel", workers=2))
    assert result.move == 6


def test_full_board_needs_no_workers(board_from):
    result = best_move_parallel(board_from("XOXOXOOXO"), 3, X)
    assert result.move == -1
    assert result.iterations == 0


def test_does_not_mutate_caller_board(board_from, threads):
    board = board_from("X___O____")
    snapshot = list(board)
    best_move_parallel(board, 3, X, depth_limit(3), executor=threads)
    assert board == snapshot


def test_never_picks_occupied_cell(board_from, threads):
    board = board_from("XO_"
                       "_X_"
                       "O__")
    move = best_move_parallel(board, 3, X, depth_limit(4), executor=threads).move
    assert board[move] == EMPTY


def test_search_candidate_returns_value_and_stats(board_from):
    value, nodes, depth = search_candidate(board_from("XXXOO____"), 3, False, SearchConfig())
    assert value == 100_000
    assert (nodes, depth) == (1, 0)


def test_worker_failure_fails_the_whole_call(board_from, threads, monkeypatch):
    real = parallel.search

    def failing(board, depth, maximizing, size, alpha, beta, config, stats):
        if board[2] == X:
            raise RuntimeError("worker crashed")
        return real(board, depth, maximizing, size, alpha, beta, config, stats)

    monkeypatch.setattr(parallel, "search", failing)
    board = board_from("XO_XO____")
    with pytest.raises(SearchWorkerError) as excinfo:
        best_move_parallel(board, 3, X, depth_limit(3), executor=threads)
    assert excinfo.value.move == 2
    assert isinstance(excinfo.value.__cause__, RuntimeError)

    # the caller's executor is left usable
    assert threads.submit(sum, [1, 2]).result() == 3


def test_async_matches_sequential(board_from):
    board = board_from("XX__O____")
    config = get_config("parallel", max_depth=5, workers=2)
    result = asyncio.run(best_move_parallel_async(board, 3, O, config))
    assert result.move == best_move(board, 3, O, depth_limit(5)).move == 2


def test_rejects_bad_input():
    with pytest.raises(ValueError):
        best_move_parallel(new_board(3), 4, X)
    with pytest.raises(ValueError):
        best_move_parallel(new_board(3), 3, X, SearchConfig(parallel=True, workers=0))
