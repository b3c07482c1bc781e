import pytest

from tttsearch.game import Outcome, detect_outcome, new_board
from tttsearch.heuristics import HeuristicWeights, evaluate_board, line_weight, win_score


def test_line_weight():
    assert line_weight(3, 2) == 1000
    assert line_weight(4, 3) == 10_000
    assert line_weight(3, 1) == pytest.approx(2 / 3)
    assert line_weight(4, 2) == pytest.approx(2.0)
    assert line_weight(5, 0) == 0


def test_win_score_outranks_near_wins():
    assert win_score(3) == 100_000
    for n in range(3, 11):
        # every line one short of completion still scores below a win
        assert win_score(n) > (2 * n + 2) * (line_weight(n, n - 1) + n)


def test_empty_board_scores_zero():
    ev = evaluate_board(new_board(3), 3)
    assert (ev.score_x, ev.score_o, ev.outcome) == (0, 0, Outcome.UNDECIDED)


def test_center_mark(board_from):
    ev = evaluate_board(board_from("____X____"), 3)
    # row, column and both diagonals, each unblocked with one mark
    assert ev.score_x == pytest.approx(4 + 4 * (2 / 3))
    assert ev.score_o == 0
    assert ev.outcome is Outcome.UNDECIDED


def test_blocked_line_gets_no_bonus(board_from):
    ev = evaluate_board(board_from("XO_"
                                   "___"
                                   "___"), 3)
    # X: row 0 (blocked), column 0, main diagonal
    assert ev.score_x == pytest.approx(3 + 2 * (2 / 3))
    # O: row 0 (blocked), column 1
    assert ev.score_o == pytest.approx(2 + 2 / 3)


def test_near_win_dominates(board_from):
    ev = evaluate_board(board_from("XX_"
                                   "O__"
                                   "O__"), 3)
    assert ev.score_x > 1000
    assert ev.score_o < 1000
    assert ev.differential > 0

    blocked = evaluate_board(board_from("XXO"
                                        "O__"
                                        "___"), 3)
    assert blocked.score_x < 1000


@pytest.mark.parametrize("text, outcome, sign", [
    ("XXXOO____", Outcome.X_WINS, 1),
    ("XX_OOOX__", Outcome.O_WINS, -1),
])
def test_terminal_scores(board_from, text, outcome, sign):
    ev = evaluate_board(board_from(text), 3)
    assert ev.outcome is outcome
    assert ev.score_x == sign * 100_000
    assert ev.score_o == -sign * 100_000


def test_draw_scores_zero(board_from):
    ev = evaluate_board(board_from("XOXOXOOXO"), 3)
    assert ev.outcome is Outcome.DRAW
    assert (ev.score_x, ev.score_o) == (0, 0)


@pytest.mark.parametrize("text", [
    "_________", "X___O____", "XOXOXOOXO", "OXXOX_O_X", "XX_OO_X__",
])
def test_outcome_matches_detector(board_from, text):
    board = board_from(text)
    assert evaluate_board(board, 3).outcome is detect_outcome(board, 3)


def test_custom_weights(board_from):
    weights = HeuristicWeights(near_win_base=5.0, growth_base=3.0)
    assert weights.line_weight(3, 2) == 125
    assert weights.line_weight(3, 1) == pytest.approx(1.0)
    ev = evaluate_board(board_from("____X____"), 3, weights)
    assert ev.score_x == pytest.approx(4 + 4 * 1.0)


def test_four_by_four_symmetric_position(board_from):
    board = board_from("X__O"
                       "____"
                       "____"
                       "O__X")
    ev = evaluate_board(board, 4)
    # each side owns one open diagonal; all its rows and columns are blocked
    assert ev.score_x == pytest.approx(ev.score_o)
