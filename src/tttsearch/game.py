"""
TicTacToe game rules on N x N boards.

Board representation: list[int] of length N*N
  - 0: empty
  - +1: X
  - -1: O

Player: +1 (X, maximizing) or -1 (O, minimizing)

A line is a full row, a full column or one of the two diagonals. A player
wins by filling a whole line.
"""

import enum
import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

X = +1
O = -1
EMPTY = 0

MIN_SIZE = 3
MAX_SIZE = 10

SYMBOLS = {EMPTY: " ", X: "X", O: "O"}


class IllegalMoveError(ValueError):
    """Raised when a move targets an occupied or out-of-range cell."""


class Outcome(enum.Enum):
    X_WINS = "X"
    O_WINS = "O"
    DRAW = "Draw"
    UNDECIDED = "Undecided"

    @property
    def is_terminal(self) -> bool:
        return self is not Outcome.UNDECIDED


def win_outcome(player: int) -> Outcome:
    return Outcome.X_WINS if player == X else Outcome.O_WINS


def winner_of(outcome: Outcome) -> int:
    """Return +1/-1 for a won game, 0 for a draw or an open game."""
    if outcome is Outcome.X_WINS:
        return X
    if outcome is Outcome.O_WINS:
        return O
    return EMPTY


@dataclass
class GameState:
    """Mutable game state used by the arena and the scripts."""
    size: int = MIN_SIZE
    board: List[int] = field(default_factory=list)
    player: int = X  # Side to move

    def __post_init__(self):
        if not self.board:
            self.board = new_board(self.size)

    def play(self, index: int) -> Outcome:
        """Place the side to move at `index` and pass the turn."""
        self.board = apply_move(self.board, self.player, index)
        self.player = opponent(self.player)
        return detect_outcome(self.board, self.size)

    def outcome(self) -> Outcome:
        return detect_outcome(self.board, self.size)


class LineCounter:
    """
    Per-player mark counts for every row, column and both diagonals.

    Filled one cell at a time during a single board scan. `add` reports a
    completed line as soon as it appears so callers can stop scanning.
    """

    __slots__ = ("size", "rows", "cols", "diags")

    def __init__(self, size: int):
        self.size = size
        self.rows = {X: [0] * size, O: [0] * size}
        self.cols = {X: [0] * size, O: [0] * size}
        self.diags = {X: [0, 0], O: [0, 0]}

    def add(self, index: int, mark: int) -> bool:
        """Count `mark` at `index`. Returns True if it completed a line."""
        n = self.size
        row, col = divmod(index, n)
        rows, cols, diags = self.rows[mark], self.cols[mark], self.diags[mark]

        rows[row] += 1
        cols[col] += 1
        full = rows[row] == n or cols[col] == n
        if row == col:
            diags[0] += 1
            full = full or diags[0] == n
        if row + col == n - 1:
            diags[1] += 1
            full = full or diags[1] == n
        return full

    def lines(self, mark: int) -> List[int]:
        """All 2N + 2 line counts for `mark`: rows, columns, diagonals."""
        return self.rows[mark] + self.cols[mark] + self.diags[mark]


def board_size(board: List[int]) -> int:
    """Infer N from a board of N*N cells."""
    n = math.isqrt(len(board))
    if n < 1 or n * n != len(board):
        raise ValueError(f"Board length {len(board)} is not a perfect square")
    return n


def check_board(board: List[int], size: int):
    """Validate board shape and cell values."""
    if size < 1:
        raise ValueError(f"Board size must be positive, got {size}")
    if len(board) != size * size:
        raise ValueError(f"Board has {len(board)} cells, expected {size * size} for size {size}")
    for i, v in enumerate(board):
        if v not in (EMPTY, X, O):
            raise ValueError(f"Invalid cell value {v!r} at index {i}")


def check_player(player: int):
    if player not in (X, O):
        raise ValueError(f"Invalid player {player!r}, expected {X} (X) or {O} (O)")


def new_board(size: int = MIN_SIZE) -> List[int]:
    """Return an empty board; size must be within 3..10."""
    if not MIN_SIZE <= size <= MAX_SIZE:
        raise ValueError(f"Board size must be between {MIN_SIZE} and {MAX_SIZE}, got {size}")
    return [EMPTY] * (size * size)


def opponent(player: int) -> int:
    return -player


def detect_outcome(board: List[int], size: int) -> Outcome:
    """
    Determine whether X or O completed a line, the game is drawn, or open.

    Scans the board once and returns as soon as a line is completed.
    """
    counter = LineCounter(size)
    has_empty = False
    for i, v in enumerate(board):
        if v == EMPTY:
            has_empty = True
            continue
        if counter.add(i, v):
            return win_outcome(v)
    return Outcome.UNDECIDED if has_empty else Outcome.DRAW


def is_terminal(board: List[int], size: int) -> Tuple[bool, int]:
    """
    Check if board is terminal.

    Returns:
        (is_terminal, winner) where winner is +1/-1/0
    """
    outcome = detect_outcome(board, size)
    return outcome.is_terminal, winner_of(outcome)


def legal_moves(board: List[int]) -> List[int]:
    """Return list of legal move indices (empty squares)."""
    return [i for i, v in enumerate(board) if v == EMPTY]


def check_move(board: List[int], index: int):
    """Raise IllegalMoveError unless `index` is an empty cell of `board`."""
    if not 0 <= index < len(board):
        raise IllegalMoveError(f"Move {index} is outside the board (0..{len(board) - 1})")
    if board[index] != EMPTY:
        raise IllegalMoveError(f"Cell {index} is already taken by {SYMBOLS[board[index]]}")


def apply_move(board: List[int], player: int, index: int) -> List[int]:
    """Apply move and return new board."""
    check_player(player)
    check_move(board, index)
    next_board = board[:]
    next_board[index] = player
    return next_board


def side_to_move(board: List[int]) -> int:
    """Infer side to move from board state (X plays first)."""
    x_cnt = sum(1 for v in board if v == X)
    o_cnt = sum(1 for v in board if v == O)
    return X if x_cnt == o_cnt else O


def format_board(board: List[int], size: Optional[int] = None, show_indices: bool = False) -> str:
    """Render the board as text rows separated by rules."""
    n = size or board_size(board)
    width = len(str(n * n - 1)) if show_indices else 1
    rows = []
    for r in range(n):
        cells = []
        for c in range(n):
            i = r * n + c
            if show_indices and board[i] == EMPTY:
                cells.append(str(i).rjust(width))
            else:
                cells.append(SYMBOLS[board[i]].rjust(width))
        rows.append(" | ".join(cells))
    rule = "-" * len(rows[0])
    return f"\n{rule}\n".join(rows)
