import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tttsearch.game import EMPTY, O, X  # noqa: E402


def parse_board(text: str):
    """Board from a compact string such as "XO_X_O___" ('_' or '.' for empty)."""
    cells = {"X": X, "O": O, "_": EMPTY, ".": EMPTY}
    return [cells[c] for c in text.replace(" ", "").replace("\n", "")]


@pytest.fixture
def board_from():
    return parse_board
