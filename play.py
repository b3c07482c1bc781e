#!/usr/bin/env python3
"""
Play TicTacToe against the search engine in the terminal.

Usage:
    python play.py                          # 3x3, you are X
    python play.py --human O --size 4 --depth 3
    python play.py --variant alpha_beta
"""

import sys
import argparse
from pathlib import Path

# Add src to path
sys.path = [str(Path(__file__).parent / "src")] + sys.path

from tttsearch import (
    X,
    O,
    Outcome,
    GameState,
    IllegalMoveError,
    VARIANTS,
    choose_move,
    format_board,
    get_config,
    legal_moves,
)
from tttsearch.game import MIN_SIZE, MAX_SIZE, SYMBOLS


def play_interactive(size: int, human: int, config):
    """Play one game against the engine."""
    state = GameState(size=size)
    outcome = Outcome.UNDECIDED

    print("\n=== Interactive Game ===")
    print(f"You are {SYMBOLS[human]} ({'play first' if human == X else 'play second'})")
    print(f"Enter moves as numbers 0-{size * size - 1}:")
    print(format_board(state.board, size, show_indices=True))
    print()

    while not outcome.is_terminal:
        if state.player == human:
            try:
                action = int(input(f"Your move ({legal_moves(state.board)}): "))
                outcome = state.play(action)
            except IllegalMoveError as e:
                print(f"Invalid move, try again: {e}")
                continue
            except ValueError:
                print("Please type a cell number")
                continue
            except (EOFError, KeyboardInterrupt):
                print("\nGame aborted")
                return
        else:
            result = choose_move(state.board, size, state.player, config)
            outcome = state.play(result.move)
            print(f"Engine plays: {result.move} ({result.iterations:,} iterations)")

        print(format_board(state.board, size, show_indices=True))
        print()

    if outcome is Outcome.DRAW:
        print("Draw!")
    elif (outcome is Outcome.X_WINS) == (human == X):
        print("You win!")
    else:
        print("Engine wins!")


def main():
    parser = argparse.ArgumentParser(description="Play TicTacToe against the engine")
    parser.add_argument("--size", type=int, default=3, help=f"Board size ({MIN_SIZE}-{MAX_SIZE})")
    parser.add_argument("--variant", choices=list(VARIANTS), default="depth_limit", help="Search variant")
    parser.add_argument("--depth", type=int, default=None, help="Override depth limit")
    parser.add_argument("--human", choices=["X", "O"], default="X", help="Your mark")

    args = parser.parse_args()

    if not MIN_SIZE <= args.size <= MAX_SIZE:
        print(f"Board size must be between {MIN_SIZE} and {MAX_SIZE}")
        return

    overrides = {"max_depth": args.depth} if args.depth is not None else {}
    config = get_config(args.variant, **overrides)

    play_interactive(args.size, X if args.human == "X" else O, config)


if __name__ == "__main__":
    main()
