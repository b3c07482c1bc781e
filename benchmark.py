#!/usr/bin/env python3
"""
Benchmark a search variant by letting it play itself.

Writes config, per-game CSV, plots and a markdown report to save_dir/run_name.

Usage:
    python benchmark.py                                   # 100 games, depth_limit, 3x3
    python benchmark.py --variant alpha_beta --games 20
    python benchmark.py --variant parallel --size 4 --depth 3 --workers 4
    python benchmark.py --openings 2 --seed 7             # random first plies
"""

import sys
import json
import time
import argparse
from pathlib import Path

from tqdm.auto import tqdm

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from tttsearch import (
    VARIANTS,
    get_config,
    run_benchmark,
    summarize,
    results_frame,
)
from tttsearch.game import MIN_SIZE, MAX_SIZE


def board_size_arg(value: str) -> int:
    size = int(value)
    if not MIN_SIZE <= size <= MAX_SIZE:
        raise argparse.ArgumentTypeError(f"size must be between {MIN_SIZE} and {MAX_SIZE}")
    return size


def create_plots(df, output_dir: Path):
    """Per-game plots: iterations, duration, game length, outcomes."""
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    # 1. Iterations per game
    plt.figure(figsize=(10, 6))
    plt.plot(df['game'], df['total_iterations'], linewidth=2)
    plt.title('Search Iterations per Game', fontsize=14, fontweight='bold')
    plt.xlabel('Game', fontsize=12)
    plt.ylabel('Nodes Visited', fontsize=12)
    plt.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig(output_dir / 'plot_1_iterations.png', dpi=150, bbox_inches='tight')
    plt.close()

    # 2. Duration per game
    plt.figure(figsize=(10, 6))
    plt.plot(df['game'], df['duration'], linewidth=2, color='purple')
    plt.title('Game Duration', fontsize=14, fontweight='bold')
    plt.xlabel('Game', fontsize=12)
    plt.ylabel('Seconds', fontsize=12)
    plt.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig(output_dir / 'plot_2_duration.png', dpi=150, bbox_inches='tight')
    plt.close()

    # 3. Game length histogram
    plt.figure(figsize=(10, 6))
    plt.hist(df['moves'], bins=range(int(df['moves'].min()), int(df['moves'].max()) + 2),
             color='teal', alpha=0.8, edgecolor='black')
    plt.title('Game Length', fontsize=14, fontweight='bold')
    plt.xlabel('Moves', fontsize=12)
    plt.ylabel('Games', fontsize=12)
    plt.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig(output_dir / 'plot_3_moves.png', dpi=150, bbox_inches='tight')
    plt.close()

    # 4. Outcomes
    counts = df['winner'].value_counts()
    plt.figure(figsize=(8, 6))
    plt.bar(counts.index, counts.values, color=['steelblue', 'orange', 'gray'][:len(counts)])
    plt.title('Outcomes', fontsize=14, fontweight='bold')
    plt.xlabel('Result', fontsize=12)
    plt.ylabel('Games', fontsize=12)
    plt.grid(True, alpha=0.3, axis='y')
    plt.tight_layout()
    plt.savefig(output_dir / 'plot_4_outcomes.png', dpi=150, bbox_inches='tight')
    plt.close()


def generate_markdown_report(summary: dict, variant: str, config, size: int, run_dir: Path):
    """Write REPORT.md for a finished benchmark."""
    md = []
    md.append("# TicTacToe Search Benchmark\n")
    md.append(f"**Generated:** {time.strftime('%Y-%m-%d %H:%M:%S')}\n")
    md.append(f"**Variant:** {variant}\n")
    md.append(f"**Board:** {size}x{size}\n")

    md.append("\n## Search Configuration\n")
    md.append("| Parameter | Value |")
    md.append("|-----------|-------|")
    md.append(f"| Alpha-beta pruning | {config.pruning} |")
    md.append(f"| Depth limit | {config.max_depth if config.max_depth is not None else 'none'} |")
    md.append(f"| Terminal scoring | {config.scoring} |")
    md.append(f"| Parallel | {config.parallel} |")
    md.append(f"| Workers | {config.workers or 'auto'} |")

    md.append("\n## Results\n")
    md.append("| Metric | Value |")
    md.append("|--------|-------|")
    md.append(f"| Games | {summary['games']} |")
    md.append(f"| Total time | {summary['total_time']:.2f}s |")
    md.append(f"| Avg moves | {summary['avg_moves']:.1f} |")
    md.append(f"| Avg time per game | {summary['avg_duration'] * 1000:.1f}ms |")
    md.append(f"| Iterations per game | {summary['avg_iterations']:,.0f} |")

    md.append("\n### Outcomes\n")
    md.append("| Result | Games | Share |")
    md.append("|--------|-------|-------|")
    for label, count in summary['wins'].items():
        md.append(f"| {label} | {count} | {summary['win_pct'][label]:.1f}% |")

    plots = [
        ("plot_1_iterations.png", "Search Iterations per Game"),
        ("plot_2_duration.png", "Game Duration"),
        ("plot_3_moves.png", "Game Length"),
        ("plot_4_outcomes.png", "Outcomes"),
    ]
    for plot_file, description in plots:
        if (run_dir / "plots" / plot_file).exists():
            md.append(f"\n### {description}\n")
            md.append(f"![{description}](plots/{plot_file})\n")

    report_path = run_dir / "REPORT.md"
    with open(report_path, 'w') as f:
        f.write('\n'.join(md))

    print(f"✓ Markdown report saved to {report_path}")


def main():
    parser = argparse.ArgumentParser(description="Benchmark TicTacToe search variants")
    parser.add_argument("--variant", choices=list(VARIANTS), default="depth_limit", help="Search variant")
    parser.add_argument("--size", type=board_size_arg, default=3, help="Board size (3-10)")
    parser.add_argument("--games", type=int, default=100, help="Games to play")
    parser.add_argument("--depth", type=int, default=None, help="Override depth limit")
    parser.add_argument("--workers", type=int, default=None, help="Worker processes (parallel variant)")
    parser.add_argument("--openings", type=int, default=0, help="Random opening plies per game")
    parser.add_argument("--seed", type=int, default=0, help="Random seed for openings")
    parser.add_argument("--run-name", type=str, default="bench_run", help="Run name for saving")
    parser.add_argument("--save-dir", type=str, default="runs", help="Save directory")
    parser.add_argument("--no-plots", action="store_true", help="Skip plot generation")

    args = parser.parse_args()

    overrides = {}
    if args.depth is not None:
        overrides["max_depth"] = args.depth
    if args.workers is not None:
        overrides["workers"] = args.workers
    config = get_config(args.variant, **overrides)

    run_dir = Path(args.save_dir) / args.run_name
    run_dir.mkdir(parents=True, exist_ok=True)

    with open(run_dir / "config.json", "w") as f:
        json.dump({"variant": args.variant, "size": args.size, "games": args.games,
                   "openings": args.openings, "seed": args.seed, **config.to_dict()}, f, indent=2)

    print(f"\n=== Benchmark: {args.variant} on {args.size}x{args.size} ===")
    bench = run_benchmark(args.games, args.size, config, opening_moves=args.openings, seed=args.seed)
    summary = summarize(bench)
    tqdm.write(f"Completed {summary['games']} games in {summary['total_time']:.2f}s")

    print("\n=== Saving ===")
    df = results_frame(bench)
    df.to_csv(run_dir / "games.csv", index=False)
    print(f"✓ Games saved to {run_dir / 'games.csv'}")

    if not args.no_plots and len(df) > 0:
        print("\n=== Generating Plots ===")
        plots_dir = run_dir / "plots"
        plots_dir.mkdir(exist_ok=True)
        create_plots(df, plots_dir)
        print(f"✓ 4 plots saved to {plots_dir}")

    print("\n=== Generating Report ===")
    generate_markdown_report(summary, args.variant, config, args.size, run_dir)

    print("\n=== Final Results ===")
    print(f"Avg moves:           {summary['avg_moves']:.1f}")
    print(f"Avg time per game:   {summary['avg_duration'] * 1000:.1f}ms")
    print(f"Iterations per game: {summary['avg_iterations']:,.0f}")
    for label, count in summary['wins'].items():
        print(f"{label}: {count} ({summary['win_pct'][label]:.1f}%)")

    print(f"\n✅ All outputs saved to: {run_dir}")


if __name__ == "__main__":
    main()
