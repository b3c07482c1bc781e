"""
Search configuration and the named engine variants.

Every variant is the same search with different flags:

  plain        minimax, no pruning, no depth limit
  depth_limit  alpha-beta, heuristic cutoff at depth 7
  alpha_beta   alpha-beta, no depth limit
  parallel     alpha-beta, cutoff at depth 4, candidates searched in worker processes
"""

from dataclasses import asdict, dataclass, replace
from typing import Callable, Dict, Optional

from .heuristics import DEFAULT_WEIGHTS, HeuristicWeights

SCORING_FIXED = "fixed"
SCORING_DEPTH = "depth"
SCORINGS = (SCORING_FIXED, SCORING_DEPTH)


@dataclass(frozen=True)
class SearchConfig:
    """Search configuration."""

    # Alpha-beta cut-offs
    pruning: bool = True

    # Heuristic cutoff depth (None searches to terminal positions)
    max_depth: Optional[int] = None

    # Terminal values: "fixed" = +/-win score, "depth" = +/-(win score - depth)
    scoring: str = SCORING_FIXED

    # Fan candidate moves out to worker processes
    parallel: bool = False
    workers: Optional[int] = None  # None lets the executor decide

    # Evaluator weights
    weights: HeuristicWeights = DEFAULT_WEIGHTS

    def validate(self) -> "SearchConfig":
        if self.max_depth is not None and self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")
        if self.scoring not in SCORINGS:
            raise ValueError(f"Unknown scoring {self.scoring!r}, expected one of {SCORINGS}")
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
        return self

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


def plain() -> SearchConfig:
    return SearchConfig(pruning=False)


def depth_limit(max_depth: int = 7) -> SearchConfig:
    return SearchConfig(pruning=True, max_depth=max_depth)


def alpha_beta() -> SearchConfig:
    return SearchConfig(pruning=True)


def parallel(max_depth: Optional[int] = 4, workers: Optional[int] = None) -> SearchConfig:
    return SearchConfig(pruning=True, max_depth=max_depth, parallel=True, workers=workers)


VARIANTS: Dict[str, Callable[[], SearchConfig]] = {
    "plain": plain,
    "depth_limit": depth_limit,
    "alpha_beta": alpha_beta,
    "parallel": parallel,
}


def get_config(name: str, **overrides) -> SearchConfig:
    """Build a named variant, optionally overriding individual fields."""
    try:
        factory = VARIANTS[name]
    except KeyError:
        raise KeyError(f"Unknown variant {name!r}; known variants: {', '.join(VARIANTS)}") from None
    config = factory()
    if overrides:
        config = replace(config, **overrides)
    return config.validate()
