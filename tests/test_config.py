from dataclasses import FrozenInstanceError

import pytest

from tttsearch.config import VARIANTS, SearchConfig, get_config
from tttsearch.heuristics import HeuristicWeights


def test_variant_presets():
    assert set(VARIANTS) == {"plain", "depth_limit", "alpha_beta", "parallel"}

    plain = get_config("plain")
    assert (plain.pruning, plain.max_depth, plain.parallel) == (False, None, False)

    limited = get_config("depth_limit")
    assert (limited.pruning, limited.max_depth, limited.parallel) == (True, 7, False)

    pruned = get_config("alpha_beta")
    assert (pruned.pruning, pruned.max_depth, pruned.parallel) == (True, None, False)

    fanned = get_config("parallel")
    assert (fanned.pruning, fanned.max_depth, fanned.parallel) == (True, 4, True)


def test_overrides():
    config = get_config("depth_limit", max_depth=3, scoring="depth")
    assert config.max_depth == 3
    assert config.scoring == "depth"


def test_unknown_variant_lists_known_names():
    with pytest.raises(KeyError, match="alpha_beta"):
        get_config("negamax")


@pytest.mark.parametrize("kwargs", [
    {"max_depth": -1},
    {"scoring": "linear"},
    {"workers": 0},
])
def test_validate_rejects(kwargs):
    with pytest.raises(ValueError):
        SearchConfig(**kwargs).validate()


def test_config_is_frozen():
    config = SearchConfig()
    with pytest.raises(FrozenInstanceError):
        config.pruning = False


def test_to_dict():
    data = SearchConfig(max_depth=2, weights=HeuristicWeights(near_win_base=5.0)).to_dict()
    assert data["max_depth"] == 2
    assert data["weights"]["near_win_base"] == 5.0
