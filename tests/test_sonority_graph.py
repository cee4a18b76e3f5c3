import json
import random

import pytest

from monosyllabize.core.parameters import GraphParameters
from monosyllabize.core.sonority_graph import START, STOP, SonorityGraph, weighted_random_choice
from monosyllabize.errors import ArtifactError

OPEN_PALETTE = GraphParameters(palette_min_support=0)


class FixedRandom:
    """Stand-in for :class:`random.Random` returning a fixed draw."""

    def __init__(self, value: float) -> None:
        self.value = value

    def random(self) -> float:
        return self.value


def test_build_counts_start_edges(cat_hat_at_syllables):
    graph = SonorityGraph.build(cat_hat_at_syllables)

    assert graph.onset[START] == {"c": 1, "h": 1, "a": 1}
    assert graph.onset["c"] == {"a": 1}
    assert graph.nucleus["a"] == {"t": 3}
    assert graph.coda["t"] == {STOP: 3}


def test_build_skips_syllables_without_nucleus():
    graph = SonorityGraph.build([("s", "t"), ("k", "æ", "t")])

    assert graph.skipped_syllables == 1
    assert graph.onset[START] == {"k": 1}


def test_random_syllables_follow_observed_paths(cat_hat_at_syllables, rng):
    graph = SonorityGraph.build(cat_hat_at_syllables)

    results = {graph.generate_random_syllable(rng) for _ in range(50)}

    assert results <= {("c", "a", "t"), ("h", "a", "t"), ("a", "t")}
    assert all(result[0] in {"c", "h", "a"} for result in results)


def test_random_walk_respects_repeat_limit(rng):
    graph = SonorityGraph.build([("s", "t", "s", "t", "s", "a")])

    for _ in range(30):
        result = graph.generate_random_syllable(rng)
        assert result
        assert result[-1] == "a"
        assert result.count("s") <= 2
        assert result.count("t") <= 2


def test_random_walk_on_empty_graph_gives_up(rng):
    assert SonorityGraph().generate_random_syllable(rng) == ()


def test_palette_limits_phonemes(cat_hat_at_syllables, rng):
    graph = SonorityGraph.build(cat_hat_at_syllables, OPEN_PALETTE)

    for _ in range(30):
        result = graph.generate_from_palette(["h", "a", "t"], rng=rng)
        assert result in {("h", "a", "t"), ("a", "t")}


def test_palette_requires_support(cat_hat_at_syllables, rng):
    graph = SonorityGraph.build(cat_hat_at_syllables)

    # every start edge was seen once, the default needs more than one
    assert graph.generate_from_palette(["h", "a", "t"], rng=rng) is None


def test_palette_without_legal_start_returns_none(cat_hat_at_syllables, rng):
    graph = SonorityGraph.build(cat_hat_at_syllables, OPEN_PALETTE)

    assert graph.generate_from_palette(["x"], rng=rng) is None


def test_palette_rejects_single_phoneme_results(rng):
    graph = SonorityGraph.build([("a",)], OPEN_PALETTE)

    assert graph.generate_from_palette(["a"], rng=rng) is None


def test_use_once_only_consumes_palette_positions(rng):
    graph = SonorityGraph.build([("t", "a", "t")], OPEN_PALETTE)

    assert graph.generate_from_palette(["t", "a"], rng=rng) == ("t", "a", "t")
    assert graph.generate_from_palette(["t", "a"], use_once_only=True, rng=rng) is None


def test_force_order_follows_palette_order(rng):
    params = GraphParameters(palette_min_support=0, order_decay=0.0)
    graph = SonorityGraph.build([("p", "a", "t"), ("t", "a", "p")], params)

    results = {
        graph.generate_from_palette(["t", "a", "p"], force_order=True, rng=rng) for _ in range(20)
    }

    assert results == {("t", "a", "p")}


def test_weighted_random_choice_uses_cumulative_weights():
    options = [("a", 1.0), ("b", 1.0)]

    assert weighted_random_choice(options, FixedRandom(0.49)) == "a"
    assert weighted_random_choice(options, FixedRandom(0.5)) == "b"
    with pytest.raises(ValueError):
        weighted_random_choice([], random.Random(0))


def test_dict_round_trip_keeps_start_and_stop(cat_hat_at_syllables):
    graph = SonorityGraph.build(cat_hat_at_syllables)

    restored = SonorityGraph.from_dict(json.loads(json.dumps(graph.to_dict())))

    assert restored.parts == graph.parts
    assert restored.onset[START]["c"] == 1


def test_from_dict_rejects_malformed_payload():
    with pytest.raises(ArtifactError):
        SonorityGraph.from_dict({"onset": []})


def test_to_dot_renders_edges(cat_hat_at_syllables):
    dot = SonorityGraph.build(cat_hat_at_syllables).to_dot()

    assert dot.startswith('digraph "Sonority" {')
    assert 'st -> "onset_c";' in dot
    assert 'st -> "vowel_a";' in dot
    assert '"coda_t" -> end;' in dot
    assert "subgraph cluster_2" in dot
