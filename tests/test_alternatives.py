import pytest

from monosyllabize.core.alternatives import (
    VariantCategory,
    apply_affix,
    find_english_variants,
    generate_syllable_alternatives,
)
from monosyllabize.core.sonority_graph import SonorityGraph

from conftest import make_dictionary


def _graph(*syllables, repeat=3):
    return SonorityGraph.build([syllable for syllable in syllables for _ in range(repeat)])


@pytest.mark.parametrize(
    "word, pattern, expected",
    [
        ("jump", "ing", "jumping"),
        ("run", "*ing", "running"),
        ("happy", "^iest", "happiest"),
        ("actor", "^^ress", "actress"),
        ("do", "un*", "undo"),
    ],
)
def test_apply_affix(word, pattern, expected):
    assert apply_affix(word, pattern) == expected


def test_find_english_variants_uses_first_matching_pattern():
    dictionary = make_dictionary(
        ("run", [("ɹ", "ʌ", "n")]),
        ("runs", [("ɹ", "ʌ", "n", "z")]),
        ("running", [("ɹ", "ʌ"), ("n", "ɪ", "ŋ")]),
        ("runner", [("ɹ", "ʌ"), ("n", "ɚ")]),
    )

    variants = find_english_variants("run", dictionary)

    assert {category: entry.word for category, entry in variants.items()} == {
        VariantCategory.PLURAL: "runs",
        VariantCategory.GERUND: "running",
    }


def test_find_english_variants_prefixes_and_dropped_letters():
    dictionary = make_dictionary(
        ("happy", [("h", "æ"), ("p", "i")]),
        ("happier", [("h", "æ"), ("p", "i"), ("ɚ",)]),
        ("happiest", [("h", "æ"), ("p", "i"), ("ɪ", "s", "t")]),
        ("happily", [("h", "æ"), ("p", "ɪ"), ("l", "i")]),
        ("unhappy", [("ʌ", "n"), ("h", "æ"), ("p", "i")]),
    )

    variants = find_english_variants("Happy", dictionary)

    assert {category: entry.word for category, entry in variants.items()} == {
        VariantCategory.COMPARATIVE: "happier",
        VariantCategory.SUPERLATIVE: "happiest",
        VariantCategory.ADVERB: "happily",
        VariantCategory.UN: "unhappy",
    }


def test_suffix_marker_goes_into_the_coda():
    graph = _graph(("k", "æ", "t", "z"))

    result = generate_syllable_alternatives(("b", "æ", "t"), graph, set(), set())

    assert result == {VariantCategory.PLURAL: ("b", "æ", "t", "z")}


def test_consonant_prefix_goes_into_the_onset():
    graph = _graph(("p", "ɹ", "æ", "t"))

    result = generate_syllable_alternatives(("ɹ", "æ", "t"), graph, set(), set())

    assert result == {VariantCategory.PRE: ("p", "ɹ", "æ", "t")}


def test_vowel_prefix_replaces_the_nucleus():
    graph = _graph(("b", "ə", "t"))

    result = generate_syllable_alternatives(("b", "æ", "t"), graph, set(), set())

    assert result == {VariantCategory.UN: ("b", "ə", "t")}


def test_claimed_forms_are_left_out():
    graph = _graph(("k", "æ", "t", "z"))

    assert generate_syllable_alternatives(("b", "æ", "t"), graph, {"bætz"}, set()) == {}
    assert generate_syllable_alternatives(("b", "æ", "t"), graph, set(), {"bætz"}) == {}


def test_tied_placements_are_left_out():
    graph = _graph(("k", "æ", "t", "z", "s"), ("k", "æ", "s", "z"))

    assert generate_syllable_alternatives(("b", "æ", "t", "s"), graph, set(), set()) == {}


def test_rare_transitions_cannot_host_a_marker():
    graph = _graph(("k", "æ", "t", "z"), repeat=2)

    assert generate_syllable_alternatives(("b", "æ", "t"), graph, set(), set()) == {}


def test_syllable_without_nucleus_has_no_alternatives():
    graph = _graph(("k", "æ", "t", "z"))

    assert generate_syllable_alternatives(("s", "t"), graph, set(), set()) == {}
