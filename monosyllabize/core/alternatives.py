"""Morphological variants on both the phonetic and the English side.

A generated syllable can carry derived forms (``bʌb`` -> plural ``bʌbz``,
past ``bʌbd`` ...) built by placing each category's marker phoneme where the
sonority graph finds it most plausible. Suffix markers go into the coda,
consonantal prefix markers into the onset, and vocalic prefix markers
replace the nucleus.

The English side checks which affixed spellings of a dictionary word are
themselves dictionary words, so ``jump`` and ``jumping`` can be kept
phonetically related when both are assigned.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Container, Dict, Iterator, Optional, Sequence, Tuple, Union

from .lexicon import Dictionary, WordEntry
from .parameters import AlternativeParameters
from .phonemes import Phoneme, Syllable, is_nucleus, join_phonemes, split_syllable
from .sonority_graph import START, STOP, SonorityGraph


class VariantCategory(str, Enum):
    """Morphological relation between a word and a derived word."""

    PAST = "past"
    PLURAL = "plural"
    GERUND = "gerund"
    ACTOR = "actor"
    PARTICIPLE = "participle"
    SUPERLATIVE = "superlative"
    COMPARATIVE = "comparative"
    ADVERB = "adverb"
    UN = "un"
    DIS = "dis"
    RE = "re"
    IN = "in"
    PRE = "pre"
    POST = "post"
    NON = "non"


VARIANT_MARKERS: Dict[VariantCategory, Phoneme] = {
    VariantCategory.PLURAL: "z",  # bubbles
    VariantCategory.GERUND: "ŋ",  # bubbling
    VariantCategory.PAST: "d",  # bubbled
    VariantCategory.ACTOR: "s",  # bubbler
    VariantCategory.PARTICIPLE: "n",  # eaten
    VariantCategory.COMPARATIVE: "ɹ",  # bubblier
    VariantCategory.SUPERLATIVE: "t",  # bubbliest
    VariantCategory.ADVERB: "l",  # bubblily
    VariantCategory.UN: "ə",
    VariantCategory.DIS: "ɪ",
    VariantCategory.RE: "i",
    VariantCategory.IN: "m",
    VariantCategory.PRE: "p",
    VariantCategory.POST: "ʊ",
    VariantCategory.NON: "ɑ",
}

SUFFIX_CATEGORIES: Tuple[VariantCategory, ...] = (
    VariantCategory.PAST,
    VariantCategory.PLURAL,
    VariantCategory.GERUND,
    VariantCategory.ACTOR,
    VariantCategory.PARTICIPLE,
    VariantCategory.SUPERLATIVE,
    VariantCategory.COMPARATIVE,
    VariantCategory.ADVERB,
)

# Spelling patterns per category, tried in order. A trailing ``*`` marks a
# prefix; each leading ``^`` drops one final letter of the base word and a
# leading ``*`` doubles its final letter.
ENGLISH_AFFIX_MATCHERS: Dict[VariantCategory, Tuple[str, ...]] = {
    VariantCategory.UN: ("un*",),
    VariantCategory.DIS: ("dis*",),
    VariantCategory.RE: ("re*",),
    VariantCategory.IN: ("in*",),
    VariantCategory.PRE: ("pre*",),
    VariantCategory.POST: ("post*",),
    VariantCategory.NON: ("non*",),
    VariantCategory.PAST: ("ed", "d"),
    VariantCategory.PLURAL: ("s", "es"),
    VariantCategory.GERUND: ("ing", "*ing"),
    VariantCategory.ACTOR: ("or", "er", "^^ress"),
    VariantCategory.PARTICIPLE: ("en",),
    VariantCategory.SUPERLATIVE: ("est", "^iest", "iest"),
    VariantCategory.COMPARATIVE: ("er", "^ier", "ier"),
    VariantCategory.ADVERB: ("ly", "lily", "^ily"),
}

Variations = Dict[VariantCategory, Syllable]


@dataclass(frozen=True)
class NoVariant:
    """The word is not a derived form of another assigned word."""


@dataclass(frozen=True)
class Variant:
    """The word was assigned as ``category`` of ``linked_word``."""

    category: VariantCategory
    linked_word: str


VariantRelation = Union[NoVariant, Variant]

NO_VARIANT = NoVariant()


def _is_claimed(form: Syllable, claimed_pool: Container[str], used_variants: Container[str]) -> bool:
    joined = join_phonemes(form)
    return joined in claimed_pool or joined in used_variants


def _supported(count: int, params: AlternativeParameters) -> bool:
    return count > params.min_score


def _coda_insertions(
    graph: SonorityGraph,
    marker: Phoneme,
    onset: Syllable,
    nucleus: Syllable,
    coda: Syllable,
) -> Iterator[Tuple[int, int, Syllable]]:
    head = onset + nucleus
    for spot in range(len(coda) + 1):
        if spot == 0:
            incoming = graph.edge_count(1, nucleus[-1], marker)
        else:
            incoming = graph.edge_count(2, coda[spot - 1], marker)
        following = coda[spot] if spot < len(coda) else STOP
        outgoing = graph.edge_count(2, marker, following)
        yield incoming, outgoing, head + coda[:spot] + (marker,) + coda[spot:]


def _onset_insertions(
    graph: SonorityGraph,
    marker: Phoneme,
    onset: Syllable,
    nucleus: Syllable,
    coda: Syllable,
) -> Iterator[Tuple[int, int, Syllable]]:
    for spot in range(len(onset) + 1):
        previous = onset[spot - 1] if spot > 0 else START
        incoming = graph.edge_count(0, previous, marker)
        following = onset[spot] if spot < len(onset) else nucleus[0]
        outgoing = graph.edge_count(0, marker, following)
        yield incoming, outgoing, onset[:spot] + (marker,) + onset[spot:] + nucleus + coda


def _nucleus_substitution(
    graph: SonorityGraph,
    marker: Phoneme,
    onset: Syllable,
    nucleus: Syllable,
    coda: Syllable,
) -> Iterator[Tuple[int, int, Syllable]]:
    if nucleus == (marker,):
        return
    incoming = graph.edge_count(0, onset[-1] if onset else START, marker)
    outgoing = graph.edge_count(1, marker, coda[0] if coda else STOP)
    yield incoming, outgoing, onset + (marker,) + coda


def _placements(category: VariantCategory, marker: Phoneme):
    if category in SUFFIX_CATEGORIES:
        return _coda_insertions
    if is_nucleus(marker):
        return _nucleus_substitution
    return _onset_insertions


def generate_syllable_alternatives(
    syllable: Sequence[Phoneme],
    graph: SonorityGraph,
    claimed_pool: Container[str],
    used_variants: Container[str],
    params: Optional[AlternativeParameters] = None,
) -> Variations:
    """Derive a form per category for ``syllable``.

    Each legal placement scores the mean of the counts of the edge into and
    out of the marker; both must exceed ``min_score``. The single best
    placement wins. A category is left out when no placement is legal, when
    the top score is tied, or when the result is already claimed.
    """

    params = params or AlternativeParameters()
    onset, nucleus, coda = split_syllable(syllable)
    alternatives: Variations = {}
    if not nucleus:
        return alternatives

    produced = set()
    for category, marker in VARIANT_MARKERS.items():
        placements = _placements(category, marker)
        best: Optional[Syllable] = None
        best_score = 0.0
        tied = False
        for incoming, outgoing, realization in placements(graph, marker, onset, nucleus, coda):
            if not (_supported(incoming, params) and _supported(outgoing, params)):
                continue
            if _is_claimed(realization, claimed_pool, used_variants):
                continue
            if realization in produced:
                continue
            score = (incoming + outgoing) / 2
            if score > best_score:
                best, best_score, tied = realization, score, False
            elif score == best_score:
                tied = True
        if best is None or tied:
            continue
        alternatives[category] = best
        produced.add(best)
    return alternatives


def apply_affix(word: str, pattern: str) -> str:
    """Spell ``word`` with ``pattern`` from :data:`ENGLISH_AFFIX_MATCHERS`."""

    if pattern.endswith("*"):
        return pattern[:-1] + word
    stem = word
    suffix = pattern
    while suffix.startswith("^"):
        stem = stem[:-1]
        suffix = suffix[1:]
    if suffix.startswith("*"):
        stem = stem + stem[-1:]
        suffix = suffix[1:]
    return stem + suffix


def find_english_variants(word: str, dictionary: Dictionary) -> Dict[VariantCategory, WordEntry]:
    """Dictionary words that are affixed forms of ``word``, one per category."""

    base = word.lower()
    found: Dict[VariantCategory, WordEntry] = {}
    for category, patterns in ENGLISH_AFFIX_MATCHERS.items():
        for pattern in patterns:
            candidate = apply_affix(base, pattern)
            if not candidate or candidate == base:
                continue
            entry = dictionary.get(candidate)
            if entry is not None:
                found[category] = entry
                break
    return found


__all__ = [
    "VariantCategory",
    "VARIANT_MARKERS",
    "SUFFIX_CATEGORIES",
    "ENGLISH_AFFIX_MATCHERS",
    "Variations",
    "NoVariant",
    "Variant",
    "VariantRelation",
    "NO_VARIANT",
    "generate_syllable_alternatives",
    "apply_affix",
    "find_english_variants",
]
