"""Syllable boundary assignment for flat IPA transcriptions.

A transcription such as ``ˈbɪznɪs`` carries no reliable syllable breaks, but
an independent source tells us the word has two syllables and is spelled
``busi-ness``. Every way of cutting the phonemes into that many contiguous
groups is scored against a handful of heuristics and the first best-scoring
partition wins. Scoring is deterministic so a fixed reference set of
expected splits can be used for regression testing.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterator, List, Optional, Sequence, Tuple

from monosyllabize.errors import SegmentationError
from monosyllabize.utils.observability import get_logger

from .parameters import PartitionWeights
from .phonemes import BOUNDARY_MARKERS, Phoneme, Syllable, group_ipa_symbols, is_nucleus

# Letters each phoneme is commonly spelled with in English orthography.
ORTHOGRAPHIC_CORRELATES: Dict[Phoneme, Tuple[str, ...]] = {
    "b": ("b", "bb"),
    "d": ("d", "dd", "ed"),
    "f": ("f", "ff", "ph", "gh"),
    "ɡ": ("g", "gg", "gu", "gh"),
    "g": ("g", "gg", "gu", "gh"),
    "h": ("h", "wh"),
    "k": ("c", "k", "ck", "ch", "qu", "q", "x"),
    "l": ("l", "ll"),
    "m": ("m", "mm", "mb"),
    "n": ("n", "nn", "kn", "gn"),
    "ŋ": ("ng", "n"),
    "p": ("p", "pp"),
    "ɹ": ("r", "rr", "wr"),
    "r": ("r", "rr", "wr"),
    "s": ("s", "ss", "c", "sc", "x"),
    "ʃ": ("sh", "ti", "ci", "ch", "s"),
    "t": ("t", "tt", "ed"),
    "θ": ("th",),
    "ð": ("th",),
    "v": ("v", "f"),
    "w": ("w", "u", "o"),
    "ʍ": ("wh",),
    "j": ("y", "i", "u", "e"),
    "z": ("z", "s", "zz", "x"),
    "ʒ": ("s", "g", "z"),
    "tʃ": ("ch", "tch", "t"),
    "dʒ": ("j", "g", "dg", "ge"),
    "ʔ": ("t",),
    "ɾ": ("t", "d", "tt", "dd"),
    "ɪ": ("i", "y", "e", "u", "a"),
    "i": ("ee", "ea", "e", "y", "i", "ie", "ey"),
    "ɛ": ("e", "ea", "a"),
    "æ": ("a",),
    "ɑ": ("o", "a"),
    "ʌ": ("u", "o", "a", "ou"),
    "ə": ("a", "e", "o", "u", "i"),
    "ɔ": ("o", "aw", "au", "a", "ough"),
    "ʊ": ("oo", "u", "ou"),
    "u": ("oo", "u", "ew", "ue", "o", "ou"),
    "eɪ": ("a", "ai", "ay", "ei", "ey", "ea"),
    "aɪ": ("i", "y", "igh", "ie", "ai"),
    "oʊ": ("o", "oa", "ow", "oe", "ou"),
    "aʊ": ("ou", "ow"),
    "ɔɪ": ("oi", "oy"),
    "ɝ": ("er", "ir", "ur", "or", "ear"),
    "ɚ": ("er", "or", "ar", "ur"),
    "ɨ": ("i", "e"),
    "l̩": ("le", "l", "el"),
    "m̩": ("m",),
    "n̩": ("n", "en", "on"),
}

# Phonemes that are implausible as a syllable of their own.
ISOLATION_SENSITIVE: FrozenSet[Phoneme] = frozenset({"ɹ", "r", "ɝ", "ɚ", "ɡ", "g"})

PLAUSIBLE_SHAPES: FrozenSet[str] = frozenset({"CV", "VC", "CVC", "V", "C"})

_LOGGER = get_logger(__name__).bind(component="syllable_boundaries")


@dataclass(frozen=True)
class Transcription:
    """Phonemes of a flat transcription plus where the source marked breaks."""

    phonemes: Tuple[Phoneme, ...]
    boundaries: FrozenSet[int]

    @classmethod
    def parse(cls, text: str) -> "Transcription":
        phonemes: List[Phoneme] = []
        boundaries = set()
        for token in group_ipa_symbols(text.strip()):
            if token.isspace():
                continue
            if token in BOUNDARY_MARKERS:
                if phonemes:
                    boundaries.add(len(phonemes))
                continue
            phonemes.append(token)
        return cls(tuple(phonemes), frozenset(boundaries))


def iterate_partitions(
    phonemes: Sequence[Phoneme],
    count: int,
) -> Iterator[List[List[Phoneme]]]:
    """Yield every split of ``phonemes`` into ``count`` non-empty groups.

    Order matches a left-to-right recursive enumeration: the first group is
    as short as possible first, then the second, and so on. ``p|o|licy``
    comes before ``p|ol|icy``.
    """

    length = len(phonemes)
    if count < 1 or length < count:
        return
    if count == 1:
        yield [list(phonemes)]
        return
    for cuts in itertools.combinations(range(1, length), count - 1):
        bounds = (0, *cuts, length)
        yield [list(phonemes[start:end]) for start, end in zip(bounds, bounds[1:])]


def correlate_with_spelling(group: Sequence[Phoneme], spelling: str) -> Tuple[int, bool]:
    """Walk ``spelling`` left to right looking for each phoneme's letters.

    Returns how many phonemes found a spelling and whether all of them did.
    Each match consumes the spelling up to its end; for a phoneme the
    earliest occurrence wins, the longer spelling on ties.
    """

    remaining = spelling.lower()
    matched = 0
    for phoneme in group:
        best: Optional[Tuple[int, str]] = None
        for letters in ORTHOGRAPHIC_CORRELATES.get(phoneme, (phoneme,)):
            index = remaining.find(letters)
            if index < 0:
                continue
            if best is None or index < best[0] or (index == best[0] and len(letters) > len(best[1])):
                best = (index, letters)
        if best is None:
            continue
        matched += 1
        remaining = remaining[best[0] + len(best[1]) :]
    return matched, bool(group) and matched == len(group)


def _shape(group: Sequence[Phoneme]) -> str:
    return "".join("V" if is_nucleus(phoneme) else "C" for phoneme in group)


def _reference_isolates(phoneme: Phoneme, reference: str) -> bool:
    letters = set("".join(ORTHOGRAPHIC_CORRELATES.get(phoneme, (phoneme,))))
    cleaned = reference.strip().lower()
    return bool(cleaned) and set(cleaned) <= letters


class SyllableBoundaryAssigner:
    """Pick the best syllable split of a transcription."""

    def __init__(self, weights: Optional[PartitionWeights] = None) -> None:
        self.weights = weights or PartitionWeights()

    def score_partition(
        self,
        partition: Sequence[Sequence[Phoneme]],
        reference_syllables: Sequence[str],
        boundaries: FrozenSet[int] = frozenset(),
    ) -> float:
        weights = self.weights
        score = 0.0
        start = 0
        for index, group in enumerate(partition):
            reference = reference_syllables[index] if index < len(reference_syllables) else ""

            if start > 0 and start in boundaries:
                score += weights.marker_alignment

            if all(not is_nucleus(phoneme) for phoneme in group):
                score += weights.consonant_only

            score += weights.length_mismatch * (len(group) - len(reference)) ** 2

            if _shape(group) in PLAUSIBLE_SHAPES:
                score += weights.shape

            matched, complete = correlate_with_spelling(group, reference)
            if complete:
                score += weights.full_correlation
            score += weights.phoneme_correlation * matched

            if (
                len(group) == 1
                and group[0] in ISOLATION_SENSITIVE
                and not _reference_isolates(group[0], reference)
            ):
                score += weights.isolated_phoneme

            start += len(group)
        return score

    def best_partition(
        self,
        phonemes: Sequence[Phoneme],
        reference_syllables: Sequence[str],
        boundaries: FrozenSet[int] = frozenset(),
    ) -> List[Syllable]:
        if not phonemes:
            return []
        count = len(reference_syllables)
        if count <= 1:
            return [tuple(phonemes)]
        if len(phonemes) < count:
            _LOGGER.debug(
                "Fewer phonemes than syllables",
                context={"phonemes": "".join(phonemes), "syllables": count},
            )
            count = len(phonemes)

        best: Optional[List[List[Phoneme]]] = None
        best_score = float("-inf")
        for partition in iterate_partitions(phonemes, count):
            score = self.score_partition(partition, reference_syllables, boundaries)
            if score > best_score:
                best, best_score = partition, score
        return [tuple(group) for group in best or []]

    def assign(
        self,
        word: str,
        reference_syllables: Sequence[str],
        transcription: str,
    ) -> List[Syllable]:
        """Split ``transcription`` of ``word`` into ``len(reference_syllables)`` syllables.

        Raises :class:`SegmentationError` when the transcription holds no
        phonemes.
        """

        parsed = Transcription.parse(transcription)
        if not parsed.phonemes:
            raise SegmentationError(word)
        return self.best_partition(parsed.phonemes, reference_syllables, parsed.boundaries)


__all__ = [
    "ORTHOGRAPHIC_CORRELATES",
    "Transcription",
    "iterate_partitions",
    "correlate_with_spelling",
    "SyllableBoundaryAssigner",
]
