from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .parameters import ScoringParameters
from .phonemes import Phoneme, similar_phonemes


def _relative_position(index: int, length: int) -> float:
    if length <= 1:
        return 0.0
    return index / (length - 1)


@dataclass(frozen=True)
class PhonemeCredit:
    """How one candidate phoneme was credited against the target."""

    phoneme: Phoneme
    kind: str
    credit: float
    target_index: Optional[int] = None


class SyllableScorer:
    """Phoneme-overlap score of a candidate syllable against a word.

    Each candidate phoneme earns the exact-match credit when the target has
    it, the similar-match credit when the target has a phoneme of the same
    similarity group, the missing penalty otherwise. Matched credit shrinks
    with the distance between the relative positions of the candidate
    phoneme and its closest counterpart in the target.
    """

    def __init__(self, params: Optional[ScoringParameters] = None) -> None:
        self.params = params or ScoringParameters()

    def perfect_score(self, candidate: Sequence[Phoneme]) -> float:
        return self.params.perfect_match * len(candidate)

    def breakdown(self, candidate: Sequence[Phoneme], target: Sequence[Phoneme]) -> List[PhonemeCredit]:
        params = self.params
        credits: List[PhonemeCredit] = []
        for index, phoneme in enumerate(candidate):
            position = _relative_position(index, len(candidate))

            matches = [j for j, other in enumerate(target) if other == phoneme]
            kind, base = "exact", params.perfect_match
            if not matches:
                related = similar_phonemes(phoneme)
                matches = [j for j, other in enumerate(target) if other in related]
                kind, base = "similar", params.similar_match
            if not matches:
                credits.append(PhonemeCredit(phoneme, "missing", params.missing))
                continue

            nearest = min(matches, key=lambda j: abs(_relative_position(j, len(target)) - position))
            offset = abs(_relative_position(nearest, len(target)) - position)
            credits.append(
                PhonemeCredit(phoneme, kind, base * (1 - params.order_penalty * offset), nearest)
            )
        return credits

    def score(self, candidate: Sequence[Phoneme], target: Sequence[Phoneme]) -> float:
        return sum(item.credit for item in self.breakdown(candidate, target))


__all__ = ["PhonemeCredit", "SyllableScorer"]
