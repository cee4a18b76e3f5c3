"""Tunable constants for scoring, generation and assignment.

The values are empirically tuned; outputs are only reproducible with the
defaults below, so they are carried as frozen dataclasses that callers may
replace wholesale (``dataclasses.replace``) rather than as inline literals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple


@dataclass(frozen=True)
class ScoringParameters:
    """Phoneme-overlap scoring shared by the variant pass and ``choice``."""

    perfect_match: float = 10.0
    similar_match: float = 4.0
    missing: float = -4.0
    order_penalty: float = 0.3
    # (progress fraction, per-phoneme multiplier) for the choice early exit;
    # the last threshold whose fraction has been reached applies.
    choice_cutoff_thresholds: Tuple[Tuple[float, float], ...] = (
        (0.0, 8.0),
        (0.2, 7.0),
        (0.3, 6.0),
    )

    def choice_cutoff(self, progress: float) -> float:
        multiplier = self.choice_cutoff_thresholds[0][1]
        for fraction, value in self.choice_cutoff_thresholds:
            if progress >= fraction:
                multiplier = value
        return multiplier


@dataclass(frozen=True)
class PartitionWeights:
    """Weights of the syllable boundary heuristics."""

    marker_alignment: float = 3.0
    consonant_only: float = -10.0
    length_mismatch: float = -1.0
    shape: float = 2.0
    full_correlation: float = 5.0
    phoneme_correlation: float = 1.0
    isolated_phoneme: float = -6.0


@dataclass(frozen=True)
class GraphParameters:
    max_repeats_per_part: int = 2
    palette_min_support: int = 1
    order_decay: float = 0.5
    max_walk_attempts: int = 100


@dataclass(frozen=True)
class AlternativeParameters:
    # transitions must be seen more often than this to host a variant marker
    min_score: int = 2


@dataclass(frozen=True)
class AssignmentParameters:
    graph_attempts: int = 1000
    report_window: int = 1000
    features: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def homonyms(self) -> bool:
        return "homonyms" in self.features


@dataclass(frozen=True)
class GenerationParameters:
    # 100 million attempts yield roughly 150,000 unique syllables
    attempts: int = 100_000_000
    target_size: Optional[int] = None
    word_frequency_cutoff: int = 60_000


KNOWN_FEATURES: FrozenSet[str] = frozenset({"homonyms"})


__all__ = [
    "ScoringParameters",
    "PartitionWeights",
    "GraphParameters",
    "AlternativeParameters",
    "AssignmentParameters",
    "GenerationParameters",
    "KNOWN_FEATURES",
]
