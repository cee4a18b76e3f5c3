"""Pre-generated syllables waiting to be assigned to words."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Sequence, Set, ValuesView

from tqdm import tqdm

from monosyllabize.errors import ArtifactError
from monosyllabize.utils.observability import create_counter, get_logger

from .alternatives import VariantCategory, Variations, generate_syllable_alternatives
from .parameters import AlternativeParameters
from .phonemes import Syllable, join_phonemes
from .sonority_graph import SonorityGraph

Signature = FrozenSet[VariantCategory]

_LOGGER = get_logger(__name__).bind(component="candidate_pool")


@dataclass
class CandidateSyllable:
    """A generated syllable and the derived forms built for it."""

    syllable: Syllable
    variations: Variations = field(default_factory=dict)

    @property
    def key(self) -> str:
        return join_phonemes(self.syllable)

    @property
    def signature(self) -> Signature:
        return frozenset(self.variations)

    def forms(self) -> List[str]:
        """Joined own form followed by the joined variation forms."""

        return [self.key, *(join_phonemes(form) for form in self.variations.values())]

    def to_payload(self) -> Dict[str, object]:
        return {
            "syllable": list(self.syllable),
            "variations": {category.value: list(form) for category, form in self.variations.items()},
        }

    @classmethod
    def from_payload(cls, payload: Dict[str, object]) -> "CandidateSyllable":
        syllable = tuple(payload["syllable"])  # type: ignore[arg-type]
        raw = payload.get("variations") or {}
        variations = {
            VariantCategory(category): tuple(form)
            for category, form in raw.items()  # type: ignore[union-attr]
        }
        return cls(syllable, variations)


class CandidatePool:
    """Ordered pool of candidates, bucketed by variant signature.

    Removing a candidate removes it from its bucket as well; the engine
    relies on this so a claimed candidate can never be handed out twice.
    """

    def __init__(self, candidates: Iterable[CandidateSyllable] = ()) -> None:
        self._candidates: Dict[str, CandidateSyllable] = {}
        self._buckets: Dict[Signature, Dict[str, CandidateSyllable]] = {}
        self.variation_forms: Set[str] = set()
        for candidate in candidates:
            self.add(candidate)

    def add(self, candidate: CandidateSyllable) -> bool:
        key = candidate.key
        if not key or key in self._candidates:
            return False
        self._candidates[key] = candidate
        self._buckets.setdefault(candidate.signature, {})[key] = candidate
        self.variation_forms.update(candidate.forms()[1:])
        return True

    def remove(self, key: str) -> Optional[CandidateSyllable]:
        candidate = self._candidates.pop(key, None)
        if candidate is None:
            return None
        bucket = self._buckets.get(candidate.signature)
        if bucket is not None:
            bucket.pop(key, None)
            if not bucket:
                del self._buckets[candidate.signature]
        return candidate

    def get(self, key: str) -> Optional[CandidateSyllable]:
        return self._candidates.get(key)

    def bucket(self, signature: Signature) -> List[CandidateSyllable]:
        return list(self._buckets.get(signature, {}).values())

    def signatures(self) -> List[Signature]:
        return list(self._buckets)

    def first(self) -> Optional[CandidateSyllable]:
        return next(iter(self._candidates.values()), None)

    def values(self) -> ValuesView[CandidateSyllable]:
        """Live view of the candidates in pool order; do not remove while iterating."""

        return self._candidates.values()

    def __contains__(self, key: object) -> bool:
        return key in self._candidates

    def __iter__(self) -> Iterator[CandidateSyllable]:
        # snapshot, callers may remove while iterating
        return iter(list(self._candidates.values()))

    def __len__(self) -> int:
        return len(self._candidates)

    @property
    def with_variations(self) -> int:
        return sum(1 for candidate in self._candidates.values() if candidate.variations)

    def to_rows(self) -> List[List[object]]:
        return [[key, candidate.to_payload()] for key, candidate in self._candidates.items()]

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[object]]) -> "CandidatePool":
        candidates = []
        try:
            for _, payload in rows:
                candidates.append(CandidateSyllable.from_payload(payload))  # type: ignore[arg-type]
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise ArtifactError(f"malformed candidate pool: {exc}") from exc
        return cls(candidates)


def build_candidate_pool(
    graph: SonorityGraph,
    attempts: int,
    rng: Optional[random.Random] = None,
    *,
    params: Optional[AlternativeParameters] = None,
    target_size: Optional[int] = None,
    show_progress: bool = True,
) -> CandidatePool:
    """Generate random syllables from ``graph`` and their variations.

    Repeats of an already generated syllable, or of a form already used as
    some other syllable's variation, are skipped. Most attempts are repeats
    once the graph's common paths are exhausted.
    """

    rng = rng or random.Random()
    pool = CandidatePool()
    generated = create_counter(
        "monosyllabize_candidates_generated_total",
        "Unique candidate syllables generated from the sonority graph.",
        label_names=("variations",),
    )

    for _ in tqdm(range(attempts), desc="syllables", unit="attempt", disable=not show_progress):
        syllable = graph.generate_random_syllable(rng)
        key = join_phonemes(syllable)
        if not key or key in pool or key in pool.variation_forms:
            continue
        variations = generate_syllable_alternatives(
            syllable, graph, pool, pool.variation_forms, params
        )
        pool.add(CandidateSyllable(syllable, variations))
        generated.labels(variations="yes" if variations else "no").inc()
        if target_size is not None and len(pool) >= target_size:
            break

    _LOGGER.info(
        "Candidate pool generated",
        context={
            "attempts": attempts,
            "unique": len(pool),
            "with_variations": pool.with_variations,
            "without_variations": len(pool) - pool.with_variations,
        },
    )
    return pool


__all__ = [
    "Signature",
    "CandidateSyllable",
    "CandidatePool",
    "build_candidate_pool",
]
