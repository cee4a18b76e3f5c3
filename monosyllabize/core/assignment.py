"""Greedy multi-pass assignment of one-syllable forms to dictionary words.

Words are visited in frequency order and every assignment claims its form
for the rest of the run, so common words get first pick of the best
fitting syllables. The passes are:

0. one-syllable words keep their own form; a generated candidate equal to
   such a form lends its variations to the word's English derivatives;
1. multi-syllable words with multi-syllable English derivatives take a
   candidate whose variations cover exactly the same categories, and the
   derivatives take the matching variations;
2. everything else walks the fallback chain ``direct`` -> ``graphOrdered``
   -> ``graphRemoved`` -> ``graph`` -> ``choice`` -> ``random`` -> ``failed``.
"""

from __future__ import annotations

import random
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Set, Tuple

from tqdm import tqdm

from monosyllabize.utils.observability import create_counter, get_logger

from .alternatives import NO_VARIANT, Variant, VariantCategory, VariantRelation, find_english_variants
from .candidate_pool import CandidatePool, CandidateSyllable
from .lexicon import Dictionary, WordEntry
from .parameters import AssignmentParameters, ScoringParameters
from .phonemes import Syllable, join_phonemes
from .scorer import SyllableScorer
from .sonority_graph import SonorityGraph


class AssignMethod(str, Enum):
    """How a word obtained its one-syllable form."""

    ALREADY_ONE_SYLLABLE = "alreadyOneSyllable"
    SINGLE_SYLLABLE_VARIANT = "singleSyllableVariant"
    VARIANT = "variant"
    DIRECT = "direct"
    GRAPH_ORDERED = "graphOrdered"
    GRAPH_REMOVED = "graphRemoved"
    GRAPH = "graph"
    CHOICE = "choice"
    RANDOM = "random"
    FAILED = "failed"


@dataclass(frozen=True)
class AssignmentRecord:
    word: str
    original: Tuple[Syllable, ...]
    phonemes: Syllable
    method: AssignMethod
    relation: VariantRelation = NO_VARIANT

    @property
    def form(self) -> str:
        return join_phonemes(self.phonemes)

    @property
    def syllable_count(self) -> int:
        return len(self.original)

    @property
    def succeeded(self) -> bool:
        return self.method is not AssignMethod.FAILED


@dataclass
class AssignmentStats:
    total_words: int
    method_counts: Dict[str, int]
    syllables_eliminated: int
    window_size: int
    window_success_rates: List[float] = field(default_factory=list)
    failed_words: List[str] = field(default_factory=list)

    @property
    def success_rate(self) -> float:
        if not self.total_words:
            return 1.0
        return 1 - len(self.failed_words) / self.total_words

    def as_dict(self) -> Dict[str, object]:
        return {
            "total_words": self.total_words,
            "method_counts": dict(self.method_counts),
            "syllables_eliminated": self.syllables_eliminated,
            "success_rate": self.success_rate,
            "window_size": self.window_size,
            "window_success_rates": list(self.window_success_rates),
            "failed_words": list(self.failed_words),
        }


class AssignmentSession:
    """Mutable state of one assignment run.

    ``seen`` holds every claimed form. Claiming a form also drops the
    candidate of that form from the pool, which is what keeps a form from
    being handed out twice.
    """

    def __init__(self, pool: CandidatePool) -> None:
        self.pool = pool
        self.seen: Set[str] = set()
        self.records: Dict[str, AssignmentRecord] = {}
        self.method_counts: Counter = Counter()

    def is_claimed(self, form: Syllable) -> bool:
        return join_phonemes(form) in self.seen

    def is_assigned(self, word: str) -> bool:
        return word in self.records

    def claim(self, form: Syllable) -> str:
        joined = join_phonemes(form)
        self.seen.add(joined)
        self.pool.remove(joined)
        return joined

    def record(self, record: AssignmentRecord) -> None:
        self.records[record.word] = record
        self.method_counts[record.method.value] += 1
        if record.succeeded:
            self.claim(record.phonemes)

    def get(self, word: str) -> Optional[AssignmentRecord]:
        return self.records.get(word)

    def __len__(self) -> int:
        return len(self.records)


Strategy = Callable[[AssignmentSession, WordEntry, float], Optional[Syllable]]


class AssignmentEngine:
    """Assign a unique one-syllable form to every dictionary word."""

    def __init__(
        self,
        dictionary: Dictionary,
        graph: SonorityGraph,
        *,
        params: Optional[AssignmentParameters] = None,
        scoring: Optional[ScoringParameters] = None,
        rng: Optional[random.Random] = None,
        show_progress: bool = False,
    ) -> None:
        self.dictionary = dictionary
        self.graph = graph
        self.params = params or AssignmentParameters()
        self.scorer = SyllableScorer(scoring)
        self.rng = rng or random.Random()
        self.show_progress = show_progress
        self._variants: Dict[str, Dict[VariantCategory, WordEntry]] = {}

        self._logger = get_logger(__name__).bind(component="assignment_engine")
        self._metric_assignments = create_counter(
            "monosyllabize_assignments_total",
            "Words assigned a one-syllable form, by method.",
            label_names=("method",),
        )
        self._metric_duplicates = create_counter(
            "monosyllabize_duplicate_assignments_total",
            "Words sharing a form with another non one-syllable word.",
        )

        self._strategies: Tuple[Tuple[AssignMethod, Strategy], ...] = (
            (AssignMethod.DIRECT, self._direct),
            (AssignMethod.GRAPH_ORDERED, self._graph_ordered),
            (AssignMethod.GRAPH_REMOVED, self._graph_removed),
            (AssignMethod.GRAPH, self._graph_unordered),
            (AssignMethod.CHOICE, self._choice),
            (AssignMethod.RANDOM, self._random),
        )

    def english_variants(self, word: str) -> Dict[VariantCategory, WordEntry]:
        variants = self._variants.get(word)
        if variants is None:
            variants = find_english_variants(word, self.dictionary)
            self._variants[word] = variants
        return variants

    def run(self, pool: CandidatePool) -> AssignmentSession:
        """Assign every dictionary word, consuming ``pool``."""

        session = AssignmentSession(pool)
        self._logger.info(
            "Assignment started",
            context={
                "words": len(self.dictionary),
                "candidates": len(pool),
                "features": sorted(self.params.features),
            },
        )
        self._assign_single_syllable_words(session)
        self._assign_variant_families(session)
        self._assign_remaining(session)
        self._logger.info(
            "Assignment finished",
            context={"words": len(session), "methods": dict(session.method_counts)},
        )
        return session

    def _record(self, session: AssignmentSession, record: AssignmentRecord) -> None:
        session.record(record)
        self._metric_assignments.labels(method=record.method.value).inc()

    # pass 0

    def _assign_single_syllable_words(self, session: AssignmentSession) -> None:
        bases: List[Tuple[WordEntry, CandidateSyllable]] = []
        for entry in self.dictionary:
            if not entry.is_monosyllabic or session.is_assigned(entry.word):
                continue
            candidate = session.pool.get(join_phonemes(entry.syllables[0]))
            if candidate is not None and candidate.variations:
                bases.append((entry, candidate))
            self._record(
                session,
                AssignmentRecord(
                    entry.word, entry.syllables, entry.syllables[0], AssignMethod.ALREADY_ONE_SYLLABLE
                ),
            )

        # promotions run after every one-syllable form is claimed so none of
        # them can collide with a real one-syllable word
        for entry, candidate in bases:
            for category, sibling in self.english_variants(entry.word).items():
                if sibling.is_monosyllabic or session.is_assigned(sibling.word):
                    continue
                form = candidate.variations.get(category)
                if form is None:
                    continue
                if session.is_claimed(form) and not self.params.homonyms:
                    continue
                self._record(
                    session,
                    AssignmentRecord(
                        sibling.word,
                        sibling.syllables,
                        form,
                        AssignMethod.SINGLE_SYLLABLE_VARIANT,
                        Variant(category, entry.word),
                    ),
                )

    # pass 1

    def _family(self, entry: WordEntry, session: AssignmentSession) -> Dict[VariantCategory, WordEntry]:
        family: Dict[VariantCategory, WordEntry] = {}
        claimed_words = set()
        for category, sibling in self.english_variants(entry.word).items():
            if sibling.is_monosyllabic or session.is_assigned(sibling.word):
                continue
            # "bigger" answers both actor and comparative; keep the first
            if sibling.word in claimed_words:
                continue
            claimed_words.add(sibling.word)
            family[category] = sibling
        return family

    def _best_family_candidate(
        self,
        entry: WordEntry,
        family: Dict[VariantCategory, WordEntry],
        session: AssignmentSession,
    ) -> Optional[CandidateSyllable]:
        target = entry.phonemes
        best: Optional[CandidateSyllable] = None
        best_score = float("-inf")
        for candidate in session.pool.bucket(frozenset(family)):
            if not self.params.homonyms and any(form in session.seen for form in candidate.forms()):
                continue
            score = self.scorer.score(candidate.syllable, target)
            if score > best_score:
                best, best_score = candidate, score
            if score >= self.scorer.perfect_score(candidate.syllable):
                break
        return best

    def _assign_variant_families(self, session: AssignmentSession) -> None:
        for entry in self.dictionary:
            if entry.is_monosyllabic or session.is_assigned(entry.word):
                continue
            family = self._family(entry, session)
            if not family:
                continue
            candidate = self._best_family_candidate(entry, family, session)
            if candidate is None:
                continue

            session.pool.remove(candidate.key)
            self._record(
                session,
                AssignmentRecord(entry.word, entry.syllables, candidate.syllable, AssignMethod.VARIANT),
            )
            # the bucket signature equals the family categories, so every
            # derived word has a variation waiting for it
            for category, sibling in family.items():
                form = candidate.variations[category]
                self._record(
                    session,
                    AssignmentRecord(
                        sibling.word,
                        sibling.syllables,
                        form,
                        AssignMethod.VARIANT,
                        Variant(category, entry.word),
                    ),
                )

    # pass 2

    def _assign_remaining(self, session: AssignmentSession) -> None:
        total = len(self.dictionary)
        pending = [
            (index, entry)
            for index, entry in enumerate(self.dictionary)
            if not session.is_assigned(entry.word)
        ]
        for index, entry in tqdm(pending, desc="assigning", unit="word", disable=not self.show_progress):
            self._record(session, self.assign_word(session, entry, index / total))

    def assign_word(self, session: AssignmentSession, entry: WordEntry, progress: float = 0.0) -> AssignmentRecord:
        """Walk the fallback chain for one word, without recording the result."""

        for method, strategy in self._strategies:
            form = strategy(session, entry, progress)
            if form:
                return AssignmentRecord(entry.word, entry.syllables, form, method)
        self._logger.debug("No strategy produced a form", context={"word": entry.word})
        return AssignmentRecord(entry.word, entry.syllables, (f"[{entry.word}]",), AssignMethod.FAILED)

    def _direct(self, session: AssignmentSession, entry: WordEntry, progress: float) -> Optional[Syllable]:
        for syllable in entry.syllables:
            if syllable and not session.is_claimed(syllable):
                return syllable
        return None

    def _from_graph(
        self,
        session: AssignmentSession,
        entry: WordEntry,
        *,
        force_order: bool,
        use_once_only: bool,
    ) -> Optional[Syllable]:
        palette = entry.phonemes
        for _ in range(self.params.graph_attempts):
            form = self.graph.generate_from_palette(
                palette,
                force_order=force_order,
                use_once_only=use_once_only,
                rng=self.rng,
            )
            if form and not session.is_claimed(form):
                return form
        return None

    def _graph_ordered(self, session: AssignmentSession, entry: WordEntry, progress: float) -> Optional[Syllable]:
        return self._from_graph(session, entry, force_order=True, use_once_only=False)

    def _graph_removed(self, session: AssignmentSession, entry: WordEntry, progress: float) -> Optional[Syllable]:
        return self._from_graph(session, entry, force_order=False, use_once_only=True)

    def _graph_unordered(self, session: AssignmentSession, entry: WordEntry, progress: float) -> Optional[Syllable]:
        return self._from_graph(session, entry, force_order=False, use_once_only=False)

    def _choice(self, session: AssignmentSession, entry: WordEntry, progress: float) -> Optional[Syllable]:
        target = entry.phonemes
        multiplier = self.scorer.params.choice_cutoff(progress)
        best: Optional[Syllable] = None
        best_score = 0.0
        for candidate in session.pool.values():
            if session.is_claimed(candidate.syllable):
                continue
            score = self.scorer.score(candidate.syllable, target)
            if score > best_score:
                best, best_score = candidate.syllable, score
                if score >= multiplier * len(candidate.syllable):
                    break
        return best

    def _random(self, session: AssignmentSession, entry: WordEntry, progress: float) -> Optional[Syllable]:
        # claiming a form drops it from the pool, so the head is unclaimed
        candidate = session.pool.first()
        return candidate.syllable if candidate is not None else None

    # reporting

    def stats(self, session: AssignmentSession) -> AssignmentStats:
        window = max(1, self.params.report_window)
        rates: List[float] = []
        failed: List[str] = []
        eliminated = 0
        in_window = successes = 0
        for entry in self.dictionary:
            record = session.get(entry.word)
            if record is None:
                continue
            if record.succeeded:
                successes += 1
                eliminated += record.syllable_count - 1
            else:
                failed.append(record.word)
            in_window += 1
            if in_window == window:
                rates.append(successes / window)
                in_window = successes = 0
        if in_window:
            rates.append(successes / in_window)
        return AssignmentStats(
            total_words=len(session),
            method_counts=dict(session.method_counts),
            syllables_eliminated=eliminated,
            window_size=window,
            window_success_rates=rates,
            failed_words=failed,
        )

    def find_duplicates(self, session: AssignmentSession) -> List[Tuple[str, str]]:
        """``(word, form)`` pairs for forms shared by several assigned words.

        One-syllable words keeping their own form are left out, real English
        homophones are expected there.
        """

        by_form: Dict[str, List[str]] = defaultdict(list)
        for record in session.records.values():
            if record.method is AssignMethod.ALREADY_ONE_SYLLABLE or not record.succeeded:
                continue
            by_form[record.form].append(record.word)

        duplicates = [
            (word, form) for form, words in by_form.items() if len(words) > 1 for word in words
        ]
        if duplicates:
            self._metric_duplicates.inc(len(duplicates))
            log = self._logger.info if self.params.homonyms else self._logger.warning
            log(
                "Duplicate assignments found",
                context={"count": len(duplicates), "homonyms": self.params.homonyms},
            )
        return duplicates


__all__ = [
    "AssignMethod",
    "AssignmentRecord",
    "AssignmentStats",
    "AssignmentSession",
    "AssignmentEngine",
]
