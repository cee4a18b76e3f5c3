"""End-to-end batch run: corpus -> graph -> candidate pool -> assignment."""

from __future__ import annotations

import random
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, TypeVar

from monosyllabize.core import (
    AlternativeParameters,
    AssignmentEngine,
    AssignmentParameters,
    AssignmentSession,
    AssignmentStats,
    CandidatePool,
    CMUDictLoader,
    Dictionary,
    GenerationParameters,
    GraphParameters,
    MonosyllabicTable,
    PartitionWeights,
    ScoringParameters,
    SonorityGraph,
    SyllableBoundaryAssigner,
    TranscriptionLoader,
    build_candidate_pool,
    load_word_frequencies,
)
from monosyllabize.errors import ArtifactError
from monosyllabize.utils.observability import (
    add_span_attributes,
    create_histogram,
    get_logger,
    record_exception,
    start_span,
)
from monosyllabize.utils.telemetry import StructuredTelemetry

from .data.storage import (
    CANDIDATES_FILE,
    GRAPH_FILE,
    REPORT_FILE,
    SYLLABIFIED_FILE,
    ArtifactStore,
)

T = TypeVar("T")


@dataclass
class PipelineSettings:
    """Paths and tunables for one pipeline run.

    Either ``dictionary_path`` (syllabified CMU dictionary) or
    ``transcription_path`` (flat IPA transcriptions) supplies the
    pronunciations; the transcription list wins when both are set.
    """

    frequency_path: Path = Path("inputs/word_frequency.txt")
    dictionary_path: Optional[Path] = Path("inputs/cmudict.0.6-syl.txt")
    transcription_path: Optional[Path] = None
    output_dir: Path = Path("outputs")
    seed: Optional[int] = None
    rebuild: bool = False
    show_progress: bool = True
    generation: GenerationParameters = field(default_factory=GenerationParameters)
    graph: GraphParameters = field(default_factory=GraphParameters)
    alternatives: AlternativeParameters = field(default_factory=AlternativeParameters)
    assignment: AssignmentParameters = field(default_factory=AssignmentParameters)
    scoring: ScoringParameters = field(default_factory=ScoringParameters)
    partition: PartitionWeights = field(default_factory=PartitionWeights)


@dataclass
class PipelineResult:
    table: MonosyllabicTable
    session: AssignmentSession
    stats: AssignmentStats
    duplicates: List[Tuple[str, str]]
    telemetry: Dict[str, Any]


class MonosyllabizePipeline:
    """Runs every stage, caching the expensive intermediate artifacts."""

    def __init__(
        self,
        settings: Optional[PipelineSettings] = None,
        *,
        store: Optional[ArtifactStore] = None,
        telemetry: Optional[StructuredTelemetry] = None,
    ) -> None:
        self.settings = settings or PipelineSettings()
        self.store = store or ArtifactStore(self.settings.output_dir)
        self.telemetry = telemetry or StructuredTelemetry()
        self.rng = random.Random(self.settings.seed)
        self._logger = get_logger(__name__).bind(component="pipeline")
        self._metric_stage_duration = create_histogram(
            "monosyllabize_stage_seconds",
            "Duration of monosyllabize pipeline stages.",
            label_names=("stage",),
        )

    @contextmanager
    def _stage(self, name: str, attributes: Optional[Dict[str, Any]] = None) -> Iterator[Dict[str, Any]]:
        with start_span(f"monosyllabize.{name}", attributes) as span:
            with self._metric_stage_duration.labels(stage=name).time():
                with self.telemetry.timer(name) as metadata:
                    try:
                        yield metadata
                    except Exception as exc:
                        record_exception(span, exc)
                        raise
                    add_span_attributes(span, metadata)

    def _cached(self, artifact: str, load: Callable[[], T], build: Callable[[], T], save: Callable[[T], Any]) -> T:
        if not self.settings.rebuild and self.store.exists(artifact):
            try:
                value = load()
            except ArtifactError as exc:
                self._logger.warning(
                    "Cached artifact unusable, rebuilding",
                    context={"artifact": artifact, "error": str(exc)},
                )
            else:
                self.telemetry.increment(f"cache.{artifact}.hit")
                return value
        self.telemetry.increment(f"cache.{artifact}.miss")
        value = build()
        save(value)
        return value

    # Stages ----------------------------------------------------------------
    def _build_corpus(self) -> Dictionary:
        settings = self.settings
        ranked = load_word_frequencies(
            settings.frequency_path, settings.generation.word_frequency_cutoff
        )
        if settings.transcription_path is not None:
            loader = TranscriptionLoader(
                settings.transcription_path,
                assigner=SyllableBoundaryAssigner(settings.partition),
            )
            return loader.load_dictionary(ranked)
        if settings.dictionary_path is None:
            raise ValueError("a dictionary or transcription path is required")
        return CMUDictLoader(settings.dictionary_path).load_dictionary(ranked)

    def load_corpus(self) -> Dictionary:
        with self._stage("corpus") as metadata:
            dictionary = self._cached(
                SYLLABIFIED_FILE,
                self.store.load_dictionary,
                self._build_corpus,
                self.store.save_dictionary,
            )
            metadata["words"] = len(dictionary)
        return dictionary

    def load_graph(self, dictionary: Dictionary) -> SonorityGraph:
        params = self.settings.graph
        with self._stage("graph") as metadata:
            graph = self._cached(
                GRAPH_FILE,
                lambda: self.store.load_graph(params),
                lambda: SonorityGraph.build(dictionary.syllables(), params),
                self.store.save_graph,
            )
            metadata["onset_keys"] = len(graph.onset)
            metadata["coda_keys"] = len(graph.coda)
        return graph

    def load_pool(self, graph: SonorityGraph) -> CandidatePool:
        generation = self.settings.generation
        with self._stage("candidates", {"attempts": generation.attempts}) as metadata:
            pool = self._cached(
                CANDIDATES_FILE,
                self.store.load_pool,
                lambda: build_candidate_pool(
                    graph,
                    generation.attempts,
                    self.rng,
                    params=self.settings.alternatives,
                    target_size=generation.target_size,
                    show_progress=self.settings.show_progress,
                ),
                self.store.save_pool,
            )
            metadata["candidates"] = len(pool)
            metadata["with_variations"] = pool.with_variations
        return pool

    def run(self) -> PipelineResult:
        self.telemetry.start_trace("monosyllabize.run")
        self.telemetry.annotate("seed", self.settings.seed)
        self.telemetry.annotate("features", sorted(self.settings.assignment.features))

        dictionary = self.load_corpus()
        graph = self.load_graph(dictionary)
        pool = self.load_pool(graph)

        engine = AssignmentEngine(
            dictionary,
            graph,
            params=self.settings.assignment,
            scoring=self.settings.scoring,
            rng=self.rng,
            show_progress=self.settings.show_progress,
        )
        with self._stage("assignment") as metadata:
            session = engine.run(pool)
            stats = engine.stats(session)
            duplicates = engine.find_duplicates(session)
            metadata.update(
                {
                    "words": stats.total_words,
                    "failed": len(stats.failed_words),
                    "duplicates": len(duplicates),
                }
            )

        with self._stage("outputs"):
            table = MonosyllabicTable.from_records(
                session.records[entry.word] for entry in dictionary if session.is_assigned(entry.word)
            )
            self.store.save_table(table)
            self.store.save_duplicates(duplicates)
            report = stats.as_dict()
            report["duplicates"] = len(duplicates)
            self.store.write_json(REPORT_FILE, report)

        for method, count in stats.method_counts.items():
            self.telemetry.increment(f"assigned.{method}", count)
        self._logger.info(
            "Pipeline finished",
            context={
                "words": stats.total_words,
                "syllables_eliminated": stats.syllables_eliminated,
                "success_rate": round(stats.success_rate, 4),
                "duplicates": len(duplicates),
            },
        )
        return PipelineResult(
            table=table,
            session=session,
            stats=stats,
            duplicates=duplicates,
            telemetry=self.telemetry.snapshot(),
        )


__all__ = ["PipelineSettings", "PipelineResult", "MonosyllabizePipeline"]
