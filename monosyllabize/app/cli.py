"""Command line entry point for the monosyllabize batch pipeline."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from monosyllabize.core import AssignmentParameters, GenerationParameters, convert_text
from monosyllabize.core.parameters import KNOWN_FEATURES
from monosyllabize.errors import MonosyllabizeError
from monosyllabize.utils.logging_config import configure_logging
from monosyllabize.utils.observability import get_logger
from monosyllabize.utils.telemetry import TelemetryLogger

from .data.storage import ArtifactStore
from .pipeline import MonosyllabizePipeline, PipelineSettings


def _parse_list(values: Optional[Sequence[str]]) -> List[str]:
    """Normalize CLI list arguments.

    Accepts comma-separated strings as well as separate tokens, so
    ``--features homonyms`` and ``--features a,b`` both work.
    """

    if not values:
        return []

    items: List[str] = []
    for value in values:
        parts = [part.strip() for part in str(value).split(",")]
        items.extend(part for part in parts if part)
    return items


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="monosyllabize",
        description="Assign a unique one-syllable pseudo-word to every dictionary word.",
    )
    parser.add_argument(
        "--frequencies",
        type=Path,
        default=Path("inputs/word_frequency.txt"),
        help="Word frequency list, one 'word<TAB>count' per line, most common first.",
    )
    parser.add_argument(
        "--dictionary",
        type=Path,
        default=Path("inputs/cmudict.0.6-syl.txt"),
        help="Syllabified CMU pronouncing dictionary.",
    )
    parser.add_argument(
        "--transcriptions",
        type=Path,
        help="Flat IPA transcription list to segment instead of the CMU dictionary.",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("outputs"),
        help="Directory for cached artifacts and results (defaults to outputs/).",
    )
    parser.add_argument("--seed", type=int, help="Seed for reproducible generation.")
    parser.add_argument(
        "--attempts",
        type=int,
        default=GenerationParameters().attempts,
        help="Random syllable generation attempts for the candidate pool.",
    )
    parser.add_argument(
        "--target-size",
        type=int,
        help="Stop generating once the candidate pool has this many syllables.",
    )
    parser.add_argument(
        "--features",
        nargs="*",
        metavar="FEATURE",
        help=f"Feature flags ({', '.join(sorted(KNOWN_FEATURES))}).",
    )
    parser.add_argument(
        "--rebuild",
        action="store_true",
        help="Ignore cached corpus, graph and candidate pool artifacts.",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable progress bars.",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (overrides MONOSYLLABIZE_LOG_LEVEL).",
    )
    parser.add_argument(
        "--convert",
        metavar="TEXT",
        help="Convert TEXT with a previously written table instead of running the pipeline.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit the run report as JSON.",
    )
    return parser


def _resolve_settings(namespace: argparse.Namespace, parser: argparse.ArgumentParser) -> PipelineSettings:
    features = frozenset(_parse_list(namespace.features))
    unknown = features - KNOWN_FEATURES
    if unknown:
        parser.error(f"unknown feature(s): {', '.join(sorted(unknown))}")

    generation = dataclasses.replace(
        GenerationParameters(),
        attempts=namespace.attempts,
        target_size=namespace.target_size,
    )
    return PipelineSettings(
        frequency_path=namespace.frequencies,
        dictionary_path=namespace.dictionary,
        transcription_path=namespace.transcriptions,
        output_dir=namespace.output_dir,
        seed=namespace.seed,
        rebuild=namespace.rebuild,
        show_progress=not namespace.no_progress,
        generation=generation,
        assignment=AssignmentParameters(features=features),
    )


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    logger = get_logger(__name__).bind(component="cli")

    if args.convert is not None:
        try:
            table = ArtifactStore(args.output_dir).load_table()
        except MonosyllabizeError as exc:
            logger.error("Cannot convert text", context={"error": str(exc)})
            return 1
        converted = convert_text(table, args.convert)
        print(converted.text)
        print(
            f"{converted.syllables_removed} of {converted.total_syllables} syllables removed",
            file=sys.stderr,
        )
        return 0

    settings = _resolve_settings(args, parser)
    pipeline = MonosyllabizePipeline(settings)
    pipeline.telemetry.add_listener(
        TelemetryLogger(level_map={"timer_started": logging.DEBUG, "counter": logging.DEBUG})
    )
    try:
        result = pipeline.run()
    except MonosyllabizeError as exc:
        logger.error("Pipeline aborted", context={"error": str(exc)})
        return 1

    report = result.stats.as_dict()
    report["duplicates"] = len(result.duplicates)
    if args.json:
        json.dump(report, sys.stdout, indent=2, ensure_ascii=False, sort_keys=True)
        sys.stdout.write("\n")
        return 0

    print(f"words:                {report['total_words']}")
    print(f"syllables eliminated: {report['syllables_eliminated']}")
    print(f"success rate:         {report['success_rate']:.2%}")
    print(f"duplicates:           {report['duplicates']}")
    for method, count in sorted(report["method_counts"].items(), key=lambda item: -item[1]):
        print(f"  {method:<22}{count}")
    return 0


__all__ = ["main"]
