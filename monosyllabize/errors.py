"""Exception hierarchy for the monosyllabize pipeline."""

from __future__ import annotations


class MonosyllabizeError(Exception):
    """Base class for pipeline errors."""


class DictionaryLoadError(MonosyllabizeError):
    """A required input file (dictionary, frequency list) is missing or corrupt."""


class SegmentationError(MonosyllabizeError):
    """A word declares syllables but has no transcription to split."""

    def __init__(self, word: str, message: str = "empty transcription") -> None:
        super().__init__(f"{word}: {message}")
        self.word = word


class ArtifactError(MonosyllabizeError):
    """A persisted intermediate artifact (graph, pool) could not be read."""


__all__ = [
    "MonosyllabizeError",
    "DictionaryLoadError",
    "SegmentationError",
    "ArtifactError",
]
