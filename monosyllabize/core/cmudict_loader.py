"""Loaders turning the raw dictionary inputs into a :class:`Dictionary`.

Two pronunciation sources are supported:

* the syllabified CMU pronouncing dictionary (``cmudict.0.6-syl``), whose
  ARPABET pronunciations already carry ``.`` syllable breaks;
* a tab-separated list of flat IPA transcriptions, split into syllables by
  :class:`~monosyllabize.core.partition.SyllableBoundaryAssigner`.

Either way the words are ordered by the frequency list, most common first,
with unranked dictionary words appended in file order.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pronouncing

from monosyllabize.errors import DictionaryLoadError, SegmentationError
from monosyllabize.utils.observability import get_logger
from monosyllabize.utils.syllables import estimate_syllable_count, split_orthographic_syllables

from .lexicon import Dictionary, WordEntry
from .partition import SyllableBoundaryAssigner
from .phonemes import Syllable, arpabet_to_ipa

_WORD_VARIANT_PATTERN = re.compile(r"\(\d+\)$")

_LOGGER = get_logger(__name__).bind(component="dictionary_loader")


def _read_lines(path: Path, label: str) -> List[str]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            return handle.read().splitlines()
    except FileNotFoundError as exc:
        raise DictionaryLoadError(f"{label} not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise DictionaryLoadError(f"{label} could not be read: {path} ({exc})") from exc


def load_word_frequencies(path: Path | str, cutoff: Optional[int] = 60_000) -> List[str]:
    """Return the ranked words of a ``word<TAB>count`` frequency list."""

    words: List[str] = []
    seen = set()
    for line in _read_lines(Path(path), "word frequency list"):
        word = line.split("\t", 1)[0].strip().lower()
        if not word or word in seen:
            continue
        seen.add(word)
        words.append(word)
        if cutoff is not None and len(words) >= cutoff:
            break
    if not words:
        raise DictionaryLoadError(f"word frequency list is empty: {path}")
    return words


def order_by_frequency(
    pronunciations: Dict[str, Tuple[Syllable, ...]],
    ranked_words: Sequence[str],
) -> Dictionary:
    """Order ``pronunciations`` by ``ranked_words``; unranked words go last."""

    dictionary = Dictionary()
    for word in ranked_words:
        syllables = pronunciations.get(word)
        if syllables:
            dictionary.add(WordEntry(word, syllables))
    for word, syllables in pronunciations.items():
        if syllables and word not in dictionary:
            dictionary.add(WordEntry(word, syllables))
    return dictionary


class CMUDictLoader:
    """Lazy loader for the syllabified CMU pronouncing dictionary."""

    def __init__(self, dict_path: Path | str) -> None:
        self.dict_path = Path(dict_path)
        self._syllables: Dict[str, Tuple[Syllable, ...]] = {}
        self._loaded = False

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return

        syllables: Dict[str, Tuple[Syllable, ...]] = {}
        for line in _read_lines(self.dict_path, "pronunciation dictionary"):
            entry = line.strip()
            if not entry or entry.startswith("#") or entry.startswith(";;;"):
                continue
            parts = entry.split("  ", 1)
            if len(parts) < 2:
                _LOGGER.debug("Skipping malformed dictionary line", context={"line": entry})
                continue
            raw_word, sounds = parts
            # alternate pronunciations (WORD(2)) are ignored
            if _WORD_VARIANT_PATTERN.search(raw_word):
                continue
            parsed = tuple(
                tuple(arpabet_to_ipa(phone) for phone in chunk.split())
                for chunk in sounds.split(".")
                if chunk.strip()
            )
            if parsed:
                syllables[raw_word.lower()] = parsed

        if not syllables:
            raise DictionaryLoadError(f"pronunciation dictionary is empty: {self.dict_path}")
        self._syllables = syllables
        self._loaded = True
        _LOGGER.info("Pronunciation dictionary loaded", context={"words": len(syllables)})

    def get_syllables(self, word: str) -> Tuple[Syllable, ...]:
        self._ensure_loaded()
        return self._syllables.get(word.lower(), ())

    def pronunciations(self) -> Dict[str, Tuple[Syllable, ...]]:
        self._ensure_loaded()
        return dict(self._syllables)

    def load_dictionary(self, ranked_words: Sequence[str]) -> Dictionary:
        return order_by_frequency(self.pronunciations(), ranked_words)


def reference_syllable_count(word: str) -> int:
    """Syllable count for ``word`` from CMU data, else a spelling estimate."""

    phones = pronouncing.phones_for_word(word.lower())
    if phones:
        return max(1, pronouncing.syllable_count(phones[0]))
    return estimate_syllable_count(word)


class TranscriptionLoader:
    """Load ``word<TAB>reference-syllables<TAB>IPA`` lines.

    The reference column holds the orthographic syllables joined by ``-``
    (``busi-ness``). When it is empty the syllable count comes from
    :func:`reference_syllable_count` and the spelling is split heuristically.
    """

    def __init__(
        self,
        path: Path | str,
        *,
        assigner: Optional[SyllableBoundaryAssigner] = None,
    ) -> None:
        self.path = Path(path)
        self.assigner = assigner or SyllableBoundaryAssigner()
        self.skipped: List[str] = []

    def _reference_for(self, word: str, column: str) -> List[str]:
        pieces = [piece for piece in column.strip().split("-") if piece]
        if pieces:
            return pieces
        return split_orthographic_syllables(word, reference_syllable_count(word))

    def parse_lines(self, lines: Iterable[str]) -> Dict[str, Tuple[Syllable, ...]]:
        pronunciations: Dict[str, Tuple[Syllable, ...]] = {}
        for line in lines:
            if not line.strip() or line.startswith("#"):
                continue
            columns = line.rstrip("\n").split("\t")
            if len(columns) < 3:
                _LOGGER.debug("Skipping malformed transcription line", context={"line": line})
                continue
            word = columns[0].strip().lower()
            if not word or word in pronunciations:
                continue
            reference = self._reference_for(word, columns[1])
            try:
                syllables = self.assigner.assign(word, reference, columns[2])
            except SegmentationError as exc:
                self.skipped.append(word)
                _LOGGER.warning("Skipping word without transcription", context={"error": str(exc)})
                continue
            pronunciations[word] = tuple(syllables)
        return pronunciations

    def load_dictionary(self, ranked_words: Sequence[str]) -> Dictionary:
        pronunciations = self.parse_lines(_read_lines(self.path, "transcription list"))
        if not pronunciations:
            raise DictionaryLoadError(f"transcription list is empty: {self.path}")
        _LOGGER.info(
            "Transcriptions segmented",
            context={"words": len(pronunciations), "skipped": len(self.skipped)},
        )
        return order_by_frequency(pronunciations, ranked_words)


__all__ = [
    "CMUDictLoader",
    "TranscriptionLoader",
    "load_word_frequencies",
    "order_by_frequency",
    "reference_syllable_count",
]
