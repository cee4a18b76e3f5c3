"""Word entries and the frequency-ordered dictionary."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .phonemes import Phoneme, Syllable


@dataclass(frozen=True)
class WordEntry:
    """A word and its canonical pronunciation split into syllables."""

    word: str
    syllables: Tuple[Syllable, ...]

    def __post_init__(self) -> None:
        if not self.syllables:
            raise ValueError(f"{self.word!r} has no syllables")

    @classmethod
    def create(cls, word: str, syllables: Iterable[Sequence[Phoneme]]) -> "WordEntry":
        return cls(word.lower(), tuple(tuple(syllable) for syllable in syllables))

    @property
    def syllable_count(self) -> int:
        return len(self.syllables)

    @property
    def is_monosyllabic(self) -> bool:
        return len(self.syllables) == 1

    @property
    def phonemes(self) -> Tuple[Phoneme, ...]:
        return tuple(phoneme for syllable in self.syllables for phoneme in syllable)


class Dictionary:
    """Frequency-ordered word entries with constant time lookup.

    Order is significant: the assignment passes walk it front to back so
    common words claim the best fitting syllables first.
    """

    def __init__(self, entries: Iterable[WordEntry] = ()) -> None:
        self._entries: List[WordEntry] = []
        self._index: Dict[str, WordEntry] = {}
        for entry in entries:
            self.add(entry)

    def add(self, entry: WordEntry) -> None:
        if entry.word in self._index:
            return
        self._entries.append(entry)
        self._index[entry.word] = entry

    def get(self, word: str) -> Optional[WordEntry]:
        return self._index.get(word.lower())

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and word.lower() in self._index

    def __iter__(self) -> Iterator[WordEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def syllables(self) -> Iterator[Syllable]:
        for entry in self._entries:
            yield from entry.syllables

    def to_rows(self) -> List[List[object]]:
        return [[entry.word, [list(syllable) for syllable in entry.syllables]] for entry in self._entries]

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[object]]) -> "Dictionary":
        entries = []
        for row in rows:
            word, syllables = row[0], row[1]
            entries.append(WordEntry.create(str(word), syllables))  # type: ignore[arg-type]
        return cls(entries)


__all__ = ["WordEntry", "Dictionary"]
