"""Lookup table of final forms and word-by-word text conversion."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from .assignment import AssignmentRecord
from .respell import respell

_TOKEN_SPLIT = re.compile(r"([ \n\t]+)")
_WORD_PATTERN = re.compile(r"([^a-zA-Z']*)([a-zA-Z']+)(.*)", re.DOTALL)


@dataclass(frozen=True)
class TableRow:
    word: str
    ipa: str
    respelled: str
    syllable_count: int

    def to_row(self) -> List[object]:
        return [self.word, self.ipa, self.respelled, self.syllable_count]


class MonosyllabicTable:
    """Final ``word -> (ipa, respelled, original syllable count)`` table."""

    def __init__(self, rows: Iterable[TableRow] = ()) -> None:
        self._rows: Dict[str, TableRow] = {}
        for row in rows:
            self._rows[row.word.lower()] = row

    @classmethod
    def from_records(cls, records: Iterable[AssignmentRecord]) -> "MonosyllabicTable":
        rows = []
        for record in records:
            ipa = record.form
            # failed placeholders are shown as-is
            respelled = respell(record.phonemes) if record.succeeded else ipa
            rows.append(TableRow(record.word, ipa, respelled, record.syllable_count))
        return cls(rows)

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[object]]) -> "MonosyllabicTable":
        return cls(
            TableRow(str(word), str(ipa), str(respelled), int(count))  # type: ignore[call-overload]
            for word, ipa, respelled, count in rows
        )

    def get(self, word: str) -> Optional[TableRow]:
        return self._rows.get(word.lower())

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and word.lower() in self._rows

    def __iter__(self) -> Iterator[TableRow]:
        return iter(self._rows.values())

    def __len__(self) -> int:
        return len(self._rows)

    def to_rows(self) -> List[List[object]]:
        return [row.to_row() for row in self._rows.values()]


@dataclass(frozen=True)
class ConvertedToken:
    original: str
    kind: str
    converted: Optional[str] = None

    @property
    def text(self) -> str:
        if self.kind == "mono" and self.converted is not None:
            return self.converted
        if self.kind == "whitespace":
            return " "
        if self.kind == "newline":
            return "\n"
        return self.original


@dataclass
class ConvertedText:
    tokens: List[ConvertedToken] = field(default_factory=list)
    total_syllables: int = 0
    syllables_removed: int = 0

    @property
    def text(self) -> str:
        return "".join(token.text for token in self.tokens)


def convert_text(table: MonosyllabicTable, text: str) -> ConvertedText:
    """Replace every known word of ``text`` by its respelled form.

    Punctuation around a word is kept. Unknown words pass through, runs of
    whitespace collapse to a single space or newline.
    """

    result = ConvertedText()
    if not text:
        return result

    for piece in _TOKEN_SPLIT.split(text):
        if not piece:
            continue
        if piece.isspace():
            kind = "newline" if "\n" in piece else "whitespace"
            result.tokens.append(ConvertedToken(piece, kind))
            continue
        match = _WORD_PATTERN.match(piece)
        if match is None:
            result.tokens.append(ConvertedToken(piece, "unknown"))
            continue

        prefix, word, suffix = match.groups()
        row = table.get(word)
        if row is None:
            result.tokens.append(ConvertedToken(piece, "unknown"))
            continue

        result.total_syllables += row.syllable_count
        result.syllables_removed += row.syllable_count - 1
        kind = "alreadyOneSyllable" if row.syllable_count == 1 else "mono"
        result.tokens.append(ConvertedToken(piece, kind, prefix + row.respelled + suffix))
    return result


__all__ = [
    "TableRow",
    "MonosyllabicTable",
    "ConvertedToken",
    "ConvertedText",
    "convert_text",
]
