"""Orthographic syllable heuristics used when no reference split is known."""

from __future__ import annotations

import re
from typing import List

__all__ = ["estimate_syllable_count", "split_orthographic_syllables"]


_VOWEL_GROUP_PATTERN = re.compile(r"[aeiouy]+")


def estimate_syllable_count(word: str) -> int:
    """Estimate the number of syllables in ``word`` using basic heuristics."""

    normalized = word.lower()
    vowel_groups = _VOWEL_GROUP_PATTERN.findall(normalized)
    syllable_count = len(vowel_groups)

    if normalized.endswith("e") and not normalized.endswith("le") and syllable_count > 1:
        syllable_count -= 1

    return max(1, syllable_count)


def split_orthographic_syllables(word: str, count: int) -> List[str]:
    """Split ``word`` into ``count`` contiguous chunks at plausible breaks.

    Breaks fall before the last consonant between two vowel groups
    (``fan|cy``, ``ba|con``). When the vowel groups disagree with
    ``count`` the shortest chunk is merged into its shorter neighbour, or the
    longest chunk is halved.
    The chunks always join back to ``word``.
    """

    normalized = word.lower()
    if count <= 1 or len(normalized) <= 1:
        return [normalized]

    groups = list(_VOWEL_GROUP_PATTERN.finditer(normalized))
    cuts: List[int] = []
    for previous, current in zip(groups, groups[1:]):
        gap_start, gap_end = previous.end(), current.start()
        if gap_end - gap_start <= 1:
            cuts.append(gap_start)
        else:
            cuts.append(gap_end - 1)

    chunks: List[str] = []
    start = 0
    for cut in cuts:
        if cut > start:
            chunks.append(normalized[start:cut])
            start = cut
    chunks.append(normalized[start:])

    while len(chunks) > count:
        shortest = min(range(len(chunks)), key=lambda index: len(chunks[index]))
        if shortest == 0:
            neighbour = 1
        elif shortest == len(chunks) - 1:
            neighbour = shortest - 1
        elif len(chunks[shortest - 1]) <= len(chunks[shortest + 1]):
            neighbour = shortest - 1
        else:
            neighbour = shortest + 1
        left = min(shortest, neighbour)
        chunks[left : left + 2] = [chunks[left] + chunks[left + 1]]

    while len(chunks) < count:
        longest = max(range(len(chunks)), key=lambda index: len(chunks[index]))
        chunk = chunks[longest]
        if len(chunk) < 2:
            break
        middle = len(chunk) // 2
        chunks[longest : longest + 1] = [chunk[:middle], chunk[middle:]]

    return chunks
