"""Approximate Latin spelling for IPA syllables.

Loosely follows Wikipedia's pronunciation respelling key, with adjustments
for monosyllables (checked vowels are not distinguished).
"""

from __future__ import annotations

from typing import Iterable, Tuple, Union

from monosyllabize.utils.observability import get_logger

from .phonemes import Phoneme, join_phonemes

_LOGGER = get_logger(__name__).bind(component="respell")

# (spelling, IPA) pairs; the first entry whose IPA prefixes the remaining
# input wins, so multi-phoneme sequences come first.
RESPELL_KEY: Tuple[Tuple[str, str], ...] = (
    ("ire", "aɪər"),
    ("oir", "ɔɪər"),
    ("our", "aʊər"),
    ("eer", "ɪər"),
    ("air", "ɛər"),
    ("ure", "jʊər"),
    ("ur", "ɜːr"),
    ("ew", "juː"),
    ("eye", "aɪ"),
    ("err", "ɛr"),
    ("irr", "ɪr"),
    ("urr", "ʌr"),
    ("uurr", "ʊr"),
    ("uhr", "ər"),
    ("uhr", "ɚ"),
    ("ur", "ɝ"),
    ("oor", "ʊər"),
    ("or", "ɔːr"),
    ("orr", "ɒr"),
    ("oh", "oʊ"),
    ("oo", "uː"),
    ("ar", "ɑːr"),
    ("arr", "ær"),
    ("y", "aɪ"),
    ("ay", "eɪ"),
    ("ee", "iː"),
    ("aw", "ɔː"),
    ("ow", "aʊ"),
    ("oy", "ɔɪ"),
    ("ah", "ɑː"),
    ("ah", "ɑ"),
    ("ee", "i"),
    ("oo", "u"),
    ("aw", "ɔ"),
    ("uh", "ə"),
    ("a", "æ"),
    ("o", "ɒ"),
    ("uu", "ʊ"),
    ("i", "ɪ"),
    ("i", "ɨ"),
    ("oo", "ʉ"),
    ("u", "ʌ"),
    ("e", "ɛ"),
    ("j", "dʒ"),
    ("nk", "ŋk"),
    ("wh", "hw"),
    ("wh", "ʍ"),
    # combining-mark symbols precede the plain letters they start with
    ("uhl", "l̩"),
    ("uhm", "m̩"),
    ("uhn", "n̩"),
    ("n", "ɾ̃"),
    ("d", "ɾ"),
    ("t", "ʔ"),
    ("b", "b"),
    ("ch", "tʃ"),
    ("d", "d"),
    ("dh", "ð"),
    ("f", "f"),
    ("g", "ɡ"),
    ("h", "h"),
    ("k", "k"),
    ("kh", "x"),
    ("l", "l"),
    ("l", "ɫ"),
    ("m", "m"),
    ("n", "n"),
    ("ng", "ŋ"),
    ("p", "p"),
    ("r", "ɹ"),
    ("r", "r"),
    ("s", "s"),
    ("sh", "ʃ"),
    ("t", "t"),
    ("th", "θ"),
    ("v", "v"),
    ("w", "w"),
    ("y", "j"),
    ("z", "z"),
    ("zh", "ʒ"),
)

# Spellings used when the phoneme ends the syllable.
SPECIAL_ENDERS: Tuple[Tuple[str, str], ...] = (
    ("ih", "ɪ"),
    ("uh", "ʌ"),
    ("eh", "ɛ"),
)


def respell(syllable: Union[str, Iterable[Phoneme]]) -> str:
    """Respell an IPA syllable, given as a string or a phoneme sequence.

    >>> respell("tʃip")
    'cheep'
    >>> respell(("m", "ɑ", "r", "k"))
    'mahrk'
    """

    remaining = syllable if isinstance(syllable, str) else join_phonemes(syllable)
    pieces = []
    while remaining:
        for spelling, ipa in SPECIAL_ENDERS:
            if remaining == ipa:
                pieces.append(spelling)
                remaining = ""
                break
        else:
            for spelling, ipa in RESPELL_KEY:
                if remaining.startswith(ipa):
                    pieces.append(spelling)
                    remaining = remaining[len(ipa) :]
                    break
            else:
                _LOGGER.debug("No respelling for symbol", context={"symbol": remaining[0]})
                pieces.append(remaining[0])
                remaining = remaining[1:]
    return "".join(pieces)


__all__ = ["RESPELL_KEY", "SPECIAL_ENDERS", "respell"]
