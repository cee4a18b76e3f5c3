"""Phoneme inventory and the IPA tokenizer."""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, List, Sequence, Tuple

from monosyllabize.utils.observability import get_logger

_LOGGER = get_logger(__name__).bind(component="phonemes")

Phoneme = str
Syllable = Tuple[Phoneme, ...]

ARPABET_TO_IPA: Dict[str, Phoneme] = {
    # Vowels
    "AA": "ɑ",
    "AE": "æ",
    "AH": "ʌ",
    "AO": "ɔ",
    "AW": "aʊ",
    "AX": "ɚ",
    "AXR": "ə",
    "AY": "aɪ",
    "EH": "ɛ",
    "ER": "ɝ",
    "EY": "eɪ",
    "IH": "ɪ",
    "IX": "ɨ",
    "IY": "i",
    "OW": "oʊ",
    "OY": "ɔɪ",
    "UH": "ʊ",
    "UW": "u",
    "UX": "ʉ",
    # Consonants
    "B": "b",
    "CH": "tʃ",
    "D": "d",
    "DH": "ð",
    "DX": "ɾ",
    "EL": "l̩",
    "EM": "m̩",
    "EN": "n̩",
    "F": "f",
    "G": "ɡ",
    "HH": "h",
    "H": "h",
    "JH": "dʒ",
    "K": "k",
    "L": "l",
    "M": "m",
    "N": "n",
    "NG": "ŋ",
    "NX": "ɾ̃",
    "P": "p",
    "Q": "ʔ",
    "R": "ɹ",
    "S": "s",
    "SH": "ʃ",
    "T": "t",
    "TH": "θ",
    "V": "v",
    "W": "w",
    "WH": "ʍ",
    "Y": "j",
    "Z": "z",
    "ZH": "ʒ",
}

VOWELS: FrozenSet[Phoneme] = frozenset(
    {
        "a",
        "ɑ",
        "æ",
        "ʌ",
        "ɔ",
        "aʊ",
        "ɚ",
        "ə",
        "aɪ",
        "ɛ",
        "ɝ",
        "eɪ",
        "ɪ",
        "ɨ",
        "i",
        "oʊ",
        "ɔɪ",
        "ʊ",
        "u",
        "ʉ",
        "e",
        "o",
        "ɒ",
        "ɜ",
        "ɐ",
        "ɑː",
        "ɔː",
        "ɜː",
        "uː",
        "iː",
        "əʊ",
    }
)

SYLLABIC_CONSONANTS: FrozenSet[Phoneme] = frozenset({"l̩", "m̩", "n̩"})

# Phonemes able to carry a syllable nucleus.
NUCLEUS_PHONEMES: FrozenSet[Phoneme] = VOWELS | SYLLABIC_CONSONANTS

STRESS_MARKERS: FrozenSet[str] = frozenset({"ˈ", "ˌ"})
BOUNDARY_MARKERS: FrozenSet[str] = frozenset({"ˈ", "ˌ", "."})

# Near-confusable clusters used for partial credit when scoring candidates.
SIMILARITY_GROUPS: Tuple[FrozenSet[Phoneme], ...] = tuple(
    frozenset(group)
    for group in (
        ("b", "p"),
        ("k", "g", "ɡ"),
        ("ɡ", "g", "ŋ"),
        ("n", "ŋ"),
        ("m", "n", "m̩", "n̩"),
        ("tʃ", "ʃ", "s"),
        ("ð", "v", "z", "θ"),
        ("l", "ɹ", "ɾ", "ɾ̃", "r", "l̩"),
        ("v", "w", "ʍ"),
        ("dʒ", "ʒ", "j"),
        ("h", "ʔ"),
        # ɔ assumes no cot-caught merger
        ("a", "ɑ", "æ", "ɔ", "eɪ"),
        ("ʌ", "aʊ"),
        ("ɚ", "ɝ"),
        ("oʊ", "ɔɪ", "ʊ"),
        ("ɪ", "i"),
        ("ɛ", "e", "ə"),
        ("u", "ʉ"),
    )
)

# Multi-character phoneme spellings, longest first so an affricate or a
# diphthong is never split into its parts.
MULTI_CHARACTER_PHONEMES: Tuple[str, ...] = (
    "t͡ʃ",
    "d͡ʒ",
    "t͡s",
    "(ɹ)",
    "(ə)",
    "(n)",
    "(j)",
    "(t)",
    "(s)",
    "(ʊ)",
    "tʃ",
    "dʒ",
    "eɪ",
    "aɪ",
    "aʊ",
    "oʊ",
    "ɔɪ",
    "əʊ",
    "ɑː",
    "ɔː",
    "ɜː",
    "uː",
    "iː",
    "kʰ",
    "tʰ",
    "pʰ",
    "l̩",
    "m̩",
    "n̩",
    "l̥",
    "ɾ̃",
    "ʌ̃",
)

KNOWN_SINGLE_PHONEMES: FrozenSet[str] = frozenset(
    "abcdefghijklmnopqrstuvwxyzæðŋɑɒɔəɚɛɜɝɡɨɪɫɹɾʃʊʉʌʍʒʔθɐː"
) | BOUNDARY_MARKERS


def group_ipa_symbols(transcription: str) -> List[Phoneme]:
    """Split ``transcription`` into phoneme tokens.

    Greedy longest match against :data:`MULTI_CHARACTER_PHONEMES`; anything
    else becomes a single-character token. Stress and boundary markers are
    kept as their own tokens.
    """

    tokens: List[Phoneme] = []
    index = 0
    length = len(transcription)
    while index < length:
        for symbol in MULTI_CHARACTER_PHONEMES:
            if transcription.startswith(symbol, index):
                tokens.append(symbol)
                index += len(symbol)
                break
        else:
            char = transcription[index]
            if char not in KNOWN_SINGLE_PHONEMES and not char.isspace():
                _LOGGER.debug(
                    "Unknown IPA symbol",
                    context={"symbol": char, "transcription": transcription},
                )
            tokens.append(char)
            index += 1
    return tokens


def arpabet_to_ipa(phone: str) -> Phoneme:
    """Map an ARPABET phone (stress digits allowed) to IPA.

    Unknown phones are returned stripped of stress so the caller keeps a
    token for them.
    """

    base = phone.rstrip("012")
    mapped = ARPABET_TO_IPA.get(base)
    if mapped is None:
        _LOGGER.debug("Unknown ARPABET phone", context={"phone": phone})
        return base.lower()
    return mapped


def is_nucleus(phoneme: Phoneme) -> bool:
    return phoneme in NUCLEUS_PHONEMES


def is_consonant(phoneme: Phoneme) -> bool:
    return phoneme not in NUCLEUS_PHONEMES


def join_phonemes(phonemes: Iterable[Phoneme]) -> str:
    return "".join(phonemes)


def similar_phonemes(phoneme: Phoneme) -> FrozenSet[Phoneme]:
    """Every phoneme sharing a similarity group with ``phoneme``."""

    related = set()
    for group in SIMILARITY_GROUPS:
        if phoneme in group:
            related.update(group)
    related.discard(phoneme)
    return frozenset(related)


def split_syllable(syllable: Sequence[Phoneme]) -> Tuple[Syllable, Syllable, Syllable]:
    """Split ``syllable`` into ``(onset, nucleus, coda)``.

    Scans left to right: the first nucleus phoneme starts the nucleus and the
    first consonant after it starts the coda. A syllable without a nucleus,
    or with a nucleus phoneme reappearing in the coda, yields three empty
    parts.
    """

    onset: List[Phoneme] = []
    nucleus: List[Phoneme] = []
    coda: List[Phoneme] = []
    for phoneme in syllable:
        if coda:
            if is_nucleus(phoneme):
                return (), (), ()
            coda.append(phoneme)
        elif nucleus:
            if is_nucleus(phoneme):
                nucleus.append(phoneme)
            else:
                coda.append(phoneme)
        elif is_nucleus(phoneme):
            nucleus.append(phoneme)
        else:
            onset.append(phoneme)

    if not nucleus:
        return (), (), ()
    return tuple(onset), tuple(nucleus), tuple(coda)


__all__ = [
    "Phoneme",
    "Syllable",
    "ARPABET_TO_IPA",
    "VOWELS",
    "SYLLABIC_CONSONANTS",
    "NUCLEUS_PHONEMES",
    "STRESS_MARKERS",
    "BOUNDARY_MARKERS",
    "SIMILARITY_GROUPS",
    "MULTI_CHARACTER_PHONEMES",
    "group_ipa_symbols",
    "arpabet_to_ipa",
    "is_nucleus",
    "is_consonant",
    "join_phonemes",
    "similar_phonemes",
    "split_syllable",
]
