import random
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from monosyllabize.core import Dictionary, WordEntry

CMUDICT_SAMPLE = """\
# syllabified sample
CAT  K AE1 T
HAT  HH AE1 T
BAT  B AE1 T
BUSINESS  B IH1 Z . N AH0 S
BASKET  B AE1 S . K AH0 T
HAPPY  HH AE1 . P IY0
HAPPIER  HH AE1 . P IY0 . ER0
CAT(2)  K AA1 T
"""

FREQUENCY_SAMPLE = "cat\t900\nbusiness\t800\nhappy\t700\nhat\t600\nbasket\t500\nhappier\t400\n"


def make_dictionary(*rows):
    """Build a :class:`Dictionary` from ``(word, [syllable, ...])`` rows."""

    return Dictionary(WordEntry.create(word, syllables) for word, syllables in rows)


@pytest.fixture
def rng():
    return random.Random(7)


@pytest.fixture
def cat_hat_at_syllables():
    return [("c", "a", "t"), ("h", "a", "t"), ("a", "t")]


@pytest.fixture
def corpus_files(tmp_path):
    """Frequency list and syllabified dictionary written to ``tmp_path``."""

    frequencies = tmp_path / "word_frequency.txt"
    frequencies.write_text(FREQUENCY_SAMPLE, encoding="utf-8")
    dictionary = tmp_path / "cmudict-syl.txt"
    dictionary.write_text(CMUDICT_SAMPLE, encoding="utf-8")
    return frequencies, dictionary
