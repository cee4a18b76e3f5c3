import pytest

from monosyllabize.core.lexicon import Dictionary, WordEntry


def test_word_entry_requires_syllables():
    with pytest.raises(ValueError):
        WordEntry.create("nothing", [])


def test_word_entry_properties():
    entry = WordEntry.create("Basket", [["b", "æ", "s"], ["k", "ɪ", "t"]])

    assert entry.word == "basket"
    assert entry.syllable_count == 2
    assert not entry.is_monosyllabic
    assert entry.phonemes == ("b", "æ", "s", "k", "ɪ", "t")


def test_dictionary_keeps_first_entry_and_order():
    dictionary = Dictionary(
        [
            WordEntry.create("cat", [["k", "æ", "t"]]),
            WordEntry.create("hat", [["h", "æ", "t"]]),
            WordEntry.create("cat", [["k", "ɑ", "t"]]),
        ]
    )

    assert [entry.word for entry in dictionary] == ["cat", "hat"]
    assert dictionary.get("CAT").syllables == (("k", "æ", "t"),)
    assert "Hat" in dictionary
    assert list(dictionary.syllables()) == [("k", "æ", "t"), ("h", "æ", "t")]


def test_dictionary_rows_round_trip():
    dictionary = Dictionary([WordEntry.create("basket", [["b", "æ", "s"], ["k", "ɪ", "t"]])])

    restored = Dictionary.from_rows(dictionary.to_rows())

    assert restored.get("basket") == dictionary.get("basket")
