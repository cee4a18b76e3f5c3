from monosyllabize.core.phonemes import (
    arpabet_to_ipa,
    group_ipa_symbols,
    is_nucleus,
    similar_phonemes,
    split_syllable,
)


def test_group_ipa_symbols_keeps_affricates_whole():
    assert group_ipa_symbols("tʃip") == ["tʃ", "i", "p"]
    assert group_ipa_symbols("dʒʌmp") == ["dʒ", "ʌ", "m", "p"]


def test_group_ipa_symbols_keeps_markers_and_diphthongs():
    assert group_ipa_symbols("ˈbaɪ.sɪ") == ["ˈ", "b", "aɪ", ".", "s", "ɪ"]


def test_group_ipa_symbols_passes_unknown_symbols_through():
    assert group_ipa_symbols("b☃") == ["b", "☃"]


def test_arpabet_to_ipa_strips_stress():
    assert arpabet_to_ipa("AH0") == "ʌ"
    assert arpabet_to_ipa("ER1") == "ɝ"
    assert arpabet_to_ipa("JH") == "dʒ"
    assert arpabet_to_ipa("XX2") == "xx"


def test_split_syllable_parts():
    assert split_syllable(("s", "t", "ɹ", "ɪ", "ŋ", "z")) == (("s", "t", "ɹ"), ("ɪ",), ("ŋ", "z"))
    assert split_syllable(("aɪ",)) == ((), ("aɪ",), ())


def test_split_syllable_rejects_malformed_syllables():
    assert split_syllable(("s", "t")) == ((), (), ())
    assert split_syllable(("k", "æ", "t", "ɪ")) == ((), (), ())


def test_syllabic_consonants_are_nuclei():
    assert is_nucleus("n̩")
    assert not is_nucleus("n")


def test_similar_phonemes_excludes_itself():
    assert similar_phonemes("b") == frozenset({"p"})
    assert "ŋ" in similar_phonemes("n")
    assert similar_phonemes("x") == frozenset()
