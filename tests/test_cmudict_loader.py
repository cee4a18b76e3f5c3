import pytest

from monosyllabize.core.cmudict_loader import (
    CMUDictLoader,
    TranscriptionLoader,
    load_word_frequencies,
    order_by_frequency,
)
from monosyllabize.errors import DictionaryLoadError


def test_cmudict_loader_splits_syllables_and_maps_to_ipa(corpus_files):
    _, dict_path = corpus_files
    loader = CMUDictLoader(dict_path)

    assert loader.get_syllables("business") == (("b", "ɪ", "z"), ("n", "ʌ", "s"))
    assert loader.get_syllables("HAT") == (("h", "æ", "t"),)


def test_cmudict_loader_ignores_alternate_pronunciations(corpus_files):
    _, dict_path = corpus_files
    loader = CMUDictLoader(dict_path)

    assert loader.get_syllables("cat") == (("k", "æ", "t"),)
    assert "cat(2)" not in loader.pronunciations()


def test_cmudict_loader_retries_after_file_creation(tmp_path):
    dict_path = tmp_path / "cmudict-syl.txt"
    loader = CMUDictLoader(dict_path)

    with pytest.raises(DictionaryLoadError):
        loader.get_syllables("test")
    assert loader._loaded is False

    dict_path.write_text("TEST  T EH1 S T\n", encoding="utf-8")

    assert loader.get_syllables("test") == (("t", "ɛ", "s", "t"),)
    assert loader._loaded is True


def test_word_frequencies_keep_rank_order(corpus_files):
    frequencies, _ = corpus_files

    assert load_word_frequencies(frequencies)[:3] == ["cat", "business", "happy"]
    assert load_word_frequencies(frequencies, cutoff=1) == ["cat"]


def test_missing_frequency_list_raises(tmp_path):
    with pytest.raises(DictionaryLoadError):
        load_word_frequencies(tmp_path / "missing.txt")


def test_dictionary_follows_frequency_rank_with_unranked_words_last(corpus_files):
    frequencies, dict_path = corpus_files

    dictionary = CMUDictLoader(dict_path).load_dictionary(["bat", "cat", "unknown"])

    words = [entry.word for entry in dictionary]
    assert words[:2] == ["bat", "cat"]
    assert set(words[2:]) == {"hat", "business", "basket", "happy", "happier"}
    assert "unknown" not in dictionary


def test_order_by_frequency_skips_empty_pronunciations():
    dictionary = order_by_frequency({"a": (("ə",),), "b": ()}, ["b", "a"])

    assert [entry.word for entry in dictionary] == ["a"]


def test_transcription_loader_segments_and_skips(tmp_path, caplog):
    path = tmp_path / "transcriptions.tsv"
    path.write_text(
        "business\tbusi-ness\tˈbɪznɪs\n"
        "empty\tem-pty\t\n"
        "# comment\n"
        "basket\tbas-ket\tˈbæs.kɪt\n",
        encoding="utf-8",
    )
    loader = TranscriptionLoader(path)

    dictionary = loader.load_dictionary(["basket", "business"])

    assert [entry.word for entry in dictionary] == ["basket", "business"]
    assert dictionary.get("business").syllables == (("b", "ɪ", "z"), ("n", "ɪ", "s"))
    assert dictionary.get("basket").syllable_count == 2
    assert loader.skipped == ["empty"]
    assert any("Skipping word without transcription" in record.message for record in caplog.records)


def test_transcription_loader_without_reference_column_estimates_count(tmp_path):
    loader = TranscriptionLoader(tmp_path / "unused.tsv")

    pronunciations = loader.parse_lines(["cat\t\tkæt"])

    assert pronunciations == {"cat": (("k", "æ", "t"),)}


def test_empty_transcription_list_raises(tmp_path):
    path = tmp_path / "transcriptions.tsv"
    path.write_text("# nothing here\n", encoding="utf-8")

    with pytest.raises(DictionaryLoadError):
        TranscriptionLoader(path).load_dictionary([])
