import pytest

from monosyllabize.core.assignment import AssignMethod, AssignmentRecord
from monosyllabize.core.converter import MonosyllabicTable, TableRow, convert_text


@pytest.fixture
def table():
    return MonosyllabicTable.from_records(
        [
            AssignmentRecord(
                "business", (("b", "ɪ", "z"), ("n", "ɪ", "s")), ("b", "ɪ", "z"), AssignMethod.DIRECT
            ),
            AssignmentRecord("cat", (("k", "æ", "t"),), ("k", "æ", "t"), AssignMethod.ALREADY_ONE_SYLLABLE),
            AssignmentRecord(
                "xylophone",
                (("z", "aɪ"), ("l", "ə"), ("f", "oʊ", "n")),
                ("[xylophone]",),
                AssignMethod.FAILED,
            ),
        ]
    )


def test_table_rows_hold_ipa_and_respelling(table):
    assert table.get("Business") == TableRow("business", "bɪz", "biz", 2)
    assert table.get("cat").respelled == "kat"
    assert "CAT" in table
    assert len(table) == 3


def test_failed_words_keep_their_placeholder(table):
    row = table.get("xylophone")

    assert row.ipa == "[xylophone]"
    assert row.respelled == "[xylophone]"


def test_rows_round_trip(table):
    restored = MonosyllabicTable.from_rows(table.to_rows())

    assert list(restored) == list(table)
    assert table.to_rows()[0] == ["business", "bɪz", "biz", 2]


def test_convert_text_keeps_punctuation_and_counts_syllables(table):
    converted = convert_text(table, "Business, cat!\nfoo")

    assert converted.text == "biz, cat!\nfoo"
    assert [token.kind for token in converted.tokens] == [
        "mono",
        "whitespace",
        "alreadyOneSyllable",
        "newline",
        "unknown",
    ]
    assert converted.total_syllables == 3
    assert converted.syllables_removed == 1


def test_convert_text_collapses_whitespace_runs(table):
    assert convert_text(table, "cat  \t business").text == "cat biz"
    assert convert_text(table, "cat \n\n cat").text == "cat\ncat"


def test_convert_text_passes_non_words_through(table):
    converted = convert_text(table, "(business) -- 42")

    assert converted.text == "(biz) -- 42"
    assert [token.kind for token in converted.tokens] == [
        "mono",
        "whitespace",
        "unknown",
        "whitespace",
        "unknown",
    ]


def test_convert_empty_text(table):
    converted = convert_text(table, "")

    assert converted.tokens == []
    assert converted.text == ""
