import json

import pytest

from monosyllabize.app.cli import _parse_list, main


@pytest.fixture
def cli_args(corpus_files, tmp_path):
    frequencies, dictionary = corpus_files
    return [
        "--frequencies",
        str(frequencies),
        "--dictionary",
        str(dictionary),
        "--output-dir",
        str(tmp_path / "outputs"),
        "--attempts",
        "150",
        "--seed",
        "4",
        "--no-progress",
    ]


def test_parse_list_accepts_commas_and_tokens():
    assert _parse_list(["homonyms", "a,b", " ,c "]) == ["homonyms", "a", "b", "c"]
    assert _parse_list(None) == []


def test_json_report(cli_args, capsys):
    assert main(cli_args + ["--json"]) == 0

    report = json.loads(capsys.readouterr().out)
    assert report["total_words"] == 7
    assert report["duplicates"] == 0
    assert report["method_counts"]["alreadyOneSyllable"] == 3


def test_text_report(cli_args, capsys):
    assert main(cli_args) == 0

    out = capsys.readouterr().out
    assert "words:                7" in out
    assert "alreadyOneSyllable" in out


def test_convert_uses_written_table(cli_args, tmp_path, capsys):
    assert main(cli_args) == 0
    capsys.readouterr()

    assert main(["--output-dir", str(tmp_path / "outputs"), "--convert", "Cat, hat!"]) == 0

    captured = capsys.readouterr()
    assert captured.out.strip() == "Cat, hat!"
    assert "0 of 2 syllables removed" in captured.err


def test_convert_without_table_fails(tmp_path):
    assert main(["--output-dir", str(tmp_path / "empty"), "--convert", "cat"]) == 1


def test_unknown_feature_is_rejected(cli_args):
    with pytest.raises(SystemExit) as excinfo:
        main(cli_args + ["--features", "bogus"])

    assert excinfo.value.code == 2


def test_missing_inputs_return_error(tmp_path):
    args = [
        "--frequencies",
        str(tmp_path / "missing.txt"),
        "--output-dir",
        str(tmp_path / "outputs"),
        "--no-progress",
    ]

    assert main(args) == 1
