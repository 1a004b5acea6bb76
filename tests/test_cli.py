from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from autotags import cli

NEW_YORK = "New York is great. We visited New York. New York rocks."


@pytest.fixture()
def text_file(tmp_path: Path) -> Path:
    path = tmp_path / "article.txt"
    path.write_text(NEW_YORK, encoding="utf-8")
    return path


def test_tag_prints_comma_separated_tags(text_file: Path) -> None:
    out = io.StringIO()
    assert cli.main(["tag", str(text_file)], out=out) == 0
    assert out.getvalue() == "new york, new, york\n"


def test_tag_limit_and_separator(text_file: Path) -> None:
    out = io.StringIO()
    cli.main(["tag", str(text_file), "-n", "1", "--separator", "_"], out=out)
    assert out.getvalue() == "new_york\n"


def test_tag_json_output(text_file: Path) -> None:
    out = io.StringIO()
    cli.main(["tag", str(text_file), "--json"], out=out)

    payload = json.loads(out.getvalue())
    assert payload[0]["value"] == "new york"
    assert payload[0]["termType"] == "CAPITALIZED_COMPOUND"


def test_tag_debug_table(text_file: Path) -> None:
    out = io.StringIO()
    cli.main(["tag", str(text_file), "--debug", "--no-lowercase"], out=out)

    output = out.getvalue()
    assert output.splitlines()[0].startswith("Tag")
    assert "Term Type" in output
    assert "New York" in output
    assert "to generate tags from 11 words" in output


def test_tag_reads_stdin(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(NEW_YORK))
    out = io.StringIO()
    cli.main(["tag"], out=out)
    assert out.getvalue().startswith("new york")


def test_tag_with_vocabulary_file(tmp_path: Path, text_file: Path) -> None:
    vocabulary = tmp_path / "vocabulary.yaml"
    vocabulary.write_text("black_list: [new, is, we]\n")

    out = io.StringIO()
    cli.main(["tag", str(text_file), "--vocabulary", str(vocabulary)], out=out)
    assert out.getvalue() == "york\n"


def test_tag_rejects_negative_limit(text_file: Path) -> None:
    with pytest.raises(SystemExit):
        cli.main(["tag", str(text_file), "-n", "-1"], out=io.StringIO())


def test_tag_reports_missing_file(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        cli.main(["tag", str(tmp_path / "missing.txt")], out=io.StringIO())


def test_tag_compound_emphasis_preset(text_file: Path) -> None:
    out = io.StringIO()
    cli.main(["tag", str(text_file), "--json", "--compound-emphasis"], out=out)

    payload = json.loads(out.getvalue())
    assert payload[0]["value"] == "new york"
    assert payload[0]["score"] == pytest.approx(21.0)
