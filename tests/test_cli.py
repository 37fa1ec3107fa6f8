"""Tests for the bibsift command line interface."""

import io
import json
import logging
from pathlib import Path

import pytest

from bibsift import __version__
from bibsift.cli import create_parser, main
from bibsift.parser import parse

BIBTEX = """@article{a1,
  author = {A},
  title = {T},
  journal = {J},
  year = 2001,
  volume = 1,
}

@book{b1,
  title = {B},
  year = 2002,
}

@misc{m1,
  note = {M},
}
"""


@pytest.fixture
def bib_path(tmp_path: Path) -> Path:
    path = tmp_path / "refs.bib"
    path.write_text(BIBTEX, encoding="utf-8")
    return path


def _run(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    return excinfo.value.code


def test_version(capsys: pytest.CaptureFixture[str]):
    """--version prints the package version."""
    assert _run(["--version"]) == 0
    assert __version__ in capsys.readouterr().out


def test_no_command(capsys: pytest.CaptureFixture[str]):
    """Running without a subcommand prints help and fails."""
    assert _run([]) == 1
    assert "usage:" in capsys.readouterr().out


def test_merge_requires_an_operation():
    """The merge command needs exactly one operation flag."""
    parser = create_parser()

    with pytest.raises(SystemExit):
        parser.parse_args(["merge", "a.bib", "b.bib"])
    with pytest.raises(SystemExit):
        parser.parse_args(["merge", "a.bib", "b.bib", "--join", "--diff"])

    args = parser.parse_args(["merge", "a.bib", "b.bib", "--exclusive"])
    assert args.operation == "exclusive"


def test_filter_pretty_prints(bib_path: Path, capsys: pytest.CaptureFixture[str]):
    """Without options every entry is written back out."""
    assert _run(["filter", str(bib_path)]) == 0

    out = capsys.readouterr().out
    assert parse(out) == parse(BIBTEX)


def test_filter_include(bib_path: Path, capsys: pytest.CaptureFixture[str]):
    """--include keeps the listed types only."""
    assert _run(["filter", str(bib_path), "--include", "article,misc"]) == 0

    entries = parse(capsys.readouterr().out)
    assert [entry.citation_key for entry in entries] == ["a1", "m1"]


def test_filter_exclude_to_file(bib_path: Path, tmp_path: Path):
    """Output goes to the given file."""
    out_path = tmp_path / "out.bib"

    assert _run(["filter", str(bib_path), str(out_path), "--exclude", "ARTICLE"]) == 0

    entries = parse(out_path.read_text(encoding="utf-8"))
    assert [entry.citation_key for entry in entries] == ["b1", "m1"]


def test_filter_json(bib_path: Path, capsys: pytest.CaptureFixture[str]):
    """--format json writes entry records."""
    assert _run(["filter", str(bib_path), "--include", "misc", "--format", "json"]) == 0

    records = json.loads(capsys.readouterr().out)
    assert records == [{"type_name": "misc", "keys": ["m1"], "fields": {"note": "{M}"}}]


def test_filter_config_file(bib_path: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    """Settings come from the config file unless overridden."""
    config_path = tmp_path / "filter.json"
    config_path.write_text(json.dumps({"include": ["book"], "exclude": ["misc"]}))

    assert _run(["filter", str(bib_path), "--config", str(config_path)]) == 0
    entries = parse(capsys.readouterr().out)
    assert [entry.citation_key for entry in entries] == ["b1"]

    argv = ["filter", str(bib_path), "--config", str(config_path), "--include", "misc,article"]
    assert _run(argv) == 0
    entries = parse(capsys.readouterr().out)
    assert [entry.citation_key for entry in entries] == ["a1"]


def test_filter_stdin(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]):
    """Input is read from stdin when no file is given."""
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(BIBTEX.encode("utf-8"))))

    assert _run(["filter", "--include", "book"]) == 0

    entries = parse(capsys.readouterr().out)
    assert [entry.citation_key for entry in entries] == ["b1"]


def test_filter_parse_error(tmp_path: Path):
    """An unparseable file fails with exit code 1."""
    bad_path = tmp_path / "bad.bib"
    bad_path.write_text("@misc{k, title = {unterminated", encoding="utf-8")

    assert _run(["filter", str(bad_path)]) == 1


def test_filter_missing_file(tmp_path: Path):
    """A missing input file fails with exit code 1."""
    assert _run(["filter", str(tmp_path / "missing.bib")]) == 1


def test_merge(bib_path: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    """Merge applies the selected set operation."""
    other_path = tmp_path / "other.bib"
    other_path.write_text("@misc{m1, note = {other}}\n@misc{x9}\n", encoding="utf-8")

    assert _run(["merge", str(bib_path), str(other_path), "--intersect"]) == 0
    entries = parse(capsys.readouterr().out)
    assert [entry.citation_key for entry in entries] == ["m1"]
    assert entries[0].fields["note"] == "{M}"

    out_path = tmp_path / "merged.bib"
    argv = ["merge", str(bib_path), str(other_path), "--join", "-o", str(out_path)]
    assert _run(argv) == 0
    entries = parse(out_path.read_text(encoding="utf-8"))
    assert [entry.citation_key for entry in entries] == ["a1", "b1", "m1", "x9"]


def test_check_reports_problems(bib_path: Path, caplog: pytest.LogCaptureFixture):
    """Advisory problems are logged but do not fail the command."""
    with caplog.at_level(logging.WARNING):
        assert _run(["check", str(bib_path)]) == 0

    assert "book b1 (line 9): missing required field 'publisher'" in caplog.text
    assert "missing one of author/editor" in caplog.text


def test_check_parse_error(tmp_path: Path):
    """check fails on input that cannot be parsed."""
    bad_path = tmp_path / "bad.bib"
    bad_path.write_text("no entries here", encoding="utf-8")

    assert _run(["check", str(bad_path)]) == 1


def test_filter_drops_special_blocks_by_default(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
):
    """Without --include only the standard entry types are written."""
    bib_path = tmp_path / "mixed.bib"
    bib_path.write_text(
        '@comment{generated by hand}\n@string{acm = "ACM"}\n' + BIBTEX, encoding="utf-8"
    )

    assert _run(["filter", str(bib_path)]) == 0
    entries = parse(capsys.readouterr().out)
    assert [entry.type_name for entry in entries] == ["article", "book", "misc"]

    assert _run(["filter", str(bib_path), "--include", "string,misc"]) == 0
    entries = parse(capsys.readouterr().out)
    assert [entry.type_name for entry in entries] == ["string", "misc"]


def test_filter_latin1_file(tmp_path: Path):
    """A file that is not UTF-8 fails with exit code 1."""
    bib_path = tmp_path / "latin1.bib"
    bib_path.write_bytes("@misc{k, author = {Gödel}}".encode("latin-1"))

    assert _run(["filter", str(bib_path)]) == 1


def test_check_latin1_stdin(monkeypatch: pytest.MonkeyPatch):
    """Non-UTF-8 standard input fails with exit code 1."""
    data = "@misc{k, author = {Gödel}}".encode("latin-1")
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(data)))

    assert _run(["check"]) == 1
