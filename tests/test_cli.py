"""Tests for the command-line interface.

WHY: The CLI is how pagination gets tuned against stored chunks. It must
write the expected files, report failures with a non-zero exit code, and
keep status chatter off stdout so JSON can be piped.

HOW: Calls main() with explicit argv, catching SystemExit. Inputs are
written to tmp_path; stdin is replaced with monkeypatch.
"""

import io
import json

import pytest

from readalong_pagination.cli import build_parser, main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("PAGINATION_MAX_PAGE_CHARS", "PAGINATION_BREATHING_GAP_MS", "PAGINATION_DEBUG"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def chunk_file(tmp_path, real_timestamp_document):
    path = tmp_path / "chunk-0.json"
    path.write_text(json.dumps(real_timestamp_document), encoding="utf-8")
    return path


def _run(argv):
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


class TestParser:

    def test_defaults(self):
        args = build_parser().parse_args(["chunk.json"])
        assert args.input_file == "chunk.json"
        assert args.formats is None
        assert args.output_dir is None
        assert args.max_page_chars is None
        assert args.breathing_gap_ms is None
        assert args.debug is False

    @pytest.mark.parametrize("flag, value", [
        ("--max-page-chars", "-3"),
        ("--max-page-chars", "0"),
        ("--max-page-chars", "wide"),
        ("--breathing-gap-ms", "-60"),
        ("--breathing-gap-ms", "nan"),
    ])
    def test_non_positive_overrides_rejected(self, flag, value, capsys):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["chunk.json", flag, value])
        assert exc_info.value.code == 2
        assert flag in capsys.readouterr().err

    def test_positive_overrides_parsed(self):
        args = build_parser().parse_args(
            ["chunk.json", "--max-page-chars", "80", "--breathing-gap-ms", "75.5"]
        )
        assert args.max_page_chars == 80
        assert args.breathing_gap_ms == 75.5


class TestMain:

    def test_writes_all_formats_next_to_input(self, chunk_file, capsys):
        assert _run([str(chunk_file)]) == 0

        data = json.loads((chunk_file.parent / "chunk-0-pagination.json").read_text(encoding="utf-8"))
        assert data["summary"]["totalPages"] == 17
        assert (chunk_file.parent / "chunk-0-pages.txt").read_text(encoding="utf-8").startswith("Page 1")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Paginated 66 words into 17 pages" in captured.err

    def test_selected_format_and_output_dir(self, chunk_file, tmp_path):
        out_dir = tmp_path / "out"
        assert _run([str(chunk_file), "--formats", "plain_text", "--output-dir", str(out_dir)]) == 0
        assert [p.name for p in out_dir.iterdir()] == ["chunk-0-pages.txt"]

    def test_threshold_overrides(self, chunk_file):
        assert _run([
            str(chunk_file), "--formats", "pagination_json",
            "--max-page-chars", "200", "--breathing-gap-ms", "100",
        ]) == 0
        data = json.loads((chunk_file.parent / "chunk-0-pagination.json").read_text(encoding="utf-8"))
        assert data["summary"]["maxPageChars"] == 200
        assert data["summary"]["breathingGapThresholdMs"] == 100.0
        assert data["summary"]["totalPages"] == 6

    def test_stdin_writes_json_to_stdout(self, monkeypatch, capsys, real_timestamp_document):
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(real_timestamp_document["words"])))
        assert _run(["-"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["pageBreaks"][0] == 2

    def test_unknown_format(self, chunk_file, capsys):
        assert _run([str(chunk_file), "--formats", "srt"]) == 1
        assert "Unknown format(s): srt" in capsys.readouterr().err

    def test_unpaginatable_text(self, tmp_path, capsys):
        path = tmp_path / "flat.json"
        path.write_text(json.dumps([
            {"word": "hello", "start": 0, "end": 0.5},
            {"word": "world", "start": 0.5, "end": 1.0},
        ]), encoding="utf-8")
        assert _run([str(path)]) == 1
        assert "no punctuation" in capsys.readouterr().err

    def test_invalid_input(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"word": "a"}]), encoding="utf-8")
        assert _run([str(path)]) == 1
        assert "Invalid word timestamps" in capsys.readouterr().err

    def test_missing_file(self, tmp_path):
        assert _run([str(tmp_path / "missing.json")]) == 1

    def test_bad_environment(self, chunk_file, monkeypatch, capsys):
        monkeypatch.setenv("PAGINATION_MAX_PAGE_CHARS", "big")
        assert _run([str(chunk_file)]) == 1
        assert "PAGINATION_MAX_PAGE_CHARS" in capsys.readouterr().err
