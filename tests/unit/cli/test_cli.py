"""Unit tests for the textmark CLI.

Test strategy:
- Test argument parsing defaults and options
- Test annotate output and pre-tagging
- Test occurrences output as text and JSON
- Test exit codes for missing input and bad keywords
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from textmark.cli import _create_parser, main

# =============================================================================
# PARSER TESTS
# =============================================================================


class TestParser:
    """Tests for subcommand registration."""

    @pytest.mark.unit
    def test_annotate_defaults(self) -> None:
        """annotate takes an input path; tags default to empty."""
        parser = _create_parser()
        args = parser.parse_args(["annotate", "in.txt"])
        assert args.command == "annotate"
        assert args.input == Path("in.txt")
        assert args.tag == []
        assert args.channel_class == "mark"
        assert args.output is None

    @pytest.mark.unit
    def test_annotate_repeated_tags(self) -> None:
        """--tag can be given several times."""
        parser = _create_parser()
        args = parser.parse_args(["annotate", "in.txt", "-t", "bread", "--tag", "peace"])
        assert args.tag == ["bread", "peace"]

    @pytest.mark.unit
    def test_occurrences_defaults(self) -> None:
        """occurrences takes an input path and a keyword."""
        parser = _create_parser()
        args = parser.parse_args(["occurrences", "in.txt", "the"])
        assert args.command == "occurrences"
        assert args.keyword == "the"
        assert args.literal is False
        assert args.json is False
        assert args.color is None

    @pytest.mark.unit
    def test_global_logging_flags(self) -> None:
        """--verbose and --log-dir belong to the top-level parser."""
        parser = _create_parser()
        args = parser.parse_args(["-v", "--log-dir", "logs", "annotate", "in.txt"])
        assert args.verbose is True
        assert args.log_dir == Path("logs")


# =============================================================================
# COMMAND TESTS
# =============================================================================


def _run(argv: list[str]) -> int:
    with patch("sys.argv", ["textmark", *argv]):
        with pytest.raises(SystemExit) as exc_info:
            main()
    return exc_info.value.code


class TestAnnotateCommand:
    """Tests for the annotate subcommand."""

    @pytest.mark.unit
    def test_prints_markup_with_tags(
        self, texts_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Tagged words carry the channel class in the printed markup."""
        code = _run(["annotate", str(texts_dir / "fox.txt"), "--tag", "Fox"])

        out = capsys.readouterr().out
        assert code == 0
        assert '<span class="text mark" data-canonical="fox">fox</span>' in out
        assert '<span class="text" data-canonical="dog">dog</span>' in out
        assert "<span>The</span>" in out

    @pytest.mark.unit
    def test_writes_output_file(self, texts_dir: Path, tmp_path: Path) -> None:
        """--output writes the markup instead of printing it."""
        output = tmp_path / "fox.html"
        code = _run(["annotate", str(texts_dir / "fox.txt"), "-o", str(output)])

        assert code == 0
        assert 'data-canonical="quick"' in output.read_text(encoding="utf-8")

    @pytest.mark.unit
    def test_missing_input_exits_1(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A missing input file is an error."""
        code = _run(["annotate", str(tmp_path / "missing.txt")])
        assert code == 1
        assert "does not exist" in capsys.readouterr().err

    @pytest.mark.unit
    def test_invalid_channel_class_exits_1(self, texts_dir: Path) -> None:
        """Library errors are logged and turned into exit code 1."""
        code = _run(["annotate", str(texts_dir / "fox.txt"), "--channel-class", "two words"])
        assert code == 1

    @pytest.mark.unit
    def test_log_file_written(self, texts_dir: Path, tmp_path: Path) -> None:
        """--log-dir creates a timestamped log file with the run's messages."""
        log_dir = tmp_path / "logs"
        output = tmp_path / "fox.html"
        code = _run(
            ["--log-dir", str(log_dir), "annotate", str(texts_dir / "fox.txt"), "-o", str(output)]
        )

        log_files = list(log_dir.glob("textmark_*.log"))
        assert code == 0
        assert len(log_files) == 1
        content = log_files[0].read_text(encoding="utf-8")
        assert f"Logging initialized - log file: {log_files[0]}" in content
        assert f"Wrote markup to {output}" in content

    @pytest.mark.unit
    def test_absent_tag_logs_warning(
        self, texts_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Tagging a word the text lacks warns on the console but still succeeds."""
        code = _run(["annotate", str(texts_dir / "fox.txt"), "--tag", "cat"])

        assert code == 0
        assert "WARNING: Word 'cat' does not occur as a taggable term" in capsys.readouterr().err


class TestOccurrencesCommand:
    """Tests for the occurrences subcommand."""

    @pytest.mark.unit
    def test_json_output(self, texts_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """JSON output lists each occurrence with its snippet."""
        code = _run(["occurrences", str(texts_dir / "fox.txt"), "the", "--json", "--color", "red"])

        data = json.loads(capsys.readouterr().out)
        assert code == 0
        assert data["keyword"] == "the"
        assert [row["position"] for row in data["occurrences"]] == [3, 34]
        assert [row["marker_id"] for row in data["occurrences"]] == [
            "occurrence-3",
            "occurrence-34",
        ]
        assert all("background-color: red" in row["snippet"] for row in data["occurrences"])

    @pytest.mark.unit
    def test_text_output(self, texts_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Text output ends with a summary line."""
        code = _run(["occurrences", str(texts_dir / "manifesto.txt"), "spectre"])

        lines = capsys.readouterr().out.strip().splitlines()
        assert code == 0
        assert lines[-1] == "4 occurrences of 'spectre'"
        assert len(lines) == 5

    @pytest.mark.unit
    def test_literal_keyword(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """--literal escapes regular expression characters."""
        source = tmp_path / "code.txt"
        source.write_text("C++ beats c+ and c++", encoding="utf-8")

        code = _run(["occurrences", str(source), "c++", "--literal", "--json"])

        data = json.loads(capsys.readouterr().out)
        assert code == 0
        assert [row["position"] for row in data["occurrences"]] == [3, 20]

    @pytest.mark.unit
    def test_invalid_pattern_exits_1(self, texts_dir: Path) -> None:
        """An invalid regular expression is an error."""
        code = _run(["occurrences", str(texts_dir / "fox.txt"), "(unclosed"])
        assert code == 1

    @pytest.mark.unit
    def test_invalid_color_exits_1(
        self, texts_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A color that is not a CSS color is logged as an error."""
        code = _run(["occurrences", str(texts_dir / "fox.txt"), "the", "--color", "red;x:y"])

        assert code == 1
        assert "InvalidColorError" in capsys.readouterr().err
