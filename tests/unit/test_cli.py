#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_cli.py
"""Unit tests for the dokuscan command line."""

import argparse
import io
import json
import sys

import pytest

from dokuscan.cli import EXIT_ERROR, EXIT_SUCCESS, build_options, create_parser, main
from dokuscan.cli.actions import env_key_for
from dokuscan.cli.output import format_references, should_use_rich_output
from dokuscan.references import ResourceReference

PAGE = "====== Start ======\nSee [[wp>DokuWiki]] and **bold** text.\n"


@pytest.fixture
def page_file(temp_dir):
    path = temp_dir / "start.txt"
    path.write_text(PAGE, encoding="utf-8")
    return path


@pytest.mark.cli
class TestParser:
    """Tests for argument parsing and option building."""

    def test_defaults(self):
        """Without flags every scanner option keeps its default."""
        args = create_parser().parse_args(["page.txt"])
        options = build_options(args)
        assert args.format == "text"
        assert options.parse_interwiki is True
        assert options.autolink_urls is True
        assert options.rss_default_count == 8

    def test_scanner_flags(self):
        """Scanner flags map onto options."""
        args = create_parser().parse_args(["page.txt", "--no-interwiki", "--no-autolink", "--rss-count", "3"])
        options = build_options(args)
        assert options.parse_interwiki is False
        assert options.autolink_urls is False
        assert options.rss_default_count == 3

    def test_rss_count_must_be_positive(self):
        """Zero is rejected by the parser."""
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["page.txt", "--rss-count", "0"])
        assert exc_info.value.code == 2

    def test_environment_defaults(self, monkeypatch):
        """Environment variables provide defaults."""
        monkeypatch.setenv("DOKUSCAN_FORMAT", "json")
        monkeypatch.setenv("DOKUSCAN_PARSE_INTERWIKI", "false")
        args = create_parser().parse_args(["page.txt"])
        assert args.format == "json"
        assert args.parse_interwiki is False

    def test_command_line_beats_environment(self, monkeypatch):
        """Explicit arguments override the environment."""
        monkeypatch.setenv("DOKUSCAN_FORMAT", "json")
        args = create_parser().parse_args(["page.txt", "--format", "references"])
        assert args.format == "references"

    def test_env_key(self):
        """Environment keys use the DOKUSCAN_ prefix."""
        assert env_key_for("rss_count") == "DOKUSCAN_RSS_COUNT"


@pytest.mark.cli
class TestMain:
    """Tests for running the command."""

    def test_text_output(self, page_file, capsys):
        """The default output is the indented event dump."""
        assert main([str(page_file)]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert out.startswith("begin_document\n")
        assert "begin_heading level=1 id='HStart'" in out
        assert out.rstrip().endswith("end_document")

    def test_json_output(self, page_file, capsys):
        """JSON output is a versioned event list."""
        assert main([str(page_file), "--format", "json"]) == EXIT_SUCCESS
        payload = json.loads(capsys.readouterr().out)
        assert payload["events"][0]["event"] == "begin_document"
        assert payload["events"][-1]["event"] == "end_document"

    def test_references_output(self, page_file, capsys):
        """The references listing holds one line per link or image."""
        assert main([str(page_file), "--format", "references"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "link\tinterwiki\ttyped\twp>DokuWiki\n"

    def test_no_interwiki(self, page_file, capsys):
        """--no-interwiki leaves targets untyped."""
        assert main([str(page_file), "--format", "references", "--no-interwiki"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "link\turl\tuntyped\twp>DokuWiki\n"

    def test_out_file(self, page_file, temp_dir, capsys):
        """--out writes to a file instead of standard output."""
        target = temp_dir / "events.json"
        assert main([str(page_file), "--format", "json", "--out", str(target)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == ""
        assert json.loads(target.read_text(encoding="utf-8"))["events"]

    def test_stdin(self, monkeypatch, capsys):
        """'-' reads standard input."""
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"hello"), encoding="utf-8"))
        assert main(["-"]) == EXIT_SUCCESS
        assert "word text='hello'" in capsys.readouterr().out

    def test_missing_file(self, temp_dir, capsys):
        """Unreadable input exits with an error status."""
        assert main([str(temp_dir / "missing.txt")]) == EXIT_ERROR
        assert capsys.readouterr().err.startswith("Error:")

    def test_rich_tree(self, page_file, capsys):
        """--rich prints the nesting as a tree."""
        assert main([str(page_file), "--rich"]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "start.txt" in out
        assert "begin_heading" in out


@pytest.mark.cli
class TestOutputHelpers:
    """Tests for output helpers."""

    def test_rich_not_requested(self):
        """Rich output is off unless asked for."""
        assert should_use_rich_output(argparse.Namespace(rich=False, out=None)) is False

    def test_rich_disabled_for_file_output(self):
        """Rich output never goes to a file."""
        assert should_use_rich_output(argparse.Namespace(rich=True, out="x.txt")) is False

    def test_rich_requested(self):
        """Rich output is used when requested and available."""
        assert should_use_rich_output(argparse.Namespace(rich=True, out=None)) is True

    def test_format_references(self):
        """Each reference becomes a tab-separated line."""
        lines = format_references(
            [("link", ResourceReference.mailto("a@b.org")), ("image", ResourceReference.internal("x.png"))]
        )
        assert lines == "link\tmailto\ttyped\ta@b.org\nimage\tinternal\ttyped\tx.png\n"

    def test_format_no_references(self):
        """No references give empty output."""
        assert format_references([]) == ""
