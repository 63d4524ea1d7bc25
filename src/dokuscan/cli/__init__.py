"""Command-line interface for the dokuscan DokuWiki scanner.

This module provides a small CLI tool that scans a DokuWiki page and prints
the resulting event stream, either as an indented event dump, as JSON, or as
the list of link and image references the page contains.

Environment Variable Support
----------------------------
All CLI options support environment variable defaults using the pattern
DOKUSCAN_<DEST> where the argument's destination is converted to uppercase.
CLI arguments always override environment variables.

Examples
--------
Dump the events of a page::

    $ dokuscan start.txt

Read from standard input::

    $ cat start.txt | dokuscan -

Write the events as JSON::

    $ dokuscan start.txt --format json --out start.json

List the links and images of a page::

    $ dokuscan start.txt --format references

Show the document structure as a tree::

    $ dokuscan start.txt --rich

Use environment variables for defaults::

    $ export DOKUSCAN_FORMAT=json
    $ export DOKUSCAN_PARSE_INTERWIKI=false
    $ dokuscan start.txt  # Uses environment defaults

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import io
import logging
import sys
from pathlib import Path
from typing import Any

from dokuscan import __version__
from dokuscan.api import scan
from dokuscan.cli.actions import PositiveIntAction, create_env_aware_argument
from dokuscan.cli.output import format_references, print_rich_tree, should_use_rich_output
from dokuscan.constants import DEFAULT_OUTPUT_FORMAT
from dokuscan.exceptions import DokuScanError
from dokuscan.logging_utils import configure_logging
from dokuscan.options import DokuWikiScannerOptions
from dokuscan.serialization import events_to_json
from dokuscan.sinks import EventCollector, ReferenceCollector, TextDumpSink, TreeBuilder

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the dokuscan command.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser

    """
    parser = argparse.ArgumentParser(
        prog="dokuscan",
        description="Scan DokuWiki markup and print its document events.",
    )
    parser.add_argument("input", help="DokuWiki file to scan, or '-' to read standard input")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    output_group = parser.add_argument_group("output")
    create_env_aware_argument(
        output_group,
        "--format",
        choices=["text", "json", "references"],
        default=DEFAULT_OUTPUT_FORMAT,
        help="Output format (default: %(default)s)",
    )
    create_env_aware_argument(output_group, "--out", "-o", dest="out", help="Write output to this file")
    create_env_aware_argument(
        output_group,
        "--rich",
        action="store_true",
        help="Render the document structure as a tree (requires rich)",
    )

    scanner_group = parser.add_argument_group("scanner options")
    create_env_aware_argument(
        scanner_group,
        "--no-interwiki",
        dest="parse_interwiki",
        action="store_false",
        help="Treat interwiki link targets (e.g., wp>Article) as plain URLs",
    )
    create_env_aware_argument(
        scanner_group,
        "--no-autolink",
        dest="autolink_urls",
        action="store_false",
        help="Do not turn bare URLs and e-mail addresses into links",
    )
    create_env_aware_argument(
        scanner_group,
        "--rss-count",
        dest="rss_count",
        action=PositiveIntAction,
        metavar="N",
        help="Item count of RSS macros that do not give one",
    )
    create_env_aware_argument(
        scanner_group,
        "--extract-metadata",
        action="store_true",
        help="Attach title and source metadata to the document events",
    )

    logging_group = parser.add_argument_group("logging")
    create_env_aware_argument(
        logging_group,
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Logging level (default: %(default)s)",
    )
    create_env_aware_argument(logging_group, "--log-file", help="Also write log records to this file")
    create_env_aware_argument(
        logging_group,
        "--trace",
        action="store_true",
        help="Debug logging with timestamps and logger names",
    )
    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments."""
    # --trace takes precedence over --log-level
    log_level = logging.DEBUG if parsed_args.trace else getattr(logging, parsed_args.log_level.upper())
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def build_options(parsed_args: argparse.Namespace) -> DokuWikiScannerOptions:
    """Build scanner options from parsed arguments.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments

    Returns
    -------
    DokuWikiScannerOptions
        Options with every given argument applied

    """
    overrides: dict[str, Any] = {
        "parse_interwiki": parsed_args.parse_interwiki,
        "autolink_urls": parsed_args.autolink_urls,
        "extract_metadata": parsed_args.extract_metadata,
    }
    if parsed_args.rss_count is not None:
        overrides["rss_default_count"] = parsed_args.rss_count
    return DokuWikiScannerOptions().create_updated(**overrides)


def _resolve_source(input_arg: str) -> Any:
    if input_arg == "-":
        return sys.stdin.buffer if hasattr(sys.stdin, "buffer") else sys.stdin
    return Path(input_arg)


def render_output(parsed_args: argparse.Namespace, source: Any, options: DokuWikiScannerOptions) -> str:
    """Scan ``source`` and render the result in the requested format.

    Returns
    -------
    str
        The complete output text

    """
    if parsed_args.format == "json":
        collector = EventCollector()
        scan(source, collector, options=options)
        return events_to_json(collector.events, indent=2) + "\n"

    if parsed_args.format == "references":
        references = ReferenceCollector()
        scan(source, references, options=options)
        return format_references(references.references)

    buffer = io.StringIO()
    scan(source, TextDumpSink(buffer), options=options)
    return buffer.getvalue()


def main(args: list[str] | None = None) -> int:
    """Execute the dokuscan command.

    Parameters
    ----------
    args : list[str], optional
        Command-line arguments. Defaults to ``sys.argv[1:]``.

    Returns
    -------
    int
        Exit status: 0 on success, 1 when scanning or reading fails

    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)
    _setup_logging_level(parsed_args)

    try:
        options = build_options(parsed_args)
        source = _resolve_source(parsed_args.input)

        if should_use_rich_output(parsed_args, raise_on_missing=True):
            builder = TreeBuilder()
            scan(source, builder, options=options)
            print_rich_tree(builder.root, title=parsed_args.input)
            return EXIT_SUCCESS

        output = render_output(parsed_args, source, options)
        if parsed_args.out:
            Path(parsed_args.out).write_text(output, encoding="utf-8")
            logger.info("Wrote %s output to %s", parsed_args.format, parsed_args.out)
        else:
            sys.stdout.write(output)
    except DokuScanError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    return EXIT_SUCCESS
