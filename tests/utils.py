"""Test utilities for the dokuscan test suite.

Helpers for scanning snippets and comparing event streams in a compact form.
"""

import shutil
import tempfile
from pathlib import Path

from dokuscan import DokuWikiScannerOptions, parse_events
from dokuscan.events import Event, Space
from dokuscan.sinks import TreeBuilder


def create_test_temp_dir() -> Path:
    """Create a temporary directory for test files."""
    return Path(tempfile.mkdtemp(prefix="dokuscan_test_"))


def cleanup_test_dir(path: Path) -> None:
    """Remove a directory created by :func:`create_test_temp_dir`."""
    shutil.rmtree(path, ignore_errors=True)


def scan_text(text: str, **options) -> list[Event]:
    """Scan markup with optional option overrides and return all events."""
    if options:
        return parse_events(text, options=DokuWikiScannerOptions(**options))
    return parse_events(text)


def body(events: list[Event]) -> list[Event]:
    """Strip the BeginDocument/EndDocument pair."""
    assert events[0].event_name == "begin_document"
    assert events[-1].event_name == "end_document"
    return events[1:-1]


def names(events: list[Event]) -> list[str]:
    """Event names in order."""
    return [event.event_name for event in events]


def without_spaces(events: list[Event]) -> list[Event]:
    """Drop Space events."""
    return [event for event in events if not isinstance(event, Space)]


def assert_well_nested(events: list[Event]) -> None:
    """Fail unless the stream is balanced and closed by a single EndDocument."""
    builder = TreeBuilder()
    for event in events:
        builder.handle(event)
    assert builder.complete
    assert builder.root.event.event_name == "begin_document"
    assert sum(1 for event in events if event.event_name == "end_document") == 1
