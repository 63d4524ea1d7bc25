"""The major exported API functions for scanning DokuWiki markup."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/dokuscan/api.py
import logging
from dataclasses import fields
from typing import Any, Iterable, Optional

from dokuscan.events import Event
from dokuscan.exceptions import ValidationError
from dokuscan.options import DokuWikiScannerOptions
from dokuscan.progress import ProgressCallback
from dokuscan.scanner import CurlyBracketHandler, DokuWikiScanner
from dokuscan.sinks import EventCollector, EventSink
from dokuscan.sources import SourceInput, load_source

logger = logging.getLogger(__name__)


def _merge_options(options: Optional[DokuWikiScannerOptions], **kwargs: Any) -> Optional[DokuWikiScannerOptions]:
    """Apply keyword overrides on top of an options object.

    Raises
    ------
    ValidationError
        If a keyword does not name an option

    """
    if not kwargs:
        return options
    known = {option.name for option in fields(DokuWikiScannerOptions)}
    for key, value in kwargs.items():
        if key not in known:
            raise ValidationError(f"Unknown scanner option: {key}", parameter_name=key, parameter_value=value)
    base = options if isinstance(options, DokuWikiScannerOptions) else DokuWikiScannerOptions()
    return base.create_updated(**kwargs)


def scan(
    source: SourceInput,
    sink: EventSink,
    options: Optional[DokuWikiScannerOptions] = None,
    progress_callback: Optional[ProgressCallback] = None,
    curly_handlers: Optional[Iterable[CurlyBracketHandler]] = None,
    **kwargs: Any,
) -> None:
    """Scan a DokuWiki document and deliver its events to ``sink``.

    Parameters
    ----------
    source : str, Path, bytes, or file-like
        Markup text, a ``Path`` to read, encoded bytes, or a stream
    sink : EventSink
        Receiver of the events, called synchronously in order
    options : DokuWikiScannerOptions, optional
        Scanner configuration
    progress_callback : ProgressCallback, optional
        Receives progress events
    curly_handlers : Iterable[CurlyBracketHandler], optional
        Replacement table of ``{{...}}`` construct handlers
    **kwargs
        Individual option overrides, e.g. ``parse_interwiki=False``

    Raises
    ------
    InputError
        If the source cannot be read
    InvalidOptionsError
        If ``options`` has the wrong type
    ParsingError
        If scanning fails unexpectedly

    Examples
    --------
        >>> from dokuscan.sinks import TextDumpSink
        >>> scan("  * item", TextDumpSink())
        begin_document
          begin_list kind=bulleted
            begin_list_item
              word text='item'
            end_list_item
          end_list kind=bulleted
        end_document

    """
    scanner = DokuWikiScanner(
        _merge_options(options, **kwargs),
        curly_handlers=curly_handlers,
        progress_callback=progress_callback,
    )
    loaded = load_source(source)
    metadata = {"source": loaded.name} if loaded.name else None
    logger.debug("Scanning %d characters from %s", len(loaded.text), loaded.name or "text input")
    scanner.scan(loaded.text, sink, metadata=metadata)


def parse_events(
    source: SourceInput,
    options: Optional[DokuWikiScannerOptions] = None,
    progress_callback: Optional[ProgressCallback] = None,
    **kwargs: Any,
) -> list[Event]:
    """Scan a DokuWiki document and return its events as a list.

    Parameters
    ----------
    source : str, Path, bytes, or file-like
        Markup text, a ``Path`` to read, encoded bytes, or a stream
    options : DokuWikiScannerOptions, optional
        Scanner configuration
    progress_callback : ProgressCallback, optional
        Receives progress events
    **kwargs
        Individual option overrides

    Returns
    -------
    list[Event]
        All events in emission order

    Examples
    --------
        >>> [e.event_name for e in parse_events("www.example.com")][1:4]
        ['begin_paragraph', 'begin_link', 'end_link']

    """
    collector = EventCollector()
    scan(source, collector, options=options, progress_callback=progress_callback, **kwargs)
    return collector.events
