#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dokuscan/scanner/core.py
"""DokuWiki scanner: markup text in, ordered events out.

The scanner walks the document line by line. Each line is classified
(blank, list item, preformatted, heading, rule, quote, table row, text) and
handed to the block state machine; the inline part of the line is then
searched for markup tokens. Opaque regions may run across lines, in which
case scanning resumes right after their closer.

A :class:`DokuWikiScanner` holds only configuration. Every call to
:meth:`DokuWikiScanner.scan` creates its own :class:`ScanSession`, so one
scanner can serve any number of concurrent calls on separate inputs.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable

from dokuscan.constants import (
    CODE_MACRO,
    FOOTNOTE_MACRO,
    HEADING_LEVEL_BASE,
    HTML_MACRO,
    LANGUAGE_PARAMETER,
    MAX_HEADING_LEVEL,
    MIN_HEADING_LEVEL,
)
from dokuscan.events import (
    BeginDocument,
    BeginHeading,
    BeginLink,
    BeginTableCell,
    BeginTableHeadCell,
    BeginTableRow,
    EndDocument,
    EndHeading,
    EndLink,
    EndTableCell,
    EndTableHeadCell,
    EndTableRow,
    FormatKind,
    HorizontalLine,
    ListKind,
    Macro,
    NewLine,
    Verbatim,
)
from dokuscan.exceptions import DokuScanError, InvalidOptionsError, ParsingError
from dokuscan.options import DokuWikiScannerOptions
from dokuscan.progress import ProgressCallback, ProgressEvent
from dokuscan.references import ResourceReference
from dokuscan.scanner.blocks import BlockKind, BlockStateMachine
from dokuscan.scanner.constructs import (
    DEFAULT_CURLY_HANDLERS,
    ConstructContext,
    CurlyBracketHandler,
    ImageParser,
    LinkParser,
)
from dokuscan.scanner.emitter import EventEmitter
from dokuscan.scanner.formatting import FormatStack
from dokuscan.scanner.opaque import parse_language, preformatted_content, read_region
from dokuscan.scanner.tokenizer import (
    INLINE_TOKEN_PATTERN,
    LineInfo,
    LineKind,
    classify_line,
    split_table_row,
    starts_with_block_opener,
)
from dokuscan.scanner.words import WordEmitter
from dokuscan.sinks import EventSink
from dokuscan.sources import normalize_newlines

logger = logging.getLogger(__name__)

TOGGLE_FORMATS: dict[str, FormatKind] = {
    "**": FormatKind.BOLD,
    "//": FormatKind.ITALIC,
    "__": FormatKind.UNDERLINED,
    "''": FormatKind.MONOSPACE,
}

TAG_FORMATS: dict[str, FormatKind] = {
    "del": FormatKind.STRIKEOUT,
    "sub": FormatKind.SUBSCRIPT,
    "sup": FormatKind.SUPERSCRIPT,
}

# token group -> (closer, macro id, block-level, fixed parameters)
_MACRO_REGIONS: dict[str, tuple[str, str, bool, dict[str, str]]] = {
    "html_block": ("</HTML>", HTML_MACRO, True, {}),
    "html_inline": ("</html>", HTML_MACRO, False, {}),
    "php_block": ("</PHP>", CODE_MACRO, True, {LANGUAGE_PARAMETER: "php"}),
    "php_inline": ("</php>", CODE_MACRO, False, {LANGUAGE_PARAMETER: "php"}),
}

_VERBATIM_CLOSERS = {"nowiki": "</nowiki>", "percent": "%%"}

_NON_ID_CHARACTERS = re.compile(r"[^A-Za-z0-9]")


def heading_level(marker_length: int) -> int:
    """Map the length of a heading marker to a level: ``7 - n`` clamped to 1..6."""
    return max(MIN_HEADING_LEVEL, min(MAX_HEADING_LEVEL, HEADING_LEVEL_BASE - marker_length))


def heading_title(line: str) -> str:
    """Strip the heading markers and surrounding whitespace from a heading line."""
    return line.strip().strip("= \t")


class HeadingIdGenerator:
    """Generate document-unique heading ids.

    An id is the prefix followed by the ASCII letters and digits of the
    title. Repeats get ``-1``, ``-2``, ... appended.

    Examples
    --------
        >>> ids = HeadingIdGenerator("H")
        >>> ids.generate("Getting started"), ids.generate("Getting started")
        ('HGettingstarted', 'HGettingstarted-1')

    """

    def __init__(self, prefix: str):
        self.prefix = prefix
        self._seen: dict[str, int] = {}

    def generate(self, title: str) -> str:
        base = self.prefix + _NON_ID_CHARACTERS.sub("", title)
        count = self._seen.get(base, 0)
        self._seen[base] = count + 1
        return base if count == 0 else f"{base}-{count}"


class DokuWikiScanner:
    """Convert DokuWiki markup into a stream of document events.

    Parameters
    ----------
    options : DokuWikiScannerOptions, optional
        Scanner configuration. Defaults are used when omitted.
    curly_handlers : Iterable[CurlyBracketHandler], optional
        Ordered handlers for ``{{...}}`` constructs. The first handler that
        accepts a span handles it. Defaults to the RSS macro followed by
        images.
    progress_callback : ProgressCallback, optional
        Receives progress events during each scan

    Raises
    ------
    InvalidOptionsError
        If ``options`` is not a DokuWikiScannerOptions instance

    Examples
    --------
        >>> from dokuscan.sinks import EventCollector
        >>> collector = EventCollector()
        >>> DokuWikiScanner().scan("**bold**", collector)
        >>> [event.event_name for event in collector.events]  # doctest: +NORMALIZE_WHITESPACE
        ['begin_document', 'begin_paragraph', 'begin_format', 'word', 'end_format',
         'end_paragraph', 'end_document']

    """

    def __init__(
        self,
        options: DokuWikiScannerOptions | None = None,
        curly_handlers: Iterable[CurlyBracketHandler] | None = None,
        progress_callback: ProgressCallback | None = None,
    ):
        self._validate_options_type(options, DokuWikiScannerOptions, "DokuWikiScanner")
        self.options: DokuWikiScannerOptions = options or DokuWikiScannerOptions()
        self.curly_handlers: tuple[CurlyBracketHandler, ...] = (
            tuple(curly_handlers) if curly_handlers is not None else DEFAULT_CURLY_HANDLERS
        )
        self.progress_callback = progress_callback

    @staticmethod
    def _validate_options_type(options: Any, expected_type: type, component_name: str) -> None:
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=component_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    def scan(self, text: str, sink: EventSink, metadata: dict[str, Any] | None = None) -> None:
        """Scan ``text`` and deliver every event to ``sink`` in order.

        Parameters
        ----------
        text : str
            DokuWiki markup
        sink : EventSink
            Receiver of the events
        metadata : dict, optional
            Document metadata (e.g. ``source``) attached to the document
            events when ``extract_metadata`` is enabled

        Raises
        ------
        ParsingError
            If scanning fails for a reason other than malformed markup

        """
        session = ScanSession(self, normalize_newlines(text), sink, metadata)
        try:
            session.run()
        except DokuScanError:
            raise
        except Exception as e:
            self._emit_progress("error", "Scan failed", metadata={"error": str(e), "stage": "scanning"})
            raise ParsingError(
                f"Failed to scan DokuWiki markup: {e}", parsing_stage="scanning", original_error=e
            ) from e

    def _emit_progress(
        self,
        event_type: str,
        message: str,
        current: int = 0,
        total: int = 0,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        if not self.progress_callback:
            return
        try:
            event = ProgressEvent(
                event_type=event_type,  # type: ignore[arg-type]
                message=message,
                current=current,
                total=total,
                metadata=metadata or {},
            )
            self.progress_callback(event)
        except Exception as e:
            # Log but don't interrupt scanning if callback fails
            logger.warning(f"Progress callback raised exception: {e}", exc_info=True)


class ScanSession:
    """State of one scan call.

    Parameters
    ----------
    scanner : DokuWikiScanner
        The scanner providing configuration
    text : str
        Markup with normalized line endings
    sink : EventSink
        Receiver of the events
    metadata : dict, optional
        Caller-provided document metadata

    """

    def __init__(
        self,
        scanner: DokuWikiScanner,
        text: str,
        sink: EventSink,
        metadata: dict[str, Any] | None = None,
    ):
        self.scanner = scanner
        self.options = scanner.options
        self.text = text
        self.metadata = dict(metadata or {})
        self.total_lines = text.count("\n") + 1 if text else 0

        self.emitter = EventEmitter(sink)
        self.formats = FormatStack(self.emitter)
        self.blocks = BlockStateMachine(self.emitter, self.formats)
        self.words = WordEmitter(self.emitter, autolink=self.options.autolink_urls)
        self.context = ConstructContext(self.emitter, self.words, self.blocks, self.options)
        image_parser = next((h for h in scanner.curly_handlers if isinstance(h, ImageParser)), None)
        self.links = LinkParser(image_parser)
        self.heading_ids = HeadingIdGenerator(self.options.heading_id_prefix)

    # ------------------------------------------------------------------
    # Driver
    # ------------------------------------------------------------------

    def run(self) -> None:
        text = self.text
        self._progress("started", "Scanning DokuWiki markup", current=0)

        document_metadata = self._document_metadata()
        self.emitter.emit(BeginDocument(document_metadata))

        pos = 0
        length = len(text)
        while pos < length:
            eol = self._line_end(pos)
            line = text[pos:eol]
            info = classify_line(line, self.options.tab_width)
            pos = self._scan_line(pos, eol, line, info)

        self.blocks.finish()
        self.emitter.emit(EndDocument(document_metadata))
        self._progress("finished", "Scan complete", current=self.total_lines)

    def _scan_line(self, pos: int, eol: int, line: str, info: LineInfo) -> int:
        """Handle one classified line and return the position of the next line."""
        kind = info.kind
        blocks = self.blocks

        if kind is LineKind.BLANK:
            blocks.close_block()
            return eol + 1

        if kind is LineKind.PREFORMATTED:
            return self._scan_preformatted(pos)

        if kind is LineKind.HEADING:
            self._scan_heading(pos, line, info)
            return eol + 1

        if kind is LineKind.HORIZONTAL_RULE:
            blocks.close_block()
            self.emitter.emit(HorizontalLine())
            return eol + 1

        if kind is LineKind.LIST_ITEM:
            list_kind = ListKind.BULLETED if info.marker == "*" else ListKind.NUMBERED
            blocks.enter_list_item(info.depth, list_kind)
            end = self._scan_inline(pos + info.content_start, eol)
            self.formats.close_all()
            return end + 1

        if kind is LineKind.QUOTE:
            blocks.enter_quotation_line(info.depth)
            end = self._scan_inline(pos + info.content_start, eol)
            self.formats.close_all()
            return end + 1

        if kind is LineKind.TABLE_ROW:
            self._scan_table_row(pos, line)
            return eol + 1

        # plain text
        if blocks.block is BlockKind.PARAGRAPH:
            if not starts_with_block_opener(line):
                self.emitter.space()
        else:
            blocks.close_block()
        return self._scan_inline(pos, eol) + 1

    def _line_end(self, pos: int) -> int:
        eol = self.text.find("\n", pos)
        return len(self.text) if eol < 0 else eol

    # ------------------------------------------------------------------
    # Line-level constructs
    # ------------------------------------------------------------------

    def _scan_heading(self, pos: int, line: str, info: LineInfo) -> None:
        self.blocks.close_block()
        title = heading_title(line)
        if not title:
            logger.debug("Skipping heading without a title at line %d", self._line_number(pos))
            return

        level = heading_level(info.depth)
        self.blocks.enter_section(level)
        heading_id = self.heading_ids.generate(title)
        self.emitter.emit(BeginHeading(level, heading_id))
        self.words.emit_plain(title)
        self.emitter.emit(EndHeading(level, heading_id))
        self._detected(pos, f"Section level {level}", "section")

    def _scan_preformatted(self, pos: int) -> int:
        self.blocks.close_block()
        start = pos
        lines: list[str] = []
        length = len(self.text)
        while pos < length:
            eol = self._line_end(pos)
            line = self.text[pos:eol]
            if classify_line(line, self.options.tab_width).kind is not LineKind.PREFORMATTED:
                break
            lines.append(line)
            pos = eol + 1

        content = preformatted_content(lines)
        if content.strip():
            self.emitter.emit(Macro(CODE_MACRO, {}, content, False))
            self._detected(start, "Preformatted block", "code")
        return pos

    def _scan_table_row(self, pos: int, line: str) -> None:
        emit = self.emitter.emit
        if self.blocks.enter_table():
            self._detected(pos, "Table", "table")

        emit(BeginTableRow())
        for cell in split_table_row(line):
            alignment = cell.alignment
            params = {"align": alignment} if alignment else {}
            emit(BeginTableHeadCell(params) if cell.header else BeginTableCell(params))
            self._scan_inline(pos + cell.start, pos + cell.end, bounded=True)
            self.formats.close_all()
            emit(EndTableHeadCell(params) if cell.header else EndTableCell(params))
        emit(EndTableRow())

    # ------------------------------------------------------------------
    # Inline content
    # ------------------------------------------------------------------

    def _scan_inline(self, pos: int, end: int, bounded: bool = False) -> int:
        """Scan inline content between ``pos`` and ``end``.

        An opaque region may carry the scan past ``end``; scanning then
        continues to the end of the line the region closed on. Bounded scans
        (table cells) never leave ``end``.

        Returns
        -------
        int
            Position where scanning stopped, always a line end or the bound

        """
        text = self.text
        while pos < end:
            match = INLINE_TOKEN_PATTERN.search(text, pos, end)
            if match is None:
                self._plain(text[pos:end])
                break
            if match.start() > pos:
                self._plain(text[pos : match.start()])
            pos = self._dispatch(match, end if bounded else None)
            if pos > end:
                end = self._line_end(pos)
        return end

    def _plain(self, chunk: str) -> None:
        if not self.blocks.is_open and chunk.isspace():
            return
        self.blocks.ensure_inline()
        self.words.emit_text(chunk)

    def _dispatch(self, match: re.Match[str], bound: int | None) -> int:
        """Emit the events for one inline token and return where scanning resumes."""
        group = match.lastgroup
        blocks = self.blocks
        emit = self.emitter.emit

        if group == "toggle":
            blocks.ensure_inline()
            self.formats.toggle(TOGGLE_FORMATS[match.group()])
        elif group == "tag_open":
            blocks.ensure_inline()
            if not self.formats.begin_if_absent(TAG_FORMATS[match.group("open_tag")]):
                self.words.emit_text(match.group(), autolink=False)
        elif group == "tag_close":
            blocks.ensure_inline()
            if not self.formats.end_if_present(TAG_FORMATS[match.group("close_tag")]):
                self.words.emit_text(match.group(), autolink=False)
        elif group == "link":
            self.links.parse(match.group("link_body"), self.context)
        elif group == "media":
            self._curly(match.group("media_body"))
        elif group == "url":
            blocks.ensure_inline()
            if self.options.autolink_urls:
                self.words.emit_autolink(match.group())
            else:
                self.words.emit_text(match.group(), autolink=False)
        elif group == "email":
            blocks.ensure_inline()
            if self.options.autolink_urls:
                reference = ResourceReference.mailto(match.group("email_address"))
                emit(BeginLink(reference, freestanding=True))
                emit(EndLink(reference, freestanding=True))
            else:
                self.words.emit_text(match.group(), autolink=False)
        elif group == "footnote":
            blocks.ensure_inline()
            emit(Macro(FOOTNOTE_MACRO, {}, match.group("footnote_body"), True))
        elif group == "linebreak":
            blocks.ensure_inline()
            emit(NewLine())
        elif group == "control":
            logger.debug("Dropping control macro %s", match.group())
        elif group == "code":
            return self._code(match, bound)
        elif group in _MACRO_REGIONS:
            return self._macro_region(match, group, bound)
        elif group in _VERBATIM_CLOSERS:
            region = read_region(self.text, match.end(), _VERBATIM_CLOSERS[group], bound)
            emit(Verbatim(region.content, blocks.is_open))
            return region.end
        return match.end()

    def _curly(self, body: str) -> None:
        for handler in self.scanner.curly_handlers:
            if handler.accepts(body):
                handler.handle(body, self.context)
                return
        # no handler took it: keep the markup as text
        self.blocks.ensure_inline()
        self.words.emit_text("{{" + body + "}}", autolink=False)

    def _code(self, match: re.Match[str], bound: int | None) -> int:
        tag = match.group("code_tag")
        region = read_region(self.text, match.end(), f"</{tag}>", bound)
        params: dict[str, str] = {}
        language = parse_language(match.group("code_args"))
        if language is not None:
            params[LANGUAGE_PARAMETER] = language

        self.blocks.ensure_block_acceptable()
        self.emitter.emit(Macro(CODE_MACRO, params, region.content, False))
        self._detected(match.start(), f"{tag.capitalize()} block", "code")
        return region.end

    def _macro_region(self, match: re.Match[str], group: str, bound: int | None) -> int:
        closer, macro_id, block_level, fixed_params = _MACRO_REGIONS[group]
        region = read_region(self.text, match.end(), closer, bound)
        if block_level:
            self.blocks.ensure_block_acceptable()
        else:
            self.blocks.ensure_inline()
        self.emitter.emit(Macro(macro_id, dict(fixed_params), region.content, not block_level))
        return region.end

    # ------------------------------------------------------------------
    # Metadata and progress
    # ------------------------------------------------------------------

    def _document_metadata(self) -> dict[str, Any]:
        if not self.options.extract_metadata:
            return {}
        metadata = dict(self.metadata)
        for line in self.text.split("\n"):
            if classify_line(line, self.options.tab_width).kind is LineKind.HEADING:
                title = heading_title(line)
                if title:
                    metadata.setdefault("title", title)
                    break
        return metadata

    def _line_number(self, pos: int) -> int:
        return self.text.count("\n", 0, pos) + 1

    def _progress(self, event_type: str, message: str, current: int = 0, **metadata: Any) -> None:
        if self.scanner.progress_callback is None:
            return
        self.scanner._emit_progress(event_type, message, current, self.total_lines, metadata)

    def _detected(self, pos: int, message: str, detected_type: str) -> None:
        if self.scanner.progress_callback is None:
            return
        self._progress("detected", message, current=self._line_number(pos), detected_type=detected_type)
