"""dokuscan - DokuWiki markup to document events.

dokuscan reads DokuWiki markup and produces an ordered, well-nested stream of
semantic document events (begin/end document, section, paragraph, list,
quotation, table, inline format spans, and leaf events for words, spaces,
links, images and macros). It does not build a tree: consumers such as
renderers and converters subscribe to the stream through an event sink.

Key Features
------------
- Line-oriented block structure: paragraphs, nested lists, quotations,
  tables, headings with sections, horizontal rules
- Inline formatting with automatic repair of overlapping spans
- Links, interwiki links, images, footnotes, e-mail and URL autolinks
- Verbatim regions: code and file blocks, raw HTML/PHP, preformatted text,
  no-format spans
- Never fails on malformed markup; the output is always balanced

Examples
--------
Collect the events of a document:

    >>> from dokuscan import parse_events
    >>> events = parse_events("====== Title ======\\n\\nSome **bold** text.")

Stream events into your own sink:

    >>> from dokuscan import DispatchingSink, scan
    >>>
    >>> class HeadingPrinter(DispatchingSink):
    ...     def on_begin_heading(self, event):
    ...         print(event.level, event.id)
    >>>
    >>> scan("===== Usage =====", HeadingPrinter())
    2 HUsage

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "dokuscan requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from dokuscan.api import parse_events, scan
from dokuscan.events import (
    BeginDocument,
    BeginFormat,
    BeginHeading,
    BeginLink,
    BeginList,
    BeginListItem,
    BeginParagraph,
    BeginQuotation,
    BeginQuotationLine,
    BeginSection,
    BeginTable,
    BeginTableCell,
    BeginTableHeadCell,
    BeginTableRow,
    EndDocument,
    EndFormat,
    EndHeading,
    EndLink,
    EndList,
    EndListItem,
    EndParagraph,
    EndQuotation,
    EndQuotationLine,
    EndSection,
    EndTable,
    EndTableCell,
    EndTableHeadCell,
    EndTableRow,
    Event,
    FormatKind,
    HorizontalLine,
    Image,
    ListKind,
    Macro,
    NewLine,
    Space,
    SpecialSymbol,
    Verbatim,
    Word,
)
from dokuscan.exceptions import (
    DependencyError,
    DokuScanError,
    InputError,
    InvalidOptionsError,
    NestingError,
    ParsingError,
    ValidationError,
)
from dokuscan.options import DokuWikiScannerOptions
from dokuscan.progress import ProgressCallback, ProgressEvent
from dokuscan.references import ReferenceKind, ResourceReference
from dokuscan.scanner import DokuWikiScanner
from dokuscan.sinks import (
    CallbackSink,
    DispatchingSink,
    EventCollector,
    EventSink,
    EventTree,
    ReferenceCollector,
    TextDumpSink,
    TreeBuilder,
)

__all__ = [
    "__version__",
    # API
    "scan",
    "parse_events",
    "DokuWikiScanner",
    "DokuWikiScannerOptions",
    # Events
    "Event",
    "BeginDocument",
    "EndDocument",
    "BeginSection",
    "EndSection",
    "BeginHeading",
    "EndHeading",
    "BeginParagraph",
    "EndParagraph",
    "BeginList",
    "EndList",
    "BeginListItem",
    "EndListItem",
    "BeginQuotation",
    "EndQuotation",
    "BeginQuotationLine",
    "EndQuotationLine",
    "BeginTable",
    "EndTable",
    "BeginTableRow",
    "EndTableRow",
    "BeginTableCell",
    "EndTableCell",
    "BeginTableHeadCell",
    "EndTableHeadCell",
    "BeginFormat",
    "EndFormat",
    "BeginLink",
    "EndLink",
    "Image",
    "Word",
    "Space",
    "SpecialSymbol",
    "NewLine",
    "HorizontalLine",
    "Verbatim",
    "Macro",
    "ListKind",
    "FormatKind",
    "ResourceReference",
    "ReferenceKind",
    # Sinks
    "EventSink",
    "DispatchingSink",
    "EventCollector",
    "CallbackSink",
    "ReferenceCollector",
    "TreeBuilder",
    "EventTree",
    "TextDumpSink",
    # Progress
    "ProgressCallback",
    "ProgressEvent",
    # Exceptions
    "DokuScanError",
    "ValidationError",
    "InvalidOptionsError",
    "InputError",
    "ParsingError",
    "NestingError",
    "DependencyError",
]
