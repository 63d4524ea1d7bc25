#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dokuscan/events.py
"""Immutable document events produced by the scanner.

The scanner does not build a tree. It emits a linear, well-nested stream of
events (a SAX-like model). Every event class is a frozen dataclass, and every
class knows:

``event_name``
    The snake-case name used for dispatch, e.g. ``begin_paragraph``. Sinks
    deriving from :class:`~dokuscan.sinks.DispatchingSink` receive the event
    in ``on_begin_paragraph``.
``role``
    ``"begin"``, ``"end"`` or ``"leaf"``.
``structure``
    For Begin/End events, the structure being opened or closed
    (``"paragraph"`` for both ``BeginParagraph`` and ``EndParagraph``).
    ``None`` for leaf events.

Examples
--------
    >>> BeginFormat(FormatKind.BOLD).event_name
    'begin_format'
    >>> EndList(ListKind.BULLETED).structure
    'list'

"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Literal, Mapping

from dokuscan.references import ResourceReference

EventRole = Literal["begin", "end", "leaf"]

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class ListKind(str, Enum):
    """Kind of list opened by ``BeginList``."""

    BULLETED = "bulleted"
    NUMBERED = "numbered"


class FormatKind(str, Enum):
    """Kind of inline format span."""

    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINED = "underlined"
    MONOSPACE = "monospace"
    SUBSCRIPT = "subscript"
    SUPERSCRIPT = "superscript"
    STRIKEOUT = "strikeout"


EVENT_TYPES: dict[str, type[Event]] = {}
"""Registry of concrete event classes by ``event_name``."""


@dataclass(frozen=True)
class Event:
    """Base class for all events."""

    event_name: ClassVar[str] = "event"
    role: ClassVar[EventRole] = "leaf"
    structure: ClassVar[str | None] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        name = _CAMEL_BOUNDARY.sub("_", cls.__name__).lower()
        cls.event_name = name
        if name.startswith("begin_"):
            cls.role = "begin"
            cls.structure = name[len("begin_") :]
        elif name.startswith("end_"):
            cls.role = "end"
            cls.structure = name[len("end_") :]
        else:
            cls.role = "leaf"
            cls.structure = None
        EVENT_TYPES[name] = cls

    def __post_init__(self) -> None:
        # params and metadata are stored as read-only copies
        for event_field in fields(self):
            value = getattr(self, event_field.name)
            if isinstance(value, dict):
                object.__setattr__(self, event_field.name, MappingProxyType(dict(value)))

    @property
    def is_begin(self) -> bool:
        return self.role == "begin"

    @property
    def is_end(self) -> bool:
        return self.role == "end"

    def closes(self, begin: Event) -> bool:
        """Return whether this End event matches the given Begin event."""
        return self.role == "end" and begin.role == "begin" and self.structure == begin.structure


# ---------------------------------------------------------------------------
# Document structure
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BeginDocument(Event):
    metadata: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class EndDocument(Event):
    metadata: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class BeginSection(Event):
    pass


@dataclass(frozen=True)
class EndSection(Event):
    pass


@dataclass(frozen=True)
class BeginHeading(Event):
    """Start of a heading.

    Parameters
    ----------
    level : int
        Heading level from 1 (largest) to 6
    id : str
        Generated identifier, unique within the document

    """

    level: int
    id: str


@dataclass(frozen=True)
class EndHeading(Event):
    level: int
    id: str


@dataclass(frozen=True)
class BeginParagraph(Event):
    pass


@dataclass(frozen=True)
class EndParagraph(Event):
    pass


@dataclass(frozen=True)
class BeginList(Event):
    kind: ListKind


@dataclass(frozen=True)
class EndList(Event):
    kind: ListKind


@dataclass(frozen=True)
class BeginListItem(Event):
    pass


@dataclass(frozen=True)
class EndListItem(Event):
    pass


@dataclass(frozen=True)
class BeginQuotation(Event):
    pass


@dataclass(frozen=True)
class EndQuotation(Event):
    pass


@dataclass(frozen=True)
class BeginQuotationLine(Event):
    pass


@dataclass(frozen=True)
class EndQuotationLine(Event):
    pass


@dataclass(frozen=True)
class BeginTable(Event):
    pass


@dataclass(frozen=True)
class EndTable(Event):
    pass


@dataclass(frozen=True)
class BeginTableRow(Event):
    pass


@dataclass(frozen=True)
class EndTableRow(Event):
    pass


@dataclass(frozen=True)
class BeginTableCell(Event):
    """Start of a body cell. ``params`` may hold ``align``."""

    params: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class EndTableCell(Event):
    params: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class BeginTableHeadCell(Event):
    """Start of a header cell. ``params`` may hold ``align``."""

    params: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class EndTableHeadCell(Event):
    params: Mapping[str, str] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Inline structure
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BeginFormat(Event):
    kind: FormatKind


@dataclass(frozen=True)
class EndFormat(Event):
    kind: FormatKind


@dataclass(frozen=True)
class BeginLink(Event):
    """Start of a link.

    Parameters
    ----------
    reference : ResourceReference
        Link target. Untyped references are left for the consumer to resolve.
    freestanding : bool, default False
        True for links synthesized from a bare URL or e-mail address. Such a
        link is always followed directly by its ``EndLink``.
    params : dict, default empty
        Extra link parameters

    """

    reference: ResourceReference
    freestanding: bool = False
    params: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class EndLink(Event):
    reference: ResourceReference
    freestanding: bool = False
    params: Mapping[str, str] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Leaf events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Image(Event):
    """An image.

    ``params`` uses the keys ``alt``, ``title``, ``align``, ``width`` and
    ``height``. Unknown keys are passed through.
    """

    reference: ResourceReference
    params: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Word(Event):
    text: str


@dataclass(frozen=True)
class Space(Event):
    pass


@dataclass(frozen=True)
class SpecialSymbol(Event):
    symbol: str


@dataclass(frozen=True)
class NewLine(Event):
    pass


@dataclass(frozen=True)
class HorizontalLine(Event):
    pass


@dataclass(frozen=True)
class Verbatim(Event):
    """Text copied without markup interpretation."""

    text: str
    inline: bool


@dataclass(frozen=True)
class Macro(Event):
    """A macro such as ``code``, ``html``, ``footnote`` or ``rss``.

    Parameters
    ----------
    id : str
        Macro identifier
    params : dict
        String-keyed, string-valued parameters
    content : str or None
        Raw macro content
    inline : bool
        Whether the macro sits inside inline content

    """

    id: str
    params: Mapping[str, str] = field(default_factory=dict)
    content: str | None = None
    inline: bool = False
