#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dokuscan/scanner/formatting.py
"""Inline formatting stack.

DokuWiki authors routinely write overlapping spans such as
``**bold //both** italic//``. Consumers need a well-nested stream, so closing
a span that is not innermost closes every span opened after it, closes the
target, and then reopens the others in their original order::

    **a //b** c//  ->  Begin(bold) a Begin(italic) b End(italic) End(bold)
                       Begin(italic) c End(italic)

"""

from __future__ import annotations

import logging

from dokuscan.events import BeginFormat, EndFormat, FormatKind
from dokuscan.scanner.emitter import EventEmitter

logger = logging.getLogger(__name__)


class FormatStack:
    """Stack of currently open inline format spans.

    Parameters
    ----------
    emitter : EventEmitter
        Destination of the BeginFormat/EndFormat events

    """

    def __init__(self, emitter: EventEmitter):
        self._emitter = emitter
        self._open: list[FormatKind] = []

    def __contains__(self, kind: object) -> bool:
        return kind in self._open

    def __len__(self) -> int:
        return len(self._open)

    @property
    def open_formats(self) -> tuple[FormatKind, ...]:
        """Open spans, outermost first."""
        return tuple(self._open)

    def toggle(self, kind: FormatKind) -> None:
        """Open ``kind`` if it is closed, otherwise close it."""
        if kind in self._open:
            self._close(kind)
        else:
            self._push(kind)

    def begin_if_absent(self, kind: FormatKind) -> bool:
        """Open ``kind`` unless it is already open.

        Returns
        -------
        bool
            False when the span was already open and the marker must be
            treated as literal text

        """
        if kind in self._open:
            logger.debug("Opening marker for already open %s treated as text", kind.value)
            return False
        self._push(kind)
        return True

    def end_if_present(self, kind: FormatKind) -> bool:
        """Close ``kind`` if it is open.

        Returns
        -------
        bool
            False when the span was not open and the marker must be treated as
            literal text

        """
        if kind not in self._open:
            logger.debug("Closing marker for unopened %s treated as text", kind.value)
            return False
        self._close(kind)
        return True

    def close_all(self) -> None:
        """Close every open span, innermost first, without reopening."""
        while self._open:
            self._emitter.emit(EndFormat(self._open.pop()))

    def _push(self, kind: FormatKind) -> None:
        self._open.append(kind)
        self._emitter.emit(BeginFormat(kind))

    def _close(self, kind: FormatKind) -> None:
        index = self._open.index(kind)
        above = self._open[index + 1 :]
        for inner in reversed(above):
            self._emitter.emit(EndFormat(inner))
        self._emitter.emit(EndFormat(kind))
        del self._open[index:]
        for inner in above:
            self._push(inner)
