#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dokuscan/scanner/emitter.py
"""Event forwarding with a one-event lookbehind."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dokuscan.events import (
    BeginHeading,
    BeginListItem,
    BeginParagraph,
    BeginQuotationLine,
    BeginTableCell,
    BeginTableHeadCell,
    Event,
    NewLine,
    Space,
)

if TYPE_CHECKING:
    from dokuscan.sinks import EventSink

# A Space directly after one of these would only render as leading whitespace
_SPACE_SUPPRESSORS: tuple[type[Event], ...] = (
    Space,
    NewLine,
    BeginParagraph,
    BeginListItem,
    BeginQuotationLine,
    BeginTableCell,
    BeginTableHeadCell,
    BeginHeading,
)


class EventEmitter:
    """Forward events to a sink, remembering the last one sent.

    Parameters
    ----------
    sink : EventSink
        Receiver of every event

    """

    def __init__(self, sink: EventSink):
        self.sink = sink
        self.last: Event | None = None
        self.count = 0

    def emit(self, event: Event) -> None:
        self.sink.handle(event)
        self.last = event
        self.count += 1

    def space(self) -> bool:
        """Emit a Space unless it would duplicate one or lead a block.

        Returns
        -------
        bool
            Whether a Space was emitted

        """
        if self.last is None or isinstance(self.last, _SPACE_SUPPRESSORS):
            return False
        self.emit(Space())
        return True
