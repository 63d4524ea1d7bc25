#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dokuscan/scanner/blocks.py
"""Block state machine.

Exactly one block is open at any time: nothing, a paragraph, a list (with a
stack of nested levels), a quotation (with a depth), or a table. Sections are
tracked independently and only change at headings and at the end of input.

Invariants
----------
- list level depths strictly increase from the outermost to the innermost
- ``quote_depth`` equals the number of open quotations
- ``section_depth`` equals the number of open sections
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from dokuscan.events import (
    BeginList,
    BeginListItem,
    BeginParagraph,
    BeginQuotation,
    BeginQuotationLine,
    BeginSection,
    BeginTable,
    EndList,
    EndListItem,
    EndParagraph,
    EndQuotation,
    EndQuotationLine,
    EndSection,
    EndTable,
    ListKind,
)
from dokuscan.scanner.emitter import EventEmitter
from dokuscan.scanner.formatting import FormatStack

logger = logging.getLogger(__name__)


class BlockKind(Enum):
    """Kind of the currently open block."""

    NONE = "none"
    PARAGRAPH = "paragraph"
    LIST = "list"
    QUOTATION = "quotation"
    TABLE = "table"


@dataclass(frozen=True)
class ListLevel:
    """One open list level: its nesting level and kind."""

    depth: int
    kind: ListKind


class BlockStateMachine:
    """Open and close blocks, emitting the minimal set of events.

    Parameters
    ----------
    emitter : EventEmitter
        Destination of the block events
    formats : FormatStack
        Inline formatting stack, closed whenever a block closes

    """

    def __init__(self, emitter: EventEmitter, formats: FormatStack):
        self._emitter = emitter
        self._formats = formats
        self.block = BlockKind.NONE
        self.lists: list[ListLevel] = []
        self.quote_depth = 0
        self.section_depth = 0

    @property
    def is_open(self) -> bool:
        """Whether any block is currently open."""
        return self.block is not BlockKind.NONE

    def ensure_inline(self) -> None:
        """Open a paragraph if inline content arrives outside any block."""
        if self.block is BlockKind.NONE:
            self._emitter.emit(BeginParagraph())
            self.block = BlockKind.PARAGRAPH

    def ensure_block_acceptable(self) -> None:
        """Close an open paragraph so a block-level leaf can follow.

        Lists, quotations and tables stay open: a code block inside a list
        item belongs to that item.
        """
        if self.block is BlockKind.PARAGRAPH:
            self.close_block()

    def close_block(self) -> None:
        """Close the current block and every format span inside it."""
        self._formats.close_all()
        emit = self._emitter.emit
        if self.block is BlockKind.QUOTATION:
            while self.quote_depth > 0:
                emit(EndQuotationLine())
                emit(EndQuotation())
                self.quote_depth -= 1
        elif self.block is BlockKind.LIST:
            while self.lists:
                level = self.lists.pop()
                emit(EndListItem())
                emit(EndList(level.kind))
        elif self.block is BlockKind.PARAGRAPH:
            emit(EndParagraph())
        elif self.block is BlockKind.TABLE:
            emit(EndTable())
        self.block = BlockKind.NONE

    def enter_list_item(self, depth: int, kind: ListKind) -> None:
        """Start a list item at nesting level ``depth``.

        Deeper than the innermost level opens a nested list. Shallower closes
        levels until the innermost one is not deeper than ``depth``; the item
        then joins that level even if it sits between two levels. A kind change
        at the same level closes the list and reopens one of the new kind.
        """
        self._formats.close_all()
        if self.block is not BlockKind.LIST:
            self.close_block()
            self.block = BlockKind.LIST

        emit = self._emitter.emit
        if not self.lists or depth > self.lists[-1].depth:
            self.lists.append(ListLevel(depth, kind))
            emit(BeginList(kind))
            emit(BeginListItem())
            return

        while len(self.lists) > 1 and self.lists[-1].depth > depth:
            level = self.lists.pop()
            emit(EndListItem())
            emit(EndList(level.kind))

        current = self.lists[-1]
        emit(EndListItem())
        if current.kind is not kind:
            emit(EndList(current.kind))
            emit(BeginList(kind))
            self.lists[-1] = ListLevel(current.depth, kind)
        emit(BeginListItem())

    def enter_quotation_line(self, depth: int) -> None:
        """Start a quotation line at quote depth ``depth``.

        At the same depth only the innermost line is closed and reopened.
        """
        self._formats.close_all()
        if self.block is not BlockKind.QUOTATION:
            self.close_block()
            self.block = BlockKind.QUOTATION

        emit = self._emitter.emit
        if self.quote_depth >= depth:
            while self.quote_depth > depth:
                emit(EndQuotationLine())
                emit(EndQuotation())
                self.quote_depth -= 1
            emit(EndQuotationLine())
            emit(BeginQuotationLine())
        else:
            while self.quote_depth < depth:
                emit(BeginQuotation())
                emit(BeginQuotationLine())
                self.quote_depth += 1

    def enter_table(self) -> bool:
        """Make sure a table is open.

        Returns
        -------
        bool
            True when a new table was opened

        """
        if self.block is BlockKind.TABLE:
            return False
        self.close_block()
        self._emitter.emit(BeginTable())
        self.block = BlockKind.TABLE
        return True

    def enter_section(self, level: int) -> None:
        """Arrange the open sections for a heading of ``level``.

        Sections at or below ``level`` are closed, then sections are opened up
        to ``level``, so a heading at the current level starts a new section.
        """
        while self.section_depth >= level:
            self._emitter.emit(EndSection())
            self.section_depth -= 1
        while self.section_depth < level:
            self.section_depth += 1
            self._emitter.emit(BeginSection())

    def finish(self) -> None:
        """Close everything still open at the end of input."""
        self.close_block()
        if self.section_depth:
            logger.debug("Closing %d open section(s) at end of input", self.section_depth)
        while self.section_depth > 0:
            self._emitter.emit(EndSection())
            self.section_depth -= 1
