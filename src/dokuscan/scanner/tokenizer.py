#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dokuscan/scanner/tokenizer.py
"""Line classification and inline token recognition.

The scanner works on physical lines. Each line is classified once by
:func:`classify_line`; inline content is then searched with
:data:`INLINE_TOKEN_PATTERN`, whose leftmost match is the next markup token.
Everything between two tokens is plain text for the word emitter.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from dokuscan.constants import LIST_INDENT_PER_LEVEL, TABLE_CELL_ALIGN_PADDING

# Block-level line patterns
LIST_ITEM_PATTERN = re.compile(r"^( {2,}|\t+)([*-])[ \t]*")
PREFORMATTED_PATTERN = re.compile(r"^(?: {2}|\t)")
HORIZONTAL_RULE_PATTERN = re.compile(r"^-{4,}[ \t]*$")
QUOTE_PATTERN = re.compile(r"^(>+)[ \t]*")
TABLE_ROW_PATTERN = re.compile(r"^[|^]")

# A line starting with one of these never adds a soft-break Space
BLOCK_OPENER_PATTERN = re.compile(r"^[ \t]*(?:<(?:code|file)(?:\s[^>]*)?>|<HTML>|<PHP>|\{\{rss>)")

INLINE_TOKEN_PATTERN = re.compile(
    r"""
    (?P<code><(?P<code_tag>code|file)(?P<code_args>\s[^>]*)?>)
    | (?P<html_block><HTML>)
    | (?P<html_inline><html>)
    | (?P<php_block><PHP>)
    | (?P<php_inline><php>)
    | (?P<nowiki><nowiki>)
    | (?P<percent>%%)
    | (?P<link>\[\[(?P<link_body>.+?)\]\])
    | (?P<media>\{\{(?P<media_body>.+?)\}\})
    | (?P<footnote>\(\((?P<footnote_body>.+?)\)\))
    | (?P<email><(?P<email_address>[\w.+-]+@[\w-]+(?:\.[\w-]+)+)>)
    | (?P<url>\b(?:(?:https?|ftp)://|www\.)[^\s<>\[\]{}|"'*]+)
    | (?P<control>~~(?:NOTOC|NOCACHE)~~)
    | (?P<linebreak>\\\\(?:[ \t]+|$))
    | (?P<tag_open><(?P<open_tag>del|sub|sup)>)
    | (?P<tag_close></(?P<close_tag>del|sub|sup)>)
    | (?P<toggle>\*\*|//|__|'')
    """,
    re.VERBOSE,
)

# Spans inside which a table separator never splits a cell
_PROTECTED_SPAN_PATTERN = re.compile(
    r"\[\[.*?\]\]|\{\{.*?\}\}|\(\(.*?\)\)|%%.*?%%|<nowiki>.*?</nowiki>"
)


class LineKind(Enum):
    """Classification of a physical line."""

    BLANK = "blank"
    LIST_ITEM = "list_item"
    PREFORMATTED = "preformatted"
    HEADING = "heading"
    HORIZONTAL_RULE = "horizontal_rule"
    QUOTE = "quote"
    TABLE_ROW = "table_row"
    TEXT = "text"


@dataclass(frozen=True)
class LineInfo:
    """A classified line.

    Parameters
    ----------
    kind : LineKind
        Line classification
    content_start : int
        Offset within the line where inline content begins
    depth : int, default 0
        List level (indentation width over two), quote depth, or heading
        marker length
    marker : str, default ""
        List marker (``*`` or ``-``)

    """

    kind: LineKind
    content_start: int = 0
    depth: int = 0
    marker: str = ""


@dataclass(frozen=True)
class CellSpan:
    """One table cell within a row line.

    Offsets are relative to the line and delimit the cell's trimmed content.
    """

    header: bool
    start: int
    end: int
    leading_padding: int
    trailing_padding: int

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    @property
    def alignment(self) -> str | None:
        leading = self.leading_padding >= TABLE_CELL_ALIGN_PADDING
        trailing = self.trailing_padding >= TABLE_CELL_ALIGN_PADDING
        if leading and trailing:
            return "center"
        if leading and not self.is_empty:
            return "right"
        return None


def indentation_width(indent: str, tab_width: int) -> int:
    """Measure leading whitespace, counting each tab as ``tab_width`` spaces."""
    return sum(tab_width if char == "\t" else 1 for char in indent)


def classify_line(line: str, tab_width: int = 2) -> LineInfo:
    """Classify a physical line (without its line terminator).

    Parameters
    ----------
    line : str
        The line text
    tab_width : int, default 2
        Spaces counted for a tab in list indentation

    Returns
    -------
    LineInfo
        The classification

    """
    if not line.strip():
        return LineInfo(LineKind.BLANK)

    match = LIST_ITEM_PATTERN.match(line)
    if match:
        return LineInfo(
            LineKind.LIST_ITEM,
            content_start=match.end(),
            depth=indentation_width(match.group(1), tab_width) // LIST_INDENT_PER_LEVEL,
            marker=match.group(2),
        )

    match = PREFORMATTED_PATTERN.match(line)
    if match:
        return LineInfo(LineKind.PREFORMATTED, content_start=match.end())

    stripped = line.strip()
    if len(stripped) >= 2 and stripped[0] == "=" and stripped[-1] == "=":
        return LineInfo(LineKind.HEADING, depth=len(stripped) - len(stripped.lstrip("=")))

    if HORIZONTAL_RULE_PATTERN.match(line):
        return LineInfo(LineKind.HORIZONTAL_RULE)

    match = QUOTE_PATTERN.match(line)
    if match:
        return LineInfo(LineKind.QUOTE, content_start=match.end(), depth=len(match.group(1)))

    if TABLE_ROW_PATTERN.match(line):
        return LineInfo(LineKind.TABLE_ROW)

    return LineInfo(LineKind.TEXT)


def starts_with_block_opener(line: str) -> bool:
    """Return whether the line begins with a block-level opaque region or macro."""
    return BLOCK_OPENER_PATTERN.match(line) is not None


def split_table_row(line: str) -> list[CellSpan]:
    """Split a table row line into cells.

    Every ``|`` or ``^`` outside a link, media, footnote or no-format span
    starts a cell. Zero-length cells at the start of the row are skipped, and
    a blank remainder after the last separator is the row's end marker.

    Examples
    --------
        >>> [c.header for c in split_table_row("^ a ^ b ^")]
        [True, True]

    """
    separators: list[int] = []
    protected = [(m.start(), m.end()) for m in _PROTECTED_SPAN_PATTERN.finditer(line)]
    span_index = 0
    for index, char in enumerate(line):
        while span_index < len(protected) and protected[span_index][1] <= index:
            span_index += 1
        if span_index < len(protected) and protected[span_index][0] <= index:
            continue
        if char in "|^":
            separators.append(index)

    cells: list[CellSpan] = []
    for number, separator in enumerate(separators):
        segment_start = separator + 1
        segment_end = separators[number + 1] if number + 1 < len(separators) else len(line)
        segment = line[segment_start:segment_end]
        is_last = number + 1 == len(separators)

        if is_last and not segment.strip():
            break
        if not cells and segment_start == segment_end:
            continue

        content = segment.strip(" \t")
        if content:
            leading = len(segment) - len(segment.lstrip(" \t"))
            trailing = len(segment) - len(segment.rstrip(" \t"))
        else:
            leading, trailing = len(segment), 0
        cells.append(
            CellSpan(
                header=line[separator] == "^",
                start=segment_start + leading,
                end=segment_end - trailing,
                leading_padding=leading,
                trailing_padding=trailing,
            )
        )
    return cells
