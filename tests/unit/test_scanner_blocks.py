#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_scanner_blocks.py
"""Unit tests for block structure: paragraphs, lists, quotations, tables and sections.

Tests cover:
- Lazy paragraph opening and soft line breaks
- List nesting, redent and kind changes
- Quotation depth changes
- Table rows, header cells and alignment
- Heading levels, ids and section nesting
- Horizontal rules and preformatted blocks

"""

import pytest
from utils import body, names, scan_text, without_spaces

from dokuscan.events import (
    BeginHeading,
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
    EndHeading,
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
    HorizontalLine,
    ListKind,
    Macro,
    Space,
    SpecialSymbol,
    Word,
)


@pytest.mark.unit
class TestParagraphs:
    """Tests for paragraph opening and closing."""

    def test_single_paragraph(self):
        """Plain text opens one paragraph closed at end of input."""
        assert body(scan_text("Hello")) == [BeginParagraph(), Word("Hello"), EndParagraph()]

    def test_soft_line_break_is_one_space(self):
        """A single newline inside a paragraph becomes one Space."""
        assert body(scan_text("one\ntwo")) == [
            BeginParagraph(),
            Word("one"),
            Space(),
            Word("two"),
            EndParagraph(),
        ]

    def test_blank_line_separates_paragraphs(self):
        """A blank line closes the paragraph; the next text opens a new one."""
        events = body(scan_text("one\n\nthree"))
        assert events == [
            BeginParagraph(),
            Word("one"),
            EndParagraph(),
            BeginParagraph(),
            Word("three"),
            EndParagraph(),
        ]

    def test_whitespace_only_lines_are_blank(self):
        """Lines holding only whitespace behave like blank lines."""
        events = body(scan_text("one\n   \nthree"))
        assert names(events).count("begin_paragraph") == 2

    def test_trailing_space_before_newline_is_not_duplicated(self):
        """Trailing whitespace plus a soft break still yields a single Space."""
        events = body(scan_text("one   \ntwo"))
        assert events == [BeginParagraph(), Word("one"), Space(), Word("two"), EndParagraph()]

    def test_empty_input(self):
        """Empty input yields only the document events."""
        assert names(scan_text("")) == ["begin_document", "end_document"]

    def test_windows_line_endings(self):
        """CRLF line endings are treated like LF."""
        assert scan_text("one\r\n\r\ntwo") == scan_text("one\n\ntwo")


@pytest.mark.unit
class TestLists:
    """Tests for list nesting."""

    def test_list_redent(self):
        """Nested item followed by a shallower item closes the nested list."""
        events = body(scan_text("  * one\n    * nested\n  * two"))
        assert events == [
            BeginList(ListKind.BULLETED),
            BeginListItem(),
            Word("one"),
            BeginList(ListKind.BULLETED),
            BeginListItem(),
            Word("nested"),
            EndListItem(),
            EndList(ListKind.BULLETED),
            EndListItem(),
            BeginListItem(),
            Word("two"),
            EndListItem(),
            EndList(ListKind.BULLETED),
        ]

    def test_numbered_list(self):
        """A dash marker starts a numbered list."""
        events = body(scan_text("  - one\n  - two"))
        assert events == [
            BeginList(ListKind.NUMBERED),
            BeginListItem(),
            Word("one"),
            EndListItem(),
            BeginListItem(),
            Word("two"),
            EndListItem(),
            EndList(ListKind.NUMBERED),
        ]

    def test_kind_change_at_same_depth_reopens_list(self):
        """Switching marker at the same depth closes and reopens the list."""
        events = body(scan_text("  * a\n  - b"))
        assert events == [
            BeginList(ListKind.BULLETED),
            BeginListItem(),
            Word("a"),
            EndListItem(),
            EndList(ListKind.BULLETED),
            BeginList(ListKind.NUMBERED),
            BeginListItem(),
            Word("b"),
            EndListItem(),
            EndList(ListKind.NUMBERED),
        ]

    def test_dedent_between_levels_joins_enclosing_level(self):
        """An item between two levels joins the enclosing one; no level is invented."""
        events = body(scan_text("  * a\n      * b\n    * c"))
        assert names(events).count("begin_list") == 2
        assert events[-7:] == [
            EndListItem(),
            EndList(ListKind.BULLETED),
            EndListItem(),
            BeginListItem(),
            Word("c"),
            EndListItem(),
            EndList(ListKind.BULLETED),
        ]

    def test_deep_dedent_closes_all_inner_levels(self):
        """Returning to the outer level closes every level in between."""
        events = body(scan_text("  * a\n    * b\n      * c\n  * d"))
        tail = names(events)[-9:]
        assert tail == [
            "end_list_item",
            "end_list",
            "end_list_item",
            "end_list",
            "end_list_item",
            "begin_list_item",
            "word",
            "end_list_item",
            "end_list",
        ]

    def test_odd_indentation_stays_on_level(self):
        """Two and three spaces of indentation are the same level."""
        events = body(scan_text("  * a\n   * b"))
        assert events == [
            BeginList(ListKind.BULLETED),
            BeginListItem(),
            Word("a"),
            EndListItem(),
            BeginListItem(),
            Word("b"),
            EndListItem(),
            EndList(ListKind.BULLETED),
        ]

    def test_tab_indentation(self):
        """A tab-indented item counts as deeper than a two-space item."""
        events = body(scan_text("  * a\n\t\t* b", tab_width=2))
        assert names(events).count("begin_list") == 2

    def test_text_line_closes_list(self):
        """A plain text line closes the list and opens a paragraph."""
        events = body(scan_text("  * a\ntext"))
        assert events[-5:] == [
            EndListItem(),
            EndList(ListKind.BULLETED),
            BeginParagraph(),
            Word("text"),
            EndParagraph(),
        ]

    def test_blank_line_splits_lists(self):
        """A blank line between items produces two lists."""
        events = body(scan_text("  * a\n\n  * b"))
        assert names(events).count("begin_list") == 2
        assert names(events).count("end_list") == 2

    def test_formats_closed_at_end_of_item(self):
        """An unclosed format span does not leak into the next item."""
        events = body(scan_text("  * **a\n  * b"))
        item_names = names(events)
        assert item_names.index("end_format") < item_names.index("end_list_item")
        assert item_names.count("begin_format") == 1


@pytest.mark.unit
class TestQuotations:
    """Tests for quotation depth."""

    def test_nested_quotations(self):
        """Deeper markers open quotations; a text line closes all of them."""
        events = body(scan_text("> a\n> b\n>> c\nd"))
        assert events == [
            BeginQuotation(),
            BeginQuotationLine(),
            Word("a"),
            EndQuotationLine(),
            BeginQuotationLine(),
            Word("b"),
            BeginQuotation(),
            BeginQuotationLine(),
            Word("c"),
            EndQuotationLine(),
            EndQuotation(),
            EndQuotationLine(),
            EndQuotation(),
            BeginParagraph(),
            Word("d"),
            EndParagraph(),
        ]

    def test_shallower_quote_closes_inner_quotation(self):
        """Going back to depth one closes the inner quotation and its line."""
        events = body(scan_text(">> a\n> b"))
        assert events == [
            BeginQuotation(),
            BeginQuotationLine(),
            BeginQuotation(),
            BeginQuotationLine(),
            Word("a"),
            EndQuotationLine(),
            EndQuotation(),
            EndQuotationLine(),
            BeginQuotationLine(),
            Word("b"),
            EndQuotationLine(),
            EndQuotation(),
        ]


@pytest.mark.unit
class TestTables:
    """Tests for table rows and cells."""

    def test_header_and_body_rows(self):
        """Caret cells are header cells, pipe cells are body cells."""
        events = body(scan_text("^ H1 ^ H2 ^\n| a | b |"))
        assert events == [
            BeginTable(),
            BeginTableRow(),
            BeginTableHeadCell(),
            Word("H1"),
            EndTableHeadCell(),
            BeginTableHeadCell(),
            Word("H2"),
            EndTableHeadCell(),
            EndTableRow(),
            BeginTableRow(),
            BeginTableCell(),
            Word("a"),
            EndTableCell(),
            BeginTableCell(),
            Word("b"),
            EndTableCell(),
            EndTableRow(),
            EndTable(),
        ]

    @pytest.mark.parametrize(
        "row,expected",
        [
            ("|  right|", {"align": "right"}),
            ("|  centered  |", {"align": "center"}),
            ("| left  |", {}),
            ("| plain |", {}),
        ],
    )
    def test_cell_alignment(self, row, expected):
        """Padding of two or more spaces determines alignment."""
        events = body(scan_text(row))
        assert events[2] == BeginTableCell(expected)
        assert events[4] == EndTableCell(expected)

    def test_leading_empty_cells_skipped(self):
        """Zero-length cells at the start of a row are not emitted."""
        events = body(scan_text("||a|"))
        assert names(events).count("begin_table_cell") == 1

    def test_empty_middle_cell_kept(self):
        """An empty cell after content is emitted without content."""
        events = body(scan_text("| a || b |"))
        assert names(events).count("begin_table_cell") == 3
        assert BeginTableCell() in events

    def test_link_separator_does_not_split_cell(self):
        """A pipe inside a link stays part of the cell."""
        events = body(scan_text("| [[page|Label]] | x |"))
        assert names(events).count("begin_table_cell") == 2
        assert Word("Label") in events

    def test_text_line_closes_table(self):
        """A plain text line after a table closes it."""
        events = body(scan_text("| a |\ntext"))
        assert names(events)[-4:] == ["end_table", "begin_paragraph", "word", "end_paragraph"]

    def test_unterminated_code_in_cell_bounded_by_cell(self):
        """An opaque region inside a cell never runs past the cell."""
        events = body(scan_text("| <code>x | b |"))
        assert events == [
            BeginTable(),
            BeginTableRow(),
            BeginTableCell(),
            Macro("code", {}, "x", False),
            EndTableCell(),
            BeginTableCell(),
            Word("b"),
            EndTableCell(),
            EndTableRow(),
            EndTable(),
        ]


@pytest.mark.unit
class TestHeadings:
    """Tests for headings and sections."""

    def test_five_equals_is_level_two(self):
        """Level is seven minus the marker length."""
        events = body(scan_text("=====Title====="))
        assert BeginHeading(2, "HTitle") in events
        assert EndHeading(2, "HTitle") in events

    def test_single_equals_clamps_to_level_six(self):
        """A one-character marker clamps to level 6."""
        events = body(scan_text("=Title="))
        assert BeginHeading(6, "HTitle") in events
        assert names(events).count("begin_section") == 6

    def test_long_marker_clamps_to_level_one(self):
        """Markers longer than six still give level 1."""
        events = body(scan_text("======== Big ========"))
        assert events[1] == BeginHeading(1, "HBig")

    def test_sections_nest_by_level(self):
        """Same or higher level headings close sections before opening new ones."""
        events = body(scan_text("====== One ======\ntext\n===== Two =====\n====== Three ======"))
        assert events == [
            BeginSection(),
            BeginHeading(1, "HOne"),
            Word("One"),
            EndHeading(1, "HOne"),
            BeginParagraph(),
            Word("text"),
            EndParagraph(),
            BeginSection(),
            BeginHeading(2, "HTwo"),
            Word("Two"),
            EndHeading(2, "HTwo"),
            EndSection(),
            EndSection(),
            BeginSection(),
            BeginHeading(1, "HThree"),
            Word("Three"),
            EndHeading(1, "HThree"),
            EndSection(),
        ]

    def test_same_level_heading_reopens_section(self):
        """A heading at the open level closes and reopens exactly one section."""
        events = names(body(scan_text("==== A ====\n==== B ====")))
        assert events.count("begin_section") == 4
        assert events.count("end_section") == 4

    def test_repeated_titles_get_unique_ids(self):
        """Duplicate heading titles get numeric suffixes."""
        events = body(scan_text("==== A ====\n==== A ===="))
        ids = [event.id for event in events if isinstance(event, BeginHeading)]
        assert ids == ["HA", "HA-1"]

    def test_heading_title_is_plain_text(self):
        """Punctuation in titles becomes special symbols, markup stays literal."""
        events = body(scan_text("== Hello, **World** =="))
        start = events.index(BeginHeading(5, "HHelloWorld"))
        end = events.index(EndHeading(5, "HHelloWorld"))
        assert without_spaces(events[start + 1 : end]) == [
            Word("Hello"),
            SpecialSymbol(","),
            SpecialSymbol("*"),
            SpecialSymbol("*"),
            Word("World"),
            SpecialSymbol("*"),
            SpecialSymbol("*"),
        ]

    def test_heading_without_title_is_skipped(self):
        """A marker-only line produces no events."""
        assert body(scan_text("======")) == []

    def test_custom_heading_id_prefix(self):
        """The id prefix is configurable."""
        events = body(scan_text("== Intro ==", heading_id_prefix="sec-"))
        assert BeginHeading(5, "sec-Intro") in events

    def test_heading_closes_paragraph(self):
        """A heading line closes an open paragraph first."""
        events = names(body(scan_text("text\n== H ==")))
        assert events.index("end_paragraph") < events.index("begin_section")


@pytest.mark.unit
class TestLineBlocks:
    """Tests for horizontal rules and preformatted blocks."""

    def test_horizontal_rule(self):
        """Four or more dashes close the paragraph and emit a rule."""
        events = body(scan_text("text\n----\nmore"))
        assert events == [
            BeginParagraph(),
            Word("text"),
            EndParagraph(),
            HorizontalLine(),
            BeginParagraph(),
            Word("more"),
            EndParagraph(),
        ]

    def test_preformatted_block(self):
        """Indented lines form one code macro without the indent."""
        events = body(scan_text("  code line\n  second\n\ntext"))
        assert events == [
            Macro("code", {}, "code line\nsecond", False),
            BeginParagraph(),
            Word("text"),
            EndParagraph(),
        ]

    def test_preformatted_keeps_markup_literal(self):
        """Markup inside a preformatted block is not scanned."""
        events = body(scan_text("  //not italic//"))
        assert events == [Macro("code", {}, "//not italic//", False)]

    def test_block_opener_adds_no_soft_break(self):
        """A line starting with a code block does not add a Space to the paragraph."""
        events = body(scan_text("text\n<code>x</code>"))
        assert events == [
            BeginParagraph(),
            Word("text"),
            EndParagraph(),
            Macro("code", {}, "x", False),
        ]
