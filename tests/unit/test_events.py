#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_events.py
"""Unit tests for event classes."""

import dataclasses

import pytest

from dokuscan.events import (
    EVENT_TYPES,
    BeginDocument,
    BeginParagraph,
    BeginTableCell,
    EndParagraph,
    Image,
    Macro,
    Word,
)
from dokuscan.references import ResourceReference
from dokuscan.sinks import describe_event


@pytest.mark.unit
class TestEventNames:
    """Tests for names and roles."""

    def test_names_and_roles(self):
        """Class names map to snake-case names and begin/end/leaf roles."""
        assert BeginParagraph.event_name == "begin_paragraph"
        assert BeginParagraph().is_begin
        assert EndParagraph().closes(BeginParagraph())
        assert Word.role == "leaf"
        assert EVENT_TYPES["begin_table_cell"] is BeginTableCell


@pytest.mark.unit
class TestImmutability:
    """Events cannot be changed after construction."""

    def test_fields_frozen(self):
        """Assigning a field fails."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            Word("a").text = "b"

    def test_params_read_only(self):
        """Parameter maps reject item assignment."""
        macro = Macro("code", {"language": "java"}, "x", False)
        with pytest.raises(TypeError):
            macro.params["language"] = "php"
        assert macro.params == {"language": "java"}

    def test_params_copied(self):
        """Changing the dict passed in does not change the event."""
        params = {"width": "50"}
        image = Image(ResourceReference.url("a.png"), params)
        params["width"] = "10"
        assert image.params == {"width": "50"}

    def test_metadata_read_only(self):
        """Document metadata rejects item assignment."""
        begin = BeginDocument({"title": "T"})
        with pytest.raises(TypeError):
            begin.metadata["title"] = "U"

    def test_default_params_equal_empty_dict(self):
        """Events built without parameters compare equal to ones built with {}."""
        assert BeginTableCell() == BeginTableCell({})
        assert describe_event(BeginTableCell({"align": "right"})) == "begin_table_cell params={'align': 'right'}"
