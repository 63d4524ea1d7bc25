#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_references.py
"""Unit tests for resource references."""

import pytest

from dokuscan.references import (
    ReferenceKind,
    ResourceReference,
    is_external_url,
    parse_interwiki,
    split_anchor,
)


@pytest.mark.unit
class TestResourceReference:
    """Tests for ResourceReference constructors and rendering."""

    def test_url_is_untyped_by_default(self):
        """Raw link targets are left for the consumer."""
        reference = ResourceReference.url("start")
        assert reference.kind is ReferenceKind.URL
        assert not reference.typed

    def test_mailto_is_typed(self):
        """E-mail references carry an explicit kind."""
        reference = ResourceReference.mailto("a@b.org")
        assert reference.typed
        assert str(reference) == "a@b.org"

    def test_interwiki_splits_anchor(self):
        """The anchor of an interwiki path is split off."""
        reference = ResourceReference.interwiki("wp", "DokuWiki#History")
        assert reference.target == "DokuWiki"
        assert reference.anchor == "History"
        assert str(reference) == "wp>DokuWiki#History"

    def test_internal(self):
        """Internal references split the anchor and are typed by default."""
        reference = ResourceReference.internal("wiki:syntax#links")
        assert (reference.target, reference.anchor, reference.typed) == ("wiki:syntax", "links", True)

    def test_query_rendered(self):
        """Query strings are rendered after a question mark."""
        reference = ResourceReference("media.png", ReferenceKind.INTERNAL, query="w=10")
        assert str(reference) == "media.png?w=10"

    def test_immutable(self):
        """References are frozen."""
        reference = ResourceReference.url("x")
        with pytest.raises(AttributeError):
            reference.target = "y"


@pytest.mark.unit
class TestHelpers:
    """Tests for module-level helpers."""

    def test_parse_interwiki(self):
        """alias>rest splits at the first >."""
        assert parse_interwiki("doku>wiki:syntax") == ("doku", "wiki:syntax")
        assert parse_interwiki("de.wp>Seite") == ("de.wp", "Seite")
        assert parse_interwiki("wiki:syntax") is None
        assert parse_interwiki("a b>c") is None

    def test_split_anchor(self):
        """Targets without # have no anchor."""
        assert split_anchor("page") == ("page", None)
        assert split_anchor("page#") == ("page", "")

    @pytest.mark.parametrize(
        "text,expected",
        [("http://x.org", True), ("HTTPS://x.org", True), ("ftp://x.org", True), ("www.x.org", False)],
    )
    def test_is_external_url(self, text, expected):
        """Only http, https and ftp schemes count."""
        assert is_external_url(text) is expected
