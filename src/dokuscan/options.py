#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dokuscan/options.py
"""Configuration options for DokuWiki scanning.

Options are frozen dataclasses so a single options object can be shared by
any number of concurrent scan calls. Use ``create_updated`` to derive a
modified copy.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from dokuscan.constants import (
    DEFAULT_AUTOLINK_URLS,
    DEFAULT_EXTRACT_METADATA,
    DEFAULT_HEADING_ID_PREFIX,
    DEFAULT_PARSE_INTERWIKI,
    DEFAULT_RSS_COUNT,
    DEFAULT_TAB_WIDTH,
)


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class DokuWikiScannerOptions(CloneFrozenMixin):
    """Configuration options for turning DokuWiki markup into events.

    Parameters
    ----------
    extract_metadata : bool, default False
        Attach ``title`` (first heading) and ``source`` (file path, when known)
        to the metadata of the BeginDocument/EndDocument events.
    parse_interwiki : bool, default True
        Whether ``[[wp>Article]]`` style targets become InterWiki references.
        When False they are emitted as untyped URL references like any other
        link target.
    autolink_urls : bool, default True
        Whether URL-shaped words and ``<user@host>`` addresses become
        freestanding links. When False they are emitted as words.
    rss_default_count : int, default 8
        Item count of an RSS macro that does not give one.
    heading_id_prefix : str, default "H"
        Prefix of the ids generated for headings.
    tab_width : int, default 2
        Number of spaces a tab counts for when measuring list indentation.
        Every two columns of indentation make one list nesting level.

    Examples
    --------
    Disable interwiki parsing:
        >>> options = DokuWikiScannerOptions(parse_interwiki=False)
        >>> scanner = DokuWikiScanner(options)

    """

    extract_metadata: bool = field(
        default=DEFAULT_EXTRACT_METADATA,
        metadata={"help": "Attach title/source metadata to the document events", "importance": "core"},
    )
    parse_interwiki: bool = field(
        default=DEFAULT_PARSE_INTERWIKI,
        metadata={
            "help": "Parse interwiki links (e.g., [[wp>Article]])",
            "cli_name": "no-interwiki",
            "importance": "core",
        },
    )
    autolink_urls: bool = field(
        default=DEFAULT_AUTOLINK_URLS,
        metadata={
            "help": "Turn bare URLs and e-mail addresses into freestanding links",
            "cli_name": "no-autolink",
            "importance": "core",
        },
    )
    rss_default_count: int = field(
        default=DEFAULT_RSS_COUNT,
        metadata={"help": "Item count of RSS macros without an explicit count", "type": int, "importance": "advanced"},
    )
    heading_id_prefix: str = field(
        default=DEFAULT_HEADING_ID_PREFIX,
        metadata={"help": "Prefix for generated heading ids", "importance": "advanced"},
    )
    tab_width: int = field(
        default=DEFAULT_TAB_WIDTH,
        metadata={"help": "Spaces per tab when measuring list indentation", "type": int, "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.rss_default_count <= 0:
            raise ValueError(f"rss_default_count must be positive, got {self.rss_default_count}")
        if self.tab_width <= 0:
            raise ValueError(f"tab_width must be positive, got {self.tab_width}")
