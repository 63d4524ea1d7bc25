#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dokuscan/scanner/opaque.py
"""Opaque regions: content copied verbatim up to a literal end marker.

Code and file blocks, raw HTML and PHP, and no-format spans are never scanned
for markup. Once an opener is seen, the only thing searched for is its closer.
A missing closer is not an error: the region runs to the end of the input (or
of the enclosing table cell) and is still emitted once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OpaqueRegion:
    """Content of an opaque region.

    Parameters
    ----------
    content : str
        Region content with one leading and one trailing line break removed
    end : int
        Position just past the closer, or the bound when unterminated
    terminated : bool
        Whether the closer was found

    """

    content: str
    end: int
    terminated: bool


def trim_line_breaks(content: str) -> str:
    """Remove exactly one leading and one trailing line break."""
    if content.startswith("\n"):
        content = content[1:]
    if content.endswith("\n"):
        content = content[:-1]
    return content


def read_region(text: str, body_start: int, closer: str, bound: int | None = None) -> OpaqueRegion:
    """Read an opaque region whose opener ends at ``body_start``.

    Parameters
    ----------
    text : str
        The whole document
    body_start : int
        Position right after the opener
    closer : str
        Literal end marker, e.g. ``</code>``
    bound : int, optional
        Position the region may not extend past. Defaults to the end of input.

    Returns
    -------
    OpaqueRegion
        The region. Never raises for a missing closer.

    """
    limit = len(text) if bound is None else bound
    index = text.find(closer, body_start, limit)
    if index < 0:
        logger.debug("No %r after position %d, region runs to position %d", closer, body_start, limit)
        return OpaqueRegion(trim_line_breaks(text[body_start:limit]), limit, False)
    return OpaqueRegion(trim_line_breaks(text[body_start:index]), index + len(closer), True)


def parse_language(arguments: str | None) -> str | None:
    """Extract the language tag from the attribute text of a code opener.

    The tag is the first whitespace-delimited token, unless it is ``-`` or
    starts with ``[``, both of which mean "no language".

    Examples
    --------
        >>> parse_language(" java")
        'java'
        >>> parse_language(" - snippet.txt") is None
        True

    """
    tokens = (arguments or "").split()
    if not tokens:
        return None
    language = tokens[0]
    if language == "-" or language.startswith("["):
        return None
    return language


def preformatted_content(lines: Iterable[str]) -> str:
    """Join indented lines into preformatted content, removing the indent."""
    return "\n".join(line[1:] if line.startswith("\t") else line[2:] for line in lines)
