#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dokuscan/references.py
"""Resource references carried by link and image events.

The scanner never resolves references. An untyped reference is a raw target
as written by the author (a page name, a bare host name, a media path) that
the consumer resolves against its own addressing scheme.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

INTERWIKI_PATTERN = re.compile(r"^([a-zA-Z0-9.]+)>(.*)$", re.DOTALL)
SCHEME_PATTERN = re.compile(r"^(?:https?|ftp)://", re.IGNORECASE)


class ReferenceKind(str, Enum):
    """What a reference points at."""

    URL = "url"
    MAILTO = "mailto"
    INTERWIKI = "interwiki"
    INTERNAL = "internal"


@dataclass(frozen=True)
class ResourceReference:
    """Target of a link or image.

    Parameters
    ----------
    target : str
        The reference text, without anchor
    kind : ReferenceKind, default ReferenceKind.URL
        Reference kind
    typed : bool, default False
        True when the reference kind was given explicitly (an e-mail address,
        an attachment link). False when the consumer has to resolve it.
    anchor : str, optional
        Fragment after ``#``
    query : str, optional
        Query string after ``?``
    interwiki_alias : str, optional
        Wiki alias of an InterWiki reference (``wp`` in ``wp>Article``)

    """

    target: str
    kind: ReferenceKind = ReferenceKind.URL
    typed: bool = False
    anchor: str | None = None
    query: str | None = None
    interwiki_alias: str | None = None

    def __str__(self) -> str:
        text = self.target
        if self.interwiki_alias is not None:
            text = f"{self.interwiki_alias}>{text}"
        if self.query:
            text = f"{text}?{self.query}"
        if self.anchor:
            text = f"{text}#{self.anchor}"
        return text

    @classmethod
    def url(cls, target: str, typed: bool = False) -> ResourceReference:
        """Create a URL reference, untyped unless told otherwise."""
        return cls(target, ReferenceKind.URL, typed=typed)

    @classmethod
    def mailto(cls, address: str) -> ResourceReference:
        """Create a typed e-mail reference."""
        return cls(address, ReferenceKind.MAILTO, typed=True)

    @classmethod
    def interwiki(cls, alias: str, path: str) -> ResourceReference:
        """Create an InterWiki reference, splitting off an anchor."""
        target, anchor = split_anchor(path)
        return cls(target, ReferenceKind.INTERWIKI, typed=True, anchor=anchor, interwiki_alias=alias)

    @classmethod
    def internal(cls, target: str, typed: bool = True) -> ResourceReference:
        """Create a reference to a wiki page or media file, splitting off an anchor."""
        name, anchor = split_anchor(target)
        return cls(name, ReferenceKind.INTERNAL, typed=typed, anchor=anchor)


def split_anchor(target: str) -> tuple[str, str | None]:
    """Split ``page#anchor`` into its parts.

    Returns
    -------
    tuple[str, str | None]
        Target without anchor and the anchor, or None when there is none

    """
    name, sep, anchor = target.partition("#")
    if not sep:
        return target, None
    return name, anchor


def parse_interwiki(text: str) -> tuple[str, str] | None:
    """Parse ``alias>rest`` into ``(alias, rest)``.

    Returns None when ``text`` does not start with an interwiki alias.

    Examples
    --------
        >>> parse_interwiki("wp>DokuWiki")
        ('wp', 'DokuWiki')
        >>> parse_interwiki("start") is None
        True

    """
    match = INTERWIKI_PATTERN.match(text)
    if match is None:
        return None
    return match.group(1), match.group(2)


def is_external_url(text: str) -> bool:
    """Return whether ``text`` starts with an http, https or ftp scheme."""
    return SCHEME_PATTERN.match(text) is not None
