#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dokuscan/scanner/words.py
"""Leaf emission for plain text runs.

A plain run is split on whitespace. Each whitespace run becomes at most one
``Space``; each remaining token becomes a ``SpecialSymbol`` (single
punctuation character), a freestanding link (URL-shaped word) or a ``Word``.
"""

from __future__ import annotations

import re

from dokuscan.constants import AUTOLINK_TRAILING_PUNCTUATION, PLAIN_TEXT_SYMBOLS, SPECIAL_SYMBOLS
from dokuscan.events import BeginLink, EndLink, SpecialSymbol, Word
from dokuscan.references import ResourceReference
from dokuscan.scanner.emitter import EventEmitter

WHITESPACE_SPLIT_PATTERN = re.compile(r"(\s+)")
PLAIN_SPLIT_PATTERN = re.compile(r"""(\s+|[!"#$%&'()*+,\-./:;<=>?@\[\\\]^_`{|}~])""")

# scheme://anything, www./ftp. prefixes, or a bare lowercase host.tld[/path]
URL_PATTERN = re.compile(
    r"""
    ^(?:
        [a-zA-Z][a-zA-Z0-9+.-]*://\S+
        | (?:www|ftp)\.[a-z0-9-]+(?:\.[a-z0-9-]+)+(?:[/?]\S*)?
        | [a-z0-9-]+(?:\.[a-z0-9-]+)*\.[a-z]{2,}(?:[/?]\S*)?
    )$
    """,
    re.VERBOSE,
)


def is_url(word: str) -> bool:
    """Return whether a whitespace-free token looks like a URL."""
    return URL_PATTERN.match(word) is not None


def split_trailing_punctuation(url: str) -> tuple[str, str]:
    """Split sentence punctuation and unbalanced closing parentheses off a URL.

    Examples
    --------
        >>> split_trailing_punctuation("http://example.com/a).")
        ('http://example.com/a', ').')
        >>> split_trailing_punctuation("http://example.com/f(x)")
        ('http://example.com/f(x)', '')

    """
    end = len(url)
    while end > 0:
        char = url[end - 1]
        if char in AUTOLINK_TRAILING_PUNCTUATION:
            end -= 1
        elif char == ")" and url.count("(", 0, end) < url.count(")", 0, end):
            end -= 1
        else:
            break
    return url[:end], url[end:]


class WordEmitter:
    """Turn plain character runs into leaf events.

    Parameters
    ----------
    emitter : EventEmitter
        Destination of the leaf events
    autolink : bool, default True
        Whether URL-shaped words become freestanding links

    """

    def __init__(self, emitter: EventEmitter, autolink: bool = True):
        self._emitter = emitter
        self.autolink = autolink

    def emit_text(self, text: str, trim: int = 0, autolink: bool | None = None) -> None:
        """Emit leaf events for a plain run.

        Parameters
        ----------
        text : str
            The run of plain characters
        trim : int, default 0
            Number of trailing characters already consumed as a delimiter
        autolink : bool, optional
            Override the emitter's autolink setting for this run. Heading
            titles and link labels are emitted with autolinking disabled.

        """
        if trim:
            text = text[:-trim]
        link_words = self.autolink if autolink is None else autolink
        for token in WHITESPACE_SPLIT_PATTERN.split(text):
            if not token:
                continue
            if token.isspace():
                self._emitter.space()
            else:
                self.emit_word(token, link_words)

    def emit_plain(self, text: str) -> None:
        """Emit text with no markup and no autolinks.

        Every ASCII punctuation character becomes its own ``SpecialSymbol``.
        Used for heading titles and link labels.
        """
        for token in PLAIN_SPLIT_PATTERN.split(text):
            if not token:
                continue
            if token.isspace():
                self._emitter.space()
            elif len(token) == 1 and token in PLAIN_TEXT_SYMBOLS:
                self._emitter.emit(SpecialSymbol(token))
            else:
                self._emitter.emit(Word(token))

    def emit_word(self, word: str, autolink: bool = True) -> None:
        """Emit a single whitespace-free token."""
        if len(word) == 1 and word in SPECIAL_SYMBOLS:
            self._emitter.emit(SpecialSymbol(word))
        elif autolink and is_url(split_trailing_punctuation(word)[0]):
            self.emit_autolink(word)
        else:
            self._emitter.emit(Word(word))

    def emit_autolink(self, url: str) -> None:
        """Emit a freestanding link, leaving trailing punctuation as text."""
        target, rest = split_trailing_punctuation(url)
        if not target:
            self.emit_text(rest, autolink=False)
            return
        reference = ResourceReference.url(target)
        self._emitter.emit(BeginLink(reference, freestanding=True))
        self._emitter.emit(EndLink(reference, freestanding=True))
        for char in rest:
            self.emit_word(char, autolink=False)
