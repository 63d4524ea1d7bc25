#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dokuscan/scanner/__init__.py
"""The DokuWiki scanner and its cooperating parts.

- :mod:`~dokuscan.scanner.tokenizer`: line classification and inline tokens
- :mod:`~dokuscan.scanner.blocks`: the block state machine
- :mod:`~dokuscan.scanner.formatting`: the inline formatting stack
- :mod:`~dokuscan.scanner.words`: leaf events for plain text
- :mod:`~dokuscan.scanner.opaque`: verbatim regions
- :mod:`~dokuscan.scanner.constructs`: links, images and macros
- :mod:`~dokuscan.scanner.core`: the scanner driving them
"""

from dokuscan.scanner.constructs import (
    DEFAULT_CURLY_HANDLERS,
    ConstructContext,
    CurlyBracketHandler,
    ImageParser,
    LinkParser,
    RssMacroHandler,
)
from dokuscan.scanner.core import DokuWikiScanner, HeadingIdGenerator, ScanSession

__all__ = [
    "DEFAULT_CURLY_HANDLERS",
    "ConstructContext",
    "CurlyBracketHandler",
    "DokuWikiScanner",
    "HeadingIdGenerator",
    "ImageParser",
    "LinkParser",
    "RssMacroHandler",
    "ScanSession",
]
