#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for dokuscan.

This module centralizes the markup constants and default configuration values
used across the scanner so they can be discovered and tuned in one place.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Scanner Defaults - Default values for scanner options
3. Markup Vocabulary - Fixed character sets and macro names
4. Input Handling - Character source and encoding settings
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

CellAlignment = Literal["center", "right"]
ImageAlignment = Literal["left", "right", "center"]
OutputFormat = Literal["text", "json", "references"]

# =============================================================================
# Scanner Defaults
# =============================================================================

DEFAULT_EXTRACT_METADATA = False
DEFAULT_PARSE_INTERWIKI = True
DEFAULT_AUTOLINK_URLS = True
DEFAULT_RSS_COUNT = 8
DEFAULT_HEADING_ID_PREFIX = "H"
DEFAULT_TAB_WIDTH = 2
DEFAULT_OUTPUT_FORMAT: OutputFormat = "text"

# Heading level = 7 - number of '=' characters, clamped to this range
MIN_HEADING_LEVEL = 1
MAX_HEADING_LEVEL = 6
HEADING_LEVEL_BASE = 7

# Cells need at least this many padding spaces on a side to count as aligned
TABLE_CELL_ALIGN_PADDING = 2

# Indentation columns per list nesting level
LIST_INDENT_PER_LEVEL = 2

# =============================================================================
# Markup Vocabulary
# =============================================================================

# Single-character tokens emitted as SpecialSymbol rather than Word
SPECIAL_SYMBOLS = frozenset("@#$*%'(!)-_^`?,;./:=+<|>")

# Plain text (heading titles, link labels) splits words at any ASCII punctuation
PLAIN_TEXT_SYMBOLS = frozenset("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~")

# Characters stripped from the end of an autolinked URL
AUTOLINK_TRAILING_PUNCTUATION = ".,;:!?"

CODE_MACRO = "code"
HTML_MACRO = "html"
FOOTNOTE_MACRO = "footnote"
RSS_MACRO = "rss"

LANGUAGE_PARAMETER = "language"
ALIGN_PARAMETER = "align"

# =============================================================================
# Input Handling
# =============================================================================

DEFAULT_FALLBACK_ENCODINGS = ("utf-8", "utf-8-sig", "latin-1")
CHARDET_SAMPLE_SIZE = 8192
CHARDET_CONFIDENCE_THRESHOLD = 0.7

ENV_PREFIX = "DOKUSCAN_"
