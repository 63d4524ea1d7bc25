#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dokuscan/sources.py
"""Character sources: turning paths, bytes and streams into markup text.

The scanner itself only sees a string. Everything that can go wrong while
obtaining that string (missing files, unreadable streams) is reported as
:class:`~dokuscan.exceptions.InputError`, the only way an I/O failure leaves a
scan call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Union

from dokuscan.constants import (
    CHARDET_CONFIDENCE_THRESHOLD,
    CHARDET_SAMPLE_SIZE,
    DEFAULT_FALLBACK_ENCODINGS,
)
from dokuscan.exceptions import InputError

logger = logging.getLogger(__name__)

SourceInput = Union[str, Path, bytes, IO[bytes], IO[str]]


@dataclass(frozen=True)
class LoadedSource:
    """Markup text together with the name of where it came from.

    Parameters
    ----------
    text : str
        Markup with ``\\n`` line endings
    name : str, optional
        File path of the source, when there is one

    """

    text: str
    name: str | None = None


def detect_encoding(
    data: bytes,
    sample_size: int = CHARDET_SAMPLE_SIZE,
    confidence_threshold: float = CHARDET_CONFIDENCE_THRESHOLD,
) -> str | None:
    """Detect the character encoding of binary data using chardet.

    Parameters
    ----------
    data : bytes
        Binary data to analyze
    sample_size : int, default 8192
        Number of bytes to sample for detection (uses first N bytes)
    confidence_threshold : float, default 0.7
        Minimum confidence level (0.0-1.0) required to trust detection

    Returns
    -------
    str | None
        Detected encoding name, or None if detection fails or the confidence
        is below the threshold

    """
    try:
        import chardet
    except ImportError:
        logger.debug("chardet not available for encoding detection")
        return None

    result = chardet.detect(data[:sample_size])
    if not result or not result.get("encoding"):
        logger.debug("chardet: No encoding detected")
        return None

    encoding = result["encoding"]
    confidence = result.get("confidence") or 0.0
    logger.debug(f"chardet detected encoding: {encoding} (confidence: {confidence:.2f})")
    if confidence < confidence_threshold:
        logger.debug(f"chardet confidence {confidence:.2f} below threshold {confidence_threshold}")
        return None
    return encoding


def decode_bytes(data: bytes, fallback_encodings: tuple[str, ...] = DEFAULT_FALLBACK_ENCODINGS) -> str:
    """Decode markup bytes, trying chardet's guess first and then the fallbacks.

    Decoding never fails: when every candidate encoding fails the data is
    decoded as UTF-8 with replacement characters.

    Examples
    --------
        >>> decode_bytes("Überschrift".encode("utf-8"))
        'Überschrift'

    """
    detected = detect_encoding(data)
    candidates = ((detected,) if detected else ()) + tuple(fallback_encodings)
    for encoding in candidates:
        try:
            text = data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug(f"Failed to decode with {encoding}: {e}")
            continue
        logger.debug(f"Successfully decoded with encoding: {encoding}")
        return text

    logger.warning("All encodings failed, decoding as UTF-8 with replacement characters")
    return data.decode("utf-8", errors="replace")


def normalize_newlines(text: str) -> str:
    """Convert ``\\r\\n`` and lone ``\\r`` line endings to ``\\n``."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _read_path(path: Path) -> LoadedSource:
    try:
        data = path.read_bytes()
    except OSError as e:
        raise InputError(f"Could not read {path}: {e}", source_name=str(path), original_error=e) from e
    return LoadedSource(normalize_newlines(decode_bytes(data)), str(path))


def load_source(source: SourceInput) -> LoadedSource:
    """Load DokuWiki markup from any supported source.

    Parameters
    ----------
    source : str, Path, bytes, or file-like
        - ``str``: markup text, never a file name
        - ``Path``: a file to read
        - ``bytes``: encoded markup, decoded with encoding detection
        - a text or binary stream, read to its end

    Returns
    -------
    LoadedSource
        The markup and, for files, the path

    Raises
    ------
    InputError
        If the source cannot be read

    """
    if isinstance(source, Path):
        return _read_path(source)

    if isinstance(source, bytes):
        return LoadedSource(normalize_newlines(decode_bytes(source)))

    if isinstance(source, str):
        return LoadedSource(normalize_newlines(source))

    if hasattr(source, "read"):
        try:
            content = source.read()
        except OSError as e:
            raise InputError(f"Could not read input stream: {e}", original_error=e) from e
        name = getattr(source, "name", None)
        name = name if isinstance(name, str) else None
        if isinstance(content, bytes):
            content = decode_bytes(content)
        return LoadedSource(normalize_newlines(content), name)

    raise InputError(f"Unsupported source type: {type(source).__name__}")
