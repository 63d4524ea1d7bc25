#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dokuscan/scanner/constructs.py
"""Parsers for delimited constructs: links, images and curly-bracket macros.

The tokenizer hands over only the text between the delimiters (``[[...]]``
or ``{{...}}``). Each parser consumes that bounded span and emits the
corresponding events; control then returns to the main scan position.

Curly-bracket constructs are dispatched through a static, ordered tuple of
:class:`CurlyBracketHandler` objects given to the scanner at construction.
The first handler whose :meth:`~CurlyBracketHandler.accepts` returns True
handles the span, so the catch-all image handler goes last.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass

from dokuscan.constants import ALIGN_PARAMETER, RSS_MACRO
from dokuscan.events import BeginLink, EndLink, Image, Macro
from dokuscan.options import DokuWikiScannerOptions
from dokuscan.references import ResourceReference, is_external_url, parse_interwiki
from dokuscan.scanner.blocks import BlockStateMachine
from dokuscan.scanner.emitter import EventEmitter
from dokuscan.scanner.words import WordEmitter

logger = logging.getLogger(__name__)

IMAGE_SIZE_PATTERN = re.compile(r"(\d+)(?:x(\d+))?", re.IGNORECASE)
REFRESH_PATTERN = re.compile(r"^\d+[mhd]$")
_NESTED_MEDIA_PATTERN = re.compile(r"\{\{.*?\}\}")


@dataclass
class ConstructContext:
    """What a construct parser may use while handling a span."""

    emitter: EventEmitter
    words: WordEmitter
    blocks: BlockStateMachine
    options: DokuWikiScannerOptions


class CurlyBracketHandler(ABC):
    """Handler for one kind of ``{{...}}`` construct."""

    name: str = "curly"

    @abstractmethod
    def accepts(self, body: str) -> bool:
        """Return whether this handler understands ``body``."""

    @abstractmethod
    def handle(self, body: str, context: ConstructContext) -> None:
        """Emit the events for ``body``."""


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------


def media_reference(name: str, parse_wiki_links: bool, typed: bool) -> ResourceReference:
    """Build the reference of a media item.

    Parameters
    ----------
    name : str
        Media name without query, possibly with a ``#anchor``
    parse_wiki_links : bool
        Whether ``alias>path`` names become InterWiki references
    typed : bool
        Typing of an internal (attachment) reference. Links to attachments
        are typed, images are not.

    """
    if is_external_url(name):
        return ResourceReference.url(name)
    if parse_wiki_links:
        interwiki = parse_interwiki(name)
        if interwiki is not None:
            return ResourceReference.interwiki(*interwiki)
    return ResourceReference.internal(name, typed=typed)


class ImageParser(CurlyBracketHandler):
    """Parse ``{{name?params|caption}}`` into an image, a link, or both.

    - ``|caption`` sets ``alt`` and ``title``
    - a leading space on the name aligns left, a trailing one right, both center
    - ``?WxH`` or ``?W`` sets ``width``/``height``
    - ``?direct`` wraps the image in a link, ``?linkonly`` emits the link alone,
      ``?nolink`` keeps the plain image
    - ``#anchor`` is split off into the reference
    """

    name = "image"

    def accepts(self, body: str) -> bool:
        return True

    def handle(self, body: str, context: ConstructContext) -> None:
        context.blocks.ensure_inline()
        self.parse(body, context)

    def parse(self, body: str, context: ConstructContext) -> None:
        params: dict[str, str] = {}
        name, separator, caption = body.partition("|")
        if separator:
            params["alt"] = caption
            params["title"] = caption

        if name.startswith(" ") and name.endswith(" ") and name.strip():
            params[ALIGN_PARAMETER] = "center"
        elif name.startswith(" "):
            params[ALIGN_PARAMETER] = "left"
        elif name.endswith(" "):
            params[ALIGN_PARAMETER] = "right"
        name = name.strip()

        generate_link = False
        generate_image = True
        if "?" in name:
            name, _, modifiers = name.rpartition("?")
            size = IMAGE_SIZE_PATTERN.search(modifiers)
            if size:
                params["width"] = size.group(1)
                if size.group(2) is not None:
                    params["height"] = size.group(2)
            lowered = modifiers.lower()
            if "linkonly" in lowered:
                generate_link = True
                generate_image = False
            elif "direct" in lowered:
                generate_link = True

        parse_wiki_links = context.options.parse_interwiki
        emit = context.emitter.emit
        link_reference = media_reference(name, parse_wiki_links, typed=True)
        if generate_link:
            emit(BeginLink(link_reference))
        if generate_image:
            emit(Image(media_reference(name, parse_wiki_links, typed=False), params))
        if generate_link:
            emit(EndLink(link_reference))


# ---------------------------------------------------------------------------
# Macros
# ---------------------------------------------------------------------------


class RssMacroHandler(CurlyBracketHandler):
    """Parse ``{{rss>FEED flags...}}`` into a block-level ``rss`` macro.

    The first numeric flag is the item count. ``description`` sets
    ``content``, a duration such as ``1h`` sets ``refresh``, and every other
    flag is passed through with the value ``"true"``.
    """

    name = RSS_MACRO
    prefix = "rss>"

    def accepts(self, body: str) -> bool:
        return body.startswith(self.prefix)

    def handle(self, body: str, context: ConstructContext) -> None:
        arguments = body[len(self.prefix) :].split()
        if not arguments:
            logger.debug("RSS macro without a feed URL")
        params: dict[str, str] = {"feed": arguments[0] if arguments else ""}
        count: str | None = None
        for flag in arguments[1:]:
            if flag.isdigit() and flag.isascii() and count is None:
                count = flag
            elif flag == "description":
                params["content"] = "true"
            elif REFRESH_PATTERN.match(flag):
                params["refresh"] = flag
            else:
                params[flag] = "true"
        params["count"] = count if count is not None else str(context.options.rss_default_count)

        context.blocks.ensure_block_acceptable()
        context.emitter.emit(Macro(RSS_MACRO, params, None, False))


DEFAULT_CURLY_HANDLERS: tuple[CurlyBracketHandler, ...] = (RssMacroHandler(), ImageParser())
"""Curly-bracket handlers used when a scanner is created without its own table."""


# ---------------------------------------------------------------------------
# Links
# ---------------------------------------------------------------------------


def split_link(body: str) -> tuple[str, str | None]:
    """Split a link body at the first ``|`` that is not inside ``{{...}}``.

    Examples
    --------
        >>> split_link("page|Label")
        ('page', 'Label')
        >>> split_link("page")
        ('page', None)

    """
    protected = [(m.start(), m.end()) for m in _NESTED_MEDIA_PATTERN.finditer(body)]
    for index, char in enumerate(body):
        if char == "|" and not any(start <= index < end for start, end in protected):
            return body[:index], body[index + 1 :]
    return body, None


class LinkParser:
    """Parse ``[[target|label]]``.

    A target starting with ``alias>`` becomes an InterWiki reference. Any
    other target is left untyped for the consumer to resolve. A label of the
    form ``{{...}}`` is an image used as link content; other labels are plain
    text.

    Parameters
    ----------
    image_parser : ImageParser, optional
        Parser for image labels

    """

    def __init__(self, image_parser: ImageParser | None = None):
        self.image_parser = image_parser or ImageParser()

    def reference_for(self, target: str, options: DokuWikiScannerOptions) -> ResourceReference:
        if options.parse_interwiki:
            interwiki = parse_interwiki(target)
            if interwiki is not None:
                return ResourceReference.interwiki(*interwiki)
        return ResourceReference.url(target)

    def parse(self, body: str, context: ConstructContext) -> None:
        context.blocks.ensure_inline()
        target, label = split_link(body)
        reference = self.reference_for(target.strip(), context.options)

        context.emitter.emit(BeginLink(reference))
        if label is not None and label.strip():
            label = label.strip()
            if label.startswith("{{") and label.endswith("}}"):
                self.image_parser.parse(label[2:-2], context)
            else:
                context.words.emit_plain(label)
        context.emitter.emit(EndLink(reference))
