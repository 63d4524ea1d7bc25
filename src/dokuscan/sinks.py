#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dokuscan/sinks.py
"""Event sinks: consumers of the scanner's event stream.

The scanner calls :meth:`EventSink.handle` once per event, synchronously and
in order. Renderers, converters and analysers implement a sink; this module
ships the generic ones.

Examples
--------
Count words with a dispatching sink:

    >>> class WordCounter(DispatchingSink):
    ...     def __init__(self):
    ...         self.count = 0
    ...
    ...     def on_word(self, event):
    ...         self.count += 1
    >>>
    >>> from dokuscan import scan
    >>> counter = WordCounter()
    >>> scan("Hello wiki world", counter)
    >>> counter.count
    3

"""

from __future__ import annotations

import dataclasses
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterator, Mapping, TextIO

from dokuscan.events import BeginLink, Event, Image
from dokuscan.exceptions import NestingError
from dokuscan.references import ResourceReference


class EventSink(ABC):
    """Abstract receiver of document events."""

    @abstractmethod
    def handle(self, event: Event) -> None:
        """Receive one event.

        Parameters
        ----------
        event : Event
            The next event in emission order

        """
        pass


class DispatchingSink(EventSink):
    """Sink routing each event to an ``on_<event_name>`` method.

    Events without a matching method go to :meth:`default`, which ignores
    them. Override it to catch everything else.
    """

    def handle(self, event: Event) -> None:
        handler = getattr(self, f"on_{event.event_name}", None)
        if handler is None:
            self.default(event)
        else:
            handler(event)

    def default(self, event: Event) -> None:
        """Handle an event without a dedicated method."""
        pass


class EventCollector(EventSink):
    """Sink storing every event in a list."""

    def __init__(self) -> None:
        self.events: list[Event] = []

    def handle(self, event: Event) -> None:
        self.events.append(event)

    def __iter__(self) -> Iterator[Event]:
        return iter(self.events)

    def __len__(self) -> int:
        return len(self.events)


class CallbackSink(EventSink):
    """Sink forwarding every event to a callable.

    Parameters
    ----------
    callback : Callable[[Event], None]
        Function called with each event

    """

    def __init__(self, callback: Callable[[Event], None]):
        self.callback = callback

    def handle(self, event: Event) -> None:
        self.callback(event)


class ReferenceCollector(DispatchingSink):
    """Collect the references of all links and images in document order.

    Attributes
    ----------
    references : list[tuple[str, ResourceReference]]
        ``("link", reference)`` or ``("image", reference)`` pairs

    """

    def __init__(self) -> None:
        self.references: list[tuple[str, ResourceReference]] = []

    def on_begin_link(self, event: BeginLink) -> None:
        self.references.append(("link", event.reference))

    def on_image(self, event: Image) -> None:
        self.references.append(("image", event.reference))


@dataclass
class EventTree:
    """A Begin/End pair with everything between, or a single leaf event.

    Parameters
    ----------
    event : Event
        The Begin event, or the leaf event
    children : list[EventTree]
        Nested nodes in order
    end : Event, optional
        The matching End event. None for leaves.

    """

    event: Event
    children: list[EventTree] = field(default_factory=list)
    end: Event | None = None

    @property
    def name(self) -> str:
        """Structure name for Begin/End pairs, event name for leaves."""
        return self.event.structure or self.event.event_name

    def walk(self) -> Iterator[EventTree]:
        """Yield this node and all descendants depth-first."""
        yield self
        for child in self.children:
            yield from child.walk()


class TreeBuilder(EventSink):
    """Build an :class:`EventTree` from a stream, checking that it is well-nested.

    Raises
    ------
    NestingError
        On an End event that does not close the innermost open structure, on
        events after the document was closed, or from :attr:`root` when the
        stream is incomplete

    """

    def __init__(self) -> None:
        self._root: EventTree | None = None
        self._stack: list[EventTree] = []

    def handle(self, event: Event) -> None:
        if self._root is not None and not self._stack:
            raise NestingError(f"Event {event.event_name!r} after the document was closed", event)

        if event.is_end:
            if not self._stack or not event.closes(self._stack[-1].event):
                expected = self._stack[-1].event.event_name if self._stack else "nothing"
                raise NestingError(f"{event.event_name!r} does not close {expected!r}", event)
            self._stack.pop().end = event
            return

        node = EventTree(event)
        if self._stack:
            self._stack[-1].children.append(node)
        elif event.is_begin:
            self._root = node
        else:
            raise NestingError(f"Leaf event {event.event_name!r} outside any structure", event)
        if event.is_begin:
            self._stack.append(node)

    @property
    def complete(self) -> bool:
        """Whether a root structure was opened and closed again."""
        return self._root is not None and not self._stack

    @property
    def root(self) -> EventTree:
        """The completed tree."""
        if not self.complete or self._root is None:
            open_names = ", ".join(node.name for node in self._stack) or "nothing"
            raise NestingError(f"Event stream is incomplete (open: {open_names})")
        return self._root


def describe_event(event: Event) -> str:
    """Render an event as ``name key=value ...`` for display."""
    parts = [event.event_name]
    for event_field in dataclasses.fields(event):
        value: Any = getattr(event, event_field.name)
        if value in (None, {}, "") and event_field.name != "text":
            continue
        if isinstance(value, ResourceReference):
            value = f"{value.kind.value}:{value}" + ("" if value.typed else " (untyped)")
            parts.append(f"{event_field.name}={value}")
        elif isinstance(value, Enum):
            parts.append(f"{event_field.name}={value.value}")
        elif isinstance(value, Mapping):
            parts.append(f"{event_field.name}={dict(value)!r}")
        else:
            parts.append(f"{event_field.name}={value!r}")
    return " ".join(parts)


class TextDumpSink(EventSink):
    """Write one indented line per event.

    Parameters
    ----------
    stream : TextIO, optional
        Destination. Defaults to ``sys.stdout``.
    indent : str, default "  "
        Indentation added per open structure

    """

    def __init__(self, stream: TextIO | None = None, indent: str = "  "):
        self.stream = stream if stream is not None else sys.stdout
        self.indent = indent
        self._depth = 0

    def handle(self, event: Event) -> None:
        if event.is_end:
            self._depth = max(0, self._depth - 1)
        self.stream.write(f"{self.indent * self._depth}{describe_event(event)}\n")
        if event.is_begin:
            self._depth += 1

