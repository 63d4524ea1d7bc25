#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dokuscan/serialization.py
"""JSON serialization and deserialization for event streams.

An event becomes a flat dictionary holding its ``event`` name and its fields.
References become nested dictionaries and enumerations become their values.

Examples
--------
    >>> from dokuscan import parse_events
    >>> from dokuscan.serialization import events_to_json, events_from_json
    >>>
    >>> json_str = events_to_json(parse_events("**bold**"), indent=2)
    >>> events_from_json(json_str)[2]
    BeginFormat(kind=<FormatKind.BOLD: 'bold'>)

"""

from __future__ import annotations

import dataclasses
import json
import logging
from enum import Enum
from typing import Any, Callable, Iterable, Mapping

from dokuscan.events import EVENT_TYPES, Event, FormatKind, ListKind
from dokuscan.references import ReferenceKind, ResourceReference

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def reference_to_dict(reference: ResourceReference) -> dict[str, Any]:
    """Convert a reference to a dictionary."""
    return {
        "target": reference.target,
        "kind": reference.kind.value,
        "typed": reference.typed,
        "anchor": reference.anchor,
        "query": reference.query,
        "interwiki_alias": reference.interwiki_alias,
    }


def reference_from_dict(data: dict[str, Any]) -> ResourceReference:
    """Rebuild a reference from :func:`reference_to_dict` output."""
    return ResourceReference(
        target=data["target"],
        kind=ReferenceKind(data.get("kind", ReferenceKind.URL.value)),
        typed=bool(data.get("typed", False)),
        anchor=data.get("anchor"),
        query=data.get("query"),
        interwiki_alias=data.get("interwiki_alias"),
    )


def _convert_value(value: Any) -> Any:
    if isinstance(value, ResourceReference):
        return reference_to_dict(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Mapping):
        return dict(value)
    return value


# Field annotation -> converter applied when deserializing
_FIELD_CONVERTERS: dict[str, Callable[[Any], Any]] = {
    "ListKind": ListKind,
    "FormatKind": FormatKind,
    "ResourceReference": reference_from_dict,
}


def event_to_dict(event: Event) -> dict[str, Any]:
    """Convert an event to a JSON-compatible dictionary.

    Examples
    --------
        >>> from dokuscan.events import Word
        >>> event_to_dict(Word("wiki"))
        {'event': 'word', 'text': 'wiki'}

    """
    result: dict[str, Any] = {"event": event.event_name}
    for event_field in dataclasses.fields(event):
        result[event_field.name] = _convert_value(getattr(event, event_field.name))
    return result


def event_from_dict(data: dict[str, Any], strict_mode: bool = True) -> Event | None:
    """Convert a dictionary back to an event.

    Parameters
    ----------
    data : dict
        Dictionary produced by :func:`event_to_dict`
    strict_mode : bool, default True
        If True, raise ValueError on unknown event names and fields. If False,
        log a warning and skip them.

    Returns
    -------
    Event or None
        The event, or None for a skipped unknown event

    Raises
    ------
    ValueError
        If the dictionary names an unknown event or field in strict mode

    """
    name = data.get("event")
    event_type = EVENT_TYPES.get(name) if isinstance(name, str) else None
    if event_type is None:
        if strict_mode:
            raise ValueError(f"Unknown event type: {name!r}")
        logger.warning(f"Unknown event type {name!r}, skipping")
        return None

    known = {event_field.name: event_field for event_field in dataclasses.fields(event_type)}
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        if key == "event":
            continue
        event_field = known.get(key)
        if event_field is None:
            if strict_mode:
                raise ValueError(f"Unknown field {key!r} for event {name!r}")
            logger.warning(f"Unknown field {key!r} for event {name!r}, skipping")
            continue
        converter = _FIELD_CONVERTERS.get(str(event_field.type))
        kwargs[key] = converter(value) if converter is not None and value is not None else value
    return event_type(**kwargs)


def events_to_json(events: Iterable[Event], indent: int | None = None) -> str:
    """Serialize an event stream to a JSON document with a schema version.

    Parameters
    ----------
    events : Iterable[Event]
        Events in emission order
    indent : int or None, default None
        Number of spaces for indentation (None for compact format)

    Returns
    -------
    str
        ``{"schema_version": 1, "events": [...]}``

    """
    payload = {"schema_version": SCHEMA_VERSION, "events": [event_to_dict(event) for event in events]}
    return json.dumps(payload, indent=indent, ensure_ascii=False)


def events_from_json(json_str: str, validate_schema: bool = True, strict_mode: bool = True) -> list[Event]:
    """Deserialize an event stream written by :func:`events_to_json`.

    Parameters
    ----------
    json_str : str
        JSON document
    validate_schema : bool, default True
        If True, reject unsupported schema versions
    strict_mode : bool, default True
        If True, raise on unknown events and fields instead of skipping them

    Returns
    -------
    list[Event]
        The events in order

    Raises
    ------
    ValueError
        If the document is not an event stream or has an unsupported schema
    json.JSONDecodeError
        If the JSON is malformed

    """
    data = json.loads(json_str)
    if not isinstance(data, dict) or not isinstance(data.get("events"), list):
        raise ValueError("JSON document does not contain an 'events' list")

    schema_version = data.get("schema_version", SCHEMA_VERSION)
    if validate_schema and schema_version != SCHEMA_VERSION:
        raise ValueError(f"Unsupported schema version: {schema_version}")

    events: list[Event] = []
    for item in data["events"]:
        event = event_from_dict(item, strict_mode=strict_mode)
        if event is not None:
            events.append(event)
    return events
