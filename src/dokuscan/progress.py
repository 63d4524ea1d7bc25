#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dokuscan/progress.py
"""Progress callback system for scanning.

Embedders that scan large wiki dumps can follow a scan call through a
callback receiving ``ProgressEvent`` objects.

Examples
--------
Print every progress event:

    >>> from dokuscan import parse_events
    >>> from dokuscan.progress import ProgressEvent
    >>>
    >>> def handler(event: ProgressEvent):
    ...     print(event)
    >>>
    >>> events = parse_events("====== Title ======", progress_callback=handler)
    [STARTED] Scanning DokuWiki markup (0/1)
    [DETECTED] Section level 1 (1/1)
    [FINISHED] Scan complete (1/1)

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Literal

EventType = Literal["started", "detected", "finished", "error"]


@dataclass
class ProgressEvent:
    """Progress event for a scan call.

    Parameters
    ----------
    event_type : EventType
        Type of progress event:

        - "started": the scan has begun, ``total`` holds the line count
        - "detected": a notable structure was opened. ``metadata["detected_type"]``
          is one of ``table``, ``code`` or ``section``
        - "finished": the scan completed and the document was closed
        - "error": the scan failed. ``metadata["error"]`` holds the message

    message : str
        Human-readable description of the event
    current : int, default 0
        Current line number (1-based)
    total : int, default 0
        Total number of lines. Zero for empty input.
    metadata : dict, default empty
        Additional event-specific information

    Examples
    --------
        >>> ProgressEvent("detected", "Table", current=4, total=10, metadata={"detected_type": "table"})

    """

    event_type: EventType
    message: str
    current: int = 0
    total: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Return human-readable string representation.

        Returns
        -------
        str
            Formatted event description

        """
        progress = f"({self.current}/{self.total})" if self.total > 0 else ""
        return f"[{self.event_type.upper()}] {self.message} {progress}".strip()


ProgressCallback = Callable[[ProgressEvent], None]
"""Type alias for progress callback functions.

Callbacks should not raise. A failing callback is logged and ignored so it
never interrupts the scan.
"""
