"""Event stream decoding and dispatch.

Stream layout::

    <type>>><field0>,<field1>,...\\n<type>>><field0>...\\n

Records carry no length prefix, only the newline. A read is decoded on its
own; a record split across two reads is not reassembled.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Collection

from ..errors import DecodeError
from .handler import Handler
from .types import EVENT_CLASSES, Event, EventType

logger = logging.getLogger(__name__)

SEPARATOR = ">>"


@dataclass(frozen=True)
class EventRecord:
    """One ``(type, data)`` pair read from the event socket."""

    type: str
    data: str


def decode_events(raw: bytes) -> list[EventRecord]:
    """Split one read into event records.

    Lines without the separator, with an empty type or data, or with the
    degenerate data ``","`` are dropped.
    """
    records: list[EventRecord] = []
    for line in raw.decode("utf-8", errors="replace").split("\n"):
        if not line:
            continue
        parts = line.split(SEPARATOR, 1)
        if len(parts) < 2:
            logger.debug("Dropping event line without separator: %r", line)
            continue
        event_type, data = parts
        if not event_type or not data or data == ",":
            logger.debug("Dropping malformed event line: %r", line)
            continue
        records.append(EventRecord(type=event_type, data=data))
    return records


def parse_event(record: EventRecord) -> Event | None:
    """Build the typed payload for a record.

    Returns:
        The payload, or ``None`` if the event type is unknown.

    Raises:
        DecodeError: If the record data does not fit the payload.
    """
    try:
        event_type = EventType(record.type)
    except ValueError:
        return None
    return EVENT_CLASSES[event_type].from_data(record.data)


def dispatch_event(
    record: EventRecord,
    event_types: Collection[EventType],
    handler: Handler,
) -> bool:
    """Pass a record to ``handler`` if its type is subscribed.

    Unknown types and malformed records are skipped. Exceptions raised by the
    handler propagate.

    Returns:
        ``True`` if the handler was called.
    """
    try:
        event_type = EventType(record.type)
    except ValueError:
        # Unknown to this version
        return False
    if event_type not in event_types:
        return False
    try:
        event = EVENT_CLASSES[event_type].from_data(record.data)
    except DecodeError as e:
        logger.debug("Dropping event record: %s", e)
        return False
    handler(event)
    return True
