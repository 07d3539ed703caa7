"""Event layer: event types, payloads, handlers, and stream decoding."""

from .types import ALL_EVENTS, EVENT_CLASSES, Event, EventType
from .handler import CallbackHandler, EventHandler, Handler
from .decoder import EventRecord, decode_events, dispatch_event, parse_event
