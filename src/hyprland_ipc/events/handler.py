"""Event handlers.

A handler is any callable taking one :class:`~.types.Event`. Two ready-made
shapes are provided:

- :class:`EventHandler`, a base class with a no-op method per event type.
  Subclass it and override only the events you care about.
- :class:`CallbackHandler`, a table mapping event types to callables.
"""

from __future__ import annotations

from typing import Callable, Mapping

from .types import (
    ActiveLayout,
    ActiveWindow,
    CloseLayer,
    CloseWindow,
    CreateWorkspace,
    DestroyWorkspace,
    Event,
    EventType,
    FocusedMonitor,
    Fullscreen,
    MonitorAdded,
    MonitorRemoved,
    MoveWindow,
    MoveWorkspace,
    OpenLayer,
    OpenWindow,
    Screencast,
    SubMap,
    Workspace,
)

Handler = Callable[[Event], None]


class EventHandler:
    """Routes each payload to the method named after its event."""

    def __call__(self, event: Event) -> None:
        getattr(self, event.handler_name)(event)

    def workspace(self, event: Workspace) -> None:
        pass

    def focused_monitor(self, event: FocusedMonitor) -> None:
        pass

    def active_window(self, event: ActiveWindow) -> None:
        pass

    def fullscreen(self, event: Fullscreen) -> None:
        pass

    def monitor_removed(self, event: MonitorRemoved) -> None:
        pass

    def monitor_added(self, event: MonitorAdded) -> None:
        pass

    def create_workspace(self, event: CreateWorkspace) -> None:
        pass

    def destroy_workspace(self, event: DestroyWorkspace) -> None:
        pass

    def move_workspace(self, event: MoveWorkspace) -> None:
        pass

    def active_layout(self, event: ActiveLayout) -> None:
        pass

    def open_window(self, event: OpenWindow) -> None:
        pass

    def close_window(self, event: CloseWindow) -> None:
        pass

    def move_window(self, event: MoveWindow) -> None:
        pass

    def open_layer(self, event: OpenLayer) -> None:
        pass

    def close_layer(self, event: CloseLayer) -> None:
        pass

    def submap(self, event: SubMap) -> None:
        pass

    def screencast(self, event: Screencast) -> None:
        pass


class CallbackHandler:
    """Calls the callback registered for the payload's event type, if any."""

    def __init__(self, callbacks: Mapping[EventType, Handler]) -> None:
        self._callbacks = dict(callbacks)

    @property
    def event_types(self) -> tuple[EventType, ...]:
        return tuple(self._callbacks)

    def __call__(self, event: Event) -> None:
        callback = self._callbacks.get(event.event_type)
        if callback is not None:
            callback(event)
