"""Event types and payloads emitted on the event socket.

See https://wiki.hyprland.org/IPC/ for the upstream event list. Each payload
is built from the comma separated data of one record, fields mapped by
position. The last field keeps any remaining commas, since window titles and
keyboard names may contain them.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from ..errors import DecodeError


class EventType(str, Enum):
    """Event names as they appear before the ``>>`` separator."""

    WORKSPACE = "workspace"
    FOCUSED_MONITOR = "focusedmon"
    ACTIVE_WINDOW = "activewindow"
    FULLSCREEN = "fullscreen"
    MONITOR_REMOVED = "monitorremoved"
    MONITOR_ADDED = "monitoradded"
    CREATE_WORKSPACE = "createworkspace"
    DESTROY_WORKSPACE = "destroyworkspace"
    MOVE_WORKSPACE = "moveworkspace"
    ACTIVE_LAYOUT = "activelayout"
    OPEN_WINDOW = "openwindow"
    CLOSE_WINDOW = "closewindow"
    MOVE_WINDOW = "movewindow"
    OPEN_LAYER = "openlayer"
    CLOSE_LAYER = "closelayer"
    SUBMAP = "submap"
    SCREENCAST = "screencast"


# Prefer naming the events you need; new event types get added upstream
ALL_EVENTS: tuple[EventType, ...] = tuple(EventType)


@dataclass(frozen=True)
class Event:
    """Base class for event payloads."""

    event_type: ClassVar[EventType]
    handler_name: ClassVar[str]

    @classmethod
    def from_data(cls, data: str) -> Event:
        """Build the payload from the raw data of a record.

        Raises:
            DecodeError: If the data has fewer fields than the payload.
        """
        fields = dataclasses.fields(cls)
        raw = data.split(",", len(fields) - 1)
        if len(raw) < len(fields):
            raise DecodeError(
                f"{cls.event_type.value} expects {len(fields)} field(s), "
                f"got {len(raw)}: {data!r}"
            )
        values = []
        for f, value in zip(fields, raw):
            if f.type in (bool, "bool"):
                values.append(value == "1")
            else:
                values.append(value)
        return cls(*values)


@dataclass(frozen=True)
class Workspace(Event):
    """Workspace changed on user request (not on mouse movement)."""

    event_type: ClassVar[EventType] = EventType.WORKSPACE
    handler_name: ClassVar[str] = "workspace"

    name: str


@dataclass(frozen=True)
class FocusedMonitor(Event):
    """Active monitor changed."""

    event_type: ClassVar[EventType] = EventType.FOCUSED_MONITOR
    handler_name: ClassVar[str] = "focused_monitor"

    monitor_name: str
    workspace_name: str


@dataclass(frozen=True)
class ActiveWindow(Event):
    """Active window changed, e.g. ``kitty,~/src``."""

    event_type: ClassVar[EventType] = EventType.ACTIVE_WINDOW
    handler_name: ClassVar[str] = "active_window"

    window_class: str
    title: str


@dataclass(frozen=True)
class Fullscreen(Event):
    """Fullscreen state of a window changed."""

    event_type: ClassVar[EventType] = EventType.FULLSCREEN
    handler_name: ClassVar[str] = "fullscreen"

    enabled: bool


@dataclass(frozen=True)
class MonitorRemoved(Event):
    event_type: ClassVar[EventType] = EventType.MONITOR_REMOVED
    handler_name: ClassVar[str] = "monitor_removed"

    monitor_name: str


@dataclass(frozen=True)
class MonitorAdded(Event):
    event_type: ClassVar[EventType] = EventType.MONITOR_ADDED
    handler_name: ClassVar[str] = "monitor_added"

    monitor_name: str


@dataclass(frozen=True)
class CreateWorkspace(Event):
    event_type: ClassVar[EventType] = EventType.CREATE_WORKSPACE
    handler_name: ClassVar[str] = "create_workspace"

    name: str


@dataclass(frozen=True)
class DestroyWorkspace(Event):
    event_type: ClassVar[EventType] = EventType.DESTROY_WORKSPACE
    handler_name: ClassVar[str] = "destroy_workspace"

    name: str


@dataclass(frozen=True)
class MoveWorkspace(Event):
    """Workspace moved to a different monitor."""

    event_type: ClassVar[EventType] = EventType.MOVE_WORKSPACE
    handler_name: ClassVar[str] = "move_workspace"

    workspace_name: str
    monitor_name: str


@dataclass(frozen=True)
class ActiveLayout(Event):
    """Keyboard layout changed, e.g. ``AT Translated Set 2 keyboard,Russian``."""

    event_type: ClassVar[EventType] = EventType.ACTIVE_LAYOUT
    handler_name: ClassVar[str] = "active_layout"

    keyboard: str
    layout: str


@dataclass(frozen=True)
class OpenWindow(Event):
    """Window opened, e.g. ``80864f60,1,Alacritty,Alacritty``."""

    event_type: ClassVar[EventType] = EventType.OPEN_WINDOW
    handler_name: ClassVar[str] = "open_window"

    address: str
    workspace_name: str
    window_class: str
    title: str


@dataclass(frozen=True)
class CloseWindow(Event):
    event_type: ClassVar[EventType] = EventType.CLOSE_WINDOW
    handler_name: ClassVar[str] = "close_window"

    address: str


@dataclass(frozen=True)
class MoveWindow(Event):
    """Window moved to another workspace."""

    event_type: ClassVar[EventType] = EventType.MOVE_WINDOW
    handler_name: ClassVar[str] = "move_window"

    address: str
    workspace_name: str


@dataclass(frozen=True)
class OpenLayer(Event):
    """Layer surface mapped, e.g. ``wofi``."""

    event_type: ClassVar[EventType] = EventType.OPEN_LAYER
    handler_name: ClassVar[str] = "open_layer"

    namespace: str


@dataclass(frozen=True)
class CloseLayer(Event):
    """Layer surface unmapped."""

    event_type: ClassVar[EventType] = EventType.CLOSE_LAYER
    handler_name: ClassVar[str] = "close_layer"

    namespace: str


@dataclass(frozen=True)
class SubMap(Event):
    """Keybind submap changed. Empty name means the default map."""

    event_type: ClassVar[EventType] = EventType.SUBMAP
    handler_name: ClassVar[str] = "submap"

    name: str


@dataclass(frozen=True)
class Screencast(Event):
    """Screencopy state of a client changed.

    ``owner`` is ``"0"`` when a monitor is shared, ``"1"`` for a window.
    """

    event_type: ClassVar[EventType] = EventType.SCREENCAST
    handler_name: ClassVar[str] = "screencast"

    sharing: bool
    owner: str


EVENT_CLASSES: dict[EventType, type[Event]] = {
    cls.event_type: cls
    for cls in (
        Workspace,
        FocusedMonitor,
        ActiveWindow,
        Fullscreen,
        MonitorRemoved,
        MonitorAdded,
        CreateWorkspace,
        DestroyWorkspace,
        MoveWorkspace,
        ActiveLayout,
        OpenWindow,
        CloseWindow,
        MoveWindow,
        OpenLayer,
        CloseLayer,
        SubMap,
        Screencast,
    )
}
