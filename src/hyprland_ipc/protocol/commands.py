"""Command verbs and parameter builders.

Each verb matches the first word of the equivalent ``hyprctl`` invocation,
e.g. ``hyprctl dispatch exec kitty`` is ``Command.DISPATCH`` with the
parameter ``"exec kitty"``.
"""

from __future__ import annotations

from enum import Enum

from .framing import Request


class Command(str, Enum):
    """Request socket verbs."""

    ACTIVE_WINDOW = "activewindow"
    ACTIVE_WORKSPACE = "activeworkspace"
    ANIMATIONS = "animations"
    BINDS = "binds"
    CLIENTS = "clients"
    CONFIG_ERRORS = "configerrors"
    CURSOR_POS = "cursorpos"
    DECORATIONS = "decorations"
    DEVICES = "devices"
    DISPATCH = "dispatch"
    GET_OPTION = "getoption"
    KEYWORD = "keyword"
    KILL = "kill"
    LAYERS = "layers"
    MONITORS = "monitors"
    RELOAD = "reload"
    SET_CURSOR = "setcursor"
    SPLASH = "splash"
    SWITCH_XKB_LAYOUT = "switchxkblayout"
    VERSION = "version"
    WORKSPACES = "workspaces"


# Commands whose reply is a JSON document when sent with the ``j/`` header
QUERY_COMMANDS: frozenset[Command] = frozenset({
    Command.ACTIVE_WINDOW,
    Command.ACTIVE_WORKSPACE,
    Command.ANIMATIONS,
    Command.BINDS,
    Command.CLIENTS,
    Command.CONFIG_ERRORS,
    Command.CURSOR_POS,
    Command.DECORATIONS,
    Command.DEVICES,
    Command.GET_OPTION,
    Command.LAYERS,
    Command.MONITORS,
    Command.VERSION,
    Command.WORKSPACES,
})

XKB_LAYOUT_COMMANDS = ("next", "prev")


def build_request(command: Command, *params: str) -> Request:
    """Build an immutable request for a known verb."""
    return Request(command.value, params)


def build_set_cursor(theme: str, size: int) -> Request:
    """Build a ``setcursor`` request.

    Args:
        theme: Cursor theme name.
        size: Cursor size in pixels, must be positive.
    """
    if not theme:
        raise ValueError("Cursor theme must not be empty")
    if size <= 0:
        raise ValueError(f"Cursor size must be positive, got {size}")
    return build_request(Command.SET_CURSOR, f"{theme} {size}")


def build_switch_xkb_layout(device: str, cmd: str | int) -> Request:
    """Build a ``switchxkblayout`` request.

    Args:
        device: Keyboard name as reported by ``devices``, or ``"all"``.
        cmd: ``"next"``, ``"prev"`` or a layout index.
    """
    if not device:
        raise ValueError("Keyboard device must not be empty")
    if isinstance(cmd, int):
        if cmd < 0:
            raise ValueError(f"Layout index must be >= 0, got {cmd}")
    elif cmd not in XKB_LAYOUT_COMMANDS:
        raise ValueError(
            f"Unknown layout command '{cmd}'. Valid: {list(XKB_LAYOUT_COMMANDS)} "
            f"or a layout index"
        )
    return build_request(Command.SWITCH_XKB_LAYOUT, f"{device} {cmd}")
