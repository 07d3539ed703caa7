"""MCP server entry point for the Hyprland IPC client.

Exposes compositor commands, state queries and event capture as tools via
the Model Context Protocol, using the official Python MCP SDK with stdio
transport. Socket locations are resolved from the environment on first use.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .client import EventClient, RequestClient
from .config import ClientConfig
from .errors import CancelledError, HyprlandError
from .events.types import ALL_EVENTS, EVENT_CLASSES, Event, EventType
from .transport.cancel import CancelToken

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "hyprland-ipc",
    instructions="Control the Hyprland compositor over its IPC sockets",
)

# Global client state
_config: ClientConfig | None = None
_client: RequestClient | None = None


def _get_config() -> ClientConfig:
    global _config
    if _config is None:
        _config = ClientConfig.from_env()
    return _config


def _get_client() -> RequestClient:
    """Get the request client, creating it from the environment if needed."""
    global _client
    if _client is None:
        _client = RequestClient.from_config(_get_config())
    return _client


def _error(e: HyprlandError) -> dict[str, Any]:
    logger.warning("Request failed: %s", e)
    result: dict[str, Any] = {"error": str(e)}
    response = getattr(e, "response", None)
    if response:
        result["response"] = response
    return result


def _event_to_dict(event: Event) -> dict[str, Any]:
    result = dataclasses.asdict(event)
    result["type"] = event.event_type.value
    return result


# ─── ACTION TOOLS ─────────────────────────────────────────────────────

@mcp.tool()
def dispatch(commands: list[str]) -> dict[str, Any]:
    """Run one or more dispatchers, like `hyprctl dispatch`.

    Several commands are sent in batch mode.

    Args:
        commands: Dispatcher invocations, e.g. ["exec kitty", "workspace 2"].
    """
    if not commands:
        return {"error": "At least one dispatcher is required"}
    try:
        return {"response": _get_client().dispatch(*commands)}
    except HyprlandError as e:
        return _error(e)


@mcp.tool()
def keyword(settings: list[str]) -> dict[str, Any]:
    """Change config values at runtime, like `hyprctl keyword`.

    Args:
        settings: Keyword assignments, e.g. ["general:gaps_in 4"].
    """
    if not settings:
        return {"error": "At least one keyword is required"}
    try:
        return {"response": _get_client().keyword(*settings)}
    except HyprlandError as e:
        return _error(e)


@mcp.tool()
def reload() -> dict[str, Any]:
    """Reload the compositor configuration."""
    try:
        return {"response": _get_client().reload()}
    except HyprlandError as e:
        return _error(e)


@mcp.tool()
def kill() -> dict[str, Any]:
    """Enter kill mode: the next clicked window is closed (ESC cancels)."""
    try:
        return {"response": _get_client().kill()}
    except HyprlandError as e:
        return _error(e)


@mcp.tool()
def set_cursor(theme: str, size: int) -> dict[str, Any]:
    """Set the cursor theme and size.

    Args:
        theme: Cursor theme name, e.g. "Adwaita".
        size: Cursor size in pixels.
    """
    try:
        return {"response": _get_client().set_cursor(theme, size)}
    except ValueError as e:
        return {"error": str(e)}
    except HyprlandError as e:
        return _error(e)


@mcp.tool()
def switch_xkb_layout(device: str, command: str = "next") -> dict[str, Any]:
    """Switch the keyboard layout of a device.

    Args:
        device: Keyboard name from list_devices, or "all".
        command: "next", "prev" or a layout index.
    """
    cmd: str | int = int(command) if command.isdigit() else command
    try:
        return {"response": _get_client().switch_xkb_layout(device, cmd)}
    except ValueError as e:
        return {"error": str(e)}
    except HyprlandError as e:
        return _error(e)


# ─── QUERY TOOLS ──────────────────────────────────────────────────────

@mcp.tool()
def get_active_window() -> dict[str, Any]:
    """Return the focused window."""
    try:
        return _get_client().active_window()
    except HyprlandError as e:
        return _error(e)


@mcp.tool()
def get_active_workspace() -> dict[str, Any]:
    """Return the focused workspace."""
    try:
        return _get_client().active_workspace()
    except HyprlandError as e:
        return _error(e)


@mcp.tool()
def list_clients() -> dict[str, Any]:
    """List all windows with their class, title, workspace and geometry."""
    try:
        return {"clients": _get_client().clients()}
    except HyprlandError as e:
        return _error(e)


@mcp.tool()
def list_monitors() -> dict[str, Any]:
    """List monitors with their resolution, position and workspaces."""
    try:
        return {"monitors": _get_client().monitors()}
    except HyprlandError as e:
        return _error(e)


@mcp.tool()
def list_workspaces() -> dict[str, Any]:
    """List workspaces with their monitor and window count."""
    try:
        return {"workspaces": _get_client().workspaces()}
    except HyprlandError as e:
        return _error(e)


@mcp.tool()
def list_devices() -> dict[str, Any]:
    """List input devices (mice, keyboards, tablets, switches)."""
    try:
        return _get_client().devices()
    except HyprlandError as e:
        return _error(e)


@mcp.tool()
def get_option(name: str) -> dict[str, Any]:
    """Read a config option, e.g. "general:border_size".

    Args:
        name: Option name in section:key form.
    """
    try:
        return _get_client().get_option(name)
    except HyprlandError as e:
        return _error(e)


@mcp.tool()
def get_version() -> dict[str, Any]:
    """Return the compositor version and build information."""
    try:
        return _get_client().version()
    except HyprlandError as e:
        return _error(e)


@mcp.tool()
def get_cursor_pos() -> dict[str, Any]:
    """Return the cursor position in global layout coordinates."""
    try:
        return _get_client().cursor_pos()
    except HyprlandError as e:
        return _error(e)


@mcp.tool()
def splash() -> dict[str, Any]:
    """Return the current splash text."""
    try:
        return {"splash": _get_client().splash()}
    except HyprlandError as e:
        return _error(e)


# ─── EVENT TOOLS ──────────────────────────────────────────────────────

@mcp.tool()
def wait_for_events(
    event_types: list[str] | None = None,
    timeout: float = 5.0,
    max_events: int = 50,
) -> dict[str, Any]:
    """Capture compositor events for a while.

    Args:
        event_types: Event names to capture (see the hyprland://events
                     resource). All events when omitted.
        timeout: Seconds to listen before returning.
        max_events: Stop early once this many events were captured.
    """
    types = event_types or [t.value for t in ALL_EVENTS]
    unknown = [t for t in types if t not in EventType._value2member_map_]
    if unknown:
        return {"error": f"Unknown event types: {unknown}"}
    if timeout <= 0:
        return {"error": "Timeout must be positive"}

    captured: list[dict[str, Any]] = []

    with CancelToken.with_timeout(timeout) as token:

        def collect(event: Event) -> None:
            captured.append(_event_to_dict(event))
            if len(captured) >= max_events:
                token.cancel("max events reached")

        try:
            with EventClient.connect(_get_config().event_socket) as client:
                client.subscribe(collect, *types, cancel=token)
        except CancelledError as e:
            logger.debug("Event capture finished: %s", e.reason)
        except HyprlandError as e:
            result = _error(e)
            result["events"] = captured
            return result

    return {"events": captured[:max_events]}


@mcp.resource("hyprland://events")
def event_catalog() -> str:
    """Event names and the payload fields each one carries."""
    lines = []
    for event_type, cls in EVENT_CLASSES.items():
        fields = ", ".join(f.name for f in dataclasses.fields(cls))
        lines.append(f"{event_type.value}: {fields}")
    return "\n".join(lines)


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
