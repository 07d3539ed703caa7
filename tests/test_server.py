"""Tests for the MCP server tools."""

from __future__ import annotations

import socket
import sys
import threading
from unittest.mock import MagicMock, patch

from hyprland_ipc.config import ClientConfig
from hyprland_ipc.errors import TransportError, ValidationError


def _get_server_module():
    """Import server module with FastMCP mocked to avoid init issues."""
    mock_fastmcp_cls = MagicMock()
    mock_fastmcp_instance = MagicMock()
    # Make the @mcp.tool() decorator a no-op that returns the function unchanged
    mock_fastmcp_instance.tool.return_value = lambda fn: fn
    mock_fastmcp_instance.resource.return_value = lambda fn: fn
    mock_fastmcp_cls.return_value = mock_fastmcp_instance

    with patch("mcp.server.fastmcp.FastMCP", mock_fastmcp_cls):
        # Remove cached server module so it re-imports with our mock
        sys.modules.pop("hyprland_ipc.server", None)
        import hyprland_ipc.server as server_mod

    return server_mod


def test_dispatch_tool_delegates_to_client():
    server = _get_server_module()
    mock_client = MagicMock()
    mock_client.dispatch.return_value = ["ok", "ok"]

    with patch.object(server, "_get_client", return_value=mock_client):
        result = server.dispatch(["exec kitty", "workspace 2"])

    mock_client.dispatch.assert_called_once_with("exec kitty", "workspace 2")
    assert result == {"response": ["ok", "ok"]}


def test_dispatch_tool_requires_commands():
    server = _get_server_module()
    assert "error" in server.dispatch([])


def test_validation_error_is_reported():
    """Failures come back as an error dict with the partial response."""
    server = _get_server_module()
    mock_client = MagicMock()
    mock_client.keyword.side_effect = ValidationError(
        "non-ok response", ["ok", "invalid field"]
    )

    with patch.object(server, "_get_client", return_value=mock_client):
        result = server.keyword(["general:gaps_in 4", "general:nope 1"])

    assert result["error"] == "non-ok response"
    assert result["response"] == ["ok", "invalid field"]


def test_query_tools():
    server = _get_server_module()
    mock_client = MagicMock()
    mock_client.clients.return_value = [{"class": "kitty"}]
    mock_client.cursor_pos.return_value = {"x": 1, "y": 2}
    mock_client.splash.return_value = "hello"

    with patch.object(server, "_get_client", return_value=mock_client):
        assert server.list_clients() == {"clients": [{"class": "kitty"}]}
        assert server.get_cursor_pos() == {"x": 1, "y": 2}
        assert server.splash() == {"splash": "hello"}


def test_transport_error_is_reported():
    server = _get_server_module()
    mock_client = MagicMock()
    mock_client.monitors.side_effect = TransportError("error while connecting")

    with patch.object(server, "_get_client", return_value=mock_client):
        assert server.list_monitors() == {"error": "error while connecting"}


def test_switch_xkb_layout_index():
    server = _get_server_module()
    mock_client = MagicMock()
    mock_client.switch_xkb_layout.return_value = ["ok"]

    with patch.object(server, "_get_client", return_value=mock_client):
        server.switch_xkb_layout("all", "2")

    mock_client.switch_xkb_layout.assert_called_once_with("all", 2)


def test_wait_for_events_rejects_unknown_types():
    server = _get_server_module()
    result = server.wait_for_events(["workspace", "teleport"])
    assert "teleport" in result["error"]


def test_wait_for_events_collects_until_timeout(short_tmp):
    server = _get_server_module()
    path = short_tmp / ".socket2.sock"
    config = ClientConfig(request_socket=short_tmp / ".socket.sock", event_socket=path)

    with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as listener:
        listener.bind(str(path))
        listener.listen()

        def emit():
            peer, _ = listener.accept()
            with peer:
                peer.sendall(b"workspace>>3\nopenlayer>>wofi\nfullscreen>>1\n")
                # Hold the connection open until the client goes away
                peer.recv(1)

        thread = threading.Thread(target=emit, daemon=True)
        thread.start()
        with patch.object(server, "_get_config", return_value=config):
            result = server.wait_for_events(["workspace", "fullscreen"], timeout=0.3)
        thread.join(timeout=5.0)

    assert result == {
        "events": [
            {"type": "workspace", "name": "3"},
            {"type": "fullscreen", "enabled": True},
        ]
    }


def test_wait_for_events_stops_at_max(short_tmp):
    server = _get_server_module()
    path = short_tmp / ".socket2.sock"
    config = ClientConfig(request_socket=short_tmp / ".socket.sock", event_socket=path)

    with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as listener:
        listener.bind(str(path))
        listener.listen()

        def emit():
            peer, _ = listener.accept()
            with peer:
                peer.sendall(b"workspace>>1\nworkspace>>2\nworkspace>>3\n")
                peer.recv(1)

        thread = threading.Thread(target=emit, daemon=True)
        thread.start()
        with patch.object(server, "_get_config", return_value=config):
            result = server.wait_for_events(timeout=30.0, max_events=2)
        thread.join(timeout=5.0)

    assert [e["name"] for e in result["events"]] == ["1", "2"]


def test_event_catalog_lists_all_types():
    server = _get_server_module()
    catalog = server.event_catalog()
    assert "openwindow: address, workspace_name, window_class, title" in catalog
    assert len(catalog.splitlines()) == 17
