"""Tests for the request socket transport."""

from unittest.mock import MagicMock, patch

import pytest

from hyprland_ipc.errors import EmptyRequestError, RequestTooBigError, TransportError
from hyprland_ipc.protocol.framing import MAX_FRAME_BYTES
from hyprland_ipc.transport.request_socket import RECV_BUFFER_SIZE, RequestSocket


def test_send_returns_reply(request_server):
    request_server.replies = [b"ok"]
    sock = RequestSocket(request_server.path)

    assert sock.send(b"dispatch exec kitty") == b"ok"
    assert request_server.requests == [b"dispatch exec kitty"]


def test_new_connection_per_frame(request_server):
    """Each send is served on its own connection."""
    request_server.replies = [b"first", b"second"]
    sock = RequestSocket(request_server.path)

    assert sock.send(b"splash") == b"first"
    assert sock.send(b"splash") == b"second"
    assert len(request_server.requests) == 2


def test_reply_of_exactly_one_buffer(request_server):
    """A full-buffer chunk keeps reading until the peer closes."""
    reply = b"x" * RECV_BUFFER_SIZE
    request_server.replies = [reply]

    assert RequestSocket(request_server.path).send(b"clients") == reply


def test_empty_reply(request_server):
    request_server.replies = [b""]
    assert RequestSocket(request_server.path).send(b"kill") == b""


def test_empty_request_makes_no_connection(request_server):
    with pytest.raises(EmptyRequestError):
        RequestSocket(request_server.path).send(b"")
    assert request_server.requests == []


def test_request_too_big_makes_no_connection(request_server):
    with pytest.raises(RequestTooBigError):
        RequestSocket(request_server.path).send(b"c" * (MAX_FRAME_BYTES + 1))
    assert request_server.requests == []


def test_full_size_frame_is_accepted(request_server):
    frame = b"c" * MAX_FRAME_BYTES
    RequestSocket(request_server.path).send(frame)
    assert request_server.requests == [frame]


def test_connect_failure_is_transport_error(short_tmp):
    sock = RequestSocket(short_tmp / "missing.sock")
    with pytest.raises(TransportError) as exc_info:
        sock.send(b"splash")
    assert isinstance(exc_info.value, ConnectionError)
    assert isinstance(exc_info.value.__cause__, OSError)


def _mock_socket():
    sock = MagicMock()
    sock.recv.return_value = b"ok"
    sock.close.side_effect = OSError("bad file descriptor")
    return sock


def test_close_failure_is_transport_error():
    """A failing close is reported even when the exchange succeeded."""
    sock = _mock_socket()
    with patch("socket.socket", return_value=sock):
        with pytest.raises(TransportError) as exc_info:
            RequestSocket("/run/hypr.sock").send(b"splash")

    sock.sendall.assert_called_once_with(b"splash")
    assert "closing" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, OSError)


def test_close_failure_is_noted_on_earlier_error():
    """The connect error propagates and carries the close error as a note."""
    sock = _mock_socket()
    sock.connect.side_effect = OSError("connection refused")
    with patch("socket.socket", return_value=sock):
        with pytest.raises(TransportError) as exc_info:
            RequestSocket("/run/hypr.sock").send(b"splash")

    assert "connecting" in str(exc_info.value)
    assert "connection refused" in str(exc_info.value)
    assert any("bad file descriptor" in note for note in exc_info.value.__notes__)
    sock.close.assert_called_once()
