"""Request socket transport.

The compositor serves one request per connection: it reads a single buffer,
writes the reply and closes. A fresh Unix-domain connection is therefore
opened for every frame and never reused.
"""

from __future__ import annotations

import logging
import socket
from pathlib import Path

from ..errors import EmptyRequestError, RequestTooBigError, TransportError
from ..protocol.framing import MAX_FRAME_BYTES

logger = logging.getLogger(__name__)

RECV_BUFFER_SIZE = 8192


class RequestSocket:
    """Sends frames to the request socket and drains the replies.

    Usage::

        sock = RequestSocket("/run/user/1000/hypr/<sig>/.socket.sock")
        reply = sock.send(b"dispatch exec kitty")
    """

    def __init__(self, path: str | Path, timeout: float | None = None) -> None:
        self._path = str(path)
        self._timeout = timeout

    @property
    def path(self) -> str:
        return self._path

    def send(self, frame: bytes) -> bytes:
        """Write one frame on a new connection and return the full reply.

        Args:
            frame: A request frame, at most ``MAX_FRAME_BYTES`` long.

        Returns:
            The raw reply bytes, possibly empty.

        Raises:
            EmptyRequestError: If ``frame`` is empty.
            RequestTooBigError: If ``frame`` is over the byte budget.
            TransportError: If connecting, writing, reading or closing fails.
        """
        if not frame:
            raise EmptyRequestError()
        if len(frame) > MAX_FRAME_BYTES:
            raise RequestTooBigError(len(frame), MAX_FRAME_BYTES)

        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        sock.settimeout(self._timeout)
        error: BaseException | None = None
        try:
            return self._round_trip(sock, frame)
        except BaseException as e:
            error = e
            raise
        finally:
            try:
                sock.close()
            except OSError as e:
                if error is None:
                    raise TransportError(f"error while closing socket: {e}") from e
                error.add_note(f"error while closing socket: {e}")

    def _round_trip(self, sock: socket.socket, frame: bytes) -> bytes:
        try:
            sock.connect(self._path)
        except OSError as e:
            raise TransportError(
                f"error while connecting to socket {self._path}: {e}"
            ) from e

        logger.debug("Sending %d byte frame: %r", len(frame), frame[:64])
        try:
            sock.sendall(frame)
        except OSError as e:
            raise TransportError(f"error while writing to socket: {e}") from e

        chunks: list[bytes] = []
        while True:
            try:
                chunk = sock.recv(RECV_BUFFER_SIZE)
            except OSError as e:
                raise TransportError(f"error while reading from socket: {e}") from e
            if not chunk:
                break
            chunks.append(chunk)
            if len(chunk) < RECV_BUFFER_SIZE:
                break

        response = b"".join(chunks)
        logger.debug("Received %d byte response", len(response))
        return response
