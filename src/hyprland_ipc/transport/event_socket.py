"""Event socket transport.

One long-lived Unix-domain connection per client. Reads block until the
compositor emits something, so every read can be paired with a
:class:`~.cancel.CancelToken`: the socket and the token are waited on
together and the socket is only read once it is readable. No read is ever
left in flight when :meth:`EventConnection.receive` returns, and the
connection stays usable after a cancelled call.
"""

from __future__ import annotations

import logging
import selectors
import socket
from pathlib import Path

from ..errors import TransportError
from ..events.decoder import EventRecord, decode_events
from .cancel import CancelToken

logger = logging.getLogger(__name__)

EVENT_BUFFER_SIZE = 8192


class EventConnection:
    """Manages the connection to the event socket.

    Only one ``receive`` may run at a time on a connection; concurrent
    readers are not supported.

    Usage::

        with EventConnection(path) as conn:
            records = conn.receive()
    """

    def __init__(self, path: str | Path) -> None:
        self._path = str(path)
        self._sock: socket.socket | None = None

    @classmethod
    def from_socket(cls, sock: socket.socket) -> EventConnection:
        """Wrap an already connected stream socket."""
        conn = cls(sock.getpeername() or "<socket>")
        sock.settimeout(None)
        conn._sock = sock
        return conn

    @property
    def path(self) -> str:
        return self._path

    @property
    def connected(self) -> bool:
        return self._sock is not None

    def open(self) -> None:
        """Connect to the event socket.

        Raises:
            TransportError: If the socket cannot be reached.
        """
        if self._sock is not None:
            return

        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.connect(self._path)
        except OSError as e:
            sock.close()
            raise TransportError(
                f"error while connecting to socket {self._path}: {e}"
            ) from e

        self._sock = sock
        logger.info("Connected to event socket %s", self._path)

    def close(self) -> None:
        """Close the connection."""
        if self._sock is None:
            return

        try:
            self._sock.close()
        except OSError as e:
            raise TransportError(f"error while closing socket: {e}") from e
        finally:
            self._sock = None
            logger.info("Disconnected from event socket %s", self._path)

    def __enter__(self) -> EventConnection:
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def read(self, cancel: CancelToken | None = None) -> bytes:
        """Perform one read of up to ``EVENT_BUFFER_SIZE`` bytes.

        Args:
            cancel: Optional token interrupting the wait for data.

        Raises:
            TransportError: If not connected, the read fails or the peer
                closed the connection.
            CancelledError: If ``cancel`` fired before data arrived.
            DeadlineExceededError: If the token deadline passed first.
        """
        if self._sock is None:
            raise TransportError("Not connected to event socket")

        if cancel is not None:
            self._wait_readable(cancel)

        try:
            data = self._sock.recv(EVENT_BUFFER_SIZE)
        except OSError as e:
            raise TransportError(f"error while reading from socket: {e}") from e

        if not data:
            raise TransportError("event socket closed by peer")
        return data

    def _wait_readable(self, cancel: CancelToken) -> None:
        if cancel.cancelled:
            raise cancel.error()

        with selectors.DefaultSelector() as sel:
            sel.register(self._sock, selectors.EVENT_READ)
            sel.register(cancel, selectors.EVENT_READ)
            ready = sel.select(timeout=cancel.remaining())

        if any(key.fileobj is self._sock for key, _ in ready):
            return

        err = cancel.error()
        logger.debug("Event read interrupted: %s", err.reason)
        raise err

    def receive(self, cancel: CancelToken | None = None) -> list[EventRecord]:
        """Read once and decode whatever records the read contains."""
        data = self.read(cancel)
        records = decode_events(data)
        logger.debug("Received %d byte(s), %d record(s)", len(data), len(records))
        return records
