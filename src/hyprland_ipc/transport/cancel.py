"""Cancel tokens for blocking event reads.

A token can be cancelled explicitly, from any thread, or expire on its own
deadline. It owns a socket pair whose read end becomes readable on
cancellation, so a reader can wait on its data socket and the token together
with :mod:`selectors` instead of polling.
"""

from __future__ import annotations

import socket
import threading
import time

from ..errors import CancelledError, DeadlineExceededError


class CancelToken:
    """A one-shot cancellation signal with an optional deadline.

    Usage::

        token = CancelToken.with_timeout(5.0)
        threading.Timer(1.0, token.cancel).start()
        client.subscribe(handler, cancel=token)
    """

    def __init__(self, deadline: float | None = None) -> None:
        # deadline is a time.monotonic() value
        self._deadline = deadline
        self._lock = threading.Lock()
        self._reason: str | None = None
        self._rsock, self._wsock = socket.socketpair()
        self._rsock.setblocking(False)
        self._wsock.setblocking(False)

    @classmethod
    def with_timeout(cls, seconds: float) -> CancelToken:
        return cls(deadline=time.monotonic() + seconds)

    @property
    def deadline(self) -> float | None:
        return self._deadline

    @property
    def cancelled(self) -> bool:
        return self._reason is not None or self.expired

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    def remaining(self) -> float | None:
        """Seconds until the deadline, ``None`` when there is none."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def fileno(self) -> int:
        """Descriptor that becomes readable once :meth:`cancel` is called."""
        return self._rsock.fileno()

    def cancel(self, reason: str = "cancelled") -> None:
        """Fire the token. Later calls keep the first reason."""
        with self._lock:
            if self._reason is not None:
                return
            self._reason = reason
            try:
                self._wsock.send(b"\0")
            except OSError:
                # Already closed or full; the reason is recorded either way
                pass

    def error(self) -> CancelledError:
        """The exception describing why the token fired."""
        if self._reason is not None:
            return CancelledError(self._reason)
        return DeadlineExceededError()

    def close(self) -> None:
        self._rsock.close()
        self._wsock.close()

    def __enter__(self) -> CancelToken:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
