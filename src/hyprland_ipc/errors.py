"""Exception types raised by the IPC client.

Every error derives from :class:`HyprlandError`. Most also derive from the
closest builtin (``ValueError``, ``ConnectionError``, ``TimeoutError``) so
callers that only care about the broad category can catch that instead.
"""

from __future__ import annotations


class HyprlandError(Exception):
    """Base class for all errors raised by this package."""


class ConfigError(HyprlandError):
    """The socket location could not be resolved from the environment."""


class EmptyCommandError(HyprlandError, ValueError):
    """A request was built with an empty command name."""

    def __init__(self) -> None:
        super().__init__("empty command")


class CommandTooLongError(HyprlandError, ValueError):
    """A single command cannot fit even a freshly started frame."""

    def __init__(self, segment: bytes, length: int, limit: int) -> None:
        self.segment = segment
        self.length = length
        self.limit = limit
        super().__init__(
            f"command is too long ({length}>{limit}): "
            f"{segment.decode('utf-8', errors='replace')}"
        )


class EmptyRequestError(HyprlandError, ValueError):
    """An empty frame was passed to the request socket."""

    def __init__(self) -> None:
        super().__init__("empty request")


class RequestTooBigError(HyprlandError, ValueError):
    """A frame exceeds the request socket buffer."""

    def __init__(self, length: int, limit: int) -> None:
        self.length = length
        self.limit = limit
        super().__init__(f"request too big ({length}>{limit})")


class TransportError(HyprlandError, ConnectionError):
    """Connecting, writing, reading or closing a socket failed."""


class ValidationError(HyprlandError):
    """The compositor reply does not match the expected outcome.

    ``response`` holds the parsed reply lines so callers can inspect which
    sub-commands succeeded.
    """

    def __init__(self, message: str, response: list[str] | None = None) -> None:
        self.response = list(response or [])
        super().__init__(message)


class DecodeError(HyprlandError, ValueError):
    """An event record could not be mapped to its payload."""


class CancelledError(HyprlandError):
    """A blocking event read was interrupted by its cancel token."""

    def __init__(self, reason: str = "cancelled") -> None:
        self.reason = reason
        super().__init__(f"receive interrupted: {reason}")


class DeadlineExceededError(CancelledError, TimeoutError):
    """A blocking event read was interrupted because its deadline passed."""

    def __init__(self, reason: str = "deadline exceeded") -> None:
        super().__init__(reason)
