"""Client for the Hyprland compositor IPC sockets."""

from .client import EventClient, RequestClient
from .config import ClientConfig, SocketKind, resolve_socket
from .errors import (
    CancelledError,
    CommandTooLongError,
    ConfigError,
    DeadlineExceededError,
    DecodeError,
    EmptyCommandError,
    EmptyRequestError,
    HyprlandError,
    RequestTooBigError,
    TransportError,
    ValidationError,
)
from .events import ALL_EVENTS, CallbackHandler, EventHandler, EventType
from .transport import CancelToken
