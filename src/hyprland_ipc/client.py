"""High-level clients for the request and event sockets."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Mapping

from .config import ClientConfig, SocketKind, resolve_socket
from .events.decoder import EventRecord, dispatch_event
from .events.handler import Handler
from .events.types import ALL_EVENTS, EventType
from .protocol.commands import (
    QUERY_COMMANDS,
    Command,
    build_request,
    build_set_cursor,
    build_switch_xkb_layout,
)
from .protocol.framing import Request, prepare_frames
from .protocol.parser import parse_json_response, parse_response, validate_response
from .transport.cancel import CancelToken
from .transport.event_socket import EventConnection
from .transport.request_socket import RequestSocket

logger = logging.getLogger(__name__)


class RequestClient:
    """Issues commands and queries over the request socket.

    Set ``validate`` to ``False`` to skip checking that action commands
    answered ``ok``; replies are then returned as parsed lines without
    inspection.
    """

    def __init__(
        self,
        socket_path: str | Path,
        validate: bool = True,
        timeout: float | None = None,
    ) -> None:
        self.validate = validate
        self._socket = RequestSocket(socket_path, timeout=timeout)

    @classmethod
    def from_config(cls, config: ClientConfig) -> RequestClient:
        return cls(config.request_socket, validate=config.validate, timeout=config.timeout)

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> RequestClient:
        return cls.from_config(ClientConfig.from_env(env))

    @property
    def socket_path(self) -> str:
        return self._socket.path

    def raw_request(self, frame: bytes) -> bytes:
        """Send one frame as-is and return the raw reply.

        No framing and no validation is applied. An invalid request will
        generally get a reply other than ``ok``.
        """
        return self._socket.send(frame)

    def do_request(
        self,
        command: str,
        *params: str,
        json_reply: bool = False,
    ) -> bytes:
        """Frame a command, send every frame in order, join the replies.

        The first failing frame aborts the remaining ones.
        """
        frames = prepare_frames(command, params, json_reply=json_reply)
        if len(frames) > 1:
            logger.debug("Sending %s with %d params in %d frames",
                         command, len(params), len(frames))
        return b"".join(self.raw_request(frame) for frame in frames)

    def _action(self, request: Request) -> list[str]:
        raw = self.do_request(request.name, *request.params)
        response = parse_response(raw)
        if self.validate:
            validate_response(request.params, response)
        return response

    def query(self, command: Command, *params: str) -> Any:
        """Send a query with the JSON header and decode the reply.

        Raises:
            ValueError: If ``command`` has no JSON reply.
            ValidationError: If the reply is not valid JSON.
        """
        if command not in QUERY_COMMANDS:
            raise ValueError(f"{command.value} is not a JSON query")
        request = build_request(command, *params)
        raw = self.do_request(request.name, *request.params, json_reply=True)
        return parse_json_response(raw)

    # ─── Actions ──────────────────────────────────────────────────────

    def dispatch(self, *params: str) -> list[str]:
        """Run dispatchers, like ``hyprctl dispatch``.

        Several parameters are sent in batch mode, like
        ``hyprctl --batch``.
        """
        return self._action(build_request(Command.DISPATCH, *params))

    def keyword(self, *params: str) -> list[str]:
        """Set config keywords at runtime, like ``hyprctl keyword``."""
        return self._action(build_request(Command.KEYWORD, *params))

    def kill(self) -> list[str]:
        """Enter kill mode. Does NOT wait for the user to click a window."""
        return self._action(build_request(Command.KILL))

    def reload(self) -> list[str]:
        return self._action(build_request(Command.RELOAD))

    def set_cursor(self, theme: str, size: int) -> list[str]:
        return self._action(build_set_cursor(theme, size))

    def switch_xkb_layout(self, device: str, cmd: str | int) -> list[str]:
        return self._action(build_switch_xkb_layout(device, cmd))

    def splash(self) -> str:
        """Return the current splash text."""
        raw = self.do_request(Command.SPLASH.value)
        return raw.decode("utf-8", errors="replace")

    # ─── Queries (JSON replies) ───────────────────────────────────────

    def active_window(self) -> dict[str, Any]:
        return self.query(Command.ACTIVE_WINDOW)

    def active_workspace(self) -> dict[str, Any]:
        return self.query(Command.ACTIVE_WORKSPACE)

    def animations(self) -> list[Any]:
        return self.query(Command.ANIMATIONS)

    def binds(self) -> list[dict[str, Any]]:
        return self.query(Command.BINDS)

    def clients(self) -> list[dict[str, Any]]:
        return self.query(Command.CLIENTS)

    def config_errors(self) -> list[str]:
        return self.query(Command.CONFIG_ERRORS)

    def cursor_pos(self) -> dict[str, int]:
        return self.query(Command.CURSOR_POS)

    def decorations(self, regex: str) -> list[dict[str, Any]]:
        return self.query(Command.DECORATIONS, regex)

    def devices(self) -> dict[str, Any]:
        return self.query(Command.DEVICES)

    def get_option(self, name: str) -> dict[str, Any]:
        return self.query(Command.GET_OPTION, name)

    def layers(self) -> dict[str, Any]:
        return self.query(Command.LAYERS)

    def monitors(self) -> list[dict[str, Any]]:
        return self.query(Command.MONITORS)

    def version(self) -> dict[str, Any]:
        return self.query(Command.VERSION)

    def workspaces(self) -> list[dict[str, Any]]:
        return self.query(Command.WORKSPACES)


class EventClient:
    """Reads and dispatches events from the event socket.

    Usage::

        class Printer(EventHandler):
            def workspace(self, event):
                print("workspace", event.name)

        with EventClient.from_env() as client:
            client.subscribe(Printer(), EventType.WORKSPACE)
    """

    def __init__(self, connection: EventConnection) -> None:
        self._conn = connection

    @classmethod
    def connect(cls, socket_path: str | Path) -> EventClient:
        conn = EventConnection(socket_path)
        conn.open()
        return cls(conn)

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> EventClient:
        return cls.connect(resolve_socket(SocketKind.EVENT, env))

    @property
    def connection(self) -> EventConnection:
        return self._conn

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> EventClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def receive(self, cancel: CancelToken | None = None) -> list[EventRecord]:
        """Low-level single read, returning the decoded records."""
        return self._conn.receive(cancel)

    def receive_once(
        self,
        handler: Handler,
        *event_types: EventType | str,
        cancel: CancelToken | None = None,
    ) -> int:
        """Read once and dispatch the records to ``handler``.

        Returns:
            How many events were passed to the handler.
        """
        return self._receive_and_dispatch(handler, _subscribed(event_types), cancel)

    def subscribe(
        self,
        handler: Handler,
        *event_types: EventType | str,
        cancel: CancelToken | None = None,
    ) -> None:
        """Dispatch events to ``handler`` until an error stops the loop.

        Blocks forever unless ``cancel`` fires, the connection fails, or the
        handler raises. The error is propagated without retrying; calling
        ``subscribe`` again on the same client is safe. All event types are
        subscribed when none are given.

        Raises:
            CancelledError: If ``cancel`` fired.
            DeadlineExceededError: If the ``cancel`` deadline passed.
            TransportError: If reading from the socket failed.
        """
        subscribed = _subscribed(event_types)
        logger.debug("Subscribing to %s", sorted(t.value for t in subscribed))
        while True:
            self._receive_and_dispatch(handler, subscribed, cancel)

    def _receive_and_dispatch(
        self,
        handler: Handler,
        subscribed: frozenset[EventType],
        cancel: CancelToken | None,
    ) -> int:
        dispatched = 0
        for record in self._conn.receive(cancel):
            if dispatch_event(record, subscribed, handler):
                dispatched += 1
        return dispatched


def _subscribed(event_types: Iterable[EventType | str]) -> frozenset[EventType]:
    types = frozenset(EventType(t) for t in event_types)
    return types or frozenset(ALL_EVENTS)
