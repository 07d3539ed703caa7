"""Socket discovery and client configuration.

The compositor places its sockets under::

    $XDG_RUNTIME_DIR/hypr/$HYPRLAND_INSTANCE_SIGNATURE/.socket.sock   (requests)
    $XDG_RUNTIME_DIR/hypr/$HYPRLAND_INSTANCE_SIGNATURE/.socket2.sock  (events)

with ``/run/user/<uid>`` used when ``XDG_RUNTIME_DIR`` is unset. Resolution
is a pure function of the environment mapping passed in; nothing here is
consulted implicitly by the clients.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Mapping

from .errors import ConfigError

INSTANCE_SIGNATURE_VAR = "HYPRLAND_INSTANCE_SIGNATURE"
RUNTIME_DIR_VAR = "XDG_RUNTIME_DIR"
TIMEOUT_VAR = "HYPRLAND_IPC_TIMEOUT"


class SocketKind(str, Enum):
    REQUEST = ".socket.sock"
    EVENT = ".socket2.sock"


def resolve_socket(
    kind: SocketKind,
    env: Mapping[str, str] | None = None,
    uid: int | None = None,
) -> Path:
    """Return the path of a compositor socket.

    Args:
        kind: Which of the two sockets to locate.
        env: Environment to read, defaults to ``os.environ``.
        uid: User id for the ``/run/user`` fallback, defaults to the
            current user.

    Raises:
        ConfigError: If the instance signature is not set.
    """
    if env is None:
        env = os.environ

    signature = env.get(INSTANCE_SIGNATURE_VAR, "")
    if not signature:
        raise ConfigError(
            f"{INSTANCE_SIGNATURE_VAR} is empty, are you using Hyprland?"
        )

    runtime_dir = env.get(RUNTIME_DIR_VAR, "")
    if not runtime_dir:
        if uid is None:
            uid = os.getuid()
        runtime_dir = f"/run/user/{uid}"

    return Path(runtime_dir) / "hypr" / signature / kind.value


@dataclass
class ClientConfig:
    """Connection settings shared by the request and event clients."""

    request_socket: Path
    event_socket: Path
    validate: bool = True
    timeout: float | None = None

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        uid: int | None = None,
    ) -> ClientConfig:
        if env is None:
            env = os.environ

        timeout = None
        raw_timeout = env.get(TIMEOUT_VAR, "")
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as e:
                raise ConfigError(
                    f"{TIMEOUT_VAR} must be a number of seconds, got {raw_timeout!r}"
                ) from e

        return cls(
            request_socket=resolve_socket(SocketKind.REQUEST, env, uid),
            event_socket=resolve_socket(SocketKind.EVENT, env, uid),
            timeout=timeout,
        )
