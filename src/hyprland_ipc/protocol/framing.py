"""Request frame builder for the Hyprland request socket.

Frame layouts::

    0 params:   [j/]<command>
    1 param:    [j/]<command> <param>
    2+ params:  [j/][[BATCH]]<command> <p0>;<command> <p1>;...

- ``j/``: optional header asking the compositor for JSON formatted replies.
  It comes once, in front of the whole frame.
- ``[[BATCH]]``: marker telling the compositor that the frame holds several
  ``;`` terminated sub-commands.
- Every frame is at most ``MAX_FRAME_BYTES`` long, which is the size of the
  buffer the compositor reads a request into. Batches that do not fit are
  split over several frames, each starting with the header and marker again.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..errors import CommandTooLongError, EmptyCommandError

BATCH_MARKER = b"[[BATCH]]"
JSON_HEADER = b"j/"
PARAM_SEPARATOR = b" "
SEGMENT_TERMINATOR = b";"
MAX_FRAME_BYTES = 8192


@dataclass(frozen=True)
class Request:
    """An immutable command verb and its ordered parameters."""

    name: str
    params: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # Accept any sequence, keep a tuple
        object.__setattr__(self, "params", tuple(self.params))

    def frames(self, json_reply: bool = False) -> list[bytes]:
        return prepare_frames(self.name, self.params, json_reply=json_reply)


def _single(command: bytes, param: bytes | None, header: bytes) -> bytes:
    frame = header + command
    if param is not None:
        frame += PARAM_SEPARATOR + param
    if len(frame) > MAX_FRAME_BYTES:
        raise CommandTooLongError(frame, len(frame), MAX_FRAME_BYTES)
    return frame


def prepare_frames(
    command: str,
    params: Sequence[str] = (),
    json_reply: bool = False,
) -> list[bytes]:
    """Pack a command and its parameters into request frames.

    Args:
        command: The hyprctl verb, e.g. ``"dispatch"``.
        params: Zero or more parameters. Two or more are sent in batch mode,
            one ``<command> <param>;`` segment each.
        json_reply: Prefix the command(s) with ``j/`` to get JSON replies.

    Returns:
        One or more frames, each at most ``MAX_FRAME_BYTES`` long, to be sent
        in order.

    Raises:
        EmptyCommandError: If ``command`` is empty.
        CommandTooLongError: If a single command cannot fit in one frame.
    """
    if not command:
        raise EmptyCommandError()

    header = JSON_HEADER if json_reply else b""
    cmd = command.encode("utf-8")

    if len(params) == 0:
        return [_single(cmd, None, header)]
    if len(params) == 1:
        return [_single(cmd, params[0].encode("utf-8"), header)]

    frames: list[bytes] = []
    prefix = header + BATCH_MARKER
    buf = bytearray(prefix)
    for param in params:
        segment = cmd + PARAM_SEPARATOR + param.encode("utf-8") + SEGMENT_TERMINATOR
        if len(prefix) + len(segment) > MAX_FRAME_BYTES:
            # Would not fit even an empty batch
            raise CommandTooLongError(
                prefix + segment,
                len(prefix) + len(segment),
                MAX_FRAME_BYTES,
            )
        if len(buf) + len(segment) > MAX_FRAME_BYTES:
            frames.append(bytes(buf))
            buf = bytearray(prefix)
        buf += segment
    frames.append(bytes(buf))

    return frames
