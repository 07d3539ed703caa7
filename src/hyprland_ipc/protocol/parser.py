"""Response parsing and validation for request socket replies."""

from __future__ import annotations

import json
from typing import Any, Sequence

from ..errors import ValidationError

SUCCESS_TOKEN = "ok"


def parse_response(raw: bytes) -> list[str]:
    """Split a raw reply into trimmed, non-blank lines."""
    text = raw.decode("utf-8", errors="replace")
    lines = []
    for line in text.splitlines():
        line = line.strip()
        if line:
            lines.append(line)
    return lines


def validate_response(params: Sequence[str], response: list[str]) -> list[str]:
    """Check that every dispatched sub-command answered ``ok``.

    A command without parameters still produces exactly one status line, so
    ``max(len(params), 1)`` lines are expected. Lines are matched to
    parameters by position.

    Returns:
        ``response`` unchanged, so calls can be chained.

    Raises:
        ValidationError: On a line count mismatch or a non-``ok`` line. The
            error keeps ``response`` for inspection.
    """
    want = max(len(params), 1)
    if len(response) != want:
        raise ValidationError(
            f"got {len(response)} response line(s), want: {want}",
            response,
        )

    for i, line in enumerate(response):
        if line != SUCCESS_TOKEN:
            param = params[i] if params else ""
            raise ValidationError(
                f"non-ok response from request: {i}, "
                f"param: {param!r}, response: {line!r}",
                response,
            )

    return response


def parse_json_response(raw: bytes) -> Any:
    """Decode a ``j/`` query reply into plain Python values."""
    if not raw:
        raise ValidationError("empty response")
    try:
        return json.loads(raw)
    except ValueError as e:
        raise ValidationError(f"error during unmarshal: {e}") from e
