"""Protocol layer: request framing, command verbs, and response parsing."""

from .framing import Request, prepare_frames, MAX_FRAME_BYTES
from .commands import Command, build_request
from .parser import parse_response, validate_response, parse_json_response
