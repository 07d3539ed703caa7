"""Transport layer: request and event Unix-domain sockets."""

from .cancel import CancelToken
from .event_socket import EventConnection
from .request_socket import RequestSocket
