"""Shared fixtures: a fake request socket served from a background thread."""

from __future__ import annotations

import shutil
import socket
import tempfile
import threading
from pathlib import Path

import pytest


class FakeRequestServer:
    """Answers each connection with the next canned reply, then closes it.

    Every received request is recorded in ``requests``.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self.requests: list[bytes] = []
        self.replies: list[bytes] = []
        self._sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        self._sock.bind(str(path))
        self._sock.listen()
        self._sock.settimeout(5.0)
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._serve, daemon=True)
        self._thread.start()

    def _serve(self) -> None:
        while True:
            try:
                conn, _ = self._sock.accept()
            except socket.timeout:
                continue
            except OSError:
                break
            with conn:
                if self._stop.is_set():
                    break
                conn.settimeout(5.0)
                self.requests.append(conn.recv(65536))
                reply = self.replies.pop(0) if self.replies else b"ok"
                conn.sendall(reply)

    def close(self) -> None:
        self._stop.set()
        # Wake the accept call so the thread sees the stop flag
        with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as wake:
            try:
                wake.connect(str(self.path))
            except OSError:
                pass
        self._thread.join(timeout=5.0)
        self._sock.close()


@pytest.fixture
def short_tmp():
    # Unix socket paths are limited to ~108 bytes, pytest's tmp_path can be longer
    path = Path(tempfile.mkdtemp(prefix="hypr"))
    yield path
    shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def request_server(short_tmp):
    server = FakeRequestServer(short_tmp / ".socket.sock")
    yield server
    server.close()
