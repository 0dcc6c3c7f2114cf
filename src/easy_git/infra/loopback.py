from __future__ import annotations

import socket
from contextlib import contextmanager
from typing import Iterator

from ..core.domain.exceptions import ListenerBindError, NetworkError
from ..core.domain.oauth import CALLBACK_PAGE
from ..core.ports import LoggerPort


BUFFER_SIZE = 4096


def parse_request_target(data: bytes) -> str:
    """Return the target of the HTTP request line (``GET <target> HTTP/1.1``), or ""."""
    request_line = data.split(b"\r\n", 1)[0].split(b"\n", 1)[0]
    parts = request_line.decode("utf-8", errors="replace").split(" ")
    if len(parts) < 2:
        return ""
    return parts[1]


def build_response(page: str) -> bytes:
    body = page.encode("utf-8")
    head = (
        "HTTP/1.1 200 OK\r\n"
        "Content-Type: text/html; charset=utf-8\r\n"
        f"Content-Length: {len(body)}\r\n"
        "Connection: close\r\n"
        "\r\n"
    )
    return head.encode("ascii") + body


class PendingCallback:
    """A bound listener waiting for its single request."""

    def __init__(self, sock: socket.socket, *, logger: LoggerPort, page: str = CALLBACK_PAGE) -> None:
        self._sock = sock
        self._logger = logger
        self._page = page
        self.port: int = sock.getsockname()[1]

    def receive(self) -> str:
        """Accept one connection, answer with the static page, return the request target.

        Blocks without timeout. The page is sent whatever the request looks
        like; validating the query is the caller's job.
        """
        try:
            conn, addr = self._sock.accept()
        except OSError as e:
            raise NetworkError(f"Failed to accept OAuth callback on port {self.port}: {e}") from e

        with conn:
            try:
                data = conn.recv(BUFFER_SIZE)
            except OSError as e:
                raise NetworkError(f"Failed to read OAuth callback: {e}") from e
            target = parse_request_target(data)
            self._logger.debug(
                "callback_received",
                type="callback_received",
                peer=addr[0],
                path=target.split("?", 1)[0],
            )
            try:
                conn.sendall(build_response(self._page))
            except OSError as e:
                # The browser may already be gone; the request itself is what matters.
                self._logger.warning("callback_response_failed", type="callback_response_failed", error=str(e))
        return target


class LoopbackCallbackListener:
    """One-shot HTTP listener on the loopback interface.

    ``bind()`` is a context manager: the socket is released on every exit
    path, and only one request is ever accepted per binding.
    """

    def __init__(
        self,
        *,
        port: int,
        logger: LoggerPort,
        host: str = "127.0.0.1",
        page: str = CALLBACK_PAGE,
    ) -> None:
        self._host = host
        self._port = port
        self._logger = logger
        self._page = page

    @contextmanager
    def bind(self) -> Iterator[PendingCallback]:
        try:
            sock = socket.create_server((self._host, self._port), backlog=1)
        except OSError as e:
            raise ListenerBindError(self._port, e.strerror or str(e)) from e

        try:
            pending = PendingCallback(sock, logger=self._logger, page=self._page)
            self._logger.debug("listener_bound", type="listener_bound", host=self._host, port=pending.port)
            yield pending
        finally:
            sock.close()
