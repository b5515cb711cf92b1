"""Shared fixtures for syncnet tests."""

import socket
from typing import Optional

import pytest


class LocalListener:
    """Loopback TCP listener driven from the test thread."""

    def __init__(self, host: str = "127.0.0.1", port: int = 0):
        self.host = host
        self.socket: Optional[socket.socket] = socket.socket(
            socket.AF_INET, socket.SOCK_STREAM
        )
        self.socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self.socket.bind((host, port))
        self.socket.listen(5)
        self.port = self.socket.getsockname()[1]

    def accept(self, timeout: float = 5.0) -> socket.socket:
        """Accept one pending client."""
        self.socket.settimeout(timeout)
        client_socket, _ = self.socket.accept()
        client_socket.settimeout(timeout)
        return client_socket

    def stop(self) -> None:
        if self.socket:
            self.socket.close()
            self.socket = None


@pytest.fixture
def listener():
    """Listener on an ephemeral loopback port."""
    server = LocalListener()
    yield server
    server.stop()


@pytest.fixture
def closed_port():
    """A loopback port with nothing listening on it."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


@pytest.fixture
def make_listener():
    """Factory for listeners on a chosen address."""
    servers = []

    def factory(host: str = "127.0.0.1", port: int = 0) -> LocalListener:
        server = LocalListener(host, port)
        servers.append(server)
        return server

    yield factory
    for server in servers:
        server.stop()
