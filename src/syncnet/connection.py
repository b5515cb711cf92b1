"""Owned connection handle."""

import logging
import socket
from typing import Any, Optional, Tuple, Union

from syncnet.config.settings import NetworkConfig
from syncnet.errors import ArgumentError, ConnectError
from syncnet.transports.tcp.connector import open_connection
from syncnet.transports.tcp.receiver import receive_text
from syncnet.transports.tcp.resolver import resolve
from syncnet.transports.tcp.sender import send_chunked

logger = logging.getLogger(__name__)

# Descriptors are C ints
MAX_HANDLE = 2**31 - 1


class Connection:
    """
    Single-owner wrapper over one connected TCP socket.

    Use after ``close`` or ``detach`` raises ``ConnectError``; closing
    twice returns a failure status instead of touching a descriptor
    that may have been reused.
    """

    def __init__(self, sock: socket.socket, config: Optional[NetworkConfig] = None):
        """
        Wrap an already connected socket.

        Args:
            sock: Connected stream socket, ownership passes to the Connection
            config: Optional NetworkConfig; defaults are used if None
        """
        self.config = config if config is not None else NetworkConfig()
        self.socket: Optional[socket.socket] = sock

    @classmethod
    def open(
        cls,
        port: int,
        host: Optional[str] = None,
        config: Optional[NetworkConfig] = None,
    ) -> "Connection":
        """
        Resolve ``host:port`` and connect to the first endpoint that accepts.

        Args:
            port: Server port
            host: Server hostname or IP; ``config.host`` if None
            config: Optional NetworkConfig

        Raises:
            ResolutionError: If the host cannot be resolved
            ConnectError: If no resolved endpoint accepts
        """
        config = config if config is not None else NetworkConfig()
        if host is None:
            host = config.host

        sock = open_connection(resolve(host, port), timeout=config.timeout)
        logger.info("Connection established to %s:%s (fd %s)", host, port, sock.fileno())
        return cls(sock, config)

    @classmethod
    def from_handle(
        cls, handle: int, config: Optional[NetworkConfig] = None
    ) -> "Connection":
        """
        Adopt a raw handle, such as one returned by ``syncnet.connect``.

        Raises:
            ConnectError: If the handle does not refer to an open socket
        """
        if not 0 <= handle <= MAX_HANDLE:
            raise ConnectError(f"invalid handle: {handle}")
        try:
            sock = socket.socket(fileno=handle)
        except (OSError, OverflowError, ValueError) as e:
            raise ConnectError(f"invalid handle: {handle}") from e

        config = config if config is not None else NetworkConfig()
        if config.timeout is not None:
            sock.settimeout(config.timeout)
        return cls(sock, config)

    @property
    def closed(self) -> bool:
        """True once the connection has been closed or detached."""
        return self.socket is None

    @property
    def handle(self) -> int:
        """Raw descriptor of the open socket."""
        return self._require().fileno()

    @property
    def peer(self) -> Tuple[Any, ...]:
        """Address of the remote end."""
        return self._require().getpeername()

    def _require(self) -> socket.socket:
        if self.socket is None:
            raise ConnectError("connection is closed")
        return self.socket

    def receive(self) -> str:
        """
        Receive up to ``config.chunk_size`` bytes as text.

        Raises:
            ConnectError: If the connection is closed
            ReceiveError: If the receive fails or the peer has closed
        """
        return receive_text(
            self._require(), self.config.buffer_size, self.config.encoding
        )

    def send(self, data: Union[str, bytes]) -> int:
        """
        Send text or bytes in ``config.chunk_size`` batches.

        Returns:
            Number of bytes accepted, short of the full payload after a
            short write

        Raises:
            ArgumentError: If data is neither str nor bytes
            ConnectError: If the connection is closed
            TransmissionError: If a send call fails
        """
        if isinstance(data, str):
            payload = data.encode(self.config.encoding, errors="replace")
        elif isinstance(data, (bytes, bytearray, memoryview)):
            payload = bytes(data)
        else:
            raise ArgumentError("data is not a string")
        return send_chunked(self._require(), payload, self.config.chunk_size)

    def close(self) -> int:
        """
        Close the connection.

        Returns:
            0 on success, -1 if the OS reported a failure or the
            connection was already closed
        """
        if self.socket is None:
            logger.warning("Close called on an already closed connection")
            return -1

        sock, self.socket = self.socket, None
        try:
            sock.close()
        except OSError as e:
            logger.warning("Close failed: %s", e)
            return -1
        return 0

    def detach(self) -> int:
        """
        Give up ownership and return the raw handle.

        The descriptor is left open and in blocking mode; the caller is
        now responsible for closing it.
        """
        sock = self._require()
        self.socket = None
        if sock.gettimeout() is not None:
            sock.settimeout(None)
        return sock.detach()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        if self.socket is not None:
            self.close()

    def __repr__(self) -> str:
        if self.socket is None:
            return "<Connection closed>"
        return f"<Connection fd={self.socket.fileno()}>"
