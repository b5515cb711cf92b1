"""
Blocking socket primitives on integer handles.

Each function validates its arguments before touching the network:
a missing argument is reported before a mistyped one, and both raise
``ArgumentError``. Transport failures raise an ``OperationError``
subclass, except in ``close``, which returns a status code.
"""

import logging
import math
import numbers
import os
from contextlib import contextmanager
from dataclasses import replace
from typing import Iterator, Optional

from syncnet.config.settings import NetworkConfig
from syncnet.connection import MAX_HANDLE, Connection
from syncnet.errors import (
    ArgumentError,
    ConnectError,
    OperationError,
    ReceiveError,
    TransmissionError,
)

logger = logging.getLogger(__name__)


def _is_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value)


def _check_handle(handle) -> int:
    if handle is None:
        raise ArgumentError("socket is not specified")
    if not _is_number(handle):
        raise ArgumentError("socket is not a number")
    return int(handle)


@contextmanager
def _borrowed(
    handle: int, config: NetworkConfig, error: OperationError
) -> Iterator[Connection]:
    """Wrap a caller-owned handle for one call without taking ownership."""
    try:
        conn = Connection.from_handle(handle, config)
    except ConnectError as e:
        raise error from e
    try:
        yield conn
    finally:
        conn.detach()


def connect(
    port=None,
    host=None,
    *,
    timeout: Optional[float] = None,
    config: Optional[NetworkConfig] = None,
) -> int:
    """
    Open a TCP connection and return its handle.

    Args:
        port: Server port
        host: Server hostname or IP literal; ``config.host`` if None
        timeout: Optional connect deadline in seconds; ``config.timeout``
            if None. The returned handle is always blocking.
        config: Optional NetworkConfig

    Returns:
        Integer handle owned by the caller, to be released with ``close``

    Raises:
        ArgumentError: If port is missing or not a number, or host is not a string
        ResolutionError: If the host cannot be resolved
        ConnectError: If no resolved address accepts the connection
    """
    if port is None:
        raise ArgumentError("port is not specified")
    if not _is_number(port):
        raise ArgumentError("port is not a number")
    if host is not None and not isinstance(host, str):
        raise ArgumentError("host is not a string")

    config = config if config is not None else NetworkConfig()
    if timeout is not None:
        config = replace(config, timeout=timeout)

    return Connection.open(int(port), host, config).detach()


def receive(handle=None, *, config: Optional[NetworkConfig] = None) -> str:
    """
    Receive once from a handle.

    Returns:
        Received text, at most ``config.chunk_size`` bytes of it

    Raises:
        ArgumentError: If the handle is missing or not a number
        ReceiveError: If the receive fails or the peer has closed the
            connection; the two are not distinguished
    """
    handle = _check_handle(handle)
    config = config if config is not None else NetworkConfig()

    with _borrowed(handle, config, ReceiveError("recv failed")) as conn:
        return conn.receive()


def send(handle=None, data=None, *, config: Optional[NetworkConfig] = None) -> int:
    """
    Send a string over a handle in ``config.chunk_size`` batches.

    Returns:
        Number of bytes accepted by the kernel; less than the encoded
        length if a batch was only partly sent

    Raises:
        ArgumentError: If an argument is missing or has the wrong type
        TransmissionError: If a send call fails; no count is returned
    """
    if handle is None and data is None:
        raise ArgumentError("socket and data are not specified")
    if data is None:
        raise ArgumentError("data is not specified")
    handle = _check_handle(handle)
    if not isinstance(data, str):
        raise ArgumentError("data is not a string")

    config = config if config is not None else NetworkConfig()

    with _borrowed(handle, config, TransmissionError("send failed")) as conn:
        return conn.send(data)


def close(handle=None) -> int:
    """
    Close a handle.

    Returns:
        0 on success, -1 if the OS reported a failure

    Raises:
        ArgumentError: If the handle is missing or not a number
    """
    handle = _check_handle(handle)
    if not 0 <= handle <= MAX_HANDLE:
        logger.warning("Close of handle %d failed: out of range", handle)
        return -1
    try:
        os.close(handle)
    except OSError as e:
        logger.warning("Close of handle %d failed: %s", handle, e)
        return -1
    return 0


read = receive
write = send
