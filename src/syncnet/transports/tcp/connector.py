"""Connection establishment over resolved endpoints."""

import logging
import socket
from typing import Iterable, Optional

from syncnet.errors import ConnectError
from syncnet.transports.tcp.resolver import Endpoint

logger = logging.getLogger(__name__)


def open_connection(
    endpoints: Iterable[Endpoint], timeout: Optional[float] = None
) -> socket.socket:
    """
    Connect to the first endpoint that accepts.

    Endpoints are tried strictly in the given order. An endpoint whose
    socket cannot be created is skipped; a socket whose connect fails is
    closed before moving on, so a failed call leaves nothing open.

    Args:
        endpoints: Candidates, usually straight from ``resolve``
        timeout: Optional socket timeout in seconds; ``None`` blocks

    Returns:
        The connected socket, owned by the caller

    Raises:
        ConnectError: If no endpoint could be connected
    """
    last_error: Optional[OSError] = None

    for endpoint in endpoints:
        try:
            sock = socket.socket(endpoint.family, endpoint.socktype, endpoint.proto)
        except OSError as e:
            logger.debug("Socket creation failed for %s: %s", endpoint.address, e)
            last_error = e
            continue

        try:
            if timeout is not None:
                sock.settimeout(timeout)
            sock.connect(endpoint.address)
        except OSError as e:
            logger.debug("Connect to %s failed: %s", endpoint.address, e)
            last_error = e
            sock.close()
            continue

        logger.debug("Connected to %s", endpoint.address)
        return sock

    raise ConnectError("connect failed") from last_error
