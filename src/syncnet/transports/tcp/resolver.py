"""Host/port resolution into connectable TCP endpoints."""

import logging
import socket
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from syncnet.errors import ResolutionError

logger = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"


@dataclass(frozen=True)
class Endpoint:
    """One resolved candidate address for a host/port pair."""

    family: int
    socktype: int
    proto: int
    address: Tuple[Any, ...]
    canonname: str = ""


def resolve(host: Optional[str], port: int) -> List[Endpoint]:
    """
    Resolve a host and port into stream endpoints.

    Both hostnames and literal IPv4/IPv6 addresses are accepted; the
    address family is left to the system resolver and its ordering is
    kept as-is.

    Args:
        host: Hostname or IP literal, ``None`` for the loopback name
        port: Port number

    Returns:
        Non-empty list of endpoints in resolver order

    Raises:
        ResolutionError: If the resolver cannot produce any address
    """
    if host is None:
        host = DEFAULT_HOST

    try:
        infos = socket.getaddrinfo(
            host, str(port), socket.AF_UNSPEC, socket.SOCK_STREAM
        )
    except socket.gaierror as e:
        raise ResolutionError(f"getaddrinfo: {e.strerror or e}") from e

    if not infos:
        raise ResolutionError(f"getaddrinfo: no addresses for {host}:{port}")

    endpoints = [
        Endpoint(family, socktype, proto, address, canonname)
        for family, socktype, proto, canonname, address in infos
    ]
    logger.debug("Resolved %s:%s to %d endpoint(s)", host, port, len(endpoints))
    return endpoints
