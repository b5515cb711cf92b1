"""Single-shot receive into a fixed-capacity buffer."""

import logging
import socket

from syncnet.errors import ReceiveError

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_SIZE = 4096


def receive_text(
    sock: socket.socket,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    encoding: str = "utf-8",
) -> str:
    """
    Receive once and decode the result.

    One byte of ``buffer_size`` is reserved for the terminator, so at
    most ``buffer_size - 1`` bytes are read. Text ends at the first NUL
    byte. A closed peer and a socket error both raise ``ReceiveError``.

    Raises:
        ReceiveError: If ``recv`` fails or returns no data
    """
    try:
        data = sock.recv(buffer_size - 1)
    except OSError as e:
        raise ReceiveError("recv failed") from e

    if not data:
        raise ReceiveError("recv failed")

    logger.debug("Received %d bytes", len(data))
    return data.split(b"\0", 1)[0].decode(encoding, errors="replace")
