"""Batched payload transmission."""

import logging
import socket
from dataclasses import dataclass

from syncnet.errors import TransmissionError

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 4095


@dataclass
class TransmissionProgress:
    """Bookkeeping for a single ``send_chunked`` call."""

    remaining: int
    offset: int = 0
    sent: int = 0

    def advance(self, count: int) -> None:
        self.offset += count
        self.sent += count
        self.remaining -= count


def send_chunked(
    sock: socket.socket, payload: bytes, chunk_size: int = DEFAULT_CHUNK_SIZE
) -> int:
    """
    Send a payload in chunks of at most ``chunk_size`` bytes.

    Each chunk is handed to a single ``send`` call. A short write ends
    the transfer: the partial count is added to the total and the rest
    of the payload is not attempted.

    Args:
        sock: Connected stream socket
        payload: Bytes to send
        chunk_size: Maximum bytes per ``send`` call

    Returns:
        Number of bytes the kernel accepted

    Raises:
        ValueError: If chunk_size is less than 1
        TransmissionError: If a ``send`` call fails. No byte count is
            reported, since earlier successful sends do not prove delivery.
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    progress = TransmissionProgress(remaining=len(payload))

    while progress.remaining > 0:
        batch = min(progress.remaining, chunk_size)
        chunk = payload[progress.offset : progress.offset + batch]

        try:
            count = sock.send(chunk)
        except OSError as e:
            raise TransmissionError("send failed") from e

        if count < batch:
            progress.sent += count
            logger.warning(
                "Short write: %d of %d bytes in chunk at offset %d, giving up",
                count,
                batch,
                progress.offset,
            )
            break

        progress.advance(batch)
        logger.debug("Sent chunk of %d bytes, %d remaining", batch, progress.remaining)

    return progress.sent
