"""Minimal blocking TCP client primitives."""

import logging

from syncnet.api import close, connect, read, receive, send, write
from syncnet.config.settings import NetworkConfig
from syncnet.connection import Connection
from syncnet.errors import (
    ArgumentError,
    ConnectError,
    OperationError,
    ReceiveError,
    ResolutionError,
    SyncNetError,
    TransmissionError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "connect",
    "receive",
    "send",
    "close",
    "read",
    "write",
    "Connection",
    "NetworkConfig",
    "SyncNetError",
    "ArgumentError",
    "OperationError",
    "ResolutionError",
    "ConnectError",
    "ReceiveError",
    "TransmissionError",
    "__version__",
]
