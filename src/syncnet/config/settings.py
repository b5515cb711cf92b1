"""Network configuration settings."""

import codecs
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class NetworkConfig:
    """Network configuration."""

    host: str = "localhost"
    buffer_size: int = 4096
    # None keeps sockets fully blocking
    timeout: Optional[float] = None
    encoding: str = "utf-8"

    def __post_init__(self):
        if self.buffer_size < 2:
            raise ValueError(f"buffer_size must be at least 2, got {self.buffer_size}")
        if self.timeout is not None and self.timeout < 0:
            raise ValueError(f"timeout must be non-negative, got {self.timeout}")
        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise ValueError(f"unknown encoding: {self.encoding}") from e

    @property
    def chunk_size(self) -> int:
        """Payload bytes moved by a single send or receive call."""
        return self.buffer_size - 1
