"""Exceptions raised by syncnet."""


class SyncNetError(Exception):
    """Base class for all syncnet errors."""


class ArgumentError(SyncNetError, TypeError):
    """
    A required argument is missing or has the wrong type.

    Raised before any socket call is attempted, so the caller can fix
    the inputs and call again.
    """


class OperationError(SyncNetError, OSError):
    """
    The underlying transport failed.

    The originating ``OSError`` (if any) is chained as ``__cause__``.
    """


class ResolutionError(OperationError):
    """Address resolution for a host/port pair failed."""


class ConnectError(OperationError):
    """No resolved endpoint accepted a connection, or the connection is gone."""


class ReceiveError(OperationError):
    """A receive failed or the peer closed the connection."""


class TransmissionError(OperationError):
    """A send failed before the payload was handed to the kernel."""
