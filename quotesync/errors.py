# quotesync Errors
# Exception hierarchy shared by transport, reconciler and session


class QuoteSyncError(Exception):
    """Base class for quotesync errors."""


class TransportUnavailable(QuoteSyncError):
    """Remote endpoint could not be reached or answered with a failure status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedRemoteData(QuoteSyncError, ValueError):
    """Remote (or stored) data does not have the shape of a record list."""


class PushFailed(QuoteSyncError):
    """Pushing the local replica to the remote did not succeed."""
