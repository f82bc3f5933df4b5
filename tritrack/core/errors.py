"""Error types for TriTrack services.

Read failures never raise (views fall back to empty data), so only the
write path has exceptions.
"""


class TriTrackError(RuntimeError):
    """Base class for service-level errors."""


class WriteError(TriTrackError):
    """Raised when the backend rejects an insert, update or delete.

    The message is the backend's own error text, surfaced to the user as-is.
    """


class NotFoundError(TriTrackError):
    """Raised when an edit or delete targets a row the user does not own."""
