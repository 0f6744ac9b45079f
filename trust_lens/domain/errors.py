"""Domain error taxonomy for rating lookups and vote aggregation."""


class TrustLensError(Exception):
    """Base class for all domain errors."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TrustLensError):
    """Malformed domain or out-of-range rating. Never retried."""

    status_code = 400


class NotFoundError(TrustLensError):
    """Domain has no stored rating."""

    status_code = 404


class DuplicateVoteError(TrustLensError):
    """Vote already recorded for this (domain, voter, address)."""

    status_code = 409

    def __init__(self, message: str = "Vote already recorded for this domain"):
        super().__init__(message)


class RemoteUnavailableError(TrustLensError):
    """Remote rating source failed (network error, non-2xx, timeout).

    Recovered locally by the fallback resolver.
    """

    status_code = 503


class StorageError(TrustLensError):
    """Persistence failure other than the vote uniqueness check."""

    status_code = 500
