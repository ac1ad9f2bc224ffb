class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class WorkerNotFoundError(ValidationError):
    """Raised when a worker id does not resolve to a known worker."""


class AlreadyClockedInError(ValidationError):
    """Raised when a worker clocks in while an open session exists."""


class NotClockedInError(ValidationError):
    """Raised when a worker clocks out without an open session."""


class StoreError(DomainError):
    """Base exception for time entry / worker / assignment store failures."""


class StoreUnavailable(StoreError):
    """Raised when a collaborator read or write failed."""


class ConcurrentWriteError(StoreError):
    """Raised when an entry changed in the store since it was read."""
