class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised by strict edits when the targeted class, extra class or exam does not exist."""


class ExtractionFailure(DomainError):
    """Raised when the timetable extractor fails or times out. No timetable is produced."""


class StorageError(DomainError):
    """Raised when a persisted blob cannot be read back."""
