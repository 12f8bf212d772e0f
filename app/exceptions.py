from fastapi import status


class StringAnalyzerError(Exception):
    """Base error for the service; carries the HTTP status it maps to."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidValueError(StringAnalyzerError):
    """Missing (400) or wrongly typed (422) input."""


class ConflictError(StringAnalyzerError):
    status_code = status.HTTP_409_CONFLICT


class NotFoundError(StringAnalyzerError):
    status_code = status.HTTP_404_NOT_FOUND


class PersistenceWarning(UserWarning):
    """Raised while reading the data file; the store logs it and starts empty."""
