class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidStateError(DomainError):
    """Raised when a lifecycle transition is not allowed from the current state."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class ApiError(DomainError):
    """Raised when the back-office REST API fails or answers with an error."""

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
