"""Domain-specific exceptions — framework-independent.

Each exception maps onto one HTTP status in the presentation layer; the
services never deal with status codes themselves.
"""

from typing import Any


class CMSError(Exception):
    """Base class for every error the application surfaces to callers."""

    def __init__(self, message: str, details: Any = None):
        self.message = message
        self.details = details
        super().__init__(message)


class InputValidationError(CMSError):
    """Raised when input is missing or malformed, before any store is touched."""


class AuthenticationError(CMSError):
    """Raised when a token or credential is missing, expired, or invalid."""

    def __init__(self, message: str = "Invalid or missing credentials"):
        super().__init__(message)


class NotFoundOrForbiddenError(CMSError):
    """Raised when an entity does not exist *or* belongs to someone else.

    Both cases produce the same message so that callers cannot probe for
    the existence of other tenants' resources.
    """

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(CMSError):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class RateLimitExceededError(CMSError):
    """Raised when a client exceeds its request budget for the current window."""

    def __init__(self, retry_after: int):
        self.retry_after = retry_after
        super().__init__(
            "Too many requests, please try again later.",
            details={"retry_after": retry_after},
        )


class ProcessingFailedError(CMSError):
    """Raised when an uploaded image cannot be decoded or re-encoded."""


class StorageUnavailableError(CMSError):
    """Raised when the record store or blob store fails an I/O operation."""


class OperationTimeoutError(CMSError):
    """Raised when a transform or store call exceeds the operation timeout."""

    def __init__(self, operation: str, timeout: float):
        self.operation = operation
        self.timeout = timeout
        super().__init__(f"{operation} timed out after {timeout:g}s")


class CommitTimeoutError(OperationTimeoutError):
    """Raised when a record-store commit outlasts the operation timeout.

    The commit itself is not cancelled and may still land, so its outcome
    is unknown to the caller.
    """
