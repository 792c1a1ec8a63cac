"""Domain error taxonomy.

Every error carries the HTTP status the request boundary reports it with, and
a message that is safe to show to the caller.
"""

from fastapi import status


class RegistryError(Exception):
    """Base class for all registry errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(RegistryError):
    """Missing or malformed required fields. Always fixable by the caller."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request."

    def __init__(self, message: str | None = None, missing_fields: list[str] | None = None):
        self.missing_fields = missing_fields or []
        if message is None and self.missing_fields:
            message = f"Missing required fields: {', '.join(self.missing_fields)}."
        super().__init__(message)


class NotFound(RegistryError):
    """Referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found."


class ConflictError(RegistryError):
    """A uniqueness constraint or state rule rejected the write."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists."


class DuplicateEmail(ConflictError):
    default_message = "Email already exists. Please use a different email address."


class DuplicateIdentifier(ConflictError):
    default_message = "Health ID already exists."


class DuplicateCard(ConflictError):
    default_message = "Benefits card number already exists."


class DuplicateImage(ConflictError):
    default_message = "Medical image already exists."


class InvalidTransition(ConflictError):
    default_message = "Operation not allowed in the current state."


class GenerationExhausted(RegistryError):
    """Identifier generation kept colliding; indicates a systemic fault."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Could not generate a unique identifier. Please try again later."

    def __init__(self, kind: str, attempts: int):
        self.kind = kind
        self.attempts = attempts
        super().__init__(f"Could not generate a unique {kind} after {attempts} attempts.")


class StorageError(RegistryError):
    """Wraps an underlying persistence failure. Detail stays in the logs."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Database error occurred."

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__()
