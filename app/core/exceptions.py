"""Typed errors raised by the user directory core.

The transport layer maps each class to a protocol-level response; nothing
in the core knows about HTTP status codes.
"""


class UserDirectoryError(Exception):
    """Base class for all user directory errors."""

    def __init__(self, message: str = ""):
        self.message = message or self.__class__.__doc__ or ""
        super().__init__(self.message)


class ValidationError(UserDirectoryError):
    """Malformed or incomplete input."""


class NotFoundError(UserDirectoryError):
    """Referenced user does not exist."""

    def __init__(self, value: int | str, field: str = "id"):
        self.value = value
        self.field = field
        super().__init__(f"User with {field} '{value}' not found")


class ConflictError(UserDirectoryError):
    """Uniqueness violation on email or username."""


class InvalidCredentialsError(UserDirectoryError):
    """Login failed.

    Raised for both an unknown email and a wrong password so callers cannot
    tell which check failed.
    """

    def __init__(self):
        super().__init__("Invalid email or password")


class Forbidden(UserDirectoryError):
    """A guard denied the operation."""

    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(message)


class NotAuthenticatedError(Forbidden):
    """No valid, unexpired token accompanied the request."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class StorageError(UserDirectoryError):
    """The repository or its backing store failed."""
