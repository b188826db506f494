"""Shared exceptions for service layer operations."""


class ToolVaultError(Exception):
    """
    Base class for errors the API maps to a JSON error response.

    Subclasses set ``status_code``; the exception handler registered in
    ``api.main`` renders ``{"error": str(exc)}`` with that status.
    """

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ValidationError(ToolVaultError):
    """Raised when input is missing or malformed."""

    status_code = 400


class AuthError(ToolVaultError):
    """Raised on bad admin credentials or a missing/invalid session token."""

    status_code = 401

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message)


class NotFoundError(ToolVaultError):
    """Raised when an identifier has no matching record."""

    status_code = 404

    def __init__(self, entity: str = "Bookmark") -> None:
        self.entity = entity
        super().__init__(f"{entity} not found")


class DatabaseConnectionError(ToolVaultError):
    """
    Raised when the database cannot be reached.

    Fatal during application startup; per-request it surfaces as a 500.
    """

    status_code = 500


class InternalError(ToolVaultError):
    """Raised for unexpected failures that have no more specific category."""

    status_code = 500
