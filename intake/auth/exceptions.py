class AuthError(Exception):
    """Base exception for all authentication errors."""


class UnauthenticatedError(AuthError):
    """Raised when no caller identity is established."""
