"""Authentication and authorization exceptions, all answered with 401 except permissions (403)."""

from app.exceptions.base import AppException


class AuthenticationError(AppException):
    """The caller could not be identified."""


class InvalidCredentialsError(AuthenticationError):
    """Login failed: unknown account, wrong password, or an account without a password."""

    def __init__(self, message: str = "Incorrect email or password"):
        super().__init__(message)


class InvalidTokenError(AuthenticationError):
    """A presented JWT is malformed, of the wrong type, or names a missing subject."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class TokenExpiredError(InvalidTokenError):
    def __init__(self, token_type: str = "access"):
        """
        Parameters:
            token_type (str): "access" or "refresh", kept on the instance as `token_type`.
        """
        super().__init__(f"{token_type.capitalize()} token has expired")
        self.token_type = token_type


class InsufficientPermissionsError(AuthenticationError):
    """
    The caller is known but may not perform the action.

    Raised for the wrong account type, for read-only partners attempting a write, and for
    relations owned by someone else.
    """

    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(message)
