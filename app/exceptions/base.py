"""Base exception for all application-level errors."""


class AppException(Exception):
    """Root of the domain exception hierarchy.

    Services raise subclasses of this; the HTTP mapping lives in
    app/core/error_handlers.py.
    """

    pass
