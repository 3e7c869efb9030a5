"""HTTP error handlers for FastAPI application.

This module is the bridge between domain exceptions raised by the services
and HTTP responses. Services never know about status codes; the mapping
lives here only.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.exceptions import (
    AppException,
    NotFoundError,
    AlreadyExistsError,
    ValidationError,
    AuthenticationError,
    InsufficientPermissionsError,
)
from app.utils.logger import logger


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Map a NotFoundError to a 404 response with a `detail` message."""
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
    )


async def already_exists_handler(
    request: Request, exc: AlreadyExistsError
) -> JSONResponse:
    """
    Convert an AlreadyExistsError into an HTTP 409 Conflict JSON response.

    Used for duplicate relations, favorites and e-mail addresses. The conflicting field is echoed back so clients can highlight it.
    """
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": str(exc), "field": exc.field},
    )


async def validation_error_handler(
    request: Request, exc: ValidationError
) -> JSONResponse:
    """
    Convert a ValidationError into an HTTP 422 Unprocessable Entity JSON response.

    Parameters:
        request (Request): The incoming HTTP request.
        exc (ValidationError): The domain validation error; if `exc.field` is set, the response will include a `field` key indicating the related field.

    Returns:
        JSONResponse: Response with status 422 and a JSON body containing a `detail` message and, when available, a `field` key.
    """
    content = {"detail": str(exc)}
    if exc.field:
        content["field"] = exc.field
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_CONTENT, content=content
    )


async def insufficient_permissions_handler(
    request: Request, exc: InsufficientPermissionsError
) -> JSONResponse:
    """Return 403 Forbidden for an authenticated caller acting outside its rights."""
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN, content={"detail": str(exc)}
    )


async def authentication_error_handler(
    request: Request, exc: AuthenticationError
) -> JSONResponse:
    """
    Convert an AuthenticationError into a 401 Unauthorized JSON response that includes a WWW-Authenticate header.
    """
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": str(exc)},
        headers={"WWW-Authenticate": "Bearer"},  # RFC 6750
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    Log an unexpected application exception and answer with a generic 500.

    The message is not echoed back to the client.
    """
    logger.error(
        f"Unhandled application error on {request.method} {request.url.path}: {exc}"
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An internal error occurred"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register the domain-to-HTTP exception handlers on a FastAPI app.

    Starlette resolves handlers along the exception's MRO, so subclasses such as
    InsufficientPermissionsError win over AuthenticationError, and AppException
    only catches what nothing more specific claimed.
    """
    app.add_exception_handler(NotFoundError, not_found_handler)  # type: ignore[arg-type]
    app.add_exception_handler(AlreadyExistsError, already_exists_handler)  # type: ignore[arg-type]
    app.add_exception_handler(ValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(
        InsufficientPermissionsError,
        insufficient_permissions_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(AuthenticationError, authentication_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
