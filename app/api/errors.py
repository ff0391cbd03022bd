"""Translate directory errors into HTTP responses.

Response bodies carry only the error's own message. Storage and unexpected
failures are logged with their traceback and answered with a generic body.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.core.exceptions import (
    ConflictError,
    Forbidden,
    InvalidCredentialsError,
    NotAuthenticatedError,
    NotFoundError,
    StorageError,
    UserDirectoryError,
    ValidationError,
)
from app.utils.logging import get_logger

logger = get_logger(__name__)

# Checked in order; subclasses before their bases.
ERROR_STATUS: tuple[tuple[type[UserDirectoryError], int], ...] = (
    (ValidationError, status.HTTP_422_UNPROCESSABLE_CONTENT),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (InvalidCredentialsError, status.HTTP_401_UNAUTHORIZED),
    (NotAuthenticatedError, status.HTTP_401_UNAUTHORIZED),
    (Forbidden, status.HTTP_403_FORBIDDEN),
    (StorageError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def status_for(exc: UserDirectoryError) -> int:
    return next(
        (code for exc_type, code in ERROR_STATUS if isinstance(exc, exc_type)),
        status.HTTP_400_BAD_REQUEST,
    )


async def directory_error_handler(request: Request, exc: UserDirectoryError) -> JSONResponse:
    code = status_for(exc)
    headers = {"WWW-Authenticate": "Bearer"} if code == status.HTTP_401_UNAUTHORIZED else None

    if isinstance(exc, StorageError):
        logger.error(
            "storage_failure", method=request.method, path=request.url.path, exc_info=exc
        )
        return JSONResponse(status_code=code, content={"detail": "Storage unavailable"})

    return JSONResponse(status_code=code, content={"detail": exc.message}, headers=headers)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_error", method=request.method, path=request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(UserDirectoryError, directory_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
