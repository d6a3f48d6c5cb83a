"""Maps domain exceptions onto HTTP responses with a uniform error envelope.

Every failing response has the shape ``{"error": str, "details"?: any}``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.domain.exceptions import (
    AuthenticationError,
    CMSError,
    DuplicateEntityError,
    InputValidationError,
    NotFoundOrForbiddenError,
    OperationTimeoutError,
    ProcessingFailedError,
    RateLimitExceededError,
    StorageUnavailableError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: dict[type[CMSError], int] = {
    InputValidationError: status.HTTP_400_BAD_REQUEST,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    NotFoundOrForbiddenError: status.HTTP_404_NOT_FOUND,
    DuplicateEntityError: status.HTTP_409_CONFLICT,
    RateLimitExceededError: status.HTTP_429_TOO_MANY_REQUESTS,
    ProcessingFailedError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    StorageUnavailableError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    OperationTimeoutError: status.HTTP_504_GATEWAY_TIMEOUT,
}


def error_body(error: str, details=None) -> dict:
    body: dict = {"error": error}
    if details is not None:
        body["details"] = jsonable_encoder(details)
    return body


def status_for(exc: CMSError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in _STATUS_BY_ERROR:
            return _STATUS_BY_ERROR[error_type]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(exc: CMSError) -> JSONResponse:
    headers = None
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}
    elif isinstance(exc, RateLimitExceededError):
        headers = {"Retry-After": str(exc.retry_after)}
    return JSONResponse(
        status_code=status_for(exc),
        content=error_body(exc.message, exc.details),
        headers=headers,
    )


async def handle_cms_error(request: Request, exc: CMSError) -> JSONResponse:
    code = status_for(exc)
    if code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected (%d): %s", request.method, request.url.path, code, exc.message)
    return error_response(exc)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": ".".join(str(part) for part in err.get("loc", ())), "message": err.get("msg")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Validation failed", errors),
    )


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    details = str(exc) if get_settings().is_development else None
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error", details),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CMSError, handle_cms_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)
