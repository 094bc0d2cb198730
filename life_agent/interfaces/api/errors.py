"""Map domain errors onto HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from life_agent.domain.errors import (
    LifeAgentError,
    NotFoundError,
    StoreError,
    UnauthorizedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: dict[type[LifeAgentError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    UnauthorizedError: status.HTTP_401_UNAUTHORIZED,
    NotFoundError: status.HTTP_404_NOT_FOUND,
}


async def domain_error_handler(request: Request, exc: LifeAgentError) -> JSONResponse:
    """Return the status matching ``exc`` with FastAPI's ``{"detail": ...}`` body."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for error_type, code in _STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            status_code = code
            break
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return JSONResponse(
        status_code=status_code, content={"detail": exc.message}, headers=headers
    )


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Log store failures with their cause; the body never leaks driver details."""

    logger.error(
        "Store error on %s %s: %s",
        request.method,
        request.url.path,
        exc.message,
        exc_info=exc,
    )
    detail = exc.message
    if request.app.state.settings.debug and exc.__cause__ is not None:
        detail = f"{exc.message}: {exc.__cause__}"
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": detail}
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies and parameters as 400 Bad Request.

    The body keeps FastAPI's list of field errors under ``detail``.
    """

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register the request validation and domain exception handlers."""

    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(LifeAgentError, domain_error_handler)


__all__ = ["register_error_handlers"]
