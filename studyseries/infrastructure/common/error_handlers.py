"""Translate exceptions into the ``{success: false, message, ...}`` error body."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from studyseries.domain.common.exceptions import (
    ConflictError,
    DomainError,
    EntityNotFoundError,
    ValidationError,
)
from studyseries.domain.study.exceptions import ActiveSessionExistsError
from studyseries.exceptions import StudySeriesError

logger = logging.getLogger(__name__)


def domain_error_status(exc: DomainError) -> int:
    """HTTP status for a domain error."""
    # Starting a second session is reported as a bad request, not a conflict
    if isinstance(exc, ActiveSessionExistsError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, EntityNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ConflictError):
        return status.HTTP_409_CONFLICT
    return status.HTTP_400_BAD_REQUEST


def error_body(message: str, details: dict[str, object] | None = None) -> dict[str, object]:
    body: dict[str, object] = {"success": False, "message": message}
    if details:
        body.update({key: value for key, value in details.items() if key not in body})
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """Register the JSON error handlers on the application."""

    @app.exception_handler(DomainError)
    async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
        status_code = domain_error_status(exc)
        logger.info(
            "Domain error on %s %s: %s (%s)", request.method, request.url.path, exc, status_code
        )
        return JSONResponse(status_code=status_code, content=error_body(exc.message, exc.details))

    @app.exception_handler(StudySeriesError)
    async def handle_study_series_error(request: Request, exc: StudySeriesError) -> JSONResponse:
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.warning(
                "Request %s %s failed: %s", request.method, request.url.path, exc.message
            )
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = [
            {
                "field": ".".join(str(part) for part in error["loc"] if part != "body"),
                "message": error["msg"],
            }
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body("Validation failed", {"errors": errors}),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=exc.headers,
        )
