"""Exception handlers: one JSON error envelope for every failure."""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from yearbook.core.errors import UnauthorizedError, YearbookError

logger = logging.getLogger(__name__)


def error_response(
    status_code: int,
    message: str,
    errors: list | None = None,
    token_expired: bool = False,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Body: {success: false, message, errors} plus tokenExpired for expired access tokens."""
    content: dict = {"success": False, "message": message, "errors": errors or []}
    if token_expired:
        content["tokenExpired"] = True
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers for service errors, validation errors and unexpected failures."""

    @app.exception_handler(YearbookError)
    async def handle_yearbook_error(request: Request, exc: YearbookError) -> JSONResponse:
        log_extra = {
            "path": request.url.path,
            "method": request.method,
            "status_code": exc.status_code,
        }
        if exc.status_code >= 500:
            logger.error("Service error: %s", exc.message, extra=log_extra)
            return error_response(exc.status_code, "Internal Server Error")
        logger.info("Request rejected: %s", exc.message, extra=log_extra)

        if isinstance(exc, UnauthorizedError):
            return error_response(
                exc.status_code,
                exc.message,
                token_expired=exc.token_expired,
                headers={"WWW-Authenticate": "Bearer"},
            )
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return error_response(400, "Invalid request", jsonable_encoder(exc.errors()))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled error",
            extra={"path": request.url.path, "method": request.method},
        )
        return error_response(500, "Internal Server Error")
