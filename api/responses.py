"""
Transport-side error mapping.

Services hand back ``Result`` objects; this module is the only place that
turns an ``ErrorKind`` into an HTTP status and the
``{success: false, message, error?}`` envelope.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from utils.results import ErrorKind, Result
from utils.schemas import ErrorResponse

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.AUTH: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.SERVER: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class GuardRejection(Exception):
    """Raised by the strict auth guard; rendered as a 401 envelope."""

    def __init__(self, message: str, detail: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


def _expose_detail(request: Request) -> bool:
    return request.app.state.settings.expose_error_detail


def error_response(
    request: Request,
    status_code: int,
    message: str,
    detail: Optional[Any] = None,
) -> JSONResponse:
    body = ErrorResponse(message=message, error=detail).to_body(_expose_detail(request))
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def result_response(
    request: Request,
    result: Result,
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    """Render a service ``Result``: the value on success, an envelope otherwise."""
    if result.ok:
        return JSONResponse(status_code=status_code, content=jsonable_encoder(result.value))
    err = result.error
    return error_response(request, STATUS_BY_KIND[err.kind], err.message, err.detail)


def register_exception_handlers(app: FastAPI) -> None:
    """Route guard rejections and framework errors through the same envelope."""

    @app.exception_handler(GuardRejection)
    async def guard_rejection_handler(request: Request, exc: GuardRejection):
        return error_response(request, status.HTTP_401_UNAUTHORIZED, exc.message, exc.detail)

    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError):
        return error_response(
            request,
            status.HTTP_400_BAD_REQUEST,
            "Invalid request body",
            exc.errors(),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(request, exc.status_code, str(exc.detail))
