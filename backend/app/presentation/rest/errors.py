"""Exception handlers — convert domain errors into REST error responses."""

import logging
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from starlette.responses import Response

from app.config import get_settings
from app.domain.exceptions import (
    EventHandlerNotFoundError,
    ObjectNotCloneableError,
    ObjectNotFoundError,
    RecordNotFoundError,
)
from app.presentation.rest.renderer import to_http_response
from app.presentation.rest.response import RestResponse

logger = logging.getLogger(__name__)

# exception type → (status code, status text)
ERROR_MAP: dict[type[Exception], tuple[int, str]] = {
    ObjectNotCloneableError: (status.HTTP_409_CONFLICT, "Not cloneable"),
    RecordNotFoundError: (status.HTTP_404_NOT_FOUND, "Record not found"),
    ObjectNotFoundError: (status.HTTP_404_NOT_FOUND, "Object not found"),
    EventHandlerNotFoundError: (status.HTTP_500_INTERNAL_SERVER_ERROR, "Clone handler missing"),
}


def error_response(exc: Exception, status_code: int, error_type: str) -> RestResponse:
    """Build the finished RestResponse describing ``exc``."""
    detail = type(exc).__name__ if get_settings().rest_expose_error_detail else ""
    return (
        RestResponse()
        .set_error(
            error_type=error_type,
            error_code=status_code,
            message=str(exc),
            detail=detail,
        )
        .finish()
    )


def _make_handler(
    status_code: int, error_type: str
) -> Callable[[Request, Exception], Awaitable[Response]]:
    async def handler(request: Request, exc: Exception) -> Response:
        log = logger.error if status_code >= 500 else logger.info
        log("%s %s -> %d %s: %s", request.method, request.url.path, status_code, error_type, exc)
        return to_http_response(error_response(exc, status_code, error_type))

    return handler


def register_exception_handlers(app: FastAPI) -> None:
    for exc_type, (status_code, error_type) in ERROR_MAP.items():
        app.add_exception_handler(exc_type, _make_handler(status_code, error_type))
