"""Request correlation and uniform upstream-error responses."""

from __future__ import annotations

import logging
import secrets

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "x-request-id"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tags every request with a correlation id and echoes it back."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or secrets.token_hex(16)
        request.state.request_id = request_id
        response: Response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or secrets.token_hex(16)


def internal_error(request: Request, action: str, exc: BaseException) -> JSONResponse:
    """Log the full failure server-side and answer with a generic 500.

    The client only sees the correlation id, never the raw error text.
    """
    correlation_id = request_id(request)
    logger.error(
        "Error %s [request_id=%s]: %s", action, correlation_id, exc, exc_info=exc
    )
    return JSONResponse(
        status_code=500,
        content={"error": "Internal Server Error", "correlation_id": correlation_id},
    )
