from __future__ import annotations

import logging
import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "x-request-id"
ELAPSED_HEADER = "x-elapsed-ms"
MAX_REQUEST_ID_LEN = 128


def resolve_request_id(request: Request) -> str:
    """Reuse a sane caller-supplied request id, otherwise mint a UUID4."""
    supplied = request.headers.get(REQUEST_ID_HEADER, "").strip()
    if supplied and len(supplied) <= MAX_REQUEST_ID_LEN and supplied.isprintable():
        return supplied
    return str(uuid.uuid4())


def _level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestIDLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and log one summary line per response.

    Tour searches run inside the request, so the elapsed time is reported both
    in the log record and in the ``x-elapsed-ms`` response header.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.perf_counter()
        request_id = resolve_request_id(request)
        request.state.request_id = request_id

        response = await call_next(request)
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[ELAPSED_HEADER] = str(elapsed_ms)

        logger.log(
            _level_for(response.status_code),
            "%s %s -> %d (%d ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            extra={
                "request_id": request_id,
                "client": request.client.host if request.client else None,
                "status_code": response.status_code,
                "duration_ms": elapsed_ms,
            },
        )
        return response
