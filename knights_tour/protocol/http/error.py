from __future__ import annotations

import logging
from typing import Any, Dict, cast

from fastapi import Request
from fastapi import HTTPException as FastAPIHTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status


logger = logging.getLogger(__name__)


_STATUS_CODES: Dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "bad_request",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
    status.HTTP_409_CONFLICT: "conflict",
    status.HTTP_422_UNPROCESSABLE_CONTENT: "unprocessable_entity",
}


def error_envelope(
    *,
    code: str,
    message: str,
    err_type: str,
    request_id: str,
    field_errors: list[dict[str, str]] | None = None,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "error": {
            "code": code,
            "message": message,
            "type": err_type,
            "request_id": request_id,
        }
    }
    if field_errors:
        payload["error"]["field_errors"] = field_errors
    return payload


def _render(request: Request, status_code: int, message: str, **kwargs: Any) -> JSONResponse:
    request_id = getattr(request.state, "request_id", "")
    payload = error_envelope(
        code=_status_to_code(status_code),
        message=message,
        err_type="client_error" if 400 <= status_code < 500 else "server_error",
        request_id=request_id,
        **kwargs,
    )
    return JSONResponse(status_code=status_code, content=payload)


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    if isinstance(exc, FastAPIHTTPException):
        detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        return _render(request, exc.status_code, detail)
    return await exception_handler(request, exc)


async def exception_handler(request: Request, exc: Exception) -> JSONResponse:
    if isinstance(exc, FastAPIHTTPException):
        return await http_exception_handler(request, exc)
    request_id = getattr(request.state, "request_id", "")
    logger.exception("Unhandled exception", extra={"request_id": request_id})
    return _render(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")


async def request_validation_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    # Pydantic/FastAPI validation errors become a 422 envelope with per-field details
    errors = []
    rve = cast(RequestValidationError, exc)
    for e in rve.errors():
        loc = ".".join(str(p) for p in e.get("loc", []) if p is not None)
        errors.append(
            {
                "field": loc,
                "code": e.get("type", "value_error"),
                "message": e.get("msg", "invalid value"),
            }
        )
    return _render(
        request,
        status.HTTP_422_UNPROCESSABLE_CONTENT,
        "Validation error",
        field_errors=errors or None,
    )


def _status_to_code(status_code: int) -> str:
    if status_code in _STATUS_CODES:
        return _STATUS_CODES[status_code]
    if 500 <= status_code < 600:
        return "internal_error"
    return "error"
