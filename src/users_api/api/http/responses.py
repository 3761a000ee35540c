"""Mapping from operation results to the JSON response contract.

Every users response is an envelope ``{"data": [...], "error": ...}``:
``error`` is null on success and ``data`` is empty on failure.
"""

from __future__ import annotations

from typing import Any

from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse

from src.users_api.core.result import ErrorKind, Failure, Result, Success

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.STORE: 500,
}


def error_envelope(
    status_code: int, detail: Any, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({"data": [], "error": detail}),
        headers=headers,
    )


def to_response(result: Result) -> JSONResponse:
    """Render a Success as 200 and a Failure with the status of its kind."""
    if isinstance(result, Success):
        content = {"data": result.data, **result.extra, "error": None}
        return JSONResponse(status_code=200, content=jsonable_encoder(content))
    if isinstance(result, Failure):
        return error_envelope(STATUS_BY_KIND[result.kind], result.detail)
    raise TypeError(f"Unsupported result type: {type(result).__name__}")
