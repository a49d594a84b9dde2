"""Translation of progress errors into HTTP responses."""

from __future__ import annotations

import typing as t

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from brainburst.progress import ConcurrencyConflict, Forbidden, InvalidAssignment, InvalidTransition, NotFound, \
    PartialCascadeFailure, ProgressError

STATUS_CODES: dict[type[ProgressError], int] = {
    NotFound: status.HTTP_404_NOT_FOUND,
    Forbidden: status.HTTP_403_FORBIDDEN,
    InvalidTransition: status.HTTP_409_CONFLICT,
    InvalidAssignment: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ConcurrencyConflict: status.HTTP_409_CONFLICT,
    PartialCascadeFailure: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_code_for(exc: ProgressError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_CODES:
            return STATUS_CODES[cls]  # pyright: ignore[reportArgumentType]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def handle_progress_error(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, ProgressError)
    body: dict[str, t.Any] = {"code": exc.code, "detail": exc.detail}
    if isinstance(exc, InvalidTransition):
        body["reason"] = exc.reason.value
    if exc.retryable:
        body["retryable"] = True
    return JSONResponse(status_code=status_code_for(exc), content=body)


def install(app: FastAPI) -> None:
    app.add_exception_handler(ProgressError, handle_progress_error)
