"""Turns LabException into the JSON error body every endpoint shares."""

import logging
from fastapi import Request
from fastapi.responses import JSONResponse
from ..exceptions import LabException

logger = logging.getLogger(__name__)


async def lab_exception_handler(request: Request, exc: LabException) -> JSONResponse:
    """
    Answer with ``{"error", "message", "details"}`` and the exception's status.

    Client errors are logged at warning level, server errors at error level.
    """
    level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logger.log(
        level,
        "%s on %s %s", exc.error_code.value, request.method, request.url.path,
        extra={
            "error_code": exc.error_code.value,
            "path": request.url.path,
            "method": request.method,
            "details": exc.details,
            "status_code": exc.status_code,
        },
    )

    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
