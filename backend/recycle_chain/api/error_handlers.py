"""Error Handlers — map every failure to the ledger's {"error": {...}} envelope.

Invariants:
    - RecycleChainError → its own code and http_status (4xx logged at INFO, 5xx at ERROR)
    - RequestValidationError → 400 VALIDATION_ERROR with per-field details
    - Anything else → 500 INTERNAL_ERROR, no internal details in the body

Design Decisions:
    - Handlers are plain module functions registered with add_exception_handler,
      so tests can call them directly
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from recycle_chain.core.errors import ErrorCategory, ErrorSeverity, RecycleChainError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RecycleChainError, ledger_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


def _envelope(
    code: str, message: str, category: ErrorCategory, severity: ErrorSeverity,
    **extra,
) -> dict:
    return {"error": {
        "code": code,
        "message": message,
        "category": category.value,
        "severity": severity.value,
        **extra,
    }}


async def ledger_error_handler(request: Request, exc: RecycleChainError):
    # Rejections are normal ledger traffic; only infrastructure failures are errors.
    level = logging.ERROR if exc.http_status >= 500 else logging.INFO
    logger.log(
        level, f"{exc.code}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "operation": exc.context.operation,
            "actor": exc.context.actor,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    logger.warning(
        f"Invalid request on {request.url.path}: {len(details)} field error(s)",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING,
            details=details,
        ),
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=True,
        extra={"path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )
