"""Error Handlers — map RigBench failures onto the HTTP error envelope.

Invariants:
    - RigBenchError → exc.http_status with exc.to_response(); the log record carries
      the error's config kind, scope, record id and field as structured extras
    - Client-side failures (4xx) log at WARNING; store/infrastructure failures at ERROR
    - Malformed request bodies/params → 400 VALIDATION_ERROR with one detail per field
    - Anything else → 500 INTERNAL_ERROR, traceback logged, never returned

Design Decisions:
    - Handlers registered from one entry point so main.py only calls
      register_error_handlers(app)
    - Request validation is 400 (not FastAPI's default 422): 422 stays reserved for
      InvalidInputError, where the payload parsed but breaks a rig rule
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from rigbench.core.errors import ErrorSeverity, RigBenchError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RigBenchError, handle_rigbench_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected_error)


def log_level_for(exc: RigBenchError) -> int:
    if exc.http_status < 500 and exc.severity != ErrorSeverity.CRITICAL:
        return logging.WARNING
    return logging.ERROR


def error_log_extra(exc: RigBenchError, path: str) -> dict:
    """Structured extras for one RigBenchError, None-valued context dropped."""
    ctx = exc.context
    extra = {
        "error_code": exc.code,
        "path": path,
        "config_kind": ctx.config_kind,
        "scope": ctx.scope,
        "record_id": ctx.record_id,
        "field": ctx.field_name,
    }
    return {k: v for k, v in extra.items() if v is not None}


async def handle_rigbench_error(request: Request, exc: RigBenchError):
    logger.log(
        log_level_for(exc),
        f"{exc.code} ({exc.http_status}): {exc.message}",
        extra=error_log_extra(exc, request.url.path),
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_request_validation(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    logger.warning(
        f"Rejected request: {len(details)} invalid field(s)",
        extra={
            "error_code": "VALIDATION_ERROR",
            "path": request.url.path,
            "field": ",".join(d["field"] for d in details),
        },
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request data",
                "category": "validation",
                "severity": ErrorSeverity.ERROR.value,
                "details": details,
            },
        },
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.error(
        f"Unhandled {type(exc).__name__}",
        exc_info=True,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": "internal",
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )
