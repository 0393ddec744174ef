"""Error Handlers — map every failure of a player request to the error envelope.

Invariants:
    - PlayerRegistryError → its own to_response() envelope and http_status
    - RequestValidationError (wrong JSON type, non-integer id, unknown race) → 400
      VALIDATION_ERROR, one detail per offending parameter, named by its wire alias
    - Anything else → 500 INTERNAL_ERROR with no internal details in the body
    - Client errors logged at warning, server errors at error, each with the path
      and (when known) the player id and field

Design Decisions:
    - Handlers registered once from main.py through register_error_handlers
    - Detail "field" drops the location prefix ("query", "body", "path") and keeps
      it separately in "location", so clients see "minExperience", not
      "query.minExperience"
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import ErrorCategory, ErrorSeverity, PlayerRegistryError

logger = logging.getLogger(__name__)

REQUEST_LOCATIONS = ("query", "body", "path", "header")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PlayerRegistryError, player_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)


async def player_error_handler(request: Request, exc: PlayerRegistryError):
    level = logging.WARNING if exc.http_status < 500 else logging.ERROR
    logger.log(
        level,
        f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "player_id": exc.context.player_id,
            "field": exc.context.field,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = [_describe(error) for error in exc.errors()]
    logger.warning(
        f"Rejected player request on {request.url.path}: "
        f"{', '.join(d['field'] for d in details)}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request data",
                "category": ErrorCategory.VALIDATION.value,
                "severity": ErrorSeverity.WARNING.value,
                "details": details,
            },
        },
    )


async def unexpected_error_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        exc_info=exc,
        extra={"path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": ErrorCategory.INTERNAL.value,
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )


def _describe(error: dict) -> dict:
    loc = [str(part) for part in error.get("loc", ())]
    location = loc[0] if loc and loc[0] in REQUEST_LOCATIONS else None
    path = loc[1:] if location else loc
    return {
        "field": ".".join(path) or (location or ""),
        "location": location,
        "message": error["msg"],
        "type": error["type"],
    }
