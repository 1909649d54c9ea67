"""Error Handlers — map exceptions to the shared error envelope and log them.

Invariants:
    - PageQueryError → its own http_status and to_response()
    - RequestValidationError → 400 VALIDATION_ERROR with field-level details
    - Exception (catch-all) → 500 INTERNAL_ERROR, never leaks internal details
    - Every log record carries the request path and, when present, the raw
      pageNumber/pageSize query parameters
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pagequery.core.errors import (
    ErrorCategory, ErrorSeverity, PageQueryError, error_envelope,
)

logger = logging.getLogger(__name__)

PAGING_PARAMS = {"pageNumber": "page_number", "pageSize": "page_size"}


def request_log_extra(request: Request, **extra: object) -> dict:
    """Logging extras for a request: path plus any paging query parameters."""
    fields: dict[str, object] = {"path": request.url.path}
    for param, field in PAGING_PARAMS.items():
        value = request.query_params.get(param)
        if value is not None:
            fields[field] = value
    fields.update(extra)
    return fields


def validation_details(exc: RequestValidationError) -> list[dict]:
    return [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]


async def handle_page_query_error(request: Request, exc: PageQueryError):
    logger.error(
        f"{type(exc).__name__}: {exc.message}",
        extra=request_log_extra(request, error_code=exc.code),
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = validation_details(exc)
    logger.warning(
        f"Rejected request with {len(details)} invalid field(s)",
        extra=request_log_extra(request, error_code="VALIDATION_ERROR"),
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR,
            details=details,
        ),
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.error(
        f"Unhandled {type(exc).__name__}",
        exc_info=exc,
        extra=request_log_extra(request, error_code="INTERNAL_ERROR"),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(PageQueryError, handle_page_query_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
