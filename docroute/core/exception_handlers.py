"""Exception handlers: domain and framework errors to JSON error bodies.

Every body has error, message and details, plus the request_id of the failing
request so a client report can be matched with the server log line.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from docroute.core.config import get_settings
from docroute.domain.exceptions import DocrouteException
from docroute.shared.context import get_request_id

logger = logging.getLogger(__name__)

_ERROR_CODE_STATUS: dict[str, int] = {
    "RESOURCE_NOT_FOUND": 404,
    "AUTHENTICATION_ERROR": 401,
    "PERMISSION_DENIED": 403,
    "VALIDATION_ERROR": 400,
    "INVALID_WORKFLOW_ACTION": 400,
    "WORKFLOW_CONFLICT": 409,
    "SERVICE_UNAVAILABLE": 503,
}


def status_for(exc: DocrouteException) -> int:
    """Return the HTTP status for a domain exception (400 when the code is unmapped)."""
    return _ERROR_CODE_STATUS.get(exc.error_code, 400)


def _error_response(status: int, body: dict[str, Any]) -> JSONResponse:
    body.setdefault("details", {})
    body["request_id"] = get_request_id()
    return JSONResponse(status_code=status, content=body)


def _docroute_exception_handler(
    request: Request, exc: DocrouteException
) -> JSONResponse:
    status = status_for(exc)
    if status >= 500:
        logger.error("%s: %s", exc.error_code, exc.message)
    elif status in (403, 409):
        # Denied or conflicting workflow actions belong in the audit trail.
        logger.info("%s on %s %s: %s", exc.error_code, request.method, request.url.path, exc.message)
    return _error_response(status, exc.to_dict())


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _error_response(
        422,
        {
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": {"errors": exc.errors()},
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    response = _error_response(
        exc.status_code,
        {"error": "HTTP_ERROR", "message": exc.detail},
    )
    if exc.headers:
        response.headers.update(exc.headers)
    return response


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; the exception text is exposed only when debug is on."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    message = str(exc) if get_settings().debug else "Internal server error"
    return _error_response(500, {"error": "INTERNAL_ERROR", "message": message})


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers above on app. Call once from create_app()."""
    app.add_exception_handler(DocrouteException, _docroute_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
