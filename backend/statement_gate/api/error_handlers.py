"""Error Handlers — every failure leaves the API in the StatementGateError envelope.

Invariants:
    - StatementGateError → its own status, envelope and headers
      (WWW-Authenticate on 401)
    - RequestValidationError → re-expressed as MalformedPayloadError (400)
    - Any other exception → InternalError (500), no internal detail in the body
    - request_path filled from the request when the raiser left it empty
    - 4xx logged at WARNING, 5xx at ERROR

Design Decisions:
    - One envelope for the whole API: statement conformance problems are
      returned as violations by the routes, everything else goes through here
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from statement_gate.core.errors import (
    InternalError,
    MalformedPayloadError,
    StatementGateError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StatementGateError, _handle_gate_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(Exception, _handle_unexpected)


def _respond(
    request: Request, error: StatementGateError, cause: BaseException | None = None,
) -> JSONResponse:
    path = request.url.path
    if error.context.request_path is None:
        error.context.request_path = path
    log = logger.error if error.http_status >= 500 else logger.warning
    log(
        f"{error.code} on {path}: {error.message}",
        exc_info=cause,
        extra={"error_code": error.code, "path": path},
    )
    return JSONResponse(
        status_code=error.http_status,
        content=error.to_response(),
        headers=error.headers,
    )


async def _handle_gate_error(request: Request, exc: StatementGateError):
    return _respond(request, exc)


async def _handle_request_validation(request: Request, exc: RequestValidationError):
    fields = sorted({".".join(str(loc) for loc in e["loc"]) for e in exc.errors()})
    error = MalformedPayloadError(f"Request is missing or has invalid: {', '.join(fields)}")
    return _respond(request, error)


async def _handle_unexpected(request: Request, exc: Exception):
    return _respond(request, InternalError(), cause=exc)
