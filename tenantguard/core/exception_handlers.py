"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain exceptions to
HTTP responses by error_code. Denials share one generic body, and 500s
never carry exception text or stack traces.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tenantguard.domain.exceptions import (
    GENERIC_INTERNAL_ERROR_MESSAGE,
    TenantGuardException,
)

logger = logging.getLogger(__name__)

_ERROR_CODE_STATUS: dict[str, int] = {
    "AUTH_REQUIRED": 401,
    "PERMISSION_DENIED": 403,
    "NO_ROLES_ASSIGNED": 403,
    "RESOURCE_NOT_FOUND": 404,
    "DUPLICATE_NAME": 400,
    "ROLE_IN_USE": 400,
    "PROTECTED_ROLE": 400,
    "VALIDATION_ERROR": 400,
    "TENANT_ALREADY_EXISTS": 409,
    "INTERNAL_ERROR": 500,
}


def status_for(exc: TenantGuardException) -> int:
    return _ERROR_CODE_STATUS.get(exc.error_code, 400)


def _tenantguard_exception_handler(
    request: Request, exc: TenantGuardException
) -> JSONResponse:
    """Return exc.to_dict() with the status mapped from error_code."""
    status = status_for(exc)
    headers = {"WWW-Authenticate": "Bearer"} if status == 401 else None
    return JSONResponse(status_code=status, content=exc.to_dict(), headers=headers)


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": jsonable_errors(exc),
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    """Validation errors without the raw 'input'/'ctx' values (they may echo secrets)."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return a generic 500; the detail goes to the log only."""
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": GENERIC_INTERNAL_ERROR_MESSAGE},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""
    app.add_exception_handler(TenantGuardException, _tenantguard_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
