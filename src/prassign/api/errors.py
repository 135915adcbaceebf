"""Mapping of domain errors to HTTP responses.

Error bodies have the shape ``{"error": {"code": ..., "message": ...}}``.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..core.domain import (
    InvalidArgumentError,
    NoCandidateError,
    NotAssignedError,
    NotFoundError,
    PRAssignError,
    PRExistsError,
    PRMergedError,
    TeamExistsError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[PRAssignError], int] = {
    InvalidArgumentError: 400,
    TeamExistsError: 400,
    NotFoundError: 404,
    PRExistsError: 409,
    PRMergedError: 409,
    NotAssignedError: 409,
    NoCandidateError: 409,
}


def error_body(code: str, message: str) -> dict:
    return {"error": {"code": code, "message": message}}


def status_for(error: PRAssignError) -> int:
    """HTTP status for a domain error; 500 for unmapped kinds."""
    for error_type, status in STATUS_BY_ERROR.items():
        if isinstance(error, error_type):
            return status
    return 500


async def handle_domain_error(request: Request, exc: PRAssignError) -> JSONResponse:
    status = status_for(exc)
    if status == 500:
        logger.error(f"Unmapped domain error on {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content=error_body("INTERNAL_ERROR", "internal server error"))
    return JSONResponse(status_code=status, content=error_body(exc.code, exc.message))


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=error_body(InvalidArgumentError.code, "invalid request body or parameters"),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Internal server error on {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content=error_body("INTERNAL_ERROR", "internal server error"))


def register_error_handlers(app: FastAPI) -> None:
    """Install the exception handlers on ``app``."""
    app.add_exception_handler(PRAssignError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
