# errors.py
"""Domain error taxonomy and its mapping to HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class BudgetError(Exception):
    """Base class for every error the service layer raises on purpose."""

    default_detail = "Internal error"

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(BudgetError):
    default_detail = "Invalid input"


class NotFound(BudgetError):
    default_detail = "Not found"


class BadRequest(BudgetError):
    default_detail = "Bad request"


class Unauthorized(BudgetError):
    default_detail = "Unauthorized"


class Conflict(BudgetError):
    default_detail = "Conflict"


class Internal(BudgetError):
    default_detail = "Internal error"


# Every BudgetError subclass must appear here; tests/test_errors.py enforces it.
STATUS_CODES = {
    ValidationError: 422,
    NotFound: 404,
    BadRequest: 400,
    Unauthorized: 401,
    Conflict: 409,
    Internal: 500,
}


def status_for(exc: BudgetError) -> int:
    """Look up the HTTP status for an error by its exact class."""
    try:
        return STATUS_CODES[type(exc)]
    except KeyError:
        raise TypeError(f"No status code mapped for {type(exc).__name__}") from None


async def handle_budget_error(request: Request, exc: BudgetError) -> JSONResponse:
    code = status_for(exc)
    if code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}", exc_info=exc)
    else:
        logger.info(f"{request.method} {request.url.path} -> {code}: {exc.detail}")

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
    return JSONResponse(status_code=code, content={"detail": exc.detail}, headers=headers)


async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} database error", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": Internal.default_detail},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BudgetError, handle_budget_error)
    app.add_exception_handler(SQLAlchemyError, handle_database_error)
