# app/core/errors.py
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class ProfessionalsError(Exception):
    """Base error rendered as a structured JSON body."""

    status_code = 500
    error_code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(ProfessionalsError):
    status_code = 404
    error_code = "NOT_FOUND"


class ReferentialError(ProfessionalsError):
    """A referenced user or category does not exist."""

    status_code = 409
    error_code = "REFERENTIAL_ERROR"


class ValidationError(ProfessionalsError):
    """A required input field is missing or blank."""

    status_code = 422
    error_code = "VALIDATION_ERROR"


def _error_body(error_code: str, message: str, details: Optional[Any] = None) -> dict:
    return {
        "error_code": error_code,
        "message": message,
        "details": details,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ProfessionalsError)
    async def professionals_error_handler(request: Request, exc: ProfessionalsError):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.error_code, exc.message, exc.details),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content=_error_body(
                "VALIDATION_ERROR",
                "Invalid request parameters.",
                _jsonable_errors(exc.errors()),
            ),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body("HTTP_ERROR", str(exc.detail)),
        )

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error("Store failure on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content=_error_body("STORE_ERROR", "The data store could not complete the request."),
        )


def _jsonable_errors(errors: list) -> list:
    # pydantic puts the raw exception under ctx for custom validators
    cleaned = []
    for err in errors:
        err = dict(err)
        if "ctx" in err:
            err["ctx"] = {key: str(value) for key, value in err["ctx"].items()}
        cleaned.append(err)
    return cleaned
