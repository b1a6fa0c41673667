# fintrack/errors.py
"""
Error taxonomy shared by every route.

Handlers raise one of these; the exception handlers registered in
fintrack.main turn them into {"success": false, "message": ...}.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger("fintrack.errors")

GENERIC_STORE_MESSAGE = "Server error"


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT


class StoreError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def failure(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"success": False, "message": message}, status_code=status_code)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return failure(exc.message, exc.status_code)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Keep the first pydantic complaint readable: "body.amount: Input should be ..."
    errors = exc.errors()
    if errors:
        first = errors[0]
        where = ".".join(str(p) for p in first.get("loc", ()))
        message = f"{where}: {first.get('msg', 'invalid value')}"
    else:
        message = "Invalid request"
    return failure(message, status.HTTP_400_BAD_REQUEST)


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("store failure on %s %s", request.method, request.url.path)
    return failure(GENERIC_STORE_MESSAGE, StoreError.status_code)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
