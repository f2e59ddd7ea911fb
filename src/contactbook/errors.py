"""Application error taxonomy.

Learn: Services and repositories raise these domain errors; the app
registers one exception handler that maps them to an HTTP status and a
``{"message": ...}`` JSON body. Route handlers stay free of status-code
plumbing, and no stack trace ever reaches the client.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class AppError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Missing or empty required field."""

    status_code = 400


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    """A record with the same unique key already exists."""

    status_code = 409


class StoreError(AppError):
    """The document store failed to complete an operation."""

    status_code = 500


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


def register_error_handlers(app: FastAPI) -> None:
    """Attach the AppError → JSON handler to the app."""
    app.add_exception_handler(AppError, app_error_handler)
