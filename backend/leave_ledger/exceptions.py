from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    error: str
    detail: str | None = None
    status_code: int


class AppError(Exception):
    """Base application exception."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed input, such as a leave window that does not move forward in time."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    """A referenced request, employee, leave type or policy does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class OverlapError(AppError):
    """The new request intersects an approved request of the same employee."""

    status_code = status.HTTP_409_CONFLICT


class InsufficientBalanceError(AppError):
    """The requested duration exceeds the remaining balance."""

    status_code = status.HTTP_400_BAD_REQUEST


class InvalidTransitionError(AppError):
    """The requested status change is not allowed from the current status."""

    status_code = status.HTTP_400_BAD_REQUEST


class PolicyMissingError(AppError):
    """No employee override or leave policy defines an entitlement.

    Raised by the entitlement resolver and recovered by the balance ledger;
    never rendered to clients.
    """


async def _app_exception_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=type(exc).__name__,
            detail=exc.message,
            status_code=exc.status_code,
        ).model_dump(),
    )


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ErrorResponse(
            error="RequestValidationError",
            detail=str(exc.errors()),
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        ).model_dump(),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers on the application."""
    app.add_exception_handler(AppError, _app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)  # type: ignore[arg-type]
