"""Application errors and their HTTP mapping."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class InvalidTokenError(Exception):
    """Raised by the token service for bad signatures, expiry or malformed tokens."""


class AppError(Exception):
    """Base class for errors rendered as JSON responses."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal_error"
    detail: str = "Internal server error"

    def __init__(self, detail: str | None = None) -> None:
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class WrongCredentialsError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "wrong_credentials"
    detail = "Wrong credentials provided"


class AuthenticationTokenMissingError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "authentication_token_missing"
    detail = "Authentication token missing"


class WrongAuthenticationTokenError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "wrong_authentication_token"
    detail = "Wrong authentication token"


class NotAuthorizedError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "not_authorized"
    detail = "You're not authorized"


class RestaurantNotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "restaurant_not_found"

    def __init__(self, restaurant_id: int | None = None) -> None:
        if restaurant_id is None:
            super().__init__("Restaurant not found")
        else:
            super().__init__(f"Restaurant with id {restaurant_id} not found")


class RestaurantAlreadyExistsError(AppError):
    status_code = status.HTTP_409_CONFLICT
    code = "restaurant_already_exists"

    def __init__(self, value: str, field: str) -> None:
        super().__init__(f"Restaurant with {field} {value} already exists")


class RestaurantAlreadyOwnedError(AppError):
    status_code = status.HTTP_409_CONFLICT
    code = "restaurant_already_owned"
    detail = "Restaurant already has an owner"


class EmailAlreadyRegisteredError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "email_already_registered"
    detail = "Email already registered"


class InternalError(AppError):
    """Unexpected failure reported to the client without internals."""


def _error_response(exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail, "code": exc.code})


def register_exception_handlers(app: FastAPI) -> None:
    """Map application and database errors to JSON responses."""

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("[ERROR] %s %s failed: %s", request.method, request.url.path, exc.detail)
        return _error_response(exc)

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.exception("[DB] Unhandled database error on %s %s", request.method, request.url.path)
        return _error_response(InternalError())
