# admin_panel/errors.py
# Every failure leaves the server as {"message": ..., "code": ...}; store and
# unexpected errors are logged here and answered with a fixed message.
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class AdminError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(AdminError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class ValidationFailure(AdminError):
    status_code = 422
    code = "validation_failure"


class AuthFailure(AdminError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "auth_failure"


class Forbidden(AdminError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"


class StoreFailure(AdminError):
    code = "store_failure"


def error_body(message: str, code: str) -> dict:
    return {"message": message, "code": code}


async def admin_error_handler(request: Request, exc: AdminError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthFailure) else None
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message, exc.code),
        headers=headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    problems = []
    for err in exc.errors():
        # drop the leading "body"/"path" segment
        where = ".".join(str(p) for p in err.get("loc", ())[1:])
        problems.append(f"{where}: {err.get('msg')}" if where else err.get("msg", "invalid"))
    return JSONResponse(
        status_code=ValidationFailure.status_code,
        content=error_body("; ".join(problems) or "Invalid request", ValidationFailure.code),
    )


async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Store failure on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=StoreFailure.status_code,
        content=error_body("Internal server error", StoreFailure.code),
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error", "server_error"),
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AdminError, admin_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
