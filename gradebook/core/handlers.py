# gradebook/core/handlers.py
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from gradebook.core.exceptions import BaseAPIException
from gradebook.core.logging import logger

ROUTE_NOT_FOUND = "Route non trouvée"
GENERIC_ERROR = "Erreur serveur"


def error_body(message: str, code: str, details=None) -> dict:
    body = {"success": False, "error": message, "code": code}
    if details:
        body["details"] = details
    return body


# 1. Errors raised on purpose by the services
async def custom_api_exception_handler(request: Request, exc: BaseAPIException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message, exc.code, exc.details),
    )


# 2. Body that Pydantic could not parse (wrong types, invalid JSON...)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = {}
    for error in exc.errors():
        field = ".".join(str(x) for x in error["loc"] if x != "body")
        details[field or "body"] = error["msg"]

    fields = ", ".join(details)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(f"Données invalides: {fields}", "VALIDATION_ERROR", details),
    )


# 3. Standard HTTP errors (unknown route, wrong method...)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = ROUTE_NOT_FOUND
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(message, "HTTP_ERROR"),
    )


# 4. Database errors nobody translated
async def store_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(GENERIC_ERROR, "STORE_FAILURE"),
    )


# 5. Anything else
async def general_exception_handler(request: Request, exc: Exception):
    logger.critical(f"Unhandled Exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(GENERIC_ERROR, "INTERNAL_SERVER_ERROR"),
    )


def add_error_handlers(app: FastAPI):
    app.add_exception_handler(BaseAPIException, custom_api_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, store_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
