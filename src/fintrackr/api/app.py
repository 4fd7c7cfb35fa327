"""FastAPI application factory and error mapping."""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from fintrackr.api.routes import auth, budgets, transactions
from fintrackr.config import Settings, load_settings
from fintrackr.database.factories import create_database
from fintrackr.database.sqlalchemy_db import SQLAlchemyDatabase
from fintrackr.domain.errors import (
    AuthError,
    ConflictError,
    DomainError,
    InvalidCredentialsError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

# Domain error -> HTTP status; anything else (validation included) is a 500
_STATUS_BY_ERROR = (
    (AuthError, 401),
    (NotFoundError, 404),
    (ConflictError, 400),
    (InvalidCredentialsError, 400),
)


def _server_error(error: object) -> JSONResponse:
    return JSONResponse(status_code=500, content={"message": "Server error", "error": str(error)})


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return JSONResponse(status_code=status_code, content={"message": str(exc)})
    return _server_error(exc)


def _describe_validation_errors(exc: RequestValidationError) -> str:
    # str(exc) embeds the endpoint's source location
    return "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', 'invalid')}"
        for error in exc.errors()
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _server_error(_describe_validation_errors(exc))


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return _server_error(exc)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return JSONResponse(status_code=404, content={"message": "Route not found"})
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)})


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Something went wrong!"})


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[SQLAlchemyDatabase] = None,
) -> FastAPI:
    """Create the API application.

    Args:
        settings: Settings; loaded from the environment when omitted
        database: Database whose engine the requests share; created from
            the settings when omitted

    Returns:
        FastAPI application with all routes under /api
    """
    if settings is None:
        settings = load_settings()
    if database is None:
        database = create_database(settings.database_url, settings.database_path)

    app = FastAPI(title="FinTrackr API")
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    app.include_router(auth.router, prefix="/api")
    app.include_router(transactions.router, prefix="/api")
    app.include_router(budgets.router, prefix="/api")

    @app.get("/")
    def root():
        return {"message": "FinTrackr API running successfully!"}

    logger.info("API configured with database %s", _safe_url(database.database_url))
    return app


def _safe_url(url: str) -> str:
    # Hide credentials in user:password@host URLs
    scheme, sep, rest = url.partition("://")
    if "@" in rest:
        rest = "***@" + rest.split("@", 1)[1]
    return scheme + sep + rest
