# user_api/main.py

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine
from starlette.exceptions import HTTPException as StarletteHTTPException

from user_api.api.responses import failure
from user_api.api.router import api_router
from user_api.core.config import Settings, get_settings
from user_api.core.errors import StoreFailure, UserApiError, ValidationFailed
from user_api.core.logging import setup_logging
from user_api.db.init_db import init_db
from user_api.db.session import build_engine, build_session_factory
from user_api.services.validation import describe_errors

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationFailed)
    async def handle_validation_failed(request: Request, exc: ValidationFailed):
        return failure(exc.status_code, exc.message, errors=exc.errors)

    @app.exception_handler(StoreFailure)
    async def handle_store_failure(request: Request, exc: StoreFailure):
        return failure(exc.status_code, exc.message, error=exc.error)

    @app.exception_handler(UserApiError)
    async def handle_api_error(request: Request, exc: UserApiError):
        return failure(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return failure(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = [violation.message for violation in describe_errors(exc.errors())]
        return failure(status.HTTP_400_BAD_REQUEST, "Validation error", errors=errors)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return failure(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error",
            error=type(exc).__name__,
        )


def create_application(
    settings: Optional[Settings] = None,
    engine: Optional[Engine] = None,
) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    engine = engine or build_engine(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(engine)
        logger.info(
            "Starting %s in %s mode (database: %s)",
            settings.PROJECT_NAME,
            settings.environment,
            engine.url.get_backend_name(),
        )
        yield
        engine.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # Store handle used by the get_db dependency
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    # ---------- CORS ----------
    if settings.backend_cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.backend_cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    # ---------- ROUTERS ----------
    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/healthz", tags=["health"])
    def healthz():
        return {"status": "ok", "environment": settings.environment}

    return app


app = create_application()


def run() -> None:
    settings = get_settings()
    uvicorn.run("user_api.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
