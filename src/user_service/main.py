# main.py
from dotenv import load_dotenv
load_dotenv()
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn
import logging

from core.config import Settings, get_settings
from core.logging_config import configure_logging, log_startup_banner
from core.exceptions import (
    DatabaseException,
    DuplicateException,
    NotFoundException,
    ValidationException,
)
from core.database import init_db
from api.users_api import router as users_router
from api.app_api import router as app_router
from api.app_config_api import router as app_config_router
from api.health_api import health_api_router
from schemas.common import ErrorResponse

logger = logging.getLogger("APPLICATION")

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables (and seed demo data when enabled) before serving."""
    init_db()
    log_startup_banner(get_settings())
    yield


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(_: Request, exc: RequestValidationError):
        body = ErrorResponse(error="Validation failed", detail=jsonable_encoder(exc.errors()))
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=jsonable_encoder(body))

    @app.exception_handler(ValidationException)
    async def handle_validation(_: Request, exc: ValidationException):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": exc.message})

    @app.exception_handler(NotFoundException)
    async def handle_not_found(_: Request, exc: NotFoundException):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})

    @app.exception_handler(DuplicateException)
    async def handle_duplicate(_: Request, exc: DuplicateException):
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": exc.message})

    @app.exception_handler(DatabaseException)
    async def handle_database(_: Request, exc: DatabaseException):
        logger.error(f"Database error: {exc.message}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Database error"},
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description=settings.app_description,
        lifespan=lifespan,
    )

    if settings.cors_enabled:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.get_allowed_origins(),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    app.include_router(app_router, prefix=API_PREFIX)
    app.include_router(health_api_router, prefix=API_PREFIX)
    app.include_router(users_router, prefix=API_PREFIX)
    app.include_router(app_config_router, prefix=API_PREFIX)

    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()

    if settings.environment.lower() == "production":
        # Production: Multiple workers, no reload
        uvicorn.run("main:app", host=settings.server_host, port=settings.server_port, workers=4)
    else:
        # Development: Single worker with hot reload
        # Note: reload=True is incompatible with workers > 1
        uvicorn.run("main:app", host=settings.server_host, port=settings.server_port, reload=True)
