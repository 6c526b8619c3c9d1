"""Application configuration and router setup."""

import logging

import fastapi
from fastapi import Request, status
from fastapi.middleware import cors
from fastapi.responses import JSONResponse

from components.core import init_db
from components.core.schemas import ErrorResponse
from components.core.config import get_settings
from components.core.errors import (
    ConsistencyError,
    LendingError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from components.core.logger import setup_logging
from restapi.endpoints import borrow_item, borrow_request, equipment, health_check, user

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConsistencyError: status.HTTP_409_CONFLICT,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


async def lending_error_handler(request: Request, exc: LendingError) -> JSONResponse:
    """Translate domain errors into JSON responses."""
    status_code = ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status_code, content=ErrorResponse(detail=exc.message).model_dump())


def create_app() -> fastapi.FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)

    app = fastapi.FastAPI(
        title=settings.SERVICE_NAME,
        description="Equipment catalog and borrow request service",
        version="1.0.0",
        lifespan=init_db.lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        cors.CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(LendingError, lending_error_handler)

    # Include routers
    app.include_router(health_check.router)
    app.include_router(user.router)
    app.include_router(equipment.router)
    app.include_router(borrow_request.router)
    app.include_router(borrow_item.router)

    return app
