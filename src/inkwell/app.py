"""FastAPI application factory — HTTP access to the content services."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from azure.monitor.opentelemetry import configure_azure_monitor
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from opentelemetry.sdk.resources import SERVICE_NAME, Resource

from inkwell.config import load_settings
from inkwell.core import initialize
from inkwell.database.client import CosmosClient
from inkwell.errors import (
    AdminAlreadyExists,
    InkwellError,
    InvalidCredentials,
    InvalidToken,
    MissingId,
    MissingItem,
    StorageFailure,
    ValidationFailure,
    VersionConflict,
    VersionNotFound,
)
from inkwell.logging import configure_logging
from inkwell.routes import auth, content, live

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterable

    from inkwell.models.schema import ContentSchema

logger = logging.getLogger(__name__)

_DEVELOPMENT_LOG_FILE = "inkwell.log"

_STATUS_BY_ERROR: dict[type[InkwellError], int] = {
    InvalidToken: status.HTTP_401_UNAUTHORIZED,
    InvalidCredentials: status.HTTP_401_UNAUTHORIZED,
    MissingId: status.HTTP_400_BAD_REQUEST,
    MissingItem: status.HTTP_400_BAD_REQUEST,
    ValidationFailure: status.HTTP_422_UNPROCESSABLE_CONTENT,
    VersionNotFound: status.HTTP_404_NOT_FOUND,
    VersionConflict: status.HTTP_409_CONFLICT,
    AdminAlreadyExists: status.HTTP_409_CONFLICT,
    StorageFailure: status.HTTP_503_SERVICE_UNAVAILABLE,
}


async def handle_inkwell_error(request: Request, exc: InkwellError) -> JSONResponse:
    """Render a typed failure as JSON with its mapped status code."""
    code = _STATUS_BY_ERROR.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    body: dict[str, object] = {"error": type(exc).__name__, "detail": exc.message}
    if isinstance(exc, ValidationFailure):
        body["fields"] = [detail.model_dump() for detail in exc.details]
    if code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed — %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=code, content=body)


def create_app(schemas: Iterable[ContentSchema]) -> FastAPI:
    """Create the app serving one content service per schema."""
    schemas = list(schemas)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        settings = load_settings()
        configure_logging(
            settings.app.log_level,
            log_file=_DEVELOPMENT_LOG_FILE if settings.app.is_development else None,
        )
        if settings.monitor.connection_string:
            configure_azure_monitor(
                connection_string=settings.monitor.connection_string,
                resource=Resource.create({SERVICE_NAME: "inkwell"}),
            )
            logger.info("Azure Monitor OpenTelemetry configured")
        cosmos = CosmosClient(settings.cosmos)
        await cosmos.initialize()
        app.state.settings = settings
        app.state.cosmos = cosmos
        app.state.core = await initialize(settings, schemas, cosmos)
        logger.info("Inkwell started — env=%s", settings.app.env)
        try:
            yield
        finally:
            await cosmos.close()
            logger.info("Inkwell stopped")

    app = FastAPI(title="Inkwell", lifespan=lifespan)
    app.add_exception_handler(InkwellError, handle_inkwell_error)
    app.include_router(auth.router)
    app.include_router(content.router)
    app.include_router(live.router)
    return app
