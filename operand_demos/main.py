"""Main FastAPI application for the webhook ingester."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import httpx
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from operand_demos.api import health, webhook
from operand_demos.core.config import Settings, get_settings
from operand_demos.core.logging import setup_logger
from operand_demos.services.operand import OperandClient
from operand_demos.services.storage import create_storage_service

logger = setup_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events."""
    settings: Settings = app.state.settings

    # Startup
    logger.info(f"Starting {settings.APP_NAME}, version={app.version}")
    if not settings.OPERAND_API_KEY:
        logger.warning("OPERAND_API_KEY not set, index requests will be rejected")

    http_client = httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS)
    app.state.operand_client = OperandClient.from_settings(settings, http_client)
    app.state.storage = create_storage_service(settings)

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.APP_NAME}")
    await http_client.aclose()


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies as 400 Bad Request."""
    logger.warning(f"Malformed request body for path: {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Indexes inbound messages and attachments with Operand",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Include API routers
    app.include_router(health.router)
    app.include_router(webhook.router)

    return app


app = create_application()
