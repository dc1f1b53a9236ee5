"""
Aura Gateway - Main Application Entry Point

An on-chain reputation service that scores wallets from their BNPL and
NFT-backed loan history.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from aura_gateway import __version__
from aura_gateway.core.config import settings
from aura_gateway.core.logging import setup_logging
from aura_gateway.core.metrics import get_metrics, get_metrics_content_type
from aura_gateway.infrastructure.database import Base, db_manager
from aura_gateway.presentation.api import api_router
from aura_gateway.presentation.middleware import (
    LoggingMiddleware,
    RequestContextMiddleware,
    error_handler_middleware,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events:
    - Set up logging
    - Initialize database connection pool and ensure the snapshot table exists
    - Clean up on shutdown
    """
    setup_logging()
    db_manager.init()

    await db_manager.create_tables(Base.metadata)

    logger = structlog.get_logger(__name__)
    logger.info("application_started", version=__version__, ledger_api_url=settings.ledger_api_url)

    yield

    await db_manager.close()
    logger.info("application_stopped")


app = FastAPI(
    title="Aura Gateway",
    description="On-chain Reputation Scoring Service",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestContextMiddleware)

error_handler_middleware(app)

app.include_router(api_router)


if settings.metrics_enabled:

    @app.get("/metrics", include_in_schema=False)
    async def metrics() -> Response:
        """Prometheus metrics endpoint."""
        return Response(
            content=get_metrics(),
            media_type=get_metrics_content_type(),
        )


@app.get("/", include_in_schema=False)
async def root():
    """Redirect to API documentation."""

    return RedirectResponse(url="/docs")
