"""FastAPI application entry point with lifespan management."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from aac_engine.api.router import api_router
from aac_engine.config import settings
from aac_engine.dependencies import get_engine, get_scheduler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application startup and shutdown lifecycle."""
    logger.info("Starting AAC suggestion engine...")

    # Initialize engine (connects the store and loads the session snapshots)
    engine = get_engine()
    await engine.initialize()

    # Initialize scheduler (deferred-write flush + retention sweep)
    scheduler = get_scheduler()
    await scheduler.initialize()

    yield

    # Cleanup
    await scheduler.shutdown()
    await engine.close()
    logger.info("AAC suggestion engine shut down cleanly")


app = FastAPI(
    title="AAC Suggestion Engine API",
    description="Predictive word, sentence and grammar suggestions for tile-based AAC input",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        settings.frontend_url,
        "http://localhost:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount API routes
app.include_router(api_router, prefix="/api")

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
