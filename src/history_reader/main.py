"""FastAPI application entry point for History Reader."""

import random
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from history_reader import __version__
from history_reader.api.routes import router
from history_reader.clients.wikipedia import WikipediaClient
from history_reader.config import get_settings
from history_reader.preferences import PreferenceStore
from history_reader.services.reader import ArticleReader
from history_reader.services.selector import TopicSelector
from history_reader.services.status import StatusBoard
from history_reader.utils.logging import get_logger, setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager."""
    settings = get_settings()
    setup_logging(settings.log_level)
    logger = get_logger(__name__)
    logger.info("History Reader starting", version=__version__, api_url=settings.api_url)

    status_board = StatusBoard()
    async with WikipediaClient(settings) as client:
        selector = TopicSelector(client, settings, rng=random.Random())
        app.state.status_board = status_board
        app.state.preference_store = PreferenceStore(settings.preferences_path)
        app.state.reader = ArticleReader(client, selector, settings, on_status=status_board)
        yield

    logger.info("History Reader shutting down")


app = FastAPI(
    title="History Reader",
    description="Full-text reader for random Japanese history articles from Wikipedia",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(router)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic info."""
    return {
        "name": "History Reader",
        "version": __version__,
        "docs": "/docs",
    }
