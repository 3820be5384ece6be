"""API routes for History Reader."""

from fastapi import APIRouter, Depends, HTTPException, Request, status

from history_reader import __version__
from history_reader.api.models import (
    ArticleResponse,
    HealthResponse,
    PreferencesModel,
    StatusResponse,
)
from history_reader.preferences import DisplayPreferences, PreferenceStore
from history_reader.services.reader import ArticleReader
from history_reader.services.status import StatusBoard
from history_reader.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["api"])


def get_reader(request: Request) -> ArticleReader:
    return request.app.state.reader


def get_status_board(request: Request) -> StatusBoard:
    return request.app.state.status_board


def get_preference_store(request: Request) -> PreferenceStore:
    return request.app.state.preference_store


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__)


@router.post("/article", response_model=ArticleResponse)
async def read_article(reader: ArticleReader = Depends(get_reader)) -> ArticleResponse:
    """Fetch a random Japanese history article.

    Picks a topic by walking the history categories, fetches its full text and
    retries on failure, using the fallback topic on the last attempt.

    Returns:
        ArticleResponse with the article text, or the error message if every
        attempt failed.

    Raises:
        HTTPException: 409 if a read is already in progress.
    """
    logger.info("Article endpoint called")

    result = await reader.run()
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A read is already in progress",
        )
    return ArticleResponse.from_result(result)


@router.get("/status", response_model=StatusResponse)
async def read_status(board: StatusBoard = Depends(get_status_board)) -> StatusResponse:
    """Latest reader status, for polling while a read is in flight."""
    return StatusResponse(status=str(board.status), message=board.message)


@router.get("/preferences", response_model=PreferencesModel)
async def get_preferences(
    store: PreferenceStore = Depends(get_preference_store),
) -> PreferencesModel:
    """Return the saved font preferences."""
    prefs = store.load()
    return PreferencesModel(font_size=prefs.font_size, font_family=prefs.font_family)


@router.put("/preferences", response_model=PreferencesModel)
async def put_preferences(
    body: DisplayPreferences,
    store: PreferenceStore = Depends(get_preference_store),
) -> PreferencesModel:
    """Save font preferences.

    An out-of-range or non-numeric font size is replaced by the default.
    """
    store.save(body)
    return PreferencesModel(font_size=body.font_size, font_family=body.font_family)
