"""Fetch a random history article, retrying with a guaranteed fallback."""

import asyncio
from collections.abc import Callable

from history_reader.clients.wikipedia import WikipediaClient
from history_reader.config import Settings
from history_reader.errors import ExhaustedRetriesError, ReaderError
from history_reader.models import (
    DisplayPayload,
    FetchStatus,
    ReadResult,
    RetryState,
    TopicResult,
)
from history_reader.services.selector import TopicSelector
from history_reader.utils.logging import get_logger, read_context

logger = get_logger(__name__)

StatusListener = Callable[[FetchStatus, str], None]


def _ignore_status(status: FetchStatus, message: str) -> None:
    pass


class ArticleReader:
    """Runs one user-triggered read: select a topic, fetch it, retry on failure.

    The last attempt in the budget skips selection and uses the configured
    fallback topic. Only one read may be in flight at a time; a second trigger
    while one is running is ignored.
    """

    def __init__(
        self,
        client: WikipediaClient,
        selector: TopicSelector,
        settings: Settings,
        on_status: StatusListener | None = None,
    ) -> None:
        self._client = client
        self._selector = selector
        self._settings = settings
        self._on_status = on_status or _ignore_status
        self._lock = asyncio.Lock()

    @property
    def busy(self) -> bool:
        """Whether a read is currently in flight."""
        return self._lock.locked()

    async def run(self) -> ReadResult | None:
        """Run one read and report the outcome without raising.

        Returns:
            The ReadResult, or None if another read was already in flight.
        """
        if self._lock.locked():
            logger.warning("Read already in progress, ignoring trigger")
            return None

        async with self._lock:
            try:
                payload, attempts = await self._read()
            except ExhaustedRetriesError as e:
                logger.error("All attempts failed", attempts=e.attempts, reason=e.last_error.reason)
                return ReadResult(
                    status=FetchStatus.ERROR,
                    attempts=e.attempts,
                    error=e.user_message,
                )

        return ReadResult(status=FetchStatus.COMPLETE, attempts=attempts, payload=payload)

    async def read(self) -> DisplayPayload:
        """Read one article, waiting for any read already in flight.

        Raises:
            ExhaustedRetriesError: If every attempt, fallback included, failed.
        """
        async with self._lock:
            payload, _ = await self._read()
        return payload

    async def _read(self) -> tuple[DisplayPayload, int]:
        with read_context():
            return await self._read_with_retries()

    async def _read_with_retries(self) -> tuple[DisplayPayload, int]:
        state = RetryState(max_attempts=self._settings.max_retries)
        self._on_status(FetchStatus.FETCHING, "検索開始...")
        logger.info("Starting read", max_retries=state.max_attempts)

        while True:
            try:
                payload = await self._attempt(state)
            except ReaderError as e:
                logger.warning(
                    "Attempt failed",
                    attempt=state.attempt + 1,
                    error_type=type(e).__name__,
                    reason=e.reason,
                )
                if not state.advance():
                    exhausted = ExhaustedRetriesError(e, attempts=state.attempt + 1)
                    self._on_status(FetchStatus.ERROR, exhausted.user_message)
                    raise exhausted from e
                await asyncio.sleep(self._settings.retry_delay)
                continue

            logger.info(
                "Read complete",
                topic=payload.header_topic,
                category=payload.header_category,
                attempts=state.attempt + 1,
                char_count=payload.char_count,
            )
            self._on_status(FetchStatus.COMPLETE, payload.header_topic)
            return payload, state.attempt + 1

    async def _attempt(self, state: RetryState) -> DisplayPayload:
        if state.is_final:
            topic = TopicResult(
                title=self._settings.fallback_topic,
                category=self._settings.fallback_category,
            )
        else:
            topic = await self._selector.select()

        self._on_status(FetchStatus.FETCHING, self._progress_message(state, topic))
        extract = await self._client.fetch_extract(topic.title)
        return DisplayPayload(
            header_topic=topic.title,
            header_category=topic.category,
            body_text=extract,
        )

    @staticmethod
    def _progress_message(state: RetryState, topic: TopicResult) -> str:
        label = f"再試行中({state.attempt}/{state.max_attempts}): " if state.attempt > 0 else ""
        return f"{label}カテゴリ【{topic.category}】から\n【{topic.title}】を取得しています..."
