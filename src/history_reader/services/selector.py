"""Random topic selection by walking the Wikipedia category tree."""

import random
from collections.abc import Sequence
from typing import Protocol, TypeVar

from history_reader.clients.wikipedia import WikipediaClient
from history_reader.config import EmptyFilterPolicy, Settings
from history_reader.errors import ReaderError, SelectionError
from history_reader.models import TopicResult
from history_reader.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class ChoiceSource(Protocol):
    """Anything that can pick one element uniformly, e.g. ``random.Random``."""

    def choice(self, seq: Sequence[T]) -> T: ...


class TopicSelector:
    """Picks a random article from a random corner of the history categories."""

    def __init__(
        self,
        client: WikipediaClient,
        settings: Settings,
        rng: ChoiceSource | None = None,
    ) -> None:
        self._client = client
        self._settings = settings
        self._rng = rng if rng is not None else random.Random()

    async def select(self) -> TopicResult:
        """Select a random article title.

        Returns:
            The chosen title and the category it was listed in.

        Raises:
            SelectionError: If no article could be resolved.
        """
        seed = self._rng.choice(self._settings.seed_categories)
        logger.debug("Seed category chosen", category=seed)

        category = await self.descend(seed)
        titles = await self._list_articles(category)
        title = self._rng.choice(titles)

        logger.info("Topic selected", title=title, category=category)
        return TopicResult(title=title, category=category)

    async def descend(self, category: str) -> str:
        """Walk down random subcategories, up to the configured depth.

        Stops early, keeping the current category, when a level has no usable
        subcategories or its listing fails.
        """
        for depth in range(self._settings.descent_depth):
            try:
                subcategories = await self._client.list_subcategories(
                    category, self._settings.subcategory_limit
                )
            except ReaderError as e:
                logger.warning(
                    "Subcategory listing failed, stopping descent",
                    category=category,
                    depth=depth,
                    reason=e.reason,
                )
                break

            pool = self._candidate_subcategories(subcategories)
            if not pool:
                logger.debug("No usable subcategories", category=category, depth=depth)
                break

            category = self._rng.choice(pool)
            logger.debug("Descended into subcategory", category=category, depth=depth + 1)

        return category

    def _candidate_subcategories(self, subcategories: list[str]) -> list[str]:
        if not subcategories:
            return []

        markers = self._settings.blocked_markers
        filtered = [s for s in subcategories if not any(m in s for m in markers)]
        if filtered:
            return filtered

        if self._settings.empty_filter_policy is EmptyFilterPolicy.USE_UNFILTERED:
            return subcategories
        return []

    async def _list_articles(self, category: str) -> list[str]:
        """List articles in a category, starting at a random sort-key prefix.

        Falls back to the unprefixed listing when the prefix yields nothing.
        """
        prefix = self._rng.choice(self._settings.sort_key_alphabet)
        limit = self._settings.article_limit

        try:
            titles = await self._client.list_articles(category, limit, start_prefix=prefix)
            if not titles:
                logger.debug("No articles after prefix, listing from start", category=category, prefix=prefix)
                titles = await self._client.list_articles(category, limit)
        except ReaderError as e:
            raise SelectionError(f"article listing failed for {category}: {e.reason}") from e

        if not titles:
            raise SelectionError("category has no articles")
        return titles
