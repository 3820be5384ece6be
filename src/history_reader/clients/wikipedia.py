"""MediaWiki API client for History Reader."""

from dataclasses import dataclass
from typing import Any

import httpx

from history_reader.config import Settings
from history_reader.errors import (
    EmptyContentError,
    MalformedResponseError,
    NotFoundError,
    TransportError,
)
from history_reader.utils.logging import get_logger

logger = get_logger(__name__)

CATEGORY_PREFIX = "Category:"
ARTICLE_NAMESPACE = 0
MISSING_PAGE_ID = "-1"


def strip_category_prefix(title: str) -> str:
    """Turn ``Category:江戸時代`` into ``江戸時代``."""
    if title.startswith(CATEGORY_PREFIX):
        return title[len(CATEGORY_PREFIX):]
    return title


def _query_section(data: dict[str, Any]) -> dict[str, Any]:
    query = data.get("query")
    if not isinstance(query, dict):
        raise MalformedResponseError("response has no query object")
    return query


@dataclass(frozen=True)
class CategoryMember:
    """Represents one entry of a category listing."""

    title: str
    ns: int

    @classmethod
    def from_api_response(cls, data: dict) -> "CategoryMember":
        """Create a CategoryMember from API response data."""
        try:
            return cls(title=str(data["title"]), ns=int(data["ns"]))
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedResponseError(f"invalid category member: {data!r}") from e


class WikipediaClient:
    """Client for the read-only parts of the MediaWiki action API we need."""

    def __init__(self, settings: Settings) -> None:
        self._api_url = settings.api_url
        self._client = httpx.AsyncClient(
            timeout=settings.request_timeout,
            follow_redirects=True,
            headers={"User-Agent": settings.user_agent},
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "WikipediaClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def list_subcategories(self, category: str, limit: int) -> list[str]:
        """List the subcategories of a category.

        Args:
            category: Category name without the ``Category:`` prefix.
            limit: Maximum number of members to request.

        Returns:
            Subcategory names without the ``Category:`` prefix.

        Raises:
            TransportError: If the request fails.
            MalformedResponseError: If the response lacks ``categorymembers``.
        """
        members = await self._category_members(category, "subcat", limit)
        return [strip_category_prefix(m.title) for m in members]

    async def list_articles(
        self,
        category: str,
        limit: int,
        start_prefix: str | None = None,
    ) -> list[str]:
        """List article titles (namespace 0) in a category.

        Args:
            category: Category name without the ``Category:`` prefix.
            limit: Maximum number of members to request.
            start_prefix: Only list members whose sort key starts at or after this.

        Returns:
            Article titles, possibly empty.
        """
        members = await self._category_members(category, "page", limit, start_prefix)
        return [m.title for m in members if m.ns == ARTICLE_NAMESPACE]

    async def fetch_extract(self, title: str) -> str:
        """Fetch the full plain-text extract of an article.

        Raises:
            TransportError: If the request fails.
            MalformedResponseError: If the response lacks ``query.pages``.
            NotFoundError: If the page does not exist.
            EmptyContentError: If the page has no text.
        """
        data = await self._query(
            {
                "prop": "extracts",
                "explaintext": "1",
                "redirects": "1",
                "titles": title,
            }
        )
        pages = _query_section(data).get("pages")
        if not isinstance(pages, dict) or not pages:
            raise MalformedResponseError("response has no query.pages")

        page_id, page = next(iter(pages.items()))
        if page_id == MISSING_PAGE_ID or not isinstance(page, dict) or "missing" in page:
            logger.warning("Page not found", title=title)
            raise NotFoundError(f"page not found: {title}")

        extract = page.get("extract") or ""
        if not isinstance(extract, str):
            logger.warning("Extract is not a string", title=title, extract_type=type(extract).__name__)
            raise MalformedResponseError("extract is not a string")
        if not extract.strip():
            logger.warning("Page has empty extract", title=title)
            raise EmptyContentError(f"empty extract: {title}")

        logger.info("Extract fetched", title=title, length=len(extract))
        return extract

    async def _category_members(
        self,
        category: str,
        member_type: str,
        limit: int,
        start_prefix: str | None = None,
    ) -> list[CategoryMember]:
        params = {
            "list": "categorymembers",
            "cmtitle": f"{CATEGORY_PREFIX}{category}",
            "cmtype": member_type,
            "cmlimit": str(limit),
        }
        if start_prefix:
            params["cmstartsortkeyprefix"] = start_prefix

        data = await self._query(params)
        members = _query_section(data).get("categorymembers")
        if not isinstance(members, list):
            raise MalformedResponseError("response has no query.categorymembers")

        logger.debug(
            "Category members listed",
            category=category,
            member_type=member_type,
            start_prefix=start_prefix,
            count=len(members),
        )
        return [CategoryMember.from_api_response(m) for m in members]

    async def _query(self, params: dict[str, str]) -> dict[str, Any]:
        """Issue an ``action=query`` request and decode the JSON body.

        Raises:
            TransportError: If the HTTP request fails.
            MalformedResponseError: If the body is not a JSON object or reports an API error.
        """
        params = {"action": "query", "format": "json", "origin": "*", **params}
        try:
            response = await self._client.get(self._api_url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning("HTTP error from MediaWiki API", status=e.response.status_code)
            raise TransportError(f"HTTP {e.response.status_code}") from e
        except httpx.TimeoutException as e:
            logger.warning("Timeout calling MediaWiki API", params=params)
            raise TransportError("timeout") from e
        except httpx.RequestError as e:
            logger.warning("Request error calling MediaWiki API", error=str(e))
            raise TransportError(f"request error: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError("response is not valid JSON") from e

        if not isinstance(data, dict):
            raise MalformedResponseError("response is not a JSON object")
        if "error" in data:
            error = data["error"]
            code = error.get("code", "unknown") if isinstance(error, dict) else "unknown"
            raise MalformedResponseError(f"API error: {code}")
        return data
