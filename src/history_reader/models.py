"""Shared data models for History Reader."""

from dataclasses import dataclass
from enum import StrEnum


class FetchStatus(StrEnum):
    """Lifecycle of one read operation."""

    IDLE = "idle"
    FETCHING = "fetching"
    COMPLETE = "complete"
    ERROR = "error"


@dataclass(frozen=True)
class TopicResult:
    """An article title and the category it was drawn from."""

    title: str
    category: str


@dataclass
class RetryState:
    """Attempt counter for a single read operation."""

    max_attempts: int
    attempt: int = 0

    @property
    def is_final(self) -> bool:
        """Whether the current attempt is the last one in the budget."""
        return self.attempt >= self.max_attempts

    def advance(self) -> bool:
        """Move to the next attempt.

        Returns:
            False, leaving the counter unchanged, if the budget is spent.
        """
        if self.is_final:
            return False
        self.attempt += 1
        return True


@dataclass(frozen=True)
class DisplayPayload:
    """Rendered article ready to be shown to the reader."""

    header_topic: str
    header_category: str
    body_text: str

    @property
    def content(self) -> str:
        return f"【主題: {self.header_topic}】\n(カテゴリ: {self.header_category})\n\n{self.body_text}"

    @property
    def char_count(self) -> int:
        return len(self.content)


@dataclass
class ReadResult:
    """Outcome of one read operation."""

    status: FetchStatus
    attempts: int
    payload: DisplayPayload | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.status is FetchStatus.COMPLETE
