"""Pydantic models for API requests and responses."""

from pydantic import BaseModel, Field

from history_reader.models import ReadResult


class ArticleResponse(BaseModel):
    """Response model for the article endpoint."""

    status: str = Field(description="Terminal status of the read: complete or error")
    attempts: int = Field(description="Number of attempts made, fallback included")
    topic: str | None = Field(default=None, description="Title of the article read")
    category: str | None = Field(default=None, description="Category the article was drawn from")
    content: str | None = Field(default=None, description="Header block followed by the article text")
    char_count: int = Field(default=0, description="Length of content in characters")
    error: str | None = Field(default=None, description="User-facing error message")

    @classmethod
    def from_result(cls, result: ReadResult) -> "ArticleResponse":
        """Build the response from a ReadResult."""
        payload = result.payload
        if payload is None:
            return cls(status=str(result.status), attempts=result.attempts, error=result.error)
        return cls(
            status=str(result.status),
            attempts=result.attempts,
            topic=payload.header_topic,
            category=payload.header_category,
            content=payload.content,
            char_count=payload.char_count,
        )


class StatusResponse(BaseModel):
    """Response model for the status endpoint."""

    status: str = Field(description="idle, fetching, complete or error")
    message: str = Field(description="Progress or error message")


class PreferencesModel(BaseModel):
    """Font preferences as exchanged with the reading view."""

    font_size: int = Field(description="Font size in pixels (8-50)")
    font_family: str = Field(description="CSS font family")


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str = Field(description="Health status")
    version: str = Field(description="Application version")
