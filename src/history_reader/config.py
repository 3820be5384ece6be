"""Configuration loading for History Reader."""

from enum import StrEnum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

WIKIPEDIA_API_URL = "https://ja.wikipedia.org/w/api.php"

# Top-level history categories used as starting points for the category walk
SEED_CATEGORIES: tuple[str, ...] = (
    "日本の歴史",
    "日本史の時代",
    "縄文時代",
    "弥生時代",
    "古墳時代",
    "飛鳥時代",
    "奈良時代",
    "平安時代",
    "鎌倉時代",
    "室町時代",
    "戦国時代 (日本)",
    "安土桃山時代",
    "江戸時代",
    "幕末",
    "明治時代",
    "大正時代",
    "昭和時代",
    "日本の戦国武将",
    "日本の城",
    "日本の戦争",
    "日本の歴史的事件",
    "日本の古代史",
    "日本の中世史",
    "日本の近世史",
    "日本の近代史",
    "日本の文化史",
    "日本の経済史",
    "日本の宗教史",
    "日本の地方史",
    "琉球王国",
)

# Subcategories whose name contains any of these are administrative, not topical
BLOCKED_MARKERS: tuple[str, ...] = (
    "スタブ",
    "画像",
    "テンプレート",
    "Wikipedia",
    "一覧",
    "のカテゴリ",
)

SORT_KEY_ALPHABET = (
    "あいうえおかきくけこさしすせそたちつてとなにぬねのはひふへほまみむめもやゆよらりるれろわ"
    "ABCDE"
)

FALLBACK_TOPIC = "日本の歴史"
FALLBACK_CATEGORY = "最終フォールバック"


class EmptyFilterPolicy(StrEnum):
    """What the category walk does when every subcategory is blocked."""

    KEEP_CURRENT = "keep_current"
    USE_UNFILTERED = "use_unfiltered"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_prefix="HISTORY_READER_", frozen=True)

    # MediaWiki API settings
    api_url: str = Field(default=WIKIPEDIA_API_URL, description="MediaWiki API endpoint")
    request_timeout: float = Field(default=15.0, description="Per-request timeout in seconds")
    user_agent: str = Field(
        default="history-reader/0.1 (https://github.com/history-reader)",
        description="User-Agent sent to the MediaWiki API",
    )

    # Topic selection settings
    seed_categories: tuple[str, ...] = Field(default=SEED_CATEGORIES)
    blocked_markers: tuple[str, ...] = Field(default=BLOCKED_MARKERS)
    sort_key_alphabet: str = Field(default=SORT_KEY_ALPHABET)
    descent_depth: int = Field(default=2, description="Subcategory levels to descend")
    subcategory_limit: int = Field(default=40, description="cmlimit for subcategory listings")
    article_limit: int = Field(default=100, description="cmlimit for article listings")
    empty_filter_policy: EmptyFilterPolicy = Field(default=EmptyFilterPolicy.KEEP_CURRENT)

    # Retry settings
    max_retries: int = Field(default=3, description="Retries before the fallback topic")
    retry_delay: float = Field(default=0.3, description="Fixed delay between attempts in seconds")
    fallback_topic: str = Field(default=FALLBACK_TOPIC)
    fallback_category: str = Field(default=FALLBACK_CATEGORY)

    # Application settings
    preferences_path: Path = Field(
        default=Path.home() / ".history_reader" / "preferences.json",
        description="Where font preferences are stored",
    )
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("request_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate the request timeout is positive."""
        if v <= 0:
            raise ValueError("HISTORY_READER_REQUEST_TIMEOUT must be greater than zero.")
        return v

    @field_validator("descent_depth", "max_retries")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"value must be non-negative, got {v}")
        return v

    @field_validator("retry_delay")
    @classmethod
    def validate_retry_delay(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"retry delay must be non-negative, got {v}")
        return v

    @field_validator("subcategory_limit", "article_limit")
    @classmethod
    def validate_limit(cls, v: int) -> int:
        """MediaWiki caps anonymous listings at 500 members."""
        if not 1 <= v <= 500:
            raise ValueError(f"listing limit must be between 1 and 500, got {v}")
        return v

    @field_validator("seed_categories")
    @classmethod
    def validate_seed_categories(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Validate the seed catalog has at least one usable category."""
        cleaned = tuple(c.strip() for c in v if c and c.strip())
        if not cleaned:
            raise ValueError(
                "HISTORY_READER_SEED_CATEGORIES must contain at least one category."
            )
        return cleaned

    @field_validator("sort_key_alphabet")
    @classmethod
    def validate_alphabet(cls, v: str) -> str:
        if not v:
            raise ValueError("HISTORY_READER_SORT_KEY_ALPHABET must not be empty.")
        return v

    @field_validator("fallback_topic")
    @classmethod
    def validate_fallback_topic(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError(
                "HISTORY_READER_FALLBACK_TOPIC is required. "
                "Set it to the title of an article that is known to exist."
            )
        return v.strip()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
