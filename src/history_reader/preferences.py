"""Font preferences for the reading view, persisted as a local JSON file."""

import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError, field_validator

from history_reader.utils.logging import get_logger

logger = get_logger(__name__)

FONT_SIZE_MIN = 8
FONT_SIZE_MAX = 50
FONT_SIZE_DEFAULT = 14
FONT_FAMILY_DEFAULT = "serif"

# Leading integer only: "14.5" -> 14, "20px" -> 20
LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def validate_font_size(value: Any) -> int:
    """Return the font size as an int, or the default if it is unusable."""
    if isinstance(value, bool) or value is None:
        return FONT_SIZE_DEFAULT
    match = LEADING_INT.match(str(value))
    if not match:
        return FONT_SIZE_DEFAULT
    size = int(match.group(1))
    if size < FONT_SIZE_MIN or size > FONT_SIZE_MAX:
        return FONT_SIZE_DEFAULT
    return size


class DisplayPreferences(BaseModel):
    """Font settings for the article text."""

    font_size: int = FONT_SIZE_DEFAULT
    font_family: str = FONT_FAMILY_DEFAULT

    @field_validator("font_size", mode="before")
    @classmethod
    def coerce_font_size(cls, v: Any) -> int:
        return validate_font_size(v)

    @field_validator("font_family", mode="before")
    @classmethod
    def coerce_font_family(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            return FONT_FAMILY_DEFAULT
        return v.strip()


class PreferenceStore:
    """Loads and saves DisplayPreferences at a fixed path."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> DisplayPreferences:
        """Load saved preferences, falling back to defaults if none are usable."""
        if not self._path.exists():
            return DisplayPreferences()

        try:
            return DisplayPreferences.model_validate_json(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            logger.warning("Ignoring unreadable preferences", path=str(self._path), error=str(e))
            return DisplayPreferences()

    def save(self, preferences: DisplayPreferences) -> None:
        """Write preferences to disk, creating the parent directory if needed."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(preferences.model_dump_json(indent=2), encoding="utf-8")
        logger.info(
            "Preferences saved",
            font_size=preferences.font_size,
            font_family=preferences.font_family,
        )
