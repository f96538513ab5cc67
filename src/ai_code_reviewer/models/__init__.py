"""Data models and transfer objects."""

from .language import (
    DEFAULT_LANGUAGE_ID,
    DEFAULT_SOURCE_TEXT,
    SUPPORTED_LANGUAGES,
    ProgrammingLanguage,
    get_language,
    is_supported_language,
)
from .review import (
    LineError,
    LineNote,
    LineSuggestion,
    ReviewMode,
    ReviewResult,
    sort_by_line_number,
)

__all__ = [
    # Review models
    "LineError",
    "LineNote",
    "LineSuggestion",
    "ReviewMode",
    "ReviewResult",
    "sort_by_line_number",
    # Languages
    "DEFAULT_LANGUAGE_ID",
    "DEFAULT_SOURCE_TEXT",
    "SUPPORTED_LANGUAGES",
    "ProgrammingLanguage",
    "get_language",
    "is_supported_language",
]
