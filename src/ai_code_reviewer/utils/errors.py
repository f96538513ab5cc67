"""Exception taxonomy for the code reviewer.

Every failure a user can trigger is a ReviewerError. The review session
collapses them into a single error slot using ``user_message``; the full
exception text only ever reaches the logs.
"""

from __future__ import annotations

EMPTY_INPUT_MESSAGE = "Please enter some code to review."
INVALID_REVIEW_MESSAGE = (
    "Failed to get a valid review from the AI. The response may be malformed."
)
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."


class ReviewerError(Exception):
    """Base exception for all code reviewer errors."""

    @property
    def user_message(self) -> str:
        """Message suitable for the error slot of the explanation panel."""
        return str(self) or UNKNOWN_ERROR_MESSAGE


class EmptyInputError(ReviewerError):
    """The source text is empty or whitespace only."""

    def __init__(self, message: str = EMPTY_INPUT_MESSAGE) -> None:
        super().__init__(message)


class AnalysisError(ReviewerError):
    """The analysis provider did not produce a review."""


class TransportError(AnalysisError):
    """The call to the analysis provider failed."""


class RateLimitError(TransportError):
    """Provider rate limit exceeded.

    Attributes:
        retry_after: Number of seconds to wait before retrying, if known.
    """

    def __init__(self, message: str, retry_after: int | None = None) -> None:
        super().__init__(message)
        self.retry_after = retry_after


class TimeoutError(TransportError):
    """The provider call timed out."""


class SchemaError(AnalysisError):
    """The provider response did not match the review schema."""

    @property
    def user_message(self) -> str:
        return INVALID_REVIEW_MESSAGE


class SecurityError(AnalysisError):
    """Security violation detected before contacting the provider."""


class NoReviewError(ReviewerError):
    """A fix or suggestion was applied without a review result."""


class LineOutOfRangeError(ReviewerError):
    """A line number does not address a line of the current source text.

    Attributes:
        line_number: The requested 1-indexed line.
        line_count: Number of lines in the source text.
    """

    def __init__(self, line_number: int, line_count: int) -> None:
        super().__init__(f"Line {line_number} is out of range (source has {line_count} lines)")
        self.line_number = line_number
        self.line_count = line_count


class UnsupportedLanguageError(ReviewerError):
    """The language id is not in the supported list."""

    def __init__(self, language_id: str) -> None:
        super().__init__(f"Unsupported language: {language_id}")
        self.language_id = language_id


class InputTooLongError(ReviewerError):
    """The source text exceeds the configured review size."""

    def __init__(self, length: int, limit: int) -> None:
        super().__init__(f"Code is too long to review ({length} characters, limit is {limit})")
        self.length = length
        self.limit = limit
