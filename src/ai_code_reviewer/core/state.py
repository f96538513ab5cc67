"""Review state and its transitions.

ReviewState is immutable. Every user action is a plain function that takes
the current state and returns the next one, so the session only ever swaps
one reference and the views can be derived from any state snapshot.

Line numbers in a review are a foreign key into the text that was reviewed.
Editing the text afterwards does not invalidate them; the annotations may
then point at shifted lines.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from ai_code_reviewer.models.language import (
    DEFAULT_LANGUAGE_ID,
    DEFAULT_SOURCE_TEXT,
    is_supported_language,
)
from ai_code_reviewer.models.review import ReviewMode, ReviewResult
from ai_code_reviewer.utils.errors import (
    EmptyInputError,
    LineOutOfRangeError,
    NoReviewError,
    UnsupportedLanguageError,
)

LINE_SEPARATOR = "\n"


@dataclass(frozen=True)
class ReviewState:
    """Everything the two views are derived from."""

    source_text: str
    language_id: str
    result: ReviewResult | None = None
    loading: bool = False
    error: str | None = None
    mode: ReviewMode = ReviewMode.EDITING
    request_id: int = 0  # Token of the most recent review request

    @property
    def lines(self) -> list[str]:
        """Source text split into lines; line N is ``lines[N - 1]``."""
        return self.source_text.split(LINE_SEPARATOR)

    @property
    def is_reviewed(self) -> bool:
        return self.mode is ReviewMode.REVIEWED

    @property
    def is_blank(self) -> bool:
        return not self.source_text.strip()


def initial_state(
    source_text: str = DEFAULT_SOURCE_TEXT,
    language_id: str = DEFAULT_LANGUAGE_ID,
) -> ReviewState:
    """Create the state a new session starts from.

    Raises:
        UnsupportedLanguageError: If language_id is not supported.
    """
    if not is_supported_language(language_id):
        raise UnsupportedLanguageError(language_id)
    return ReviewState(source_text=source_text, language_id=language_id)


def set_source_text(state: ReviewState, text: str) -> ReviewState:
    """Replace the whole source text. The review, if any, is kept as is."""
    return replace(state, source_text=text)


def set_language(state: ReviewState, language_id: str) -> ReviewState:
    """Select another language without touching the current review.

    Raises:
        UnsupportedLanguageError: If language_id is not supported.
    """
    if not is_supported_language(language_id):
        raise UnsupportedLanguageError(language_id)
    return replace(state, language_id=language_id)


def begin_review(state: ReviewState) -> ReviewState:
    """Start a review request.

    Clears the previous result and error, sets loading and issues a new
    request token.

    Raises:
        EmptyInputError: If the source text is blank.
    """
    if state.is_blank:
        raise EmptyInputError()
    return replace(
        state,
        loading=True,
        error=None,
        result=None,
        request_id=state.request_id + 1,
    )


def reject_review(state: ReviewState, message: str) -> ReviewState:
    """Record why a review could not be started."""
    return replace(state, error=message)


def review_succeeded(state: ReviewState, request_id: int, result: ReviewResult) -> ReviewState:
    """Install a review result. Outcomes of superseded requests are ignored."""
    if request_id != state.request_id:
        return state
    return replace(
        state,
        result=result,
        loading=False,
        error=None,
        mode=ReviewMode.REVIEWED,
    )


def review_failed(state: ReviewState, request_id: int, message: str) -> ReviewState:
    """Record a failed review. Outcomes of superseded requests are ignored."""
    if request_id != state.request_id:
        return state
    return replace(
        state,
        result=None,
        loading=False,
        error=message,
        mode=ReviewMode.EDITING,
    )


def replace_line(text: str, line_number: int, replacement: str) -> str:
    """Replace line ``line_number`` (1-indexed) of text with replacement, verbatim.

    Raises:
        LineOutOfRangeError: If the line does not exist.
    """
    lines = text.split(LINE_SEPARATOR)
    if not 1 <= line_number <= len(lines):
        raise LineOutOfRangeError(line_number, len(lines))
    lines[line_number - 1] = replacement
    return LINE_SEPARATOR.join(lines)


def apply_fix(state: ReviewState, line_number: int, replacement: str) -> ReviewState:
    """Apply an error fix to one line and mark that error fixed.

    Only the first error reported for the line is marked.

    Raises:
        NoReviewError: If there is no review result.
        LineOutOfRangeError: If the line does not exist; state is unchanged.
    """
    if state.result is None:
        raise NoReviewError("Cannot apply a fix without a review")

    source_text = replace_line(state.source_text, line_number, replacement)

    errors = list(state.result.errors)
    for index, error in enumerate(errors):
        if error.line_number == line_number:
            errors[index] = replace(error, is_fixed=True)
            break

    return replace(
        state,
        source_text=source_text,
        result=replace(state.result, errors=tuple(errors)),
    )


def apply_suggestion(state: ReviewState, line_number: int, replacement: str) -> ReviewState:
    """Apply a suggestion to one line and mark that suggestion applied.

    Only the first suggestion reported for the line is marked.

    Raises:
        NoReviewError: If there is no review result.
        LineOutOfRangeError: If the line does not exist; state is unchanged.
    """
    if state.result is None:
        raise NoReviewError("Cannot apply a suggestion without a review")

    source_text = replace_line(state.source_text, line_number, replacement)

    suggestions = list(state.result.suggestions)
    for index, suggestion in enumerate(suggestions):
        if suggestion.line_number == line_number:
            suggestions[index] = replace(suggestion, is_applied=True)
            break

    return replace(
        state,
        source_text=source_text,
        result=replace(state.result, suggestions=tuple(suggestions)),
    )


def reset(state: ReviewState) -> ReviewState:
    """Return to editing. Text changes made by fixes and suggestions stay.

    A review still in flight is abandoned: its outcome will be ignored.
    """
    request_id = state.request_id + 1 if state.loading else state.request_id
    return replace(
        state,
        result=None,
        error=None,
        loading=False,
        mode=ReviewMode.EDITING,
        request_id=request_id,
    )
