"""Review session: owns the current state and talks to the analyzer.

The session is the only place where state is replaced. All transitions are
synchronous; the analyzer call in ``request_review`` is the single
suspension point. Each review carries a request token, so when two reviews
overlap only the most recent one may install its outcome.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

import structlog

from ai_code_reviewer.core import state as transitions
from ai_code_reviewer.core.state import ReviewState, initial_state
from ai_code_reviewer.utils.errors import (
    UNKNOWN_ERROR_MESSAGE,
    AnalysisError,
    EmptyInputError,
    InputTooLongError,
)
from ai_code_reviewer.utils.logging import LogEventNames

if TYPE_CHECKING:
    from ai_code_reviewer.config.schema import ReviewerConfig
    from ai_code_reviewer.interfaces.analysis import CodeAnalyzer

log = structlog.get_logger()


class ReviewSession:
    """One user's review workflow: edit, review, apply, reset.

    Example:
        session = ReviewSession(analyzer)
        session.set_source_text("print(1)\\nprint(2)")
        state = await session.request_review()
        if state.result and state.result.errors:
            error = state.result.errors[0]
            session.apply_fix(error.line_number, error.suggested_fix)
    """

    def __init__(
        self,
        analyzer: CodeAnalyzer,
        state: ReviewState | None = None,
        max_code_length: int | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            analyzer: Provider used to review code
            state: Starting state. Defaults to the sample snippet.
            max_code_length: Reject longer source texts without contacting
                the analyzer. None disables the check.
        """
        self._analyzer = analyzer
        self._state = state or initial_state()
        self._max_code_length = max_code_length
        self._log = log.bind(session_id=uuid.uuid4().hex[:12])
        self._log.debug(LogEventNames.SESSION_CREATED, language=self._state.language_id)

    @property
    def state(self) -> ReviewState:
        """The current state snapshot."""
        return self._state

    def set_source_text(self, text: str) -> ReviewState:
        """Replace the source text."""
        if self._state.is_reviewed:
            self._log.warning(
                LogEventNames.SOURCE_EDITED_AFTER_REVIEW,
                detail="line numbers in the current review may no longer match",
            )
        self._state = transitions.set_source_text(self._state, text)
        return self._state

    def set_language(self, language_id: str) -> ReviewState:
        """Select a language from the supported list.

        Raises:
            UnsupportedLanguageError: If language_id is not supported.
        """
        self._state = transitions.set_language(self._state, language_id)
        self._log.debug(LogEventNames.LANGUAGE_CHANGED, language=language_id)
        return self._state

    def _check_length(self) -> None:
        if self._max_code_length is None:
            return
        length = len(self._state.source_text)
        if length > self._max_code_length:
            raise InputTooLongError(length, self._max_code_length)

    async def request_review(self) -> ReviewState:
        """Review the current source text.

        Never raises for review failures: the outcome is either a reviewed
        state with a result, or an editing state with a message in
        ``error``. Loading is always cleared once this request settles.

        Returns:
            The state after the review settled.
        """
        try:
            self._check_length()
            self._state = transitions.begin_review(self._state)
        except (EmptyInputError, InputTooLongError) as e:
            self._log.info(LogEventNames.REVIEW_REJECTED, reason=str(e))
            self._state = transitions.reject_review(self._state, e.user_message)
            return self._state

        request_id = self._state.request_id
        self._log.info(
            LogEventNames.REVIEW_REQUESTED,
            request_id=request_id,
            language=self._state.language_id,
            code_chars=len(self._state.source_text),
            code_lines=len(self._state.lines),
        )

        try:
            result = await self._analyzer.analyze(
                self._state.source_text, self._state.language_id
            )
        except AnalysisError as e:
            self._log.warning(
                LogEventNames.REVIEW_FAILED,
                request_id=request_id,
                error_type=type(e).__name__,
                error=str(e),
            )
            self._settle(transitions.review_failed(self._state, request_id, e.user_message))
        except Exception as e:
            self._log.exception(LogEventNames.REVIEW_FAILED, request_id=request_id, error=str(e))
            self._settle(
                transitions.review_failed(self._state, request_id, str(e) or UNKNOWN_ERROR_MESSAGE)
            )
        else:
            self._settle(transitions.review_succeeded(self._state, request_id, result))
            if self._state.request_id == request_id:
                self._log.info(
                    LogEventNames.REVIEW_COMPLETED,
                    request_id=request_id,
                    errors=len(result.errors),
                    suggestions=len(result.suggestions),
                )
        finally:
            if self._state.request_id == request_id and self._state.loading:
                # Cancelled before an outcome was recorded
                self._state = transitions.review_failed(
                    self._state, request_id, "The review was cancelled."
                )

        return self._state

    def _settle(self, new_state: ReviewState) -> None:
        if new_state is self._state:
            self._log.info(
                LogEventNames.STALE_REVIEW_DISCARDED,
                latest_request_id=self._state.request_id,
            )
            return
        self._state = new_state

    def apply_fix(self, line_number: int, replacement: str) -> ReviewState:
        """Replace a line with an error's fix and mark the error fixed.

        Raises:
            NoReviewError: If there is no review result.
            LineOutOfRangeError: If the line does not exist.
        """
        self._state = transitions.apply_fix(self._state, line_number, replacement)
        self._log.info(LogEventNames.FIX_APPLIED, line_number=line_number)
        return self._state

    def apply_suggestion(self, line_number: int, replacement: str) -> ReviewState:
        """Replace a line with a suggestion and mark the suggestion applied.

        Raises:
            NoReviewError: If there is no review result.
            LineOutOfRangeError: If the line does not exist.
        """
        self._state = transitions.apply_suggestion(self._state, line_number, replacement)
        self._log.info(LogEventNames.SUGGESTION_APPLIED, line_number=line_number)
        return self._state

    def reset(self) -> ReviewState:
        """Discard the review and return to editing."""
        self._state = transitions.reset(self._state)
        self._log.info(LogEventNames.SESSION_RESET)
        return self._state


def create_session(config: ReviewerConfig) -> ReviewSession:
    """Factory function to create a ReviewSession with its analyzer.

    Args:
        config: Application configuration

    Returns:
        Session starting from the sample snippet in the configured language

    Raises:
        ValueError: If the provider configuration is missing
    """
    analyzer = _create_analyzer(config)
    return ReviewSession(
        analyzer,
        state=initial_state(language_id=config.review.default_language),
        max_code_length=config.review.max_code_length,
    )


def _create_analyzer(config: ReviewerConfig) -> CodeAnalyzer:
    """Create the analysis adapter selected in the configuration.

    Raises:
        ValueError: If provider is not supported or its config is missing
    """
    provider = config.llm.provider

    if provider == "anthropic":
        if not config.llm.anthropic:
            raise ValueError("Anthropic configuration required when provider is 'anthropic'")
        # Import here to avoid loading the SDK until it is needed
        from ai_code_reviewer.adapters.llm.anthropic import AnthropicReviewAdapter

        return AnthropicReviewAdapter(config.llm.anthropic, timeout=config.review.timeout)

    raise ValueError(f"Unsupported LLM provider: {provider}")
