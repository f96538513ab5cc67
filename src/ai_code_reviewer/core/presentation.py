"""Derive per-line decorations and the two review views from a state.

Nothing here mutates state. Errors always take precedence over
suggestions: a line carrying both is shown in its error state in the
editor, and the explanation view only details a suggestion when the line
has no error.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ai_code_reviewer.core.state import ReviewState
from ai_code_reviewer.models.review import LineError, LineNote, LineSuggestion, ReviewResult

NO_OUTPUT_MESSAGE = "No output captured."


class LineDecoration(Enum):
    """Visual status of one source line."""

    PLAIN = "plain"
    UNFIXED_ERROR = "unfixed_error"
    FIXED_ERROR = "fixed_error"
    OPEN_SUGGESTION = "open_suggestion"
    APPLIED_SUGGESTION = "applied_suggestion"


class PanelStatus(Enum):
    """What the explanation panel is showing."""

    LOADING = "loading"
    ERROR = "error"
    EMPTY = "empty"
    REVIEWED = "reviewed"


@dataclass(frozen=True)
class EditorLine:
    """One line of the editor view."""

    number: int
    text: str
    decoration: LineDecoration


@dataclass(frozen=True)
class EditorView:
    """The editor pane: raw text while editing, decorated lines once reviewed."""

    language_id: str
    editable: bool
    lines: tuple[EditorLine, ...]


@dataclass(frozen=True)
class ExplanationLine:
    """One line of the annotated explanation view."""

    number: int
    text: str
    decoration: LineDecoration
    note: LineNote | None
    error: LineError | None
    suggestion: LineSuggestion | None  # Only set when the line has no error

    @property
    def can_apply_fix(self) -> bool:
        return self.error is not None and not self.error.is_fixed

    @property
    def can_use_suggestion(self) -> bool:
        return self.suggestion is not None and not self.suggestion.is_applied


@dataclass(frozen=True)
class ExplanationView:
    """The explanation pane. Fields other than ``status`` depend on it."""

    status: PanelStatus
    error: str | None = None
    summary: str = ""
    all_clear: bool = False
    lines: tuple[ExplanationLine, ...] = ()
    output: str = ""
    time_complexity: str = ""
    space_complexity: str = ""


def find_error(result: ReviewResult, line_number: int) -> LineError | None:
    """First error reported for a line."""
    return next((e for e in result.errors if e.line_number == line_number), None)


def find_suggestion(result: ReviewResult, line_number: int) -> LineSuggestion | None:
    """First suggestion reported for a line."""
    return next((s for s in result.suggestions if s.line_number == line_number), None)


def find_note(result: ReviewResult, line_number: int) -> LineNote | None:
    """First explanation reported for a line."""
    return next((n for n in result.line_explanations if n.line_number == line_number), None)


def decorate_line(result: ReviewResult | None, line_number: int) -> LineDecoration:
    """Classify a line; error status is checked before suggestion status."""
    if result is None:
        return LineDecoration.PLAIN

    error = find_error(result, line_number)
    if error is not None:
        return LineDecoration.FIXED_ERROR if error.is_fixed else LineDecoration.UNFIXED_ERROR

    suggestion = find_suggestion(result, line_number)
    if suggestion is not None:
        if suggestion.is_applied:
            return LineDecoration.APPLIED_SUGGESTION
        return LineDecoration.OPEN_SUGGESTION

    return LineDecoration.PLAIN


def editor_view(state: ReviewState) -> EditorView:
    """Build the editor pane for a state."""
    result = state.result if state.is_reviewed else None
    lines = tuple(
        EditorLine(number=number, text=text, decoration=decorate_line(result, number))
        for number, text in enumerate(state.lines, start=1)
    )
    return EditorView(language_id=state.language_id, editable=not state.is_reviewed, lines=lines)


def explanation_view(state: ReviewState) -> ExplanationView:
    """Build the explanation pane for a state.

    Loading wins over an error message, which wins over an empty panel.
    """
    if state.loading:
        return ExplanationView(status=PanelStatus.LOADING)
    if state.error:
        return ExplanationView(status=PanelStatus.ERROR, error=state.error)

    result = state.result
    if result is None:
        return ExplanationView(status=PanelStatus.EMPTY)

    lines = []
    for number, text in enumerate(state.lines, start=1):
        error = find_error(result, number)
        lines.append(
            ExplanationLine(
                number=number,
                text=text,
                decoration=decorate_line(result, number),
                note=find_note(result, number),
                error=error,
                suggestion=find_suggestion(result, number) if error is None else None,
            )
        )

    return ExplanationView(
        status=PanelStatus.REVIEWED,
        summary=result.overall_explanation,
        all_clear=not result.has_findings,
        lines=tuple(lines),
        output=result.output or NO_OUTPUT_MESSAGE,
        time_complexity=result.time_complexity,
        space_complexity=result.space_complexity,
    )
