"""Data models for code review results."""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, TypeVar


class ReviewMode(Enum):
    """Which view the session is showing."""

    EDITING = "editing"
    REVIEWED = "reviewed"


@dataclass(frozen=True)
class LineError:
    """A bug or syntax error flagged on a single line."""

    line_number: int  # 1-indexed into the reviewed snapshot
    error_description: str
    suggested_fix: str  # Replacement text for the whole line
    fix_explanation: str
    is_fixed: bool = False


@dataclass(frozen=True)
class LineSuggestion:
    """An optional improvement for a line that already works."""

    line_number: int
    suggestion: str  # Replacement text for the whole line
    explanation: str
    is_applied: bool = False


@dataclass(frozen=True)
class LineNote:
    """A one-line explanation of what a line does."""

    line_number: int
    explanation: str


@dataclass(frozen=True)
class ReviewResult:
    """Structured critique of one source-text snapshot."""

    overall_explanation: str
    errors: tuple[LineError, ...]
    suggestions: tuple[LineSuggestion, ...]
    line_explanations: tuple[LineNote, ...]
    output: str  # Predicted standard output
    time_complexity: str
    space_complexity: str

    @property
    def has_findings(self) -> bool:
        """Whether the review flagged any error or suggestion."""
        return bool(self.errors or self.suggestions)

    @property
    def open_errors(self) -> tuple[LineError, ...]:
        """Errors whose fix has not been applied yet."""
        return tuple(error for error in self.errors if not error.is_fixed)

    @property
    def open_suggestions(self) -> tuple[LineSuggestion, ...]:
        """Suggestions that have not been used yet."""
        return tuple(s for s in self.suggestions if not s.is_applied)


class _LineAddressed(Protocol):
    @property
    def line_number(self) -> int: ...


L = TypeVar("L", bound=_LineAddressed)


def sort_by_line_number(items: Iterable[L]) -> tuple[L, ...]:
    """Order annotations ascending by line number.

    The sort is stable, so annotations on the same line keep the order the
    model returned them in, and sorting an already sorted sequence changes
    nothing.
    """
    return tuple(sorted(items, key=lambda item: item.line_number))
