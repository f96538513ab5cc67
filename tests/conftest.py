"""Shared test fixtures for AI Code Reviewer."""

from __future__ import annotations

import copy
import json
from typing import Any
from unittest.mock import AsyncMock

import pytest

from ai_code_reviewer.models.review import LineError, LineNote, LineSuggestion, ReviewResult

REVIEW_PAYLOAD: dict[str, Any] = {
    "overallExplanation": "Prints a greeting and the sum of two numbers.",
    "errors": [
        {
            "lineNumber": 3,
            "errorDescription": "Missing closing parenthesis.",
            "suggestedFix": "print(a + b)",
            "fixExplanation": "Every opening parenthesis needs a closing one.",
        }
    ],
    "suggestions": [
        {
            "lineNumber": 1,
            "suggestion": 'print("Hello, world!")',
            "explanation": "Use the conventional greeting.",
        }
    ],
    "lineExplanations": [
        {"lineNumber": 3, "explanation": "Prints the sum."},
        {"lineNumber": 1, "explanation": "Prints a greeting."},
        {"lineNumber": 2, "explanation": "Assigns two numbers."},
    ],
    "output": "Hello\n3",
    "timeComplexity": "O(1)",
    "spaceComplexity": "O(1)",
}

SOURCE_TEXT = 'print("Hello")\na, b = 1, 2\nprint(a + b'


@pytest.fixture
def review_payload() -> dict[str, Any]:
    """Return a fresh copy of a schema-valid review payload."""
    return copy.deepcopy(REVIEW_PAYLOAD)


@pytest.fixture
def review_json(review_payload: dict[str, Any]) -> str:
    """Return the review payload serialized as the model would send it."""
    return json.dumps(review_payload)


@pytest.fixture
def source_text() -> str:
    """Return the three-line snippet the sample review belongs to."""
    return SOURCE_TEXT


@pytest.fixture
def review_result() -> ReviewResult:
    """Return the sample review as a decoded, sorted ReviewResult."""
    return ReviewResult(
        overall_explanation="Prints a greeting and the sum of two numbers.",
        errors=(
            LineError(
                line_number=3,
                error_description="Missing closing parenthesis.",
                suggested_fix="print(a + b)",
                fix_explanation="Every opening parenthesis needs a closing one.",
            ),
        ),
        suggestions=(
            LineSuggestion(
                line_number=1,
                suggestion='print("Hello, world!")',
                explanation="Use the conventional greeting.",
            ),
        ),
        line_explanations=(
            LineNote(1, "Prints a greeting."),
            LineNote(2, "Assigns two numbers."),
            LineNote(3, "Prints the sum."),
        ),
        output="Hello\n3",
        time_complexity="O(1)",
        space_complexity="O(1)",
    )


@pytest.fixture
def mock_analyzer(review_result: ReviewResult) -> AsyncMock:
    """Create a mock analyzer that returns the sample review."""
    analyzer = AsyncMock()
    analyzer.analyze.return_value = review_result
    analyzer.model_name = "test-model"
    return analyzer
