"""Core business logic components.

This module exports the main business logic:
- ReviewState and its transitions: the review state store
- ReviewSession: owns the state and runs reviews against an analyzer
- editor_view / explanation_view: derive the two panes from a state
"""

from ai_code_reviewer.core.presentation import (
    EditorView,
    ExplanationView,
    LineDecoration,
    PanelStatus,
    decorate_line,
    editor_view,
    explanation_view,
)
from ai_code_reviewer.core.session import ReviewSession, create_session
from ai_code_reviewer.core.state import ReviewState, initial_state

__all__ = [
    "EditorView",
    "ExplanationView",
    "LineDecoration",
    "PanelStatus",
    "ReviewSession",
    "ReviewState",
    "create_session",
    "decorate_line",
    "editor_view",
    "explanation_view",
    "initial_state",
]
