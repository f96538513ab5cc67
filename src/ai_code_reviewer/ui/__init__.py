"""Text rendering of the review views."""

from ai_code_reviewer.ui.console import render_editor, render_explanation, render_languages

__all__ = ["render_editor", "render_explanation", "render_languages"]
