"""Plain-text rendering of the editor and explanation views."""

from __future__ import annotations

from ai_code_reviewer.core.presentation import (
    EditorView,
    ExplanationLine,
    ExplanationView,
    LineDecoration,
    PanelStatus,
)
from ai_code_reviewer.models.language import SUPPORTED_LANGUAGES, get_language

# Gutter markers, one per decoration
DECORATION_MARKERS: dict[LineDecoration, str] = {
    LineDecoration.PLAIN: " ",
    LineDecoration.UNFIXED_ERROR: "!",
    LineDecoration.FIXED_ERROR: "+",
    LineDecoration.OPEN_SUGGESTION: "~",
    LineDecoration.APPLIED_SUGGESTION: "*",
}

INDENT = "      "


def render_languages() -> str:
    """List the supported languages, one ``id  name`` pair per line."""
    width = max(len(language.id) for language in SUPPORTED_LANGUAGES)
    return "\n".join(f"{lang.id.ljust(width)}  {lang.name}" for lang in SUPPORTED_LANGUAGES)


def render_editor(view: EditorView) -> str:
    """Render the editor pane with line numbers and decoration markers."""
    language = get_language(view.language_id)
    header = f"== Code ({language.name if language else view.language_id}) =="
    width = len(str(len(view.lines)))
    body = [
        f"{DECORATION_MARKERS[line.decoration]} {str(line.number).rjust(width)} | {line.text}"
        for line in view.lines
    ]
    return "\n".join([header, *body])


def _render_line(line: ExplanationLine, width: int) -> list[str]:
    out = [f"{str(line.number).rjust(width)} | {line.text}"]
    if line.note:
        out.append(f"{INDENT}{line.note.explanation}")

    if line.error:
        status = " (Fixed)" if line.error.is_fixed else ""
        out.append(f"{INDENT}Issue{status}: {line.error.error_description}")
        out.append(f"{INDENT}Explanation: {line.error.fix_explanation}")
        if line.can_apply_fix:
            out.append(f"{INDENT}[Apply Fix] {line.error.suggested_fix}")
    elif line.suggestion:
        status = " (Applied)" if line.suggestion.is_applied else ""
        out.append(f"{INDENT}Suggestion{status}")
        out.append(f"{INDENT}Explanation: {line.suggestion.explanation}")
        if line.can_use_suggestion:
            out.append(f"{INDENT}[Use Suggestion] {line.suggestion.suggestion}")
    return out


def render_explanation(view: ExplanationView) -> str:
    """Render the explanation pane for any panel status."""
    if view.status is PanelStatus.LOADING:
        return "AI is reviewing your code...\nThis may take a few moments."
    if view.status is PanelStatus.ERROR:
        return f"An Error Occurred\n{view.error}"
    if view.status is PanelStatus.EMPTY:
        return "AI Analysis Panel\nYour code's analysis will appear here after review."

    out = ["== Code Summary ==", view.summary, "", "== Line-by-Line Analysis =="]
    if view.all_clear:
        out.append("Great job! No errors or suggestions.")

    width = len(str(len(view.lines)))
    for line in view.lines:
        out.extend(_render_line(line, width))

    out.extend(
        [
            "",
            "== Output ==",
            view.output,
            "",
            f"Time Complexity:  {view.time_complexity}",
            f"Space Complexity: {view.space_complexity}",
        ]
    )
    return "\n".join(out)
