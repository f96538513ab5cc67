"""AI Code Reviewer - line-by-line code review backed by an LLM."""

from ai_code_reviewer._version import __version__

__all__ = ["__version__"]
