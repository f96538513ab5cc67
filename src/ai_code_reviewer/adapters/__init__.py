"""Concrete implementations of provider interfaces."""

from .llm.anthropic import AnthropicReviewAdapter

__all__ = [
    "AnthropicReviewAdapter",
]
