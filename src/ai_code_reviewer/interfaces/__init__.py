"""Protocol definitions for pluggable adapters."""

from .analysis import CodeAnalyzer

__all__ = ["CodeAnalyzer"]
