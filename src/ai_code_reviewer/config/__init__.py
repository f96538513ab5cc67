"""Configuration loading and validation."""

from .loader import load_config
from .schema import (
    AnthropicConfig,
    FileLoggingConfig,
    LLMConfig,
    LoggingConfig,
    ReviewConfig,
    ReviewerConfig,
)

__all__ = [
    # Loader
    "load_config",
    # Root config
    "ReviewerConfig",
    # Sections
    "LLMConfig",
    "ReviewConfig",
    "LoggingConfig",
    "FileLoggingConfig",
    # Provider-specific configs
    "AnthropicConfig",
]
