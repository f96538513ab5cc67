"""Utility functions and helpers.

- errors: Exception taxonomy
- security: Secret redaction before provider calls
- async_helpers: Timeouts around provider calls
- logging: Structured logging with secret sanitization
"""

from ai_code_reviewer.utils.errors import (
    AnalysisError,
    EmptyInputError,
    InputTooLongError,
    LineOutOfRangeError,
    NoReviewError,
    RateLimitError,
    ReviewerError,
    SchemaError,
    SecurityError,
    TimeoutError,
    TransportError,
    UnsupportedLanguageError,
)
from ai_code_reviewer.utils.logging import (
    LogFormat,
    LogLevel,
    bind_context,
    clear_context,
    configure_logging,
)
from ai_code_reviewer.utils.security import RedactionError, SecretRedactor

__all__ = [
    # Errors
    "AnalysisError",
    "EmptyInputError",
    "InputTooLongError",
    "LineOutOfRangeError",
    "NoReviewError",
    "RateLimitError",
    "ReviewerError",
    "SchemaError",
    "SecurityError",
    "TimeoutError",
    "TransportError",
    "UnsupportedLanguageError",
    # Logging
    "LogFormat",
    "LogLevel",
    "bind_context",
    "clear_context",
    "configure_logging",
    # Security
    "RedactionError",
    "SecretRedactor",
]
