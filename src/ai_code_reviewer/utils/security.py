"""Secret redaction for code sent to the analysis provider.

Pasted snippets regularly carry hard-coded credentials. Everything that
leaves the process goes through SecretRedactor first, and redaction is
fail-closed: if a pattern cannot be applied the call is blocked instead of
sending the raw text.

Patterns never match across a newline, so redaction keeps every line in
place and line numbers in the review stay aligned with the source text.
Only literal credential formats are matched. Code that merely names a
password or token variable is sent unchanged.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import structlog

from ai_code_reviewer.utils.errors import SecurityError

if TYPE_CHECKING:
    from collections.abc import Sequence

log = structlog.get_logger()


class RedactionError(SecurityError):
    """Raised when secret redaction fails."""


class SecretRedactor:
    """Detects and redacts secrets from text.

    Usage:
        redactor = SecretRedactor()
        safe_code = redactor.redact(source_text)

    Attributes:
        placeholder: The string to replace secrets with (default: "[REDACTED]").
    """

    DEFAULT_PATTERNS: tuple[tuple[str, str], ...] = (
        (r"sk-ant-[\w-]{40,}", "Anthropic API key"),
        (r"sk-proj-[a-zA-Z0-9]{20,}", "OpenAI project API key"),
        (r"sk-[a-zA-Z0-9]{48}", "OpenAI legacy API key"),
        (r"AIza[0-9A-Za-z\-_]{35}", "Google API key"),
        (r"ghp_[a-zA-Z0-9]{36}", "GitHub PAT"),
        (r"github_pat_[a-zA-Z0-9_]{22,}", "GitHub fine-grained PAT"),
        (r"xox[baprs]-[\w-]+", "Slack token"),
        (r"AKIA[0-9A-Z]{16}", "AWS access key ID"),
        (r"sk_live_[a-zA-Z0-9]{24,}", "Stripe secret key"),
        (
            r"(?i)(postgres(?:ql)?|mysql|mongodb(?:\+srv)?|redis|amqp)://"
            r"[^:\s\"']+:[^@\s\"']+@[^\s\"'`]+",
            "Database connection string",
        ),
        (r"-----BEGIN (?:RSA |EC |DSA |OPENSSH )?PRIVATE KEY-----", "Private key header"),
        (r"eyJ[a-zA-Z0-9_-]*\.eyJ[a-zA-Z0-9_-]*\.[a-zA-Z0-9_-]*", "JWT token"),
    )

    def __init__(
        self,
        placeholder: str = "[REDACTED]",
        custom_patterns: Sequence[tuple[str, str]] | None = None,
    ) -> None:
        """Initialize the SecretRedactor.

        Args:
            placeholder: String to replace detected secrets with.
            custom_patterns: Additional (pattern, name) tuples to detect.

        Raises:
            RedactionError: If any pattern fails to compile.
        """
        if "\n" in placeholder:
            raise RedactionError("Placeholder must not contain a newline")
        self.placeholder = placeholder
        self._pattern_names: dict[re.Pattern[str], str] = {}

        all_patterns = list(self.DEFAULT_PATTERNS)
        if custom_patterns:
            all_patterns.extend(custom_patterns)

        for pattern_str, name in all_patterns:
            try:
                compiled = re.compile(pattern_str)
            except re.error as e:
                log.error("pattern_compilation_failed", pattern=pattern_str, error=str(e))
                raise RedactionError(f"Failed to compile secret pattern '{name}': {e}") from e
            self._pattern_names[compiled] = name

    @property
    def patterns(self) -> list[re.Pattern[str]]:
        """Return the list of compiled patterns."""
        return list(self._pattern_names)

    def redact(self, text: str) -> str:
        """Redact all secrets from the given text.

        Args:
            text: The text to scan and redact secrets from.

        Returns:
            The text with all detected secrets replaced with the placeholder.

        Raises:
            RedactionError: If redaction fails or would change the line count.
        """
        if not text:
            return text

        try:
            result = text
            for pattern in self._pattern_names:
                result = pattern.sub(self.placeholder, result)
        except Exception as e:
            log.error("redaction_failed", error=str(e))
            raise RedactionError(f"Redaction failed: {e}") from e

        if result.count("\n") != text.count("\n"):
            # A custom pattern swallowed a line break
            log.error("redaction_changed_line_count")
            raise RedactionError("Redaction changed the number of lines")
        return result

    def has_secrets(self, text: str) -> bool:
        """Check if text contains any secrets.

        Raises:
            RedactionError: If checking fails for any reason.
        """
        if not text:
            return False

        try:
            return any(pattern.search(text) for pattern in self._pattern_names)
        except Exception as e:
            log.error("has_secrets_check_failed", error=str(e))
            raise RedactionError(f"Secret check failed: {e}") from e


def mask_config_value(key: str, value: str) -> str:
    """Mask sensitive config values for logging.

    Args:
        key: The configuration key name.
        value: The configuration value.

    Returns:
        The masked value if the key indicates sensitivity, otherwise the original.
    """
    sensitive_keys = {"token", "key", "secret", "password", "credential"}

    if any(s in key.lower() for s in sensitive_keys):
        if len(value) > 8:
            return f"{value[:4]}...{value[-4:]}"
        return "***"

    return value
