"""Abstract interface for code analysis providers."""

from typing import Protocol

from ..models.review import ReviewResult


class CodeAnalyzer(Protocol):
    """Abstract interface for the external code analysis call.

    Implementations are stateless between calls and safe to invoke
    repeatedly. Checking for blank input is the caller's job.
    """

    async def analyze(self, source_text: str, language_id: str) -> ReviewResult:
        """
        Review a code snippet.

        Args:
            source_text: The code to review, lines separated by newlines
            language_id: Identifier of the snippet's language

        Returns:
            Review whose errors, suggestions and line explanations are
            sorted ascending by line number

        Raises:
            TransportError: If the provider call fails
            SchemaError: If the response does not match the review schema
            SecurityError: If the code could not be redacted
        """
        ...

    @property
    def model_name(self) -> str:
        """
        Return the model identifier being used.

        Examples:
            - "claude-3-5-sonnet-20241022"
        """
        ...
