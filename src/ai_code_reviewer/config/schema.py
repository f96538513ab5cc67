"""Pydantic models for configuration schema."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..models.language import DEFAULT_LANGUAGE_ID, is_supported_language


class AnthropicConfig(BaseModel):
    """Anthropic-specific configuration."""

    api_key: str
    model: str = "claude-3-5-sonnet-20241022"
    max_tokens: int = Field(8192, ge=256, le=64000)
    temperature: float = Field(0.2, ge=0.0, le=1.0)

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Reject blank API keys."""
        if not v.strip():
            raise ValueError("API key must not be empty")
        return v


class LLMConfig(BaseModel):
    """LLM provider configuration."""

    provider: Literal["anthropic"] = "anthropic"
    anthropic: AnthropicConfig | None = None


class ReviewConfig(BaseModel):
    """Review behaviour configuration."""

    default_language: str = DEFAULT_LANGUAGE_ID
    max_code_length: int = Field(20000, ge=1, le=200000, description="Max characters per review")
    timeout: float = Field(120.0, gt=0, le=600, description="Provider call timeout in seconds")

    @field_validator("default_language")
    @classmethod
    def validate_default_language(cls, v: str) -> str:
        """Validate the default language against the supported list."""
        if not is_supported_language(v):
            raise ValueError(f"Unsupported language: {v}")
        return v


class FileLoggingConfig(BaseModel):
    """File logging configuration."""

    enabled: bool = False
    path: Path = Path("ai-code-reviewer.log")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["json", "console"] = "console"
    file: FileLoggingConfig = FileLoggingConfig()


class ReviewerConfig(BaseSettings):
    """Root configuration for AI Code Reviewer."""

    llm: LLMConfig = LLMConfig()
    review: ReviewConfig = ReviewConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = SettingsConfigDict(
        env_prefix="AI_CODE_REVIEWER_",
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )
