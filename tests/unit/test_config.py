"""Tests for configuration loading and validation."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from ai_code_reviewer.config.loader import load_config, substitute_env_vars, validate_config
from ai_code_reviewer.config.schema import (
    AnthropicConfig,
    LLMConfig,
    LoggingConfig,
    ReviewConfig,
    ReviewerConfig,
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep real environment variables and .env files out of these tests."""
    for name in list(os.environ):
        if name.startswith("AI_CODE_REVIEWER_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


class TestSubstituteEnvVars:
    """Test environment variable substitution."""

    def test_substitute_single_var(self):
        """Test substituting a single variable."""
        with patch.dict(os.environ, {"TEST_VAR": "test_value"}):
            assert substitute_env_vars("key: ${TEST_VAR}") == "key: test_value"

    def test_substitute_multiple_vars(self):
        """Test substituting multiple variables."""
        with patch.dict(os.environ, {"VAR1": "value1", "VAR2": "value2"}):
            assert substitute_env_vars("${VAR1} and ${VAR2}") == "value1 and value2"

    def test_missing_env_var_raises(self):
        """Test that missing env var raises ValueError."""
        with pytest.raises(ValueError, match="NONEXISTENT_VAR"):
            substitute_env_vars("key: ${NONEXISTENT_VAR}")

    def test_no_substitution_needed(self):
        """Test text without variables."""
        assert substitute_env_vars("plain text") == "plain text"


class TestAnthropicConfig:
    """Test Anthropic configuration."""

    def test_defaults(self):
        """Test default model settings."""
        config = AnthropicConfig(api_key="sk-ant-test")
        assert config.max_tokens == 8192
        assert config.temperature == 0.2

    def test_blank_api_key_rejected(self):
        """Test that a blank key is invalid."""
        with pytest.raises(ValidationError):
            AnthropicConfig(api_key="   ")

    def test_max_tokens_bounds(self):
        """Test max_tokens limits."""
        with pytest.raises(ValidationError):
            AnthropicConfig(api_key="k", max_tokens=10)
        with pytest.raises(ValidationError):
            AnthropicConfig(api_key="k", max_tokens=100000)

    def test_temperature_bounds(self):
        """Test temperature limits."""
        with pytest.raises(ValidationError):
            AnthropicConfig(api_key="k", temperature=1.5)


class TestReviewConfig:
    """Test review behaviour configuration."""

    def test_defaults(self):
        """Test default values."""
        config = ReviewConfig()
        assert config.default_language == "javascript"
        assert config.max_code_length == 20000
        assert config.timeout == 120.0

    def test_unsupported_default_language(self):
        """Test that the default language must be supported."""
        with pytest.raises(ValidationError, match="Unsupported language"):
            ReviewConfig(default_language="klingon")

    def test_timeout_must_be_positive(self):
        """Test timeout bounds."""
        with pytest.raises(ValidationError):
            ReviewConfig(timeout=0)

    def test_max_code_length_bounds(self):
        """Test max_code_length bounds."""
        with pytest.raises(ValidationError):
            ReviewConfig(max_code_length=0)


class TestLoggingConfig:
    """Test logging configuration."""

    def test_defaults(self):
        """Test default values."""
        config = LoggingConfig()
        assert config.level == "WARNING"
        assert config.format == "console"
        assert config.file.enabled is False

    def test_invalid_level(self):
        """Test that unknown levels are rejected."""
        with pytest.raises(ValidationError):
            LoggingConfig(level="VERBOSE")


class TestLoadConfig:
    """Test loading configuration from YAML and the environment."""

    def test_load_valid_config(self, tmp_path: Path):
        """Test loading a YAML file with variable substitution."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            """
llm:
  provider: anthropic
  anthropic:
    api_key: ${TEST_ANTHROPIC_KEY}
    model: claude-3-5-haiku-20241022
review:
  default_language: python
  max_code_length: 5000
logging:
  level: DEBUG
  format: json
"""
        )

        with patch.dict(os.environ, {"TEST_ANTHROPIC_KEY": "sk-ant-from-env"}):
            config = load_config(config_file)

        assert config.llm.anthropic is not None
        assert config.llm.anthropic.api_key == "sk-ant-from-env"
        assert config.llm.anthropic.model == "claude-3-5-haiku-20241022"
        assert config.review.default_language == "python"
        assert config.review.max_code_length == 5000
        assert config.logging.level == "DEBUG"

    def test_load_config_missing_file(self, tmp_path: Path):
        """Test loading a missing config file."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nonexistent.yaml")

    def test_load_config_missing_env_var(self, tmp_path: Path):
        """Test that an unresolved ${VAR} raises."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("llm:\n  anthropic:\n    api_key: ${MISSING_KEY_FOR_TEST}\n")

        with pytest.raises(ValueError, match="MISSING_KEY_FOR_TEST"):
            load_config(config_file)

    def test_load_config_not_a_mapping(self, tmp_path: Path):
        """Test that a YAML list is rejected."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- one\n- two\n")

        with pytest.raises(ValueError, match="mapping"):
            load_config(config_file)

    def test_load_config_from_environment(self, monkeypatch):
        """Test loading without a file, from AI_CODE_REVIEWER_* variables."""
        monkeypatch.setenv("AI_CODE_REVIEWER_LLM__ANTHROPIC__API_KEY", "sk-ant-env")
        monkeypatch.setenv("AI_CODE_REVIEWER_REVIEW__DEFAULT_LANGUAGE", "go")

        config = load_config()

        assert config.llm.anthropic is not None
        assert config.llm.anthropic.api_key == "sk-ant-env"
        assert config.review.default_language == "go"

    def test_load_config_empty_environment(self):
        """Test that no provider config at all is an error."""
        with pytest.raises(ValueError, match="anthropic config missing"):
            load_config()


class TestValidateConfig:
    """Test cross-field validation."""

    def test_anthropic_provider_without_config(self):
        """Test anthropic provider without anthropic config."""
        config = ReviewerConfig(llm=LLMConfig(provider="anthropic"))
        with pytest.raises(ValueError, match="anthropic config missing"):
            validate_config(config)

    def test_valid_config_passes(self):
        """Test that a complete configuration passes."""
        config = ReviewerConfig(
            llm=LLMConfig(provider="anthropic", anthropic=AnthropicConfig(api_key="sk-ant-x"))
        )
        validate_config(config)
