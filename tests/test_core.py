"""
Tests for configuration, logging setup and the exception hierarchy.
"""

import logging
import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError as PydanticValidationError

from copilot_ai.core.config import Settings, get_settings
from copilot_ai.core.exceptions import (
    ConfigurationError,
    CopilotAIException,
    InvalidRequestError,
    ProviderError,
    ProviderUnavailableError,
    UnknownTaskTypeError,
    ValidationError,
)
from copilot_ai.core.logging import setup_logging
from copilot_ai.services.routing.types import Provider, TaskType


class TestSettings:

    @pytest.mark.unit
    def test_reads_keys_from_environment(self):
        env = {"OPENAI_API_KEY": "sk-env", "GOOGLE_AI_API_KEY": "  ", "LOG_LEVEL": "DEBUG"}
        with patch.dict(os.environ, env, clear=True):
            settings = get_settings()

        assert settings.api_key_for(Provider.OPENAI) == "sk-env"
        assert settings.api_key_for("google") is None
        assert settings.api_key_for(Provider.ANTHROPIC) is None
        assert settings.LOG_LEVEL == "DEBUG"

    @pytest.mark.unit
    def test_settings_are_cached(self):
        assert get_settings() is get_settings()

    @pytest.mark.unit
    def test_defaults(self):
        settings = Settings(OPENAI_API_KEY=None)

        assert settings.DEFAULT_TEMPERATURE == 0.7
        assert settings.api_key_for("unknown") is None
        assert not hasattr(settings, "PROJECT_NAME")

    @pytest.mark.unit
    def test_out_of_range_default_temperature_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(DEFAULT_TEMPERATURE=5.0)


class TestLogging:

    @pytest.mark.unit
    def test_setup_logging_sets_level(self):
        logger = setup_logging("copilot_ai.test", level="warning")

        assert logger.name == "copilot_ai.test"
        assert logger.level == logging.WARNING

    @pytest.mark.unit
    def test_unknown_level_falls_back_to_info(self):
        logger = setup_logging("copilot_ai.test.fallback", level="chatty")

        assert logger.level == logging.INFO


class TestExceptions:

    @pytest.mark.unit
    def test_hierarchy(self):
        assert issubclass(ProviderUnavailableError, ConfigurationError)
        assert issubclass(UnknownTaskTypeError, ValidationError)
        assert issubclass(InvalidRequestError, ValidationError)
        assert issubclass(ProviderError, CopilotAIException)

    @pytest.mark.unit
    def test_unavailable_message_names_credential(self):
        error = ProviderUnavailableError(Provider.GOOGLE, credential_name="GOOGLE_AI_API_KEY")

        assert error.message == "google client not initialized. Set GOOGLE_AI_API_KEY."
        assert error.error_code == "PROVIDER_UNAVAILABLE"
        assert error.provider == "google"

    @pytest.mark.unit
    def test_annotate_keeps_identity_and_adds_context(self):
        error = ProviderError("timeout", provider=Provider.ANTHROPIC)

        annotated = error.annotate(task_type=TaskType.COMPLEX_ANALYSIS, provider=Provider.ANTHROPIC)

        assert annotated is error
        data = error.to_dict()
        assert data["error"] == "PROVIDER_ERROR"
        assert data["task_type"] == "complex_analysis"
        assert data["provider"] == "anthropic"

    @pytest.mark.unit
    def test_exceptions_log_on_creation(self, caplog):
        with caplog.at_level(logging.ERROR, logger="copilot_ai.core.exceptions"):
            InvalidRequestError("bad options")

        assert "[INVALID_REQUEST] bad options" in caplog.text
