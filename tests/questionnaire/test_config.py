"""Unit tests for environment-driven settings."""

from __future__ import annotations

import pytest

from pipeline import PipelineConfigError
from questionnaire import build_questionnaire_pipeline, load_settings
from questionnaire.config import DEFAULT_MODEL
from tests.pipeline_engine.conftest import MockBackend


@pytest.mark.unit
class TestLoadSettings:
    def test_defaults(self):
        settings = load_settings({})
        assert settings.llm.model == DEFAULT_MODEL
        assert settings.llm.api_key is None
        assert settings.llm.max_tokens == 2048
        assert settings.max_attempts == 3

    def test_reads_environment_mapping(self):
        settings = load_settings(
            {
                "QUESTIONNAIRE_MODEL": "claude-3-5-haiku",
                "QUESTIONNAIRE_API_KEY": "sk-x",
                "QUESTIONNAIRE_API_BASE": "https://llm.internal/v1",
                "QUESTIONNAIRE_TEMPERATURE": "0.3",
                "QUESTIONNAIRE_MAX_TOKENS": "900",
                "QUESTIONNAIRE_MIN_INTERVAL": "1.5",
                "QUESTIONNAIRE_MAX_ATTEMPTS": "5",
            }
        )
        assert settings.llm.model == "claude-3-5-haiku"
        assert settings.llm.api_key == "sk-x"
        assert settings.llm.api_base == "https://llm.internal/v1"
        assert settings.llm.temperature == 0.3
        assert settings.llm.max_tokens == 900
        assert settings.llm.min_interval == 1.5
        assert settings.max_attempts == 5

    def test_blank_key_treated_as_unset(self):
        assert load_settings({"QUESTIONNAIRE_API_KEY": ""}).llm.api_key is None

    def test_defaults_to_process_environment(self, monkeypatch):
        monkeypatch.setenv("QUESTIONNAIRE_MODEL", "from-env")
        assert load_settings().llm.model == "from-env"


@pytest.mark.unit
class TestSettingsOverrides:
    def test_none_keeps_loaded_values(self):
        settings = load_settings({"QUESTIONNAIRE_MAX_ATTEMPTS": "5"}).with_overrides()
        assert settings.llm.model == DEFAULT_MODEL
        assert settings.max_attempts == 5

    def test_explicit_values_replace_loaded_ones(self):
        settings = load_settings({}).with_overrides(model="m", max_attempts=2)
        assert settings.llm.model == "m"
        assert settings.max_attempts == 2

    def test_zero_attempts_is_kept_and_rejected_by_the_pipeline(self):
        settings = load_settings({"QUESTIONNAIRE_MAX_ATTEMPTS": "5"}).with_overrides(
            max_attempts=0
        )
        assert settings.max_attempts == 0
        with pytest.raises(PipelineConfigError):
            build_questionnaire_pipeline(MockBackend(["{}"]), max_attempts=settings.max_attempts)
