"""
Tests for configuration models.
"""

import pytest
from pydantic import ValidationError

from cienv.config import GeneralConfig, OrchestratorSettings, TelemetryConfig


class TestOrchestratorSettings:
    def test_from_env_prefers_piper_token(self):
        settings = OrchestratorSettings.from_env(
            {"PIPER_GITHUB_TOKEN": "piper-token", "GITHUB_TOKEN": "gh-token"}
        )

        assert settings.github_token == "piper-token"

    def test_from_env_falls_back_to_github_token(self):
        assert OrchestratorSettings.from_env({"GITHUB_TOKEN": "gh-token"}).github_token == "gh-token"

    def test_secrets(self):
        settings = OrchestratorSettings(github_token="a-token", jenkins_user="admin")

        assert settings.secrets() == ["a-token"]


class TestTelemetryConfig:
    def test_defaults(self):
        config = TelemetryConfig()

        assert config.base_url == "https://app.pendo.io"
        assert config.endpoint == "/data/track"
        assert config.disabled is False

    def test_timeout_bounds(self):
        with pytest.raises(ValidationError):
            TelemetryConfig(request_timeout=0)


class TestGeneralConfig:
    def test_from_env(self):
        config = GeneralConfig.from_env(
            {
                "PIPER_envRootPath": "/tmp/pipeline",
                "PIPER_noTelemetry": "true",
                "PIPER_correlationID": "https://ci/build/1",
            }
        )

        assert config.env_root_path == "/tmp/pipeline"
        assert config.telemetry.disabled is True
        assert config.correlation_id == "https://ci/build/1"

    def test_overrides_win_and_none_is_ignored(self):
        config = GeneralConfig.from_env(
            {"PIPER_envRootPath": "/tmp/pipeline"}, env_root_path=None, verbose=True
        )

        assert config.env_root_path == "/tmp/pipeline"
        assert config.verbose is True

    def test_defaults(self):
        config = GeneralConfig.from_env({})

        assert config.env_root_path == ".pipeline"
        assert config.telemetry.disabled is False
        assert config.orchestrator.github_token == ""

    def test_fields(self):
        assert set(GeneralConfig.model_fields) == {
            "env_root_path",
            "correlation_id",
            "verbose",
            "json_logs",
            "orchestrator",
            "telemetry",
        }
