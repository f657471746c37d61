"""
cienv Config - Configuration models.

Pydantic models for type-safe configuration. A GeneralConfig is built once
at process start (see cienv.cli) and passed explicitly to the components
that need it; there is no process-wide settings object.
"""

from __future__ import annotations

import os
from typing import Mapping

from pydantic import BaseModel, Field


def _first(env: Mapping[str, str], *names: str) -> str:
    for name in names:
        value = env.get(name)
        if value:
            return value
    return ""


class OrchestratorSettings(BaseModel):
    """Credentials used by providers that call their orchestrator's API."""

    github_token: str = Field(default="", description="Token for the GitHub Actions REST API")
    azure_token: str = Field(default="", description="Azure DevOps system access token")
    jenkins_user: str = Field(default="", description="Jenkins user")
    jenkins_token: str = Field(default="", description="Jenkins API token")

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "OrchestratorSettings":
        env = os.environ if env is None else env
        return cls(
            github_token=_first(env, "PIPER_GITHUB_TOKEN", "GITHUB_TOKEN"),
            azure_token=_first(env, "SYSTEM_ACCESSTOKEN"),
            jenkins_user=_first(env, "PIPER_JENKINS_USER"),
            jenkins_token=_first(env, "PIPER_JENKINS_TOKEN"),
        )

    def secrets(self) -> list[str]:
        """Values that must be redacted from logs."""
        return [v for v in (self.github_token, self.azure_token, self.jenkins_token) if v]


class TelemetryConfig(BaseModel):
    """Telemetry endpoint settings."""

    disabled: bool = Field(default=False, description="Only log telemetry, never send it")
    base_url: str = Field(default="https://app.pendo.io", description="Telemetry service base URL")
    endpoint: str = Field(default="/data/track", description="Telemetry service path")
    site_id: str = Field(default="827e8025-1e21-ae84-c3a3-3f62b70b0130")
    token: str = Field(default="", description="Integration key sent with every event")
    library_repository: str = Field(
        default="https://github.com/n/a", description="Repository of the running library"
    )
    request_timeout: float = Field(default=5.0, gt=0, le=60, description="Send timeout in seconds")


class GeneralConfig(BaseModel):
    """Settings shared by all commands of a single invocation."""

    env_root_path: str = Field(default=".pipeline", description="Root of the pipeline environment")
    correlation_id: str = Field(default="", description="Id attached to every log record")
    verbose: bool = False
    json_logs: bool = False
    orchestrator: OrchestratorSettings = Field(default_factory=OrchestratorSettings)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None, **overrides) -> "GeneralConfig":
        env = os.environ if env is None else env
        telemetry = TelemetryConfig(
            disabled=env.get("PIPER_noTelemetry", "").lower() in ("1", "true", "yes", "on"),
            token=env.get("PIPER_TELEMETRY_TOKEN", ""),
        )
        values = {
            "env_root_path": env.get("PIPER_envRootPath", ".pipeline"),
            "correlation_id": env.get("PIPER_correlationID", ""),
            "orchestrator": OrchestratorSettings.from_env(env),
            "telemetry": telemetry,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
