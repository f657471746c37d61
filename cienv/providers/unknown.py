"""Fallback provider used when no supported orchestrator is detected."""

from __future__ import annotations

from cienv.models import PullRequestConfig
from cienv.protocols import Orchestrator
from cienv.providers.base import BaseConfigProvider


class UnknownOrchestratorConfigProvider(BaseConfigProvider):
    """Answers every query with an empty value."""

    orchestrator = Orchestrator.UNKNOWN

    def get_stage_name(self) -> str:
        return ""

    def get_branch(self) -> str:
        return ""

    def get_reference(self) -> str:
        return ""

    def get_build_url(self) -> str:
        return ""

    def get_build_id(self) -> str:
        return ""

    def get_job_url(self) -> str:
        return ""

    def get_job_name(self) -> str:
        return ""

    def get_commit(self) -> str:
        return ""

    def get_repo_url(self) -> str:
        return ""

    def is_pull_request(self) -> bool:
        return False

    def get_pull_request_config(self) -> PullRequestConfig:
        return PullRequestConfig()
