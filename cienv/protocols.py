"""
Orchestrator protocols - the capability set every CI provider exposes.

Callers depend on ConfigProviderProtocol only; concrete providers live in
cienv.providers and are selected by cienv.detector.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable

from cienv.models import OrchestratorInfo, PullRequestConfig


class Orchestrator(str, Enum):
    """Supported CI orchestrators."""

    UNKNOWN = "Unknown"
    AZURE_DEVOPS = "AzureDevOps"
    GITHUB_ACTIONS = "GitHubActions"
    JENKINS = "Jenkins"
    GITLAB = "GitLab"

    def __str__(self) -> str:
        return self.value


@runtime_checkable
class ConfigProviderProtocol(Protocol):
    """
    Protocol for orchestrator-specific config providers.

    Every query returns an empty value when the underlying environment
    variable is missing; none of them raise. Only get_log() may fail.
    """

    orchestrator: Orchestrator

    def orchestrator_type(self) -> str:
        """Label of the orchestrator (e.g. "GitHubActions")."""
        ...

    def orchestrator_version(self) -> str:
        ...

    def get_stage_name(self) -> str:
        ...

    def get_branch(self) -> str:
        """Short branch name, without the refs/heads/ prefix."""
        ...

    def get_reference(self) -> str:
        """Full git reference, e.g. refs/heads/main or refs/pull/42/merge."""
        ...

    def get_build_url(self) -> str:
        ...

    def get_build_id(self) -> str:
        ...

    def get_job_url(self) -> str:
        ...

    def get_job_name(self) -> str:
        ...

    def get_commit(self) -> str:
        ...

    def get_repo_url(self) -> str:
        ...

    def get_build_reason(self) -> str:
        ...

    def is_pull_request(self) -> bool:
        ...

    def get_pull_request_config(self) -> PullRequestConfig:
        ...

    def get_log(self) -> bytes:
        """
        Retrieve the logs of the current run.

        Raises:
            LogRetrievalError: If the orchestrator API cannot be reached
        """
        ...

    def info(self) -> OrchestratorInfo:
        """Snapshot of all capabilities."""
        ...
