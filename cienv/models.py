"""
Orchestrator data models.

Platform-agnostic snapshot of the CI metadata a provider exposes, so that
telemetry and logging code never has to know which CI system is running.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class PullRequestConfig:
    """Source branch, target branch and identifying key of a pull request."""

    branch: str = ""
    base: str = ""
    key: str = ""


@dataclass(frozen=True)
class OrchestratorInfo:
    """Normalized view of the current CI run."""

    orchestrator: str
    orchestrator_version: str = ""
    branch: str = ""
    reference: str = ""
    commit: str = ""
    repo_url: str = ""
    build_url: str = ""
    build_id: str = ""
    job_url: str = ""
    job_name: str = ""
    stage_name: str = ""
    build_reason: str = ""
    is_pull_request: bool = False
    pull_request: PullRequestConfig = field(default_factory=PullRequestConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return asdict(self)
