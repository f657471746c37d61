"""GitLab CI config provider (predefined CI/CD variables)."""

from __future__ import annotations

from cienv.models import PullRequestConfig
from cienv.protocols import Orchestrator
from cienv.providers.base import BaseConfigProvider
from cienv.pull_request import HEADS_PREFIX, TAGS_PREFIX


class GitLabConfigProvider(BaseConfigProvider):
    """GitLab CI job environment. Merge requests count as pull requests."""

    orchestrator = Orchestrator.GITLAB

    def orchestrator_version(self) -> str:
        return self.getenv("CI_SERVER_VERSION")

    def get_stage_name(self) -> str:
        return self.getenv("CI_JOB_STAGE")

    def get_branch(self) -> str:
        if self.is_pull_request():
            return self.getenv("CI_MERGE_REQUEST_SOURCE_BRANCH_NAME")
        return self.getenv("CI_COMMIT_REF_NAME")

    def get_reference(self) -> str:
        tag = self.getenv("CI_COMMIT_TAG")
        if tag:
            return f"{TAGS_PREFIX}{tag}"
        if self.is_pull_request():
            return f"refs/merge-requests/{self.getenv('CI_MERGE_REQUEST_IID')}/head"
        ref_name = self.getenv("CI_COMMIT_REF_NAME")
        return f"{HEADS_PREFIX}{ref_name}" if ref_name else ""

    def get_build_url(self) -> str:
        return self.getenv("CI_PIPELINE_URL")

    def get_build_id(self) -> str:
        return self.getenv("CI_PIPELINE_ID")

    def get_job_url(self) -> str:
        return self.getenv("CI_JOB_URL")

    def get_job_name(self) -> str:
        return self.getenv("CI_JOB_NAME")

    def get_commit(self) -> str:
        return self.getenv("CI_COMMIT_SHA")

    def get_repo_url(self) -> str:
        return self.getenv("CI_PROJECT_URL")

    def get_build_reason(self) -> str:
        return self.getenv("CI_PIPELINE_SOURCE")

    def is_pull_request(self) -> bool:
        return self.has("CI_MERGE_REQUEST_IID")

    def get_pull_request_config(self) -> PullRequestConfig:
        return PullRequestConfig(
            branch=self.getenv("CI_MERGE_REQUEST_SOURCE_BRANCH_NAME"),
            base=self.getenv("CI_MERGE_REQUEST_TARGET_BRANCH_NAME"),
            key=self.getenv("CI_MERGE_REQUEST_IID"),
        )
