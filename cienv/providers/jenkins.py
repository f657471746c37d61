"""
Jenkins config provider.

Covers multibranch pipelines: pull-request builds expose CHANGE_* variables,
branch builds expose BRANCH_NAME, tag builds TAG_NAME.
"""

from __future__ import annotations

from cienv.models import PullRequestConfig
from cienv.protocols import Orchestrator
from cienv.providers.base import BaseConfigProvider
from cienv.pull_request import HEADS_PREFIX, TAGS_PREFIX


class JenkinsConfigProvider(BaseConfigProvider):
    """Jenkins build environment."""

    orchestrator = Orchestrator.JENKINS

    def orchestrator_version(self) -> str:
        return self.getenv("JENKINS_VERSION")

    def get_stage_name(self) -> str:
        return self.getenv("STAGE_NAME")

    def get_branch(self) -> str:
        if self.is_pull_request():
            return self.getenv("CHANGE_BRANCH")
        return self.getenv("BRANCH_NAME")

    def get_reference(self) -> str:
        if self.is_pull_request():
            return f"refs/pull/{self.getenv('CHANGE_ID')}/head"
        tag = self.getenv("TAG_NAME")
        if tag:
            return f"{TAGS_PREFIX}{tag}"
        branch = self.getenv("BRANCH_NAME")
        if not branch:
            return ""
        if branch.startswith("refs/"):
            return branch
        return f"{HEADS_PREFIX}{branch}"

    def get_build_url(self) -> str:
        return self.getenv("BUILD_URL")

    def get_build_id(self) -> str:
        return self.getenv("BUILD_ID")

    def get_job_url(self) -> str:
        return self.getenv("JOB_URL")

    def get_job_name(self) -> str:
        return self.getenv("JOB_NAME")

    def get_commit(self) -> str:
        return self.getenv("GIT_COMMIT")

    def get_repo_url(self) -> str:
        return self.getenv("GIT_URL")

    def is_pull_request(self) -> bool:
        return self.has("CHANGE_ID")

    def get_pull_request_config(self) -> PullRequestConfig:
        return PullRequestConfig(
            branch=self.getenv("CHANGE_BRANCH"),
            base=self.getenv("CHANGE_TARGET"),
            key=self.getenv("CHANGE_ID"),
        )
