"""Azure DevOps pipelines config provider."""

from __future__ import annotations

from cienv.models import PullRequestConfig
from cienv.protocols import Orchestrator
from cienv.providers.base import BaseConfigProvider
from cienv.pull_request import strip_ref_prefix


class AzureDevOpsConfigProvider(BaseConfigProvider):
    """Azure DevOps agent environment."""

    orchestrator = Orchestrator.AZURE_DEVOPS

    def orchestrator_version(self) -> str:
        return self.getenv("AGENT_VERSION")

    def get_stage_name(self) -> str:
        return self.getenv("SYSTEM_STAGEDISPLAYNAME")

    def get_branch(self) -> str:
        if self.is_pull_request():
            return strip_ref_prefix(self.getenv("SYSTEM_PULLREQUEST_SOURCEBRANCH"))
        return strip_ref_prefix(self.getenv("BUILD_SOURCEBRANCH"))

    def get_reference(self) -> str:
        return self.getenv("BUILD_SOURCEBRANCH")

    def _project_url(self) -> str:
        # SYSTEM_TEAMFOUNDATIONCOLLECTIONURI carries a trailing slash
        collection = self.getenv("SYSTEM_TEAMFOUNDATIONCOLLECTIONURI")
        project = self.getenv("SYSTEM_TEAMPROJECT")
        if not collection or not project:
            return ""
        return f"{collection.rstrip('/')}/{project}"

    def get_build_url(self) -> str:
        project_url = self._project_url()
        build_id = self.get_build_id()
        if not project_url or not build_id:
            return ""
        return f"{project_url}/_build/results?buildId={build_id}"

    def get_build_id(self) -> str:
        return self.getenv("BUILD_BUILDID")

    def get_job_url(self) -> str:
        project_url = self._project_url()
        definition_id = self.getenv("SYSTEM_DEFINITIONID")
        if not project_url or not definition_id:
            return ""
        return f"{project_url}/_build?definitionId={definition_id}"

    def get_job_name(self) -> str:
        return self.getenv("BUILD_DEFINITIONNAME")

    def get_commit(self) -> str:
        return self.getenv("BUILD_SOURCEVERSION")

    def get_repo_url(self) -> str:
        return self.getenv("BUILD_REPOSITORY_URI")

    def get_build_reason(self) -> str:
        return self.getenv("BUILD_REASON")

    def is_pull_request(self) -> bool:
        return self.getenv("BUILD_REASON") == "PullRequest"

    def get_pull_request_config(self) -> PullRequestConfig:
        return PullRequestConfig(
            branch=strip_ref_prefix(self.getenv("SYSTEM_PULLREQUEST_SOURCEBRANCH")),
            base=strip_ref_prefix(self.getenv("SYSTEM_PULLREQUEST_TARGETBRANCH")),
            key=self.getenv("SYSTEM_PULLREQUEST_PULLREQUESTID"),
        )
