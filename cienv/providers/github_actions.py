"""
GitHub Actions config provider.

Reads the default environment of a GitHub Actions runner and fetches job
logs through the GitHub REST API.
"""

from __future__ import annotations

from typing import List, Mapping, Optional

from cienv.config import OrchestratorSettings
from cienv.exceptions import HttpClientError, LogRetrievalError
from cienv.http_client import ClientOptions, HttpClient
from cienv.models import PullRequestConfig
from cienv.protocols import Orchestrator
from cienv.providers.base import BaseConfigProvider
from cienv.pull_request import is_pull_request_ref, pull_request_key, strip_ref_prefix
from cienv.utils.logger import logger

DEFAULT_API_URL = "https://api.github.com"


class GitHubActionsConfigProvider(BaseConfigProvider):
    """GitHub Actions runner environment."""

    orchestrator = Orchestrator.GITHUB_ACTIONS

    def __init__(
        self,
        settings: Optional[OrchestratorSettings] = None,
        env: Optional[Mapping[str, str]] = None,
        client: Optional[HttpClient] = None,
    ) -> None:
        super().__init__(settings=settings, env=env)
        self._client = client

    @property
    def client(self) -> HttpClient:
        """HTTP client for log retrieval, created on first use."""
        if self._client is None:
            self._client = HttpClient(
                ClientOptions(
                    max_request_duration=30.0,
                    max_retries=3,
                    token=self.settings.github_token or self.getenv("GITHUB_TOKEN"),
                )
            )
        return self._client

    def get_stage_name(self) -> str:
        return self.getenv("GITHUB_JOB")

    def get_branch(self) -> str:
        if self.is_pull_request() and self.getenv("GITHUB_HEAD_REF"):
            return self.getenv("GITHUB_HEAD_REF")
        return strip_ref_prefix(self.getenv("GITHUB_REF"))

    def get_reference(self) -> str:
        return self.getenv("GITHUB_REF")

    def get_build_url(self) -> str:
        repo_url = self.get_repo_url()
        run_id = self.get_build_id()
        if not repo_url or not run_id:
            return ""
        return f"{repo_url}/actions/runs/{run_id}"

    def get_build_id(self) -> str:
        return self.getenv("GITHUB_RUN_ID")

    def get_job_url(self) -> str:
        build_url = self.get_build_url()
        attempt = self.getenv("GITHUB_RUN_ATTEMPT")
        if build_url and attempt:
            return f"{build_url}/attempts/{attempt}"
        return build_url

    def get_job_name(self) -> str:
        return self.getenv("GITHUB_WORKFLOW")

    def get_commit(self) -> str:
        return self.getenv("GITHUB_SHA")

    def get_repo_url(self) -> str:
        server = self.getenv("GITHUB_SERVER_URL")
        repository = self.getenv("GITHUB_REPOSITORY")
        if not server or not repository:
            return ""
        return f"{server.rstrip('/')}/{repository}"

    def get_build_reason(self) -> str:
        return self.getenv("GITHUB_EVENT_NAME")

    def is_pull_request(self) -> bool:
        return self.has("GITHUB_HEAD_REF") or is_pull_request_ref(self.getenv("GITHUB_REF"))

    def get_pull_request_config(self) -> PullRequestConfig:
        return PullRequestConfig(
            branch=self.getenv("GITHUB_HEAD_REF"),
            base=self.getenv("GITHUB_BASE_REF"),
            key=pull_request_key(self.getenv("GITHUB_REF")),
        )

    def _api_url(self) -> str:
        return (self.getenv("GITHUB_API_URL") or DEFAULT_API_URL).rstrip("/")

    def _get_job_ids(self) -> List[str]:
        repository = self.getenv("GITHUB_REPOSITORY")
        run_id = self.get_build_id()
        if not repository or not run_id:
            raise LogRetrievalError("GITHUB_REPOSITORY and GITHUB_RUN_ID are required to fetch logs")

        url = f"{self._api_url()}/repos/{repository}/actions/runs/{run_id}/jobs"
        response = self.client.get(
            url,
            headers={"Accept": "application/vnd.github+json"},
            params={"per_page": 100},
        )
        payload = response.json()
        jobs = payload.get("jobs") if isinstance(payload, dict) else None
        if not isinstance(jobs, list):
            raise LogRetrievalError(f"Unexpected job list from GitHub API: {type(payload).__name__}")
        return [str(job["id"]) for job in jobs if isinstance(job, dict) and "id" in job]

    def get_log(self) -> bytes:
        """
        Fetch and concatenate the logs of every job of the current run.

        Returns:
            Log bytes, in job order

        Raises:
            LogRetrievalError: If the job list or any job log cannot be fetched
        """
        repository = self.getenv("GITHUB_REPOSITORY")
        try:
            job_ids = self._get_job_ids()
            logger.debug(f"Fetching logs for {len(job_ids)} jobs of run {self.get_build_id()}")
            chunks = []
            for job_id in job_ids:
                url = f"{self._api_url()}/repos/{repository}/actions/jobs/{job_id}/logs"
                chunks.append(self.client.get(url).content)
        except HttpClientError as e:
            raise LogRetrievalError(f"Failed to fetch GitHub Actions logs: {e}") from e
        except ValueError as e:
            raise LogRetrievalError(f"Unexpected response from GitHub API: {e}") from e
        return b"".join(chunks)
