"""
Orchestrator detection.

Selects the provider for the CI system running the current process by
checking sentinel environment variables. The chain is a priority list:
nested CI contexts (e.g. a GitHub Actions job started from an Azure
agent) resolve to the first orchestrator listed in DETECTION_ORDER.
"""

from __future__ import annotations

import os
from typing import Dict, Mapping, Optional, Tuple, Type

from cienv.config import OrchestratorSettings
from cienv.http_client import HttpClient
from cienv.protocols import Orchestrator
from cienv.providers import (
    AzureDevOpsConfigProvider,
    BaseConfigProvider,
    GitHubActionsConfigProvider,
    GitLabConfigProvider,
    JenkinsConfigProvider,
    UnknownOrchestratorConfigProvider,
    truthy,
)
from cienv.utils.logger import logger

# Ordered: first orchestrator with a truthy sentinel wins
DETECTION_ORDER: Tuple[Tuple[Orchestrator, Tuple[str, ...]], ...] = (
    (Orchestrator.AZURE_DEVOPS, ("AZURE_HTTP_USER_AGENT", "TF_BUILD")),
    (Orchestrator.GITHUB_ACTIONS, ("GITHUB_ACTION", "GITHUB_ACTIONS")),
    (Orchestrator.JENKINS, ("JENKINS_HOME", "JENKINS_URL")),
    (Orchestrator.GITLAB, ("GITLAB_CI",)),
)

PROVIDERS: Dict[Orchestrator, Type[BaseConfigProvider]] = {
    Orchestrator.AZURE_DEVOPS: AzureDevOpsConfigProvider,
    Orchestrator.GITHUB_ACTIONS: GitHubActionsConfigProvider,
    Orchestrator.JENKINS: JenkinsConfigProvider,
    Orchestrator.GITLAB: GitLabConfigProvider,
    Orchestrator.UNKNOWN: UnknownOrchestratorConfigProvider,
}


def detect_orchestrator(env: Optional[Mapping[str, str]] = None) -> Orchestrator:
    """
    Detect the orchestrator from environment sentinels.

    Args:
        env: Environment mapping (default: os.environ)

    Returns:
        The first matching Orchestrator, or Orchestrator.UNKNOWN
    """
    env = os.environ if env is None else env
    for orchestrator, sentinels in DETECTION_ORDER:
        if any(truthy(env, var) for var in sentinels):
            return orchestrator
    return Orchestrator.UNKNOWN


def new_orchestrator_specific_config_provider(
    settings: Optional[OrchestratorSettings] = None,
    env: Optional[Mapping[str, str]] = None,
    client: Optional[HttpClient] = None,
) -> BaseConfigProvider:
    """
    Create the config provider for the current orchestrator.

    Never raises: when no orchestrator is detected the unknown provider is
    returned and a warning is logged.

    Args:
        settings: Credentials for orchestrator API calls
        env: Environment mapping (default: os.environ)
        client: HTTP client for providers that call an API

    Returns:
        Provider instance for the detected orchestrator
    """
    orchestrator = detect_orchestrator(env)
    if orchestrator is Orchestrator.UNKNOWN:
        logger.warning(
            "Unable to detect a supported orchestrator "
            "(Azure DevOps, GitHub Actions, Jenkins, GitLab CI), using default values"
        )

    provider_class = PROVIDERS[orchestrator]
    logger.debug(f"Using {provider_class.__name__}")
    if provider_class is GitHubActionsConfigProvider:
        return GitHubActionsConfigProvider(settings=settings, env=env, client=client)
    return provider_class(settings=settings, env=env)
