"""Orchestrator-specific config providers."""

from cienv.providers.azure_devops import AzureDevOpsConfigProvider
from cienv.providers.base import BaseConfigProvider, truthy
from cienv.providers.github_actions import GitHubActionsConfigProvider
from cienv.providers.gitlab import GitLabConfigProvider
from cienv.providers.jenkins import JenkinsConfigProvider
from cienv.providers.unknown import UnknownOrchestratorConfigProvider

__all__ = [
    "AzureDevOpsConfigProvider",
    "BaseConfigProvider",
    "GitHubActionsConfigProvider",
    "GitLabConfigProvider",
    "JenkinsConfigProvider",
    "UnknownOrchestratorConfigProvider",
    "truthy",
]
