"""
cienv - CI orchestrator environment normalization.

Detects the CI system running the current process (Azure DevOps, GitHub
Actions, Jenkins, GitLab CI) and exposes its metadata through one interface.

Usage:
    from cienv import new_orchestrator_specific_config_provider

    provider = new_orchestrator_specific_config_provider()
    provider.get_branch()
    provider.is_pull_request()
"""

__version__ = "0.1.0"

from cienv.config import GeneralConfig, OrchestratorSettings, TelemetryConfig
from cienv.detector import detect_orchestrator, new_orchestrator_specific_config_provider
from cienv.exceptions import CienvError, HttpClientError, LogRetrievalError, PipelineEnvError
from cienv.models import OrchestratorInfo, PullRequestConfig
from cienv.protocols import ConfigProviderProtocol, Orchestrator

__all__ = [
    "__version__",
    # Protocols
    "ConfigProviderProtocol",
    "Orchestrator",
    # Models
    "OrchestratorInfo",
    "PullRequestConfig",
    # Config
    "GeneralConfig",
    "OrchestratorSettings",
    "TelemetryConfig",
    # Detection
    "detect_orchestrator",
    "new_orchestrator_specific_config_provider",
    # Errors
    "CienvError",
    "HttpClientError",
    "LogRetrievalError",
    "PipelineEnvError",
]
