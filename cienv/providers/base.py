"""
Base config provider - shared behavior for all orchestrator providers.

Subclasses only map their orchestrator's environment variables onto the
capability set defined by ConfigProviderProtocol.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import Mapping, Optional

from cienv.config import OrchestratorSettings
from cienv.models import OrchestratorInfo, PullRequestConfig
from cienv.protocols import Orchestrator

FALSY_VALUES = frozenset({"", "no", "false", "off", "0"})


def truthy(env: Mapping[str, str], key: str) -> bool:
    """Check that a variable is set and neither empty nor false."""
    value = env.get(key)
    if value is None:
        return False
    return value.strip().lower() not in FALSY_VALUES


class BaseConfigProvider(ABC):
    """
    Abstract base class for orchestrator config providers.

    Providers read the environment lazily on every query, so repeated
    queries against an unchanged environment return identical results.
    """

    orchestrator: Orchestrator

    def __init__(
        self,
        settings: Optional[OrchestratorSettings] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> None:
        """
        Initialize the provider.

        Args:
            settings: Credentials for orchestrator API calls
            env: Environment mapping (default: os.environ)

        Raises:
            TypeError: If the subclass does not define an Orchestrator
        """
        if not isinstance(getattr(self, "orchestrator", None), Orchestrator):
            raise TypeError(
                f"{self.__class__.__name__} must define 'orchestrator' class attribute "
                f"as an Orchestrator member"
            )
        self.settings = settings or OrchestratorSettings()
        self._env: Mapping[str, str] = os.environ if env is None else env

    def getenv(self, key: str) -> str:
        """Read a variable, missing variables read as empty string."""
        return self._env.get(key, "")

    def has(self, key: str) -> bool:
        """Check that a variable carrying a value is set and non-empty."""
        return bool(self.getenv(key))

    def orchestrator_type(self) -> str:
        return self.orchestrator.value

    def orchestrator_version(self) -> str:
        return ""

    def get_build_reason(self) -> str:
        return ""

    def get_log(self) -> bytes:
        """Orchestrators without log retrieval return no logs."""
        return b""

    @abstractmethod
    def get_stage_name(self) -> str:
        pass

    @abstractmethod
    def get_branch(self) -> str:
        pass

    @abstractmethod
    def get_reference(self) -> str:
        pass

    @abstractmethod
    def get_build_url(self) -> str:
        pass

    @abstractmethod
    def get_build_id(self) -> str:
        pass

    @abstractmethod
    def get_job_url(self) -> str:
        pass

    @abstractmethod
    def get_job_name(self) -> str:
        pass

    @abstractmethod
    def get_commit(self) -> str:
        pass

    @abstractmethod
    def get_repo_url(self) -> str:
        pass

    @abstractmethod
    def is_pull_request(self) -> bool:
        pass

    @abstractmethod
    def get_pull_request_config(self) -> PullRequestConfig:
        pass

    def info(self) -> OrchestratorInfo:
        """Collect every capability into one immutable snapshot."""
        return OrchestratorInfo(
            orchestrator=self.orchestrator_type(),
            orchestrator_version=self.orchestrator_version(),
            branch=self.get_branch(),
            reference=self.get_reference(),
            commit=self.get_commit(),
            repo_url=self.get_repo_url(),
            build_url=self.get_build_url(),
            build_id=self.get_build_id(),
            job_url=self.get_job_url(),
            job_name=self.get_job_name(),
            stage_name=self.get_stage_name(),
            build_reason=self.get_build_reason(),
            is_pull_request=self.is_pull_request(),
            pull_request=self.get_pull_request_config(),
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
