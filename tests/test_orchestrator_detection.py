"""
Tests for orchestrator detection and provider selection.
"""

import pytest

from cienv.detector import (
    DETECTION_ORDER,
    detect_orchestrator,
    new_orchestrator_specific_config_provider,
)
from cienv.protocols import ConfigProviderProtocol, Orchestrator
from cienv.providers import (
    AzureDevOpsConfigProvider,
    GitHubActionsConfigProvider,
    GitLabConfigProvider,
    JenkinsConfigProvider,
    UnknownOrchestratorConfigProvider,
)


class TestDetectOrchestrator:
    @pytest.mark.parametrize(
        "env, expected",
        [
            ({"AZURE_HTTP_USER_AGENT": "VSTS_agent"}, Orchestrator.AZURE_DEVOPS),
            ({"TF_BUILD": "True"}, Orchestrator.AZURE_DEVOPS),
            ({"GITHUB_ACTIONS": "true"}, Orchestrator.GITHUB_ACTIONS),
            ({"GITHUB_ACTION": "__run"}, Orchestrator.GITHUB_ACTIONS),
            ({"JENKINS_URL": "https://jenkins.example.com/"}, Orchestrator.JENKINS),
            ({"JENKINS_HOME": "/var/jenkins_home"}, Orchestrator.JENKINS),
            ({"GITLAB_CI": "true"}, Orchestrator.GITLAB),
            ({}, Orchestrator.UNKNOWN),
        ],
    )
    def test_sentinels(self, env, expected):
        assert detect_orchestrator(env) == expected

    @pytest.mark.parametrize("value", ["", "false", "FALSE", "no", "off", "0"])
    def test_falsy_sentinel_is_ignored(self, value):
        assert detect_orchestrator({"GITHUB_ACTIONS": value}) == Orchestrator.UNKNOWN

    def test_priority_azure_before_github(self):
        env = {"GITHUB_ACTIONS": "true", "AZURE_HTTP_USER_AGENT": "agent"}
        assert detect_orchestrator(env) == Orchestrator.AZURE_DEVOPS

    def test_priority_github_before_jenkins(self):
        env = {"JENKINS_URL": "https://jenkins", "GITHUB_ACTIONS": "true"}
        assert detect_orchestrator(env) == Orchestrator.GITHUB_ACTIONS

    def test_priority_jenkins_before_gitlab(self):
        env = {"GITLAB_CI": "true", "JENKINS_HOME": "/var/jenkins_home"}
        assert detect_orchestrator(env) == Orchestrator.JENKINS

    def test_detection_order(self):
        assert [o for o, _ in DETECTION_ORDER] == [
            Orchestrator.AZURE_DEVOPS,
            Orchestrator.GITHUB_ACTIONS,
            Orchestrator.JENKINS,
            Orchestrator.GITLAB,
        ]

    def test_reads_process_environment_by_default(self, clean_env):
        clean_env.setenv("JENKINS_URL", "https://jenkins")
        assert detect_orchestrator() == Orchestrator.JENKINS


class TestNewProvider:
    @pytest.mark.parametrize(
        "env, provider_class",
        [
            ({"TF_BUILD": "True"}, AzureDevOpsConfigProvider),
            ({"GITHUB_ACTIONS": "true"}, GitHubActionsConfigProvider),
            ({"JENKINS_URL": "https://jenkins"}, JenkinsConfigProvider),
            ({"GITLAB_CI": "true"}, GitLabConfigProvider),
            ({}, UnknownOrchestratorConfigProvider),
        ],
    )
    def test_provider_class(self, env, provider_class):
        provider = new_orchestrator_specific_config_provider(env=env)

        assert type(provider) is provider_class
        assert isinstance(provider, ConfigProviderProtocol)

    def test_cleared_environment_yields_unknown_defaults(self, clean_env):
        provider = new_orchestrator_specific_config_provider()

        assert isinstance(provider, UnknownOrchestratorConfigProvider)
        assert provider.orchestrator_type() == "Unknown"
        assert provider.get_branch() == ""
        assert provider.get_reference() == ""
        assert provider.get_commit() == ""
        assert provider.get_repo_url() == ""
        assert provider.get_build_url() == ""
        assert provider.get_job_url() == ""
        assert provider.get_stage_name() == ""
        assert provider.is_pull_request() is False
        assert provider.get_pull_request_config().key == ""
        assert provider.get_log() == b""

    def test_unknown_logs_warning(self):
        from loguru import logger

        messages = []
        sink_id = logger.add(messages.append, level="WARNING")
        try:
            new_orchestrator_specific_config_provider(env={})
        finally:
            logger.remove(sink_id)

        assert any("Unable to detect" in str(m) for m in messages)

    def test_github_provider_receives_client(self):
        client = object()
        provider = new_orchestrator_specific_config_provider(
            env={"GITHUB_ACTIONS": "true"}, client=client
        )

        assert provider.client is client


class TestProviderBase:
    def test_subclass_without_orchestrator_is_rejected(self):
        class Broken(UnknownOrchestratorConfigProvider):
            orchestrator = "custom"

        with pytest.raises(TypeError, match="orchestrator"):
            Broken()
