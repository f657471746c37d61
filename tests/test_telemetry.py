"""
Tests for step telemetry.
"""

import hashlib
import json
from unittest.mock import MagicMock

from loguru import logger

from cienv.config import TelemetryConfig
from cienv.exceptions import HttpClientError
from cienv.providers import GitHubActionsConfigProvider, UnknownOrchestratorConfigProvider
from cienv.telemetry import ACTION_NAME, EVENT_TYPE, CustomData, Telemetry, sha1_or_na

GITHUB_ENV = {
    "GITHUB_ACTIONS": "true",
    "GITHUB_REF": "refs/heads/main",
    "GITHUB_RUN_ID": "42",
    "GITHUB_SERVER_URL": "https://github.com",
    "GITHUB_REPOSITORY": "foo/bar",
    "GITHUB_JOB": "build",
}


def _capture_logs():
    messages = []
    sink_id = logger.add(lambda m: messages.append(m.record["message"]), level="INFO")
    return messages, sink_id


class TestSha1OrNA:
    def test_empty(self):
        assert sha1_or_na("") == "n/a"

    def test_hash(self):
        assert sha1_or_na("abc") == hashlib.sha1(b"abc").hexdigest()


class TestInitialize:
    def test_base_data_from_provider(self):
        provider = GitHubActionsConfigProvider(env=GITHUB_ENV)
        telemetry = Telemetry(TelemetryConfig(), provider, client=MagicMock())
        telemetry.initialize("readPipelineEnv")

        base = telemetry.get_data().base_data
        assert base.orchestrator == "GitHubActions"
        assert base.stage_name == "build"
        assert base.step_name == "readPipelineEnv"
        assert base.action_name == ACTION_NAME
        assert base.event_type == EVENT_TYPE
        assert base.url == "https://github.com/n/a"
        assert base.build_url_hash == sha1_or_na("https://github.com/foo/bar/actions/runs/42")
        assert base.pipeline_url_hash == sha1_or_na(provider.get_job_url())

    def test_unknown_orchestrator_hashes_are_na(self):
        telemetry = Telemetry(TelemetryConfig(), UnknownOrchestratorConfigProvider(env={}), client=MagicMock())
        telemetry.initialize("step")

        assert telemetry.get_data().base_data.build_url_hash == "n/a"
        assert telemetry.get_data().base_data.pipeline_url_hash == "n/a"

    def test_set_data_keeps_base_data(self):
        telemetry = Telemetry(TelemetryConfig(), GitHubActionsConfigProvider(env=GITHUB_ENV), client=MagicMock())
        telemetry.initialize("step")
        telemetry.set_data(CustomData(duration="1200", error_code="1"))

        data = telemetry.get_data().to_dict()
        assert data["step_name"] == "step"
        assert data["duration"] == "1200"
        assert data["error_code"] == "1"


class TestSend:
    def test_disabled_only_logs(self):
        client = MagicMock()
        telemetry = Telemetry(
            TelemetryConfig(disabled=True), GitHubActionsConfigProvider(env=GITHUB_ENV), client=client
        )
        telemetry.initialize("step")
        telemetry.set_data(CustomData(duration="100"))

        messages, sink_id = _capture_logs()
        try:
            assert telemetry.send() is False
        finally:
            logger.remove(sink_id)

        client.send_request.assert_not_called()
        lines = [m for m in messages if m.startswith("Step telemetry data:")]
        assert len(lines) == 1
        payload = json.loads(lines[0][len("Step telemetry data:"):])
        assert payload["StepName"] == "step"
        assert payload["StepDuration"] == "100"
        assert payload["CorrelationID"] == "https://github.com/foo/bar/actions/runs/42"

    def test_enabled_posts_event(self):
        client = MagicMock()
        config = TelemetryConfig(token="integration-key", base_url="https://telemetry.example.com/")
        telemetry = Telemetry(config, GitHubActionsConfigProvider(env=GITHUB_ENV), client=client)
        telemetry.initialize("step")

        assert telemetry.send() is True

        args, kwargs = client.send_request.call_args
        assert args == ("POST", "https://telemetry.example.com/data/track")
        assert kwargs["headers"]["x-pendo-integration-key"] == "integration-key"
        assert kwargs["body"]["type"] == "track"
        assert kwargs["body"]["event"] == "step"
        assert kwargs["body"]["properties"]["orchestrator"] == "GitHubActions"

    def test_send_failure_is_not_raised(self):
        client = MagicMock()
        client.send_request.side_effect = HttpClientError("boom", status_code=500)
        telemetry = Telemetry(TelemetryConfig(), UnknownOrchestratorConfigProvider(env={}), client=client)
        telemetry.initialize("step")

        assert telemetry.send() is False

    def test_invalid_duration_is_tolerated(self):
        telemetry = Telemetry(TelemetryConfig(disabled=True), UnknownOrchestratorConfigProvider(env={}), client=MagicMock())
        telemetry.initialize("step")
        telemetry.set_data(CustomData(duration="n/a"))

        assert telemetry.step_telemetry_data()["StepDuration"] == "n/a"
