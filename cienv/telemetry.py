"""
Step telemetry.

Builds telemetry events from the active orchestrator provider. Step data is
always written to the log (log collectors parse the "Step telemetry data:"
line); events are only sent when telemetry is enabled.
"""

from __future__ import annotations

import hashlib
import json
import time
from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from cienv.config import TelemetryConfig
from cienv.exceptions import HttpClientError
from cienv.http_client import ClientOptions, HttpClient
from cienv.protocols import ConfigProviderProtocol
from cienv.utils.logger import logger

EVENT_TYPE = "library-os-ng"
ACTION_NAME = "Piper Library OS"


def sha1_or_na(value: str) -> str:
    """SHA-1 hex digest of value, "n/a" for empty input."""
    if not value:
        return "n/a"
    return hashlib.sha1(value.encode("utf-8")).hexdigest()


@dataclass
class BaseData:
    """Data identifying the step and the pipeline it runs in."""

    orchestrator: str = ""
    stage_name: str = ""
    url: str = ""
    action_name: str = ACTION_NAME
    event_type: str = EVENT_TYPE
    step_name: str = ""
    site_id: str = ""
    pipeline_url_hash: str = "n/a"
    build_url_hash: str = "n/a"


@dataclass
class CustomData:
    """Outcome of the step, filled in once it finished."""

    duration: str = "0"
    error_code: str = "0"
    error_category: str = ""
    piper_commit_hash: str = ""


@dataclass
class Data:
    base_data: BaseData = field(default_factory=BaseData)
    custom_data: CustomData = field(default_factory=CustomData)

    def to_dict(self) -> Dict[str, Any]:
        return {**asdict(self.base_data), **asdict(self.custom_data)}


class Telemetry:
    """
    Telemetry for a single step execution.

    Usage:
        telemetry = Telemetry(config.telemetry, provider)
        telemetry.initialize("readPipelineEnv")
        ...
        telemetry.set_data(CustomData(duration="1200", error_code="0"))
        telemetry.send()
    """

    def __init__(
        self,
        config: TelemetryConfig,
        provider: ConfigProviderProtocol,
        client: Optional[HttpClient] = None,
    ) -> None:
        self.config = config
        self.provider = provider
        self.client = client or HttpClient(
            ClientOptions(max_request_duration=config.request_timeout, max_retries=0)
        )
        self.base_data = BaseData()
        self.data = Data()
        self.timestamp = 0

    @property
    def disabled(self) -> bool:
        return self.config.disabled

    def initialize(self, step_name: str) -> None:
        """Collect base data from the provider."""
        self.base_data = BaseData(
            orchestrator=self.provider.orchestrator_type(),
            stage_name=self.provider.get_stage_name(),
            url=self.config.library_repository,
            step_name=step_name,
            site_id=self.config.site_id,
            pipeline_url_hash=sha1_or_na(self.provider.get_job_url()),
            build_url_hash=sha1_or_na(self.provider.get_build_url()),
        )
        self.data = Data(base_data=self.base_data)
        self.timestamp = int(time.time() * 1000)

    def set_data(self, custom_data: CustomData) -> None:
        self.data = Data(base_data=self.base_data, custom_data=custom_data)

    def get_data(self) -> Data:
        return self.data

    def event(self) -> Dict[str, Any]:
        """Track event payload."""
        return {
            "type": "track",
            "event": self.base_data.step_name,
            "visitorId": self.base_data.pipeline_url_hash,
            "accountId": self.base_data.site_id,
            "timestamp": self.timestamp,
            "properties": self.data.to_dict(),
        }

    def step_telemetry_data(self) -> Dict[str, Any]:
        """Data written to the log for every step, even with telemetry disabled."""
        custom = self.data.custom_data
        try:
            duration_ms = int(custom.duration)
        except ValueError:
            duration_ms = 0
        start_time = datetime.now(timezone.utc) - timedelta(milliseconds=duration_ms)

        return {
            "StepStartTime": start_time.isoformat(),
            "PipelineURLHash": self.base_data.pipeline_url_hash,
            "BuildURLHash": self.base_data.build_url_hash,
            "StageName": self.base_data.stage_name,
            "StepName": self.base_data.step_name,
            "ErrorCode": custom.error_code,
            "StepDuration": custom.duration,
            "ErrorCategory": custom.error_category,
            "CorrelationID": self.provider.get_build_url(),
            "PiperCommitHash": custom.piper_commit_hash,
        }

    def log_step_telemetry_data(self) -> None:
        # Log collectors match on this exact prefix
        logger.info("Step telemetry data:" + json.dumps(self.step_telemetry_data()))

    def send(self) -> bool:
        """
        Log the step data and send the event unless telemetry is disabled.

        Returns:
            True if an event was sent successfully
        """
        self.log_step_telemetry_data()

        if self.disabled:
            return False

        url = f"{self.config.base_url.rstrip('/')}{self.config.endpoint}"
        headers = {
            "Content-Type": "application/json",
            "x-pendo-integration-key": self.config.token,
        }
        logger.debug("Sending telemetry data")
        try:
            self.client.send_request("POST", url, body=self.event(), headers=headers)
        except HttpClientError as e:
            logger.warning(f"Failed to send telemetry data: {e}")
            return False
        return True
