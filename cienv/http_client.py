"""
HTTP client used for orchestrator API calls and telemetry.

Thin wrapper around requests.Session with a bounded request duration,
a bounded retry budget and optional bearer token authentication.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from cienv.exceptions import HttpClientError
from cienv.utils.logger import logger, register_secret

RETRY_STATUS_CODES = (429, 500, 502, 503, 504)


@dataclass
class ClientOptions:
    """
    Options for HttpClient.

    Attributes:
        max_request_duration: Timeout per request in seconds
        max_retries: Retries per request; 0 or -1 disables retries
        token: Bearer token sent as Authorization header
        transport_skip_verification: Skip TLS certificate verification
        user_agent: User-Agent header
    """

    max_request_duration: float = 30.0
    max_retries: int = 3
    token: str = ""
    transport_skip_verification: bool = False
    user_agent: str = "cienv"
    backoff_factor: float = 0.5


class HttpClient:
    """Synchronous HTTP client with timeout and retry handling."""

    def __init__(self, options: Optional[ClientOptions] = None) -> None:
        self.options = options or ClientOptions()
        self._session = self._build_session()

    def set_options(self, options: ClientOptions) -> None:
        """Replace the options and rebuild the underlying session."""
        self.close()
        self.options = options
        self._session = self._build_session()

    def _build_session(self) -> requests.Session:
        session = requests.Session()
        retries = max(self.options.max_retries, 0)
        retry = Retry(
            total=retries,
            connect=retries,
            read=retries,
            status=retries,
            backoff_factor=self.options.backoff_factor,
            status_forcelist=RETRY_STATUS_CODES,
            allowed_methods=None,
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        session.headers["User-Agent"] = self.options.user_agent
        if self.options.token:
            register_secret(self.options.token)
            session.headers["Authorization"] = f"Bearer {self.options.token}"
        session.verify = not self.options.transport_skip_verification
        return session

    def send_request(
        self,
        method: str,
        url: str,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        """
        Send a request and return the response.

        Args:
            method: HTTP method
            url: Absolute URL
            body: bytes/str payload, or a dict sent as JSON
            headers: Extra headers
            params: Query parameters

        Returns:
            The response (status 2xx)

        Raises:
            HttpClientError: On transport errors, timeouts and non-2xx statuses
        """
        kwargs: Dict[str, Any] = {
            "headers": headers,
            "params": params,
            "timeout": self.options.max_request_duration,
        }
        if isinstance(body, dict):
            kwargs["json"] = body
        elif body is not None:
            kwargs["data"] = body

        logger.debug(f"{method} {url}")
        try:
            response = self._session.request(method, url, **kwargs)
        except requests.exceptions.RequestException as e:
            raise HttpClientError(f"{method} {url} failed: {e}", url=url) from e

        if not 200 <= response.status_code < 300:
            raise HttpClientError(
                f"{method} {url} returned HTTP {response.status_code}",
                status_code=response.status_code,
                url=url,
            )
        return response

    def get(self, url: str, **kwargs: Any) -> requests.Response:
        return self.send_request("GET", url, **kwargs)

    def close(self) -> None:
        self._session.close()
