"""
Exception hierarchy for cienv.

Detection and per-field lookups never raise; only operations that touch
the network or the filesystem do.
"""

from __future__ import annotations


class CienvError(Exception):
    """Base class for all cienv errors."""


class HttpClientError(CienvError):
    """Raised when an HTTP request fails or returns a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None, url: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class LogRetrievalError(CienvError):
    """Raised when build logs cannot be fetched from the orchestrator."""


class PipelineEnvError(CienvError):
    """Raised when the common pipeline environment cannot be read or encrypted."""
