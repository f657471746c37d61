"""
Pull-request reference parsing shared by the providers.
"""

from __future__ import annotations

import re

HEADS_PREFIX = "refs/heads/"
TAGS_PREFIX = "refs/tags/"

# refs/pull/<number>/merge (GitHub merge ref) or refs/pull/<number>/head
PULL_REQUEST_REF = re.compile(r"^refs/pull/(\d+)/(?:merge|head)$")


def strip_ref_prefix(ref: str) -> str:
    """Return the short branch name for a refs/heads/ reference."""
    if ref.startswith(HEADS_PREFIX):
        return ref[len(HEADS_PREFIX):]
    return ref


def is_pull_request_ref(ref: str) -> bool:
    return bool(ref) and PULL_REQUEST_REF.match(ref) is not None


def pull_request_key(ref: str) -> str:
    """
    Extract the pull-request number from a pull reference.

    Args:
        ref: Git reference, e.g. "refs/pull/42/merge"

    Returns:
        The number as string ("42"), or "" when ref is not a pull reference
    """
    if not ref:
        return ""
    match = PULL_REQUEST_REF.match(ref)
    return match.group(1) if match else ""
