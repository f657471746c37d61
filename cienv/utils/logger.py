"""
Centralized logging for cienv.

Provides:
- Console logging to stderr (stdout is reserved for command output)
- Optional JSON log lines for log collectors
- Redaction of registered secrets from every record
"""
import json
import sys
from typing import List

from loguru import logger

from cienv.utils.security import redact_sensitive_info

_secrets: List[str] = []


def register_secret(secret: str) -> None:
    """Register a value that must never appear in log output."""
    if secret and secret not in _secrets:
        _secrets.append(secret)


def clear_secrets() -> None:
    _secrets.clear()


def redact(text: str) -> str:
    return redact_sensitive_info(text, _secrets)


def setup_logger(verbose: bool = False, json_logs: bool = False, correlation_id: str = "") -> None:
    """
    Configure the logger.

    Args:
        verbose: Log DEBUG+ instead of INFO+
        json_logs: Emit one JSON object per line
        correlation_id: Optional id bound to every record (e.g. the build URL)
    """
    logger.remove()

    level = "DEBUG" if verbose else "INFO"

    def format_json(record):
        entry = {
            "timestamp": record["time"].isoformat(),
            "level": record["level"].name,
            "message": record["message"],
            "module": record["name"],
        }
        cid = record["extra"].get("correlation_id")
        if cid:
            entry["correlation_id"] = cid
        # Escape braces, loguru treats the returned string as a format template
        return json.dumps(entry).replace("{", "{{").replace("}", "}}") + "\n"

    if json_logs:
        logger.add(sys.stderr, format=format_json, level=level, colorize=False)
    else:
        logger.add(
            sys.stderr,
            format=(
                "<green>{time:HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
                "<level>{message}</level>"
            ),
            level=level,
            colorize=None,
        )

    def redaction_filter(record):
        """Redact registered secrets from all logs."""
        record["message"] = redact(record["message"])
        if correlation_id:
            record["extra"].setdefault("correlation_id", correlation_id)

    logger.configure(patcher=redaction_filter)


__all__ = ["logger", "setup_logger", "register_secret", "clear_secrets", "redact"]
