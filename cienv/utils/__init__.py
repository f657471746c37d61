"""Shared utilities (logging, redaction)."""
