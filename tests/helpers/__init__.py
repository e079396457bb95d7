"""Utilities shared across webhook test suites."""

from .signing import MSG_ID, PAYLOAD, SECRET, SECRET_KEY, TIMESTAMP, reference_signature

__all__ = ["MSG_ID", "PAYLOAD", "SECRET", "SECRET_KEY", "TIMESTAMP", "reference_signature"]
