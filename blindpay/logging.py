"""Logging setup for the ``blindpay`` package loggers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only
    from .config import WebhookSettings

__all__ = ["PACKAGE_LOGGER", "configure_logging", "resolve_level"]

PACKAGE_LOGGER = "blindpay"

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def resolve_level(value: str | int | None) -> int:
    """Translate a level name or number into a :mod:`logging` level.

    Unknown names fall back to INFO.
    """

    if isinstance(value, int):
        return value
    candidate = (value or "").strip()
    if candidate.isdigit():
        return int(candidate)
    resolved = logging.getLevelName(candidate.upper()) if candidate else None
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
    settings: Optional["WebhookSettings"] = None,
    *,
    level: str | int | None = None,
    **kwargs: Any,
) -> int:
    """Apply the configured level to the ``blindpay`` loggers.

    ``level`` wins over ``settings.log_level`` (``LOG_LEVEL``); without either
    the cached :func:`~blindpay.config.get_settings` instance is used. A
    handler is only attached to the root logger when the host application has
    not configured one; pass ``force=True`` to replace existing handlers.
    """

    if level is None:
        if settings is None:
            from .config import get_settings

            settings = get_settings()
        level = settings.log_level
    effective_level = resolve_level(level)

    logging.getLogger(PACKAGE_LOGGER).setLevel(effective_level)
    logging.basicConfig(
        format=kwargs.pop("format", _DEFAULT_FORMAT),
        datefmt=kwargs.pop("datefmt", _DEFAULT_DATEFMT),
        force=kwargs.pop("force", False),
        **kwargs,
    )
    return effective_level
