"""Centralized logging helpers.

Provides a single place to configure the root logger, plus small helpers for
structured DEBUG traces so modules don't build ``extra`` dicts by hand.
"""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from constants import Constants

_STRUCTURED_KEYS = ("event", "component", "action", "outcome", "target")


class _ContextFormatter(logging.Formatter):
    """Formatter that appends structured context fields when present."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        fields = []
        for key in _STRUCTURED_KEYS:
            value = getattr(record, key, None)
            if value is not None:
                fields.append(f"{key}={value}")
        extras = getattr(record, "context_extra", None)
        if isinstance(extras, dict):
            fields.extend(f"{k}={v}" for k, v in extras.items())
        if fields:
            return f"{base} ({', '.join(fields)})"
        return base


def _resolve_level(level: Optional[str]) -> int:
    name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "INFO").upper()
    value = getattr(logging, name, None)
    return value if isinstance(value, int) else logging.INFO


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """Configure the root logger.

    The level comes from ``level`` when given, otherwise from the
    ``REMIX_RELEASE_LOG_LEVEL`` environment variable, defaulting to INFO.
    Calling this more than once replaces handlers installed by a previous call.

    Args:
        level: Optional level name (DEBUG, INFO, ...).
        log_file: Optional path of an additional log file.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_remix_release", False):
            root.removeHandler(handler)
            handler.close()

    console = logging.StreamHandler()
    console.setFormatter(_ContextFormatter(Constants.LOG_FORMAT))
    console._remix_release = True  # type: ignore[attr-defined]
    root.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            _ContextFormatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
        file_handler._remix_release = True  # type: ignore[attr-defined]
        root.addHandler(file_handler)

    root.setLevel(_resolve_level(level))


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted by ``logger``."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(
    event: Optional[str] = None,
    component: Optional[str] = None,
    action: Optional[str] = None,
    outcome: Optional[str] = None,
    target: Optional[str] = None,
    **kwargs: Any,
) -> Dict[str, Any]:
    """Build an ``extra`` mapping for structured log records."""
    ctx: Dict[str, Any] = {
        "event": event,
        "component": component,
        "action": action,
        "outcome": outcome,
        "target": target,
    }
    ctx = {k: v for k, v in ctx.items() if v is not None}
    if kwargs:
        ctx["context_extra"] = kwargs
    return ctx

