"""Logging utilities for sharpdoc analyzers and commands.

Console lines are tagged with a scope: the analysis mode for analyzer
loggers (``[sharpdoc:filesystem]``, ``[sharpdoc:semantic]``,
``[sharpdoc:docs]``) and the emitting component everywhere else
(``[sharpdoc:cli]``, ``[sharpdoc:walker]``).
"""

from __future__ import annotations

import logging
from typing import Any, MutableMapping, Tuple

_LOGGER_NAME = "sharpdoc"
_FORMAT = "[sharpdoc:%(scope)s] %(levelname)s %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the sharpdoc hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


class AnalysisLogger(logging.LoggerAdapter):
    """Logger adapter that stamps every record with an analysis mode."""

    def __init__(self, mode: str) -> None:
        super().__init__(get_logger(f"analysis.{mode}"), {"scope": mode})
        self.mode = mode

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra.setdefault("scope", self.mode)
        kwargs["extra"] = extra
        return msg, kwargs


def analysis_logger(mode: str) -> AnalysisLogger:
    return AnalysisLogger(mode)


def scope_for(logger_name: str) -> str:
    """Component name shown for records that carry no analysis mode."""
    prefix = f"{_LOGGER_NAME}."
    if not logger_name.startswith(prefix):
        return logger_name
    return logger_name[len(prefix):].split(".", 1)[0]


class _ScopeFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "scope"):
            record.scope = scope_for(record.name)
        return True


def configure_logging(*, verbose: bool = False) -> logging.Logger:
    """Configure the sharpdoc logger with scoped console output."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Repeated CLI invocations in one process must not stack handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.addFilter(_ScopeFilter())
    stream_handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(stream_handler)

    return logger


__all__ = ["AnalysisLogger", "analysis_logger", "configure_logging", "get_logger", "scope_for"]
