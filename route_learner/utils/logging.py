"""
Structured logging utilities for route-learner
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union


class StructuredLogger:
    """
    Logger that appends ``key=value`` context to human-readable messages.

    The pipeline runs inside a host's single scheduling thread, so every
    message stays on one line and carries the numbers needed to follow a
    recording (point counts, cluster counts, tile coordinates).
    """

    def __init__(
        self,
        name: str,
        log_file: Optional[Path] = None,
        level: int = logging.INFO
    ):
        """
        Args:
            name: Dotted logger name, usually the owning module or class
            log_file: Also write records to this file when given
            level: Initial threshold; see ``configure_logging``
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)
        self.logger.propagate = False

        # Replace handlers left over from an earlier logger with this name
        self.logger.handlers.clear()

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(StructuredFormatter())
        self.logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(file_handler)

    @property
    def level(self) -> int:
        """Effective level of the wrapped logger."""
        return self.logger.level

    def set_level(self, level: Union[int, str]) -> None:
        """Change the level of the wrapped logger."""
        self.logger.setLevel(_resolve_level(level))

    def log(
        self,
        level: str,
        message: str,
        **context: Any
    ) -> None:
        """
        Emit ``message`` followed by `` | key=value ...`` for ``context``

        Context is only formatted when ``level`` is enabled.
        """
        if not self.logger.isEnabledFor(_resolve_level(level)):
            return

        emit = getattr(self.logger, level.lower())
        suffix = self._format_context(context)
        emit(f"{message} | {suffix}" if suffix else message)

    def debug(self, message: str, **context: Any) -> None:
        self.log("debug", message, **context)

    def info(self, message: str, **context: Any) -> None:
        self.log("info", message, **context)

    def warning(self, message: str, **context: Any) -> None:
        self.log("warning", message, **context)

    def error(self, message: str, **context: Any) -> None:
        self.log("error", message, **context)

    def critical(self, message: str, **context: Any) -> None:
        self.log("critical", message, **context)

    @staticmethod
    def _format_context_value(value: Any) -> str:
        """Return a readable string for context values."""
        if isinstance(value, str):
            return value if " " not in value else f"\"{value}\""
        if isinstance(value, float):
            return f"{value:.3f}"
        if isinstance(value, (int, bool)) or value is None:
            return str(value)
        if hasattr(value, "model_dump"):
            value = value.model_dump()
        try:
            return json.dumps(value, ensure_ascii=False)
        except TypeError:
            return repr(value)

    def _format_context(self, context: Dict[str, Any]) -> str:
        """Return formatted key=value pairs for log context."""
        if not context:
            return ""

        return " ".join(
            f"{key}={self._format_context_value(value)}"
            for key, value in sorted(context.items())
        )


class StructuredFormatter(logging.Formatter):
    """Formatter that provides consistent human-friendly output."""

    def __init__(self) -> None:
        super().__init__(
            fmt="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


# Named logger cache
_loggers: Dict[str, StructuredLogger] = {}
_default_level: int = logging.INFO


def get_logger(name: str = "route_learner") -> StructuredLogger:
    """Return the structured logger for ``name``, creating it on first use."""
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name, level=_default_level)

    return _loggers[name]


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Set the level of every cached logger and of loggers created later

    Args:
        level: Logging level as an int or a name such as "DEBUG"
    """
    global _default_level
    _default_level = _resolve_level(level)
    for structured in _loggers.values():
        structured.set_level(_default_level)
