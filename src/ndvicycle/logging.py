"""
Structured logging for ndvicycle.

Provides:
- CycleLogger: Structured logger with context binding
- get_logger: Get a logger for a specific component
- configure_logging: Configure logging output format
- configure_library_default: Quiet default when used as a library

Loggers are thin wrappers over structlog so call sites read the same
whether output goes to a JSON stream or a developer console. Until
configure_logging runs, events below WARNING are dropped.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Dict, Optional

import structlog


class CycleLogger:
    """
    Structured logger for aligner, cycler and renderer events.

    Example:
        log = get_logger("cycler").bind(entity_count=12)

        log.info("tick", index=3)
        log.warning("align_mismatch", entity_length=40, external_length=39)
    """

    def __init__(
        self,
        component: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize the logger.

        Args:
            component: Component name (e.g., "cycler", "scheduler")
            context: Initial context bindings
        """
        self._component = component
        self._context = context or {}
        self._logger = structlog.get_logger(f"ndvicycle.{component}")
        if self._context:
            self._logger = self._logger.bind(**self._context)

    @property
    def component(self) -> str:
        return self._component

    @property
    def context(self) -> Dict[str, Any]:
        return dict(self._context)

    def bind(self, **kwargs: Any) -> "CycleLogger":
        """
        Create a new logger with additional context bindings.

        Args:
            **kwargs: Key-value pairs to bind to the logger

        Returns:
            New CycleLogger with bound context
        """
        new_context = {**self._context, **kwargs}
        return CycleLogger(self._component, new_context)

    def debug(self, event: str, **kwargs: Any) -> None:
        """Log debug message."""
        self._logger.debug(event, **kwargs)

    def info(self, event: str, **kwargs: Any) -> None:
        """Log info message."""
        self._logger.info(event, **kwargs)

    def warning(self, event: str, **kwargs: Any) -> None:
        """Log warning message."""
        self._logger.warning(event, **kwargs)

    def error(self, event: str, **kwargs: Any) -> None:
        """Log error message."""
        self._logger.error(event, **kwargs)

    def exception(self, event: str, **kwargs: Any) -> None:
        """Log exception with traceback."""
        self._logger.exception(event, **kwargs)


def get_logger(component: str) -> CycleLogger:
    """
    Get a logger for a specific component.

    Args:
        component: Component name (e.g., "aligner", "cycler", "renderer")

    Returns:
        CycleLogger instance
    """
    return CycleLogger(component)


def configure_logging(
    level: str = "INFO",
    format: str = "console",
    output: str = "stderr",
) -> None:
    """
    Configure logging output.

    Args:
        level: Log level ("DEBUG", "INFO", "WARNING", "ERROR")
        format: Output format ("json" or "console")
        output: Output destination ("stderr", "stdout", or file path)

    Example:
        # JSON lines for a long-running display loop
        configure_logging(level="INFO", format="json")

        # Pretty console output while developing
        configure_logging(level="DEBUG", format="console")
    """
    level_num = getattr(logging, level.upper(), logging.INFO)

    if output == "stderr":
        handler = logging.StreamHandler(sys.stderr)
    elif output == "stdout":
        handler = logging.StreamHandler(sys.stdout)
    else:
        handler = logging.FileHandler(output)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root_logger = logging.getLogger("ndvicycle")
    root_logger.setLevel(level_num)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    if format == "json":
        processors = [
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_library_default(level: int = logging.WARNING) -> None:
    """
    Filter structlog output below ``level`` when nothing else configured it.

    Applications that call ``configure_logging`` or configure structlog
    themselves are left untouched.
    """
    if not structlog.is_configured():
        structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(level))


configure_library_default()
