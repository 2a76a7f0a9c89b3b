#!/usr/bin/env python3
"""Structured logging for FabricFS.

Thin wrapper over the standard ``logging`` module that attaches key=value
context to every message. Context can be pushed for a block of work with
``add_context`` and is kept per thread.

Example:
    >>> logger = Logger("fabricfs.uri", level=LogLevel.DEBUG)
    >>> logger.warning("Malformed URI", uri="http://nope")
    >>> with logger.add_context(uri="fabric://ws"):
    ...     logger.debug("Resolving")
"""

import logging
import logging.handlers
import threading
from contextlib import contextmanager
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


class LogLevel(IntEnum):
    """Log levels matching Python's logging module."""

    DEBUG = logging.DEBUG  # 10
    INFO = logging.INFO  # 20
    WARNING = logging.WARNING  # 30
    ERROR = logging.ERROR  # 40
    CRITICAL = logging.CRITICAL  # 50


def _coerce_level(level: Union[LogLevel, str, int]) -> LogLevel:
    if isinstance(level, str):
        return LogLevel[level.upper()]
    return LogLevel(level)


class Logger:
    """Structured logger with context support.

    Loggers are named under the ``fabricfs`` hierarchy. Handlers are only
    installed on the instance that creates them, so child loggers created
    with ``handlers=[]`` propagate to their parent.
    """

    # Thread-local storage for context
    _context_stack = threading.local()

    def __init__(
        self,
        name: str = "fabricfs",
        level: Optional[Union[LogLevel, str]] = None,
        handlers: Optional[List[logging.Handler]] = None,
    ):
        """Initialize logger.

        Args:
            name: Logger name for identification
            level: Minimum log level to output; None inherits from the
                parent logger (INFO for the root ``fabricfs`` logger)
            handlers: Handlers to install; None installs a console handler
                on the root ``fabricfs`` logger only
        """
        self.name = name
        self.logger = logging.getLogger(name)

        if level is not None:
            self.set_level(level)
        elif name == "fabricfs":
            self.set_level(LogLevel.INFO)

        if handlers is None and name == "fabricfs":
            handlers = [self._create_console_handler()]

        if handlers is not None:
            for handler in list(self.logger.handlers):
                handler.close()
            self.logger.handlers.clear()
            for handler in handlers:
                self.logger.addHandler(handler)

    def _create_console_handler(self) -> logging.StreamHandler:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT))
        return handler

    def create_file_handler(
        self,
        filename: Union[str, Path],
        max_bytes: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5,
    ) -> logging.handlers.RotatingFileHandler:
        """Create rotating file handler.

        Args:
            filename: Path to log file
            max_bytes: Maximum size before rotation
            backup_count: Number of backup files to keep

        Returns:
            Configured rotating file handler
        """
        handler = logging.handlers.RotatingFileHandler(
            filename, maxBytes=max_bytes, backupCount=backup_count
        )
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT))
        return handler

    def add_handler(self, handler: logging.Handler) -> None:
        self.logger.addHandler(handler)

    def remove_handler(self, handler: logging.Handler) -> None:
        self.logger.removeHandler(handler)

    def set_level(self, level: Union[LogLevel, str]) -> None:
        """Set the minimum log level.

        Args:
            level: New log level (LogLevel or string)
        """
        self.logger.setLevel(_coerce_level(level))

    def get_level(self) -> LogLevel:
        return LogLevel(self.logger.getEffectiveLevel())

    def _get_context(self) -> Dict[str, Any]:
        """Merge every context level pushed on this thread."""
        if not hasattr(self._context_stack, "stack"):
            self._context_stack.stack = [{}]

        context = {}
        for ctx in self._context_stack.stack:
            context.update(ctx)
        return context

    def _format_message(self, msg: str, context: Dict[str, Any]) -> str:
        if context:
            ctx_str = " ".join(f"{k}={v}" for k, v in context.items())
            return f"{msg} | {ctx_str}"
        return msg

    @contextmanager
    def add_context(self, **kwargs):
        """Context manager to add temporary context.

        Example:
            >>> with logger.add_context(uri="fabric://ws/Notebook"):
            ...     logger.info("Listing items")
        """
        if not hasattr(self._context_stack, "stack"):
            self._context_stack.stack = [{}]

        self._context_stack.stack.append(kwargs)
        try:
            yield
        finally:
            self._context_stack.stack.pop()

    def _log(self, level: LogLevel, msg: str, context: Dict[str, Any], **kwargs) -> None:
        if not self.logger.isEnabledFor(level):
            return

        combined_context = self._get_context()
        combined_context.update(context)
        formatted_msg = self._format_message(msg, combined_context)
        self.logger.log(level, formatted_msg, extra={"context": combined_context}, **kwargs)

    def debug(self, msg: str, **context) -> None:
        self._log(LogLevel.DEBUG, msg, context)

    def info(self, msg: str, **context) -> None:
        self._log(LogLevel.INFO, msg, context)

    def warning(self, msg: str, **context) -> None:
        self._log(LogLevel.WARNING, msg, context)

    def error(self, msg: str, **context) -> None:
        self._log(LogLevel.ERROR, msg, context)
