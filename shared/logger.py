"""
Keysmith Structured Logger
===========================

:class:`KeysmithLogger` sends records to stderr through Rich and,
optionally, to a rotating file as plain text or JSON lines.

The active *operation* name lives in a :class:`contextvars.ContextVar`
rather than on the logger, so concurrent tasks sharing one logger each
see their own operation and nothing leaks once a scope closes.

Generated secrets must never be passed to the logger; callers log the
password type, unit counts and entropy figures only.

References:
    - Python logging HOWTO. https://docs.python.org/3/howto/logging.html
    - PEP 567 -- Context Variables.
    - Rich library. https://github.com/Textualize/rich
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Iterator, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

_LOG_THEME = Theme(
    {
        "log.level.debug": "dim cyan",
        "log.level.info": "bold bright_blue",
        "log.level.warning": "bold yellow",
        "log.level.error": "bold red",
    }
)

_PLAIN_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Operation scope of the running task; unset outside ``operation()``.
current_operation: ContextVar[Optional[str]] = ContextVar(
    "keysmith_operation", default=None
)


class _JSONLineFormatter(logging.Formatter):
    """One JSON object per record: time, level, logger, message, context."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "tool_name": getattr(record, "tool_name", None),
        }
        operation = getattr(record, "operation", None)
        if operation is not None:
            entry["operation"] = operation
        fields = getattr(record, "fields", None)
        if fields:
            entry["extra"] = fields
        if record.exc_info and record.exc_info[1] is not None:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def _stderr_handler(level: int) -> RichHandler:
    # stdout carries generated passwords only
    return RichHandler(
        level=level,
        console=Console(theme=_LOG_THEME, stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )


class KeysmithLogger:
    """Component logger with keyword fields and a task-local operation.

    Usage::

        log = KeysmithLogger("service", log_file="keysmith.log", json_logs=True)
        with log.operation("generate"):
            log.debug("Dispatching", password_type="strong", iteration=4)

    Args:
        tool_name:      Component name; the stdlib logger is ``keysmith.<tool_name>``.
        log_level:      Minimum severity name.
        log_file:       Rotating log file; ``None`` or empty disables it.
        json_logs:      Write JSON lines instead of plain text to the file.
        max_bytes:      File size that triggers rotation.
        backup_count:   Rotated files to keep.
        console_output: Attach the Rich stderr handler.
    """

    def __init__(
        self,
        tool_name: str,
        *,
        log_level: str = "WARNING",
        log_file: str | Path | None = None,
        json_logs: bool = False,
        max_bytes: int = 10_485_760,
        backup_count: int = 5,
        console_output: bool = True,
    ) -> None:
        self._tool_name = tool_name
        level = getattr(logging, log_level.upper(), logging.WARNING)

        self._logger = logging.getLogger(f"keysmith.{tool_name}")
        self._logger.setLevel(level)
        self._logger.propagate = False
        self._logger.handlers.clear()

        if console_output:
            self._logger.addHandler(_stderr_handler(level))

        if log_file:
            path = Path(log_file)
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(
                _JSONLineFormatter() if json_logs else logging.Formatter(_PLAIN_FORMAT)
            )
            self._logger.addHandler(file_handler)

    @classmethod
    def from_config(cls, tool_name: str, settings: Any) -> KeysmithLogger:
        """Build a logger from a :class:`shared.config.GlobalConfig`."""
        return cls(
            tool_name,
            log_level="DEBUG" if settings.debug else settings.log_level,
            log_file=settings.log_file or None,
            json_logs=settings.log_json,
            console_output=settings.console_logging,
        )

    @staticmethod
    @contextmanager
    def operation(name: str) -> Iterator[None]:
        """Tag records logged by the current task with ``operation=<name>``."""
        token = current_operation.set(name)
        try:
            yield
        finally:
            current_operation.reset(token)

    @contextmanager
    def timed(self, label: str) -> Iterator[None]:
        """Log the start of *label* and, on exit, its duration in seconds."""
        start = time.perf_counter()
        self.debug("Started: %s", label)
        try:
            yield
        finally:
            self.debug("Completed: %s (%.3f sec)", label, time.perf_counter() - start)

    def _log(self, level: int, msg: str, args: tuple[Any, ...], fields: dict[str, Any]) -> None:
        exc_info = fields.pop("exc_info", None)
        self._logger.log(
            level,
            msg,
            *args,
            exc_info=exc_info,
            extra={
                "tool_name": self._tool_name,
                "operation": current_operation.get(),
                "fields": fields,
            },
        )

    def debug(self, msg: str, *args: Any, **fields: Any) -> None:
        self._log(logging.DEBUG, msg, args, fields)

    def info(self, msg: str, *args: Any, **fields: Any) -> None:
        self._log(logging.INFO, msg, args, fields)

    def warning(self, msg: str, *args: Any, **fields: Any) -> None:
        self._log(logging.WARNING, msg, args, fields)

    def error(self, msg: str, *args: Any, **fields: Any) -> None:
        self._log(logging.ERROR, msg, args, fields)
