"""
Alea Structured Logger
=======================

Provides :class:`AleaLogger`, a logging facade that emits human-friendly
Rich console output and, optionally, machine-parseable JSON lines to a
rotating log file.

References:
    - Python logging HOWTO. https://docs.python.org/3/howto/logging.html
    - Rich library. https://github.com/Textualize/rich
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Iterator

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

_LOG_THEME = Theme(
    {
        "log.level.debug": "dim cyan",
        "log.level.info": "bold bright_blue",
        "log.level.warning": "bold yellow",
        "log.level.error": "bold red",
        "log.level.critical": "bold white on red",
    }
)


# ========================== Handlers =======================================


class _JSONFormatter(logging.Formatter):
    """One JSON object per line, e.g.::

        {"timestamp": "...", "level": "INFO", "logger": "alea.engine",
         "message": "...", "tool_name": "engine", "operation": "sample",
         "extra": {"bound": 6}}

    ``tool_name``/``operation`` are omitted when unset; ``exc_info`` is
    added when the record carries an exception.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, getattr(record, key))
            for key in ("tool_name", "operation")
            if getattr(record, key, None) is not None
        )
        if getattr(record, "alea_extra", None) is not None:
            entry["extra"] = record.alea_extra
        if record.exc_info and record.exc_info[1] is not None:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class _ColorConsoleHandler(RichHandler):
    """Rich handler on stderr using the Alea level colours."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(
            console=Console(theme=_LOG_THEME, stderr=True),
            show_path=False,
            rich_tracebacks=True,
            markup=False,
            **kwargs,
        )


# ========================== AleaLogger =====================================

_PLAIN_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_PLAIN_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"
_RECORD_KWARGS = frozenset({"exc_info", "stack_info", "stacklevel"})


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


class Stopwatch:
    """Elapsed-time handle yielded by :meth:`AleaLogger.timed`."""

    __slots__ = ("_start",)

    def __init__(self) -> None:
        self._start = time.perf_counter()

    @property
    def elapsed(self) -> float:
        """Seconds since the stopwatch started."""
        return time.perf_counter() - self._start


class AleaLogger:
    """Logger bound to one Alea component, with an optional operation scope.

    Usage::

        log = AleaLogger("engine", log_file="alea.log", json_logs=True)
        with log.operation("uniformity"):
            log.debug("Trial %d", 3, bound=6)

    Keyword arguments other than ``exc_info``, ``stack_info`` and
    ``stacklevel`` are collected into the record's ``alea_extra`` field
    and appear under ``"extra"`` in JSON output.

    Args:
        tool_name:       Component name; the stdlib logger is ``alea.<tool_name>``.
        log_level:       Minimum severity name.
        log_file:        Rotating log file path; falsy disables file logging.
        json_logs:       Write JSON lines instead of plain text to the file.
        max_bytes:       Size at which the file rotates.
        backup_count:    Rotated files kept.
        console_output:  Attach a Rich handler writing to stderr.
    """

    def __init__(
        self,
        tool_name: str,
        *,
        log_level: str = "INFO",
        log_file: str | Path | None = None,
        json_logs: bool = False,
        max_bytes: int = 10_485_760,
        backup_count: int = 5,
        console_output: bool = True,
    ) -> None:
        self._tool_name = tool_name
        self._operation: str | None = None

        logger = logging.getLogger(f"alea.{tool_name}")
        logger.setLevel(_level(log_level))
        logger.propagate = False
        # re-instantiation replaces handlers rather than stacking them
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        if console_output:
            logger.addHandler(_ColorConsoleHandler(level=_level(log_level)))
        if log_file:
            logger.addHandler(
                self._file_handler(Path(log_file), log_level, json_logs, max_bytes, backup_count)
            )
        if not logger.handlers:
            logger.addHandler(logging.NullHandler())

        self._logger = logger

    @staticmethod
    def _file_handler(
        path: Path, log_level: str, json_logs: bool, max_bytes: int, backup_count: int
    ) -> RotatingFileHandler:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            filename=str(path),
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        handler.setLevel(_level(log_level))
        handler.setFormatter(
            _JSONFormatter()
            if json_logs
            else logging.Formatter(fmt=_PLAIN_FORMAT, datefmt=_PLAIN_DATEFMT)
        )
        return handler

    # ------------------------------------------------------------------ #
    #  Scopes
    # ------------------------------------------------------------------ #

    @contextmanager
    def operation(self, name: str) -> Iterator[AleaLogger]:
        """Tag every record emitted inside the block with ``operation=name``."""
        previous, self._operation = self._operation, name
        try:
            yield self
        finally:
            self._operation = previous

    @contextmanager
    def timed(self, label: str) -> Iterator[Stopwatch]:
        """Log the start (DEBUG) and duration (INFO) of the block.

        Usage::

            with log.timed("uniformity check") as watch:
                report = checker.run(6, 600, 200)
        """
        self.debug("Started: %s", label)
        watch = Stopwatch()
        try:
            yield watch
        finally:
            self.info("Completed: %s (%.3f sec)", label, watch.elapsed)

    # ------------------------------------------------------------------ #
    #  Emission
    # ------------------------------------------------------------------ #

    def log(self, level: int, msg: str, *args: Any, **kwargs: Any) -> None:
        """Emit *msg* at *level* with the component context attached."""
        fields = {k: kwargs.pop(k) for k in list(kwargs) if k not in _RECORD_KWARGS}
        extra = {"tool_name": self._tool_name, "operation": self._operation}
        if fields:
            extra["alea_extra"] = fields
        self._logger.log(level, msg, *args, extra=extra, **kwargs)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.ERROR, msg, *args, **kwargs)

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """ERROR record carrying the active exception's traceback."""
        kwargs.setdefault("exc_info", True)
        self.log(logging.ERROR, msg, *args, **kwargs)

    @property
    def tool_name(self) -> str:
        return self._tool_name

    @property
    def underlying(self) -> logging.Logger:
        """The wrapped :class:`logging.Logger`."""
        return self._logger


def get_logger(tool_name: str) -> AleaLogger:
    """Return a library-mode logger: DEBUG threshold, no console handler.

    Library components log through this so that importing Alea never
    prints anything; the CLI configures its own console-bound logger.
    """
    return AleaLogger(tool_name, log_level="DEBUG", console_output=False)
