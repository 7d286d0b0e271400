"""
================================================================================
Run Log Sink
================================================================================

Append-only, dated log file shared by every keyword in a test run.

One LogSink is created per pytest session (see the root conftest). Keywords
receive it explicitly, so tests can build isolated sinks in a tmp directory.

File format (one line per record):
    [2026-10-19T08:15:02.113Z] [INFO] ✅ Successfully click on "selector: "#submit""

Lines are written through a loguru file handler opened once in append mode.
Loguru serialises writes inside a process and every record is a single write,
so parallel pytest-xdist workers appending to the same daily file do not
interleave partial lines.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import itertools
from datetime import datetime, timezone
from pathlib import Path
from typing import Literal, Optional, Union

from loguru import logger


LogLevel = Literal["INFO", "WARN", "ERROR", "DEBUG"]

LOG_FILE_FORMAT = "[{time:YYYY-MM-DDTHH:mm:ss.SSS[Z]!UTC}] [{extra[level_tag]}] {message}"

# loguru names WARN "WARNING"
_LOGURU_LEVELS = {
    "INFO": "INFO",
    "WARN": "WARNING",
    "ERROR": "ERROR",
    "DEBUG": "DEBUG",
}

_sink_ids = itertools.count(1)


class LogSink:
    """
    Dated run log writer with optional console echo.

    Usage:
        sink = LogSink("logs")
        sink.create_log_file()
        sink.save_log("Open new page successfully")
        sink.save_log("Dialog type is not prompt", level="WARN")
        sink.close()

    A sink built without a directory is console-only; ``create_log_file`` is
    then a no-op.
    """

    def __init__(
        self,
        log_dir: Optional[Union[str, Path]] = None,
        started_at: Optional[datetime] = None,
    ):
        """
        Args:
            log_dir: Directory holding the ``logs_<date>.txt`` files.
            started_at: Run start time. The file date is fixed from it, so a
                run crossing midnight keeps writing to one file.
        """
        self.log_dir = Path(log_dir) if log_dir is not None else None
        self.started_at = started_at or datetime.now(timezone.utc)
        self._sink_id = next(_sink_ids)
        self._handler_id: Optional[int] = None
        self._logger = logger.bind(sink_id=self._sink_id)

    @property
    def log_file_path(self) -> Optional[Path]:
        """Path of this run's log file, or None for a console-only sink."""
        if self.log_dir is None:
            return None
        return self.log_dir / f"logs_{self.started_at.strftime('%Y-%m-%d')}.txt"

    def create_log_file(self) -> None:
        """Create the log directory and file, and open the file handler once."""
        path = self.log_file_path
        if path is None or self._handler_id is not None:
            return

        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch(exist_ok=True)

        sink_id = self._sink_id
        self._handler_id = logger.add(
            str(path),
            level="DEBUG",
            format=LOG_FILE_FORMAT,
            filter=lambda record: record["extra"].get("sink_id") == sink_id,
            mode="a",
            encoding="utf-8",
            colorize=False,
            backtrace=False,
            diagnose=False,
        )

    def save_log(
        self,
        message: Union[str, int, float],
        level: LogLevel = "INFO",
        silent: bool = False,
    ) -> None:
        """
        Append one timestamped line to the run log.

        Args:
            message: The log message
            level: INFO, WARN, ERROR or DEBUG
            silent: If True, the line is not echoed to the console (CI mode)
        """
        level = level.upper()
        if level not in _LOGURU_LEVELS:
            raise ValueError(f"Unknown log level: {level}")
        self._logger.bind(level_tag=level, silent=silent).opt(depth=1).log(
            _LOGURU_LEVELS[level], str(message)
        )

    def close(self) -> None:
        """Flush and detach the file handler."""
        if self._handler_id is not None:
            logger.remove(self._handler_id)
            self._handler_id = None


__all__ = [
    "LogSink",
    "LogLevel",
    "LOG_FILE_FORMAT",
]
