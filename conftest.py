"""
Repository-level pytest configuration.

Responsibilities:
  - Own the run LogSink (one dated log file per run, shared by every test)
  - Forward pytest lifecycle hooks to the LifecycleReporter

Under pytest-xdist every worker runs its own session and appends to the same
dated file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

import pytest

from webui_tools.common.global_config import get_config, init_logger
from webui_tools.common.log_sink import LogSink
from webui_tools.report_tools.lifecycle_reporter import LifecycleReporter


_reporter: Optional[LifecycleReporter] = None


def _split_location(location: Tuple[str, Optional[int], str]) -> Tuple[str, str]:
    """(file, line, "Class.test") -> ("Class" or file, "test")."""
    filename, _, domain = location
    parent, _, title = domain.rpartition(".")
    return parent or filename, title


def pytest_sessionstart(session: pytest.Session) -> None:
    """Global setup: create the run log file and write the opening lines."""
    global _reporter
    init_logger()
    _reporter = LifecycleReporter(LogSink(log_dir=get_config("logging.dir", "logs")))
    _reporter.on_run_start()
    _reporter.on_begin(" ".join(session.config.args) or None)


def pytest_runtest_logstart(nodeid: str, location: Tuple[str, Optional[int], str]) -> None:
    if _reporter is not None:
        _reporter.on_test_begin(*_split_location(location))


def pytest_runtest_logreport(report: pytest.TestReport) -> None:
    if _reporter is None:
        return
    # One completion line per test: the call phase, or setup when it never got that far
    if report.when == "call" or (report.when == "setup" and not report.passed):
        _, title = _split_location(report.location)
        _reporter.on_test_end(title, report.outcome)


def pytest_sessionfinish(session: pytest.Session, exitstatus: int) -> None:
    """Global teardown: closing lines, then release the log file."""
    global _reporter
    if _reporter is None:
        return
    _reporter.on_end()
    _reporter.on_run_end()
    _reporter = None


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session")
def log_sink() -> LogSink:
    """The run LogSink created at session start."""
    if _reporter is None:
        return LogSink()
    return _reporter.sink
