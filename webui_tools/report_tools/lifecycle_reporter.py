"""
================================================================================
Lifecycle Reporter
================================================================================

Writes suite and test lifecycle lines into the run log:

    ============ Start running tests ============
    Starting test suite: "testsuites/unit/test_keywords.py"
    Test started: "TestCheckElement" -> "test_check_twice_keeps_checked"
    Test Completed: "test_check_twice_keeps_checked". Status: "passed"
    All tests finished!
    ============ All tests finished ============

The root conftest forwards pytest hooks to an instance of this class.

================================================================================
"""

from __future__ import annotations

from typing import Optional

from webui_tools.common.log_sink import LogSink


RUN_BANNER_START = "============ Start running tests ============"
RUN_BANNER_END = "============ All tests finished ============"


class LifecycleReporter:
    """Translate runner lifecycle events into LogSink lines."""

    def __init__(self, sink: LogSink):
        self.sink = sink
        self.started = 0
        self.completed = 0

    def on_run_start(self) -> None:
        """Global setup: create the log file and write the opening banner."""
        self.sink.create_log_file()
        self.sink.save_log(RUN_BANNER_START)

    def on_begin(self, suite_title: Optional[str]) -> None:
        self.sink.save_log(f"Starting test suite: \"{suite_title or 'Root Suite'}\"")

    def on_test_begin(self, parent_title: Optional[str], test_title: str) -> None:
        self.started += 1
        self.sink.save_log(
            f"Test started: \"{parent_title or 'No Suite'}\" -> \"{test_title}\""
        )

    def on_test_end(self, test_title: str, status: str) -> None:
        self.completed += 1
        level = "ERROR" if status == "failed" else "INFO"
        self.sink.save_log(
            f"Test Completed: \"{test_title}\". Status: \"{status}\"", level=level
        )

    def on_end(self) -> None:
        self.sink.save_log("All tests finished!")

    def on_run_end(self) -> None:
        """Global teardown: closing banner, then release the file handler."""
        self.sink.save_log(RUN_BANNER_END)
        self.sink.close()


__all__ = [
    "LifecycleReporter",
    "RUN_BANNER_START",
    "RUN_BANNER_END",
]
