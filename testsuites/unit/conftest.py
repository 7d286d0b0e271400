"""
Unit test fixtures: the keyword core wired to in-memory fakes.

No browser is launched. ``expect()`` in the wait engine is swapped for a
fake so checked/enabled gates read the fake locator's state.
"""

import pytest

from webui_tools.report_tools.screenshot_recorder import ScreenshotRecorder
from testsuites.ui_testing.framework.action_base import RetryConfig
from testsuites.ui_testing.framework.web_ui import WebUI
from testsuites.unit.fakes import FakeClock, FakeExpectation, FakePage, FakeReport, RecordingSink


@pytest.fixture(autouse=True)
def fake_expect(monkeypatch):
    monkeypatch.setattr(
        "testsuites.ui_testing.framework.wait_engine.expect", FakeExpectation
    )


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def report():
    return FakeReport()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_page():
    return FakePage()


@pytest.fixture
def make_ui(sink, report, clock, tmp_path):
    """Build a WebUI over a FakePage; screenshots on unless told otherwise."""

    def _make(page=None, screenshots=True, download_dir=None, **kwargs):
        kwargs.setdefault("default_timeout", 1000)
        kwargs.setdefault("retry_config", RetryConfig(max_attempts=1))
        return WebUI(
            page if page is not None else FakePage(),
            log_sink=sink,
            report=report,
            screenshots=ScreenshotRecorder(enabled=screenshots),
            download_dir=download_dir or tmp_path,
            sleep=clock.sleep,
            **kwargs,
        )

    return _make
