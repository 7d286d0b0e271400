"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures for browser management, the WebUI keyword facade and page objects.

Key Features:
- Browser and page lifecycle management (skips when browsers are missing)
- One WebUI per test sharing the run LogSink
- Page Object fixtures bound to the bundled HTML site
- Screenshot capture on failure

All browser fixtures are function scoped so each test owns its event loop
resources.

================================================================================
"""

from pathlib import Path
from typing import AsyncGenerator, List

import pytest
import yaml
from loguru import logger
from playwright.async_api import Browser, BrowserContext, Error as PlaywrightError, Page

from webui_tools.common.log_sink import LogSink
from webui_tools.report_tools.allure_utils import AllureReportContext, attach_png, attach_text
from testsuites.ui_testing.framework.browser_manager import (
    BrowserManager,
    BrowserUnavailableError,
)
from testsuites.ui_testing.framework.web_ui import WebUI
from testsuites.ui_testing.pages.dashboard_page import DashboardPage
from testsuites.ui_testing.pages.login_page import LoginPage
from testsuites.ui_testing.pages.user_register_page import UserRegisterData, UserRegisterPage


TESTDATA_DIR = Path(__file__).parent.parent / "testdata"


def load_user_register_data() -> List[UserRegisterData]:
    """Registration scenarios from testdata/user_register.yaml."""
    with open(TESTDATA_DIR / "user_register.yaml", "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return [UserRegisterData.from_dict(item, TESTDATA_DIR) for item in raw.get("users", [])]


def pytest_generate_tests(metafunc):
    """Run tests asking for ``user_register_data`` once per YAML scenario."""
    if "user_register_data" in metafunc.fixturenames:
        scenarios = load_user_register_data()
        metafunc.parametrize(
            "user_register_data",
            scenarios,
            ids=[scenario.username for scenario in scenarios],
        )


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture
async def browser_manager() -> AsyncGenerator[BrowserManager, None]:
    """Started BrowserManager; skips the test when the browser cannot launch."""
    manager = BrowserManager()
    try:
        await manager.start()
    except BrowserUnavailableError as e:
        pytest.skip(f"Playwright browser not available: {e}")
    yield manager
    await manager.close()


@pytest.fixture
async def browser(browser_manager: BrowserManager) -> Browser:
    return browser_manager.browser


@pytest.fixture
async def context(browser_manager: BrowserManager) -> BrowserContext:
    """Isolated browser context (closed by the manager)."""
    return await browser_manager.new_context()


@pytest.fixture
async def page(request, context: BrowserContext) -> AsyncGenerator[Page, None]:
    """
    Function-scoped page fixture.

    Attaches a full-page screenshot and the current URL to Allure when the
    test body failed.
    """
    page = await context.new_page()
    yield page

    report = getattr(request.node, "rep_call", None)
    if report is not None and report.failed and not page.is_closed():
        try:
            attach_png(await page.screenshot(full_page=True), name="failure_screenshot")
            attach_text(page.url, name="Current URL")
        except PlaywrightError as e:
            logger.warning(f"Failed to capture screenshot on failure: {e}")
    await page.close()


# ================================================================================
# Keyword Fixtures
# ================================================================================

@pytest.fixture
def report_context(request) -> AllureReportContext:
    return AllureReportContext(test_name=request.node.name)


@pytest.fixture
def download_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "downloads"
    directory.mkdir()
    return directory


@pytest.fixture
def web_ui(
    page: Page,
    log_sink: LogSink,
    report_context: AllureReportContext,
    download_dir: Path,
) -> WebUI:
    """WebUI facade bound to the test's page."""
    return WebUI(page, log_sink=log_sink, report=report_context, download_dir=download_dir)


@pytest.fixture(scope="session")
def site_url() -> str:
    """Base URL of the bundled HTML site."""
    return TESTDATA_DIR.as_uri()


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def dashboard_page(page: Page, web_ui: WebUI, site_url: str) -> DashboardPage:
    return DashboardPage(page, web_ui, base_url=site_url)


@pytest.fixture
def user_register_page(page: Page, web_ui: WebUI, site_url: str) -> UserRegisterPage:
    return UserRegisterPage(page, web_ui, base_url=site_url)


@pytest.fixture
def login_page(page: Page, web_ui: WebUI, site_url: str) -> LoginPage:
    return LoginPage(page, web_ui, base_url=site_url)


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase's report as ``item.rep_<phase>`` for fixture teardown."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)
