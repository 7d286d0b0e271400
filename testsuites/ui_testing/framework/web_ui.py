"""
================================================================================
WebUI Facade
================================================================================

Single entry point for the keyword library: every element, select, verify,
scroll and page keyword on one object, plus the dialog and download
coordinators bound to the same page.

Usage:
    ui = WebUI(page, log_sink=sink, report=AllureReportContext())
    await ui.open_url("/register.html")
    async with ui.step("Fill registration form"):
        await ui.fill_text("#username", "alice")
        await ui.select_option_by_index("#country", 1)
    record = await ui.downloads.download_file("#export")

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional, Union

from playwright.async_api import Page

from .dialog_handler import DialogCoordinator
from .download_manager import DownloadCoordinator
from .page_actions import PageActions
from .scroll_actions import ScrollActions
from .select_actions import SelectActions
from .verify_actions import VerifyActions


class WebUI(VerifyActions, SelectActions, ScrollActions, PageActions):
    """
    Keyword facade.

    Attributes:
        dialogs: DialogCoordinator for the bound page
        downloads: DownloadCoordinator for the bound page
    """

    def __init__(
        self,
        page: Page,
        download_dir: Optional[Union[str, Path]] = None,
        sleep=asyncio.sleep,
        **kwargs,
    ):
        super().__init__(page, **kwargs)
        shared = dict(
            log_sink=self.log,
            report=self.report,
            screenshots=self.screenshots,
            default_timeout=self.default_timeout,
            retry_config=self.retry_config,
        )
        self.dialogs = DialogCoordinator(page, sleep=sleep, **shared)
        self.downloads = DownloadCoordinator(page, download_dir=download_dir, sleep=sleep, **shared)

    def switch_to_page(self, page: Page) -> Page:
        previous = super().switch_to_page(page)
        self.dialogs.page = page
        self.downloads.page = page
        return previous


__all__ = [
    "WebUI",
]
