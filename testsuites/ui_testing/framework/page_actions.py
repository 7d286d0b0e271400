"""
================================================================================
Page Actions
================================================================================

Navigation, viewport and tab/window keywords.

A "tab" is a Page inside the current BrowserContext; a "window" is a new
BrowserContext with its own Page. ``switch_to_page`` rebinds the keyword
instance to another Page so following keywords act on it.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from typing import Dict, Optional

import allure
from playwright.async_api import Browser, BrowserContext, Page

from webui_tools.common.global_config import get_config

from .action_base import ActionBase, with_retry
from .errors import VerificationError


def get_current_dir() -> str:
    """Current working directory of the test process."""
    return os.getcwd()


class PageActions(ActionBase):
    """Page-level keywords."""

    # =========================================================================
    # Navigation
    # =========================================================================

    @with_retry()
    async def open_url(
        self,
        url: str,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> None:
        """
        Navigate to ``url``.

        Relative paths are joined onto ``framework.base_url``.
        """
        timeout = self._timeout(timeout)
        if url.startswith("/"):
            url = f"{get_config('framework.base_url', '').rstrip('/')}{url}"

        with self._executing(f'open url: "{url}"'):
            await self.page.goto(url, timeout=timeout)
        self._passed(f'Successfully opened url: "{url}"')
        await self._capture(step_name, f"open_url {url}")

    def get_url(self) -> str:
        """Current page URL (sync)."""
        current_url = self.page.url
        self.log.save_log(f'Current url is "{current_url}"')
        return current_url

    async def get_current_url(self) -> str:
        current_url = self.page.url
        self.log.save_log(f'Current url: "{current_url}"')
        return current_url

    async def get_page_title(self) -> str:
        with self._executing("get page title"):
            title = await self.page.title()
        self.log.save_log(f'Get page title: "{title}"')
        return title

    # =========================================================================
    # Viewport
    # =========================================================================

    async def set_window_size(self, width: int, height: int) -> None:
        with self._executing(f"set window size to {width}x{height}"):
            await self.page.set_viewport_size({"width": width, "height": height})
        self.log.save_log(f"Set window size: width = {width}, height = {height}")

    def get_window_size(self) -> Optional[Dict[str, int]]:
        """Viewport as ``{"width": ..., "height": ...}``, or None when unset."""
        return self.page.viewport_size

    # =========================================================================
    # Tabs and windows
    # =========================================================================

    async def close_current_window(self) -> None:
        with self._executing("close current window"):
            await self.page.close()
        self.log.save_log("Close current window")

    def _verify_count(self, current: int, expected: int) -> None:
        self.log.save_log(
            f'Asserting number of window/tab: Current = "{current}", Expected = "{expected}"'
        )
        if current != expected:
            raise self._fail(VerificationError(
                f'❌ Assertion failed: "{current}" windows/tabs are open, expected "{expected}"',
                operation="verify_number_of_windows",
            ))
        self._passed(f"Assertion passed: {expected} windows/tabs are open.")

    def verify_number_of_tabs(self, context: BrowserContext, expected: int) -> None:
        """Assert ``context`` has exactly ``expected`` open pages."""
        self._verify_count(len(context.pages), expected)

    def verify_number_of_windows(self, browser: Browser, expected: int) -> None:
        """Assert ``browser`` has exactly ``expected`` contexts."""
        self._verify_count(len(browser.contexts), expected)

    @allure.step("Open new tab")
    async def open_new_tab(self, context: Optional[BrowserContext] = None) -> Page:
        """Open a Page in ``context`` (default: the current page's context)."""
        context = context or self.page.context
        with self._executing("open new tab"):
            new_tab = await context.new_page()
        self.log.save_log("Open new page successfully")
        return new_tab

    @allure.step("Open new window")
    async def open_new_window(self, browser: Browser) -> Page:
        """Open a Page in a fresh BrowserContext of ``browser``."""
        with self._executing("open new window"):
            context = await browser.new_context()
            new_page = await context.new_page()
        self.log.save_log("Open new page successfully")
        return new_page

    def switch_to_page(self, page: Page) -> Page:
        """
        Make ``page`` the target of following keywords.

        Returns:
            The previously bound Page
        """
        previous, self.page = self.page, page
        self.log.save_log(f'Switched to page: "{page.url}"')
        return previous


__all__ = [
    "PageActions",
    "get_current_dir",
]
