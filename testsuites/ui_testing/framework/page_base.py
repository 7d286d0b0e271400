"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Page objects talk to the browser only through the WebUI keyword facade, so
every interaction is gated, logged and (optionally) screenshotted the same
way as in tests.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure
from playwright.async_api import Page

from webui_tools.common.global_config import get_config

from .web_ui import WebUI


class BasePage:
    """
    Base class for all page objects.

    Usage:
        class LoginPage(BasePage):
            URL_PATH = "/login.html"

            async def login(self, username: str, password: str):
                await self.ui.fill_text(self.USERNAME_INPUT, username)
                await self.ui.fill_text(self.PASSWORD_INPUT, password)
                await self.ui.click_element(self.SUBMIT_BUTTON)
    """

    # Override in subclasses
    URL_PATH: str = "/"
    PAGE_TITLE: str = ""

    def __init__(
        self,
        page: Page,
        ui: Optional[WebUI] = None,
        base_url: str = "",
    ):
        """
        Initialize page object.

        Args:
            page: Playwright Page object
            ui: Keyword facade bound to ``page`` (created when omitted)
            base_url: Base URL for the application (default: framework.base_url)
        """
        self.page = page
        self.ui = ui or WebUI(page)
        if not base_url:
            base_url = get_config("framework.base_url", "http://localhost:3000")
        self.base_url = base_url.rstrip("/")

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    async def navigate(self) -> None:
        """Navigate to this page."""
        with allure.step(f"Navigate to {self.URL_PATH}"):
            await self.ui.open_url(self.url)

    async def get_title(self) -> str:
        return await self.ui.get_page_title()


__all__ = [
    "BasePage",
]
