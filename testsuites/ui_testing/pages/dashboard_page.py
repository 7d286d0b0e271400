"""
================================================================================
Dashboard Page Object (Async / Playwright)
================================================================================

Landing page of the demo site; links to the individual practice forms.

================================================================================
"""

from __future__ import annotations

import allure

from testsuites.ui_testing.framework.page_base import BasePage


class DashboardPage(BasePage):
    """Dashboard page object (async)."""

    URL_PATH = "/dashboard.html"
    PAGE_TITLE = "Dashboard"

    USER_REGISTRATION_LINK = "//a[@href='01-xpath-register-page.html']"

    @allure.step("Open dashboard")
    async def open(self) -> "DashboardPage":
        await self.navigate()
        return self

    async def click_on_user_registration(self) -> None:
        await self.ui.click_element(self.USER_REGISTRATION_LINK)
