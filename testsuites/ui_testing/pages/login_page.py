"""
================================================================================
Login Page Object (Async / Playwright)
================================================================================

Login form (#user_login / #user_pass / #wp-submit).

================================================================================
"""

from __future__ import annotations

import allure

from testsuites.ui_testing.framework.page_base import BasePage


class LoginPage(BasePage):
    """Login page object (async)."""

    URL_PATH = "/login.html"
    PAGE_TITLE = "Log In"

    USERNAME_INPUT = "#user_login"
    PASSWORD_INPUT = "#user_pass"
    SUBMIT_BUTTON = "#wp-submit"

    @allure.step("Open login page")
    async def open(self) -> "LoginPage":
        await self.navigate()
        return self

    @allure.step("Fill login form (username={username})")
    async def fill_information(self, username: str, password: str) -> None:
        await self.ui.fill_text(self.USERNAME_INPUT, username)
        await self.ui.fill_text(self.PASSWORD_INPUT, password)

    @allure.step("Submit login form")
    async def login(self) -> None:
        await self.ui.click_element(self.SUBMIT_BUTTON)
