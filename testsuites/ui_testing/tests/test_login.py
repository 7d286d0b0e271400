"""
================================================================================
Login UI Tests (Async / Playwright)
================================================================================

Login form page object against testdata/login.html.

================================================================================
"""

import allure
import pytest

from webui_tools.data_generator.text_generator import generate_random_text
from webui_tools.report_tools.allure_utils import attach_text
from testsuites.ui_testing.framework.web_ui import WebUI
from testsuites.ui_testing.pages.login_page import LoginPage


@allure.epic("UI Testing")
@allure.feature("Login")
class TestLogin:
    """Login page UI tests (async)."""

    @allure.title("User can log in")
    @pytest.mark.P0
    @pytest.mark.smoke
    async def test_login_success(self, web_ui: WebUI, login_page: LoginPage):
        username = generate_random_text(8)
        attach_text(username, name="Username")

        await login_page.open()
        assert await login_page.get_title() == LoginPage.PAGE_TITLE

        await login_page.fill_information(username, "s3cret")
        await login_page.login()

        await web_ui.verify_element_text_equal("#login-result", f"Welcome, {username}")

    @allure.title("Empty password shows an error")
    @pytest.mark.P2
    async def test_login_empty_password(self, web_ui: WebUI, login_page: LoginPage):
        await login_page.open()
        await login_page.fill_information("admin", "")
        await login_page.login()

        await web_ui.verify_element_text_contain("#login-result", "password field is empty")
