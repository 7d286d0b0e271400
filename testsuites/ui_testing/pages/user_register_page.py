"""
================================================================================
User Registration Page Object (Async / Playwright)
================================================================================

Registration form exercising most keyword families: text inputs, radio and
checkbox groups, single and multi selects, upload, hover and a toggle.

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from testsuites.ui_testing.framework.page_base import BasePage


@dataclass
class UserRegisterData:
    """One registration form submission."""
    username: str
    email: str
    gender: str
    hobbies: str
    country: str
    interests: List[str] = field(default_factory=list)
    date_of_birth: str = ""
    rate_us: str = "5"
    favorite_color: str = "#000000"
    news_letter: bool = False
    profile_picture: str = ""
    biography: str = ""
    enable_feature: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base_dir: Optional[Path] = None) -> "UserRegisterData":
        """
        Build from a test-data mapping.

        A relative ``profile_picture`` is resolved against ``base_dir``.
        """
        item = cls(**data)
        if base_dir and item.profile_picture and not Path(item.profile_picture).is_absolute():
            item.profile_picture = str(base_dir / item.profile_picture)
        return item

    @property
    def countries(self) -> List[str]:
        """``country`` holds space-separated option labels."""
        return self.country.split(" ")


class UserRegisterPage(BasePage):
    """User registration page object (async)."""

    URL_PATH = "/01-xpath-register-page.html"
    PAGE_TITLE = "User Registration"

    USERNAME_INPUT = "//input[@id='username']"
    EMAIL_INPUT = "#email"
    COUNTRY_SELECT = "#country"
    INTERESTS_SELECT = "#interests"
    DATE_OF_BIRTH_INPUT = "#dob"
    RATING_INPUT = "#rating"
    FAVORITE_COLOR_INPUT = "#favcolor"
    NEWSLETTER_CHECKBOX = "#newsletter"
    PROFILE_PICTURE_INPUT = "#profile"
    BIOGRAPHY_INPUT = "#bio"
    TOOLTIP = ".tooltip"
    ENABLE_FEATURE_TOGGLE = "//span[@class='slider round']"
    REGISTER_BUTTON = "//button[@type='submit']"

    @staticmethod
    def gender_radio(gender: str) -> str:
        return f"input[id='{gender}']"

    @staticmethod
    def hobby_label(hobby: str) -> str:
        return f"//label[text()='{hobby}']"

    async def click_on_register_button(self) -> None:
        await self.ui.click_element(self.REGISTER_BUTTON)

    async def fill_information(self, data: Union[UserRegisterData, Dict[str, Any]]) -> None:
        """Fill every field of the form; does not submit."""
        if isinstance(data, dict):
            data = UserRegisterData.from_dict(data)
        ui = self.ui

        await ui.fill_text(self.USERNAME_INPUT, data.username)
        await ui.fill_text(self.EMAIL_INPUT, data.email)

        await ui.check_element(self.gender_radio(data.gender))
        await ui.verify_element_checked(self.gender_radio(data.gender))

        await ui.check_element(self.hobby_label(data.hobbies))
        await ui.verify_element_checked(self.hobby_label(data.hobbies))

        await ui.select_multiple_options_by_text(self.COUNTRY_SELECT, data.countries)
        await ui.verify_select_by_text(self.COUNTRY_SELECT, data.countries)

        await ui.select_multiple_options_by_text(self.INTERESTS_SELECT, data.interests)
        await ui.verify_select_by_text(self.INTERESTS_SELECT, data.interests)

        await ui.verify_option_total(self.COUNTRY_SELECT)

        await ui.fill_text(self.DATE_OF_BIRTH_INPUT, data.date_of_birth)
        await ui.fill_text(self.RATING_INPUT, data.rate_us)
        await ui.fill_text(self.FAVORITE_COLOR_INPUT, data.favorite_color)

        if data.news_letter:
            await ui.check_element(self.NEWSLETTER_CHECKBOX)

        if data.profile_picture:
            await ui.upload_file(self.PROFILE_PICTURE_INPUT, data.profile_picture)

        await ui.fill_text(self.BIOGRAPHY_INPUT, data.biography)

        await ui.hover_on_element(self.TOOLTIP)

        if data.enable_feature:
            await ui.click_element(self.ENABLE_FEATURE_TOGGLE)
