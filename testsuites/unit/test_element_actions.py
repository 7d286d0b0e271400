from pathlib import Path

import pytest
from playwright.async_api import Error as PlaywrightError

from testsuites.ui_testing.framework.action_base import RetryConfig
from testsuites.ui_testing.framework.errors import (
    ActionExecutionError,
    GateTimeoutError,
    MissingPathError,
    NotAFileError,
)
from testsuites.unit.fakes import FakeLocator, FakePage


def _page(**elements):
    return FakePage({f"#{name}": locator for name, locator in elements.items()})


class TestClickAndText:

    async def test_click_visible_element(self, make_ui, sink, report):
        button = FakeLocator("#register")
        ui = make_ui(_page(register=button))

        await ui.click_element("#register")

        assert button.calls == ["wait_for", "click"]
        assert 'Successfully click on "selector: "#register""' in sink.messages()[-1]
        assert [a.step_name for a in report.artifacts] == ['click_element selector: "#register"']

    async def test_right_and_double_click(self, make_ui):
        item = FakeLocator("#item")
        ui = make_ui(_page(item=item))

        await ui.right_click_element("#item")
        await ui.double_click_element("#item")

        assert item.args["click"][1]["button"] == "right"
        assert "dblclick" in item.calls

    async def test_fill_hidden_input_never_fills(self, make_ui, sink, report):
        hidden = FakeLocator("#hidden-field", visible=False)
        ui = make_ui(_page(**{"hidden-field": hidden}))

        with pytest.raises(GateTimeoutError) as excinfo:
            await ui.fill_text("#hidden-field", "secret", timeout=500)

        assert "fill" not in hidden.calls
        assert excinfo.value.timeout_ms == 500
        assert sink.messages("ERROR")[-1].startswith('❌ Failed to fill text: "secret"')
        assert report.artifacts == []

    async def test_fill_replaces_value(self, make_ui):
        email = FakeLocator("#email")
        email.value = "old"
        ui = make_ui(_page(email=email))

        await ui.fill_text("#email", "a@b.com")

        assert email.value == "a@b.com"

    async def test_fill_and_press_key(self, make_ui):
        search = FakeLocator("#search")
        ui = make_ui(_page(search=search))

        await ui.fill_text_and_press_key("#search", "playwright", "Enter")

        assert search.calls == ["wait_for", "fill", "press"]
        assert search.args["press"][0] == ("Enter",)

    async def test_send_keys_appends(self, make_ui):
        name = FakeLocator("#username")
        name.value = "al"
        ui = make_ui(_page(username=name))

        await ui.send_keys("#username", "ice")

        assert name.value == "alice"
        assert name.calls == ["wait_for", "focus", "press_sequentially"]

    async def test_clear_text(self, make_ui):
        bio = FakeLocator("#bio")
        bio.value = "text"
        ui = make_ui(_page(bio=bio))

        await ui.clear_text("#bio")

        assert bio.value == ""

    async def test_playwright_failure_becomes_action_error(self, make_ui, sink):
        broken = FakeLocator("#broken", fail_on={"click": RuntimeError("detached")})
        ui = make_ui(_page(broken=broken))

        with pytest.raises(ActionExecutionError) as excinfo:
            await ui.click_element("#broken")

        assert isinstance(excinfo.value.__cause__, RuntimeError)
        assert 'Error: "detached"' in sink.messages("ERROR")[-1]

    async def test_action_error_is_retried(self, make_ui):
        flaky = FakeLocator("#flaky", fail_on={"click": RuntimeError("flaky")})
        ui = make_ui(_page(flaky=flaky), retry_config=RetryConfig(max_attempts=3, delay_seconds=0))

        with pytest.raises(ActionExecutionError):
            await ui.click_element("#flaky")

        assert flaky.calls.count("click") == 3

    async def test_gate_timeout_is_not_retried(self, make_ui):
        hidden = FakeLocator("#hidden", visible=False)
        ui = make_ui(_page(hidden=hidden), retry_config=RetryConfig(max_attempts=3, delay_seconds=0))

        with pytest.raises(GateTimeoutError):
            await ui.click_element("#hidden")

        assert hidden.calls == ["wait_for"]


class TestCheckboxes:

    async def test_check_twice_keeps_checked(self, make_ui):
        box = FakeLocator("#newsletter")
        ui = make_ui(_page(newsletter=box))

        assert await ui.check_element("#newsletter") is True
        assert await ui.check_element("#newsletter") is True

        assert box.checked is True
        assert box.calls.count("check") == 1

    async def test_uncheck_only_when_checked(self, make_ui):
        box = FakeLocator("#newsletter", checked=True)
        ui = make_ui(_page(newsletter=box))

        await ui.uncheck_element("#newsletter")
        await ui.uncheck_element("#newsletter")

        assert box.checked is False
        assert box.calls.count("uncheck") == 1

    async def test_check_screenshot_uses_step_name(self, make_ui, report):
        ui = make_ui(_page(male=FakeLocator("#male")))

        await ui.check_element("#male", step_name="Select gender")

        assert report.artifacts[-1].step_name == "Select gender"


class TestMouse:

    async def test_hover_returns_true(self, make_ui, report):
        ui = make_ui(_page(tooltip=FakeLocator(".tooltip")))

        assert await ui.hover_on_element("#tooltip") is True
        assert len(report.artifacts) == 1

    async def test_hover_failure_is_logged_not_raised(self, make_ui, sink):
        ui = make_ui(_page(tooltip=FakeLocator(".tooltip", visible=False)))

        assert await ui.hover_on_element("#tooltip") is False
        assert sink.messages("ERROR")[-1].startswith('❌ Failed to hover on element')

    async def test_move_to_element_centre(self, make_ui):
        page = _page(slider=FakeLocator(box={"x": 10, "y": 20, "width": 100, "height": 40}))
        ui = make_ui(page)

        await ui.move_to_element("#slider")

        assert page.mouse.moves == [(60, 40)]

    async def test_move_to_element_without_box(self, make_ui, sink):
        ui = make_ui(_page(slider=FakeLocator(box=None)))

        with pytest.raises(ActionExecutionError):
            await ui.move_to_element("#slider")

        assert "bounding box" in sink.messages("ERROR")[-1]

    async def test_drag_and_drop(self, make_ui):
        source, target = FakeLocator("#a"), FakeLocator("#b")
        ui = make_ui(_page(a=source, b=target))

        await ui.drag_and_drop("#a", "#b")

        assert source.args["drag_to"][0] == (target,)


class TestUpload:

    async def test_upload_existing_file(self, make_ui, tmp_path):
        picture = tmp_path / "profile.png"
        picture.write_bytes(b"png")
        profile = FakeLocator("#profile", visible=False)
        ui = make_ui(_page(profile=profile))

        await ui.upload_file("#profile", picture)

        assert profile.args["wait_for"][1]["state"] == "attached"
        assert profile.args["set_input_files"][0] == (str(picture),)

    async def test_missing_path_fails_before_browser(self, make_ui, tmp_path, sink):
        profile = FakeLocator("#profile")
        ui = make_ui(_page(profile=profile))
        missing = tmp_path / "nope.png"

        with pytest.raises(MissingPathError):
            await ui.upload_file("#profile", missing)

        assert profile.calls == []
        assert sink.messages("ERROR")[-1] == f'File Path : "{missing}" is not existed!'

    async def test_directory_is_not_a_file(self, make_ui, tmp_path):
        profile = FakeLocator("#profile")
        ui = make_ui(_page(profile=profile))

        with pytest.raises(NotAFileError):
            await ui.upload_file("#profile", Path(tmp_path))

        assert "set_input_files" not in profile.calls


class TestQueries:

    async def test_get_text(self, make_ui):
        ui = make_ui(_page(result=FakeLocator(text="Registration successful: alice")))

        assert await ui.get_text_element("#result") == "Registration successful: alice"

    async def test_get_text_of_hidden_element_raises(self, make_ui):
        ui = make_ui(_page(result=FakeLocator(visible=False)))

        with pytest.raises(GateTimeoutError):
            await ui.get_text_element("#result", timeout=100)

    async def test_list_texts(self, make_ui):
        page = FakePage({"li": FakeLocator("li", text="row", count=2)})
        ui = make_ui(page)

        assert await ui.get_list_elements_text("li") == ["row", "row"]

    async def test_css_value(self, make_ui):
        ui = make_ui(_page(title=FakeLocator(css={"color": "rgb(0, 0, 0)"})))

        assert await ui.get_css_value_element("#title", "color") == "rgb(0, 0, 0)"

    async def test_missing_attribute_warns(self, make_ui, sink):
        ui = make_ui(_page(email=FakeLocator(attributes={"type": "email"})))

        assert await ui.get_attribute_element("#email", "type") == "email"
        assert await ui.get_attribute_element("#email", "placeholder") is None
        assert 'Attribute "placeholder" is not present' in sink.messages("WARN")[-1]

    async def test_get_web_locator_has_no_io(self, make_ui):
        email = FakeLocator("#email")
        ui = make_ui(_page(email=email))

        assert ui.get_web_locator("#email") is email
        assert email.calls == []

    async def test_get_web_locators(self, make_ui):
        page = FakePage({"li": FakeLocator("li", count=3)})
        ui = make_ui(page)

        assert len(await ui.get_web_locators("li")) == 3
        assert await ui.get_web_locators("li.missing") == []


class TestBooleanWaits:

    async def test_visible_wait(self, make_ui, sink):
        ui = make_ui(_page(shown=FakeLocator(), hidden=FakeLocator(visible=False)))

        assert await ui.wait_for_element_visible("#shown") is True
        assert await ui.wait_for_element_visible("#hidden", timeout=200) is False
        assert "within 200ms" in sink.messages("WARN")[-1]

    async def test_clickable_needs_enabled(self, make_ui):
        ui = make_ui(_page(register=FakeLocator(enabled=False)))

        assert await ui.wait_for_element_clickable("#register") is False

    async def test_playwright_error_is_logged_as_false(self, make_ui, sink, report):
        broken = FakeLocator(
            "#x", fail_on={"wait_for": PlaywrightError("Unexpected token in selector")}
        )
        ui = make_ui(_page(x=broken))

        assert await ui.wait_for_element_visible("#x") is False
        assert await ui.wait_for_element_present("#x") is False
        assert 'Error: "Unexpected token in selector"' in sink.messages("WARN")[-1]
        assert report.artifacts == []

    async def test_present_ignores_visibility(self, make_ui):
        ui = make_ui(_page(**{"hidden-field": FakeLocator(visible=False)}))

        assert await ui.wait_for_element_present("#hidden-field") is True
        assert await ui.wait_for_element_present("#nowhere") is False
