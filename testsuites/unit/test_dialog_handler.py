import asyncio
import warnings
from pathlib import Path

import pytest
from playwright.async_api import Error as PlaywrightError

from testsuites.ui_testing.framework import dialog_handler
from testsuites.ui_testing.framework.dialog_handler import (
    DialogAction,
    DialogWatch,
    WatchState,
)
from testsuites.ui_testing.framework.errors import ActionExecutionError, GateTimeoutError
from testsuites.unit.fakes import FakeDialog, FakeLocator, FakePage, never


def _fire(page, dialog_type, message=""):
    dialog = FakeDialog(dialog_type, message)
    return dialog, (lambda: page.fire_dialog(dialog))


async def test_accept_confirm(make_ui, report):
    page = FakePage()
    ui = make_ui(page)
    dialog, trigger = _fire(page, "confirm", "Are you sure?")

    record = await ui.dialogs.alert_accept(trigger=trigger)

    assert dialog.response == ("accept", None)
    assert record.dialog_type == "confirm"
    assert record.message == "Are you sure?"
    assert record.action is DialogAction.ACCEPT
    assert report.artifacts[-1].step_name == "alert_accept"
    assert page.listeners["dialog"] == []


async def test_dismiss_confirm(make_ui, sink):
    page = FakePage()
    ui = make_ui(page)
    dialog, trigger = _fire(page, "confirm", "Delete?")

    record = await ui.dialogs.alert_dismiss(trigger=trigger)

    assert dialog.response == ("dismiss", None)
    assert record.action is DialogAction.DISMISS
    assert 'Dialog type: "confirm". Dialog message: "Delete?"' in sink.messages()


async def test_set_text_on_prompt(make_ui):
    page = FakePage()
    ui = make_ui(page)
    dialog, trigger = _fire(page, "prompt", "Your name?")

    record = await ui.dialogs.alert_set_text("Alice", trigger=trigger)

    assert dialog.response == ("accept", "Alice")
    assert record.action is DialogAction.SET_TEXT
    assert record.text == "Alice"


async def test_set_text_on_alert_dismisses_with_warning(make_ui, sink):
    page = FakePage()
    ui = make_ui(page)
    dialog, trigger = _fire(page, "alert", "Hi")

    record = await ui.dialogs.alert_set_text("Alice", trigger=trigger)

    assert dialog.response == ("dismiss", None)
    assert record.action is DialogAction.DISMISS
    assert sink.messages("WARN") == ["⚠️ Dialog type is not prompt, cannot set text"]


async def test_watch_is_armed_before_the_trigger_runs(make_ui):
    page = FakePage()
    ui = make_ui(page)
    seen = []

    async def trigger():
        seen.append(len(page.listeners.get("dialog", [])))
        await page.fire_dialog(FakeDialog("alert"))

    await ui.dialogs.alert_accept(trigger=trigger)

    assert seen == [1]


async def test_only_first_dialog_is_handled(make_ui):
    page = FakePage()
    ui = make_ui(page)
    first, second = FakeDialog("alert", "one"), FakeDialog("alert", "two")

    async def trigger():
        await page.fire_dialog(first)
        await page.fire_dialog(second)

    record = await ui.dialogs.alert_accept(trigger=trigger)

    assert record.message == "one"
    assert second.response is None


async def test_arm_context_manager(make_ui):
    page = FakePage({"#prompt": FakeLocator("#prompt")})
    ui = make_ui(page)
    page.elements["#prompt"].on_click = lambda: page.fire_dialog(FakeDialog("prompt", "Name?"))

    async with ui.dialogs.arm_set_text("Bob") as watch:
        await ui.click_element("#prompt")

    assert watch.state is WatchState.HANDLED
    assert watch.record.text == "Bob"


async def test_arm_context_manager_times_out(make_ui, clock):
    page = FakePage()
    ui = make_ui(page)

    with pytest.raises(GateTimeoutError):
        async with ui.dialogs.arm_accept(timeout_ms=1500):
            pass

    assert clock.sleeps == [1.5]
    assert page.listeners["dialog"] == []


async def test_handling_timeout_raises(make_ui, clock, sink):
    page = FakePage()
    ui = make_ui(page)

    with pytest.raises(GateTimeoutError):
        await ui.dialogs.alert_accept(timeout_ms=2000)

    assert clock.now == pytest.approx(2.0)
    assert "no dialog within 2000ms" in sink.messages("ERROR")[-1]


async def test_failed_trigger_cancels_watch(make_ui):
    page = FakePage()
    ui = make_ui(page)

    async def trigger():
        raise RuntimeError("click failed")

    with pytest.raises(RuntimeError):
        await ui.dialogs.alert_accept(trigger=trigger)

    assert page.listeners["dialog"] == []


async def test_response_failure_surfaces_as_action_error(sink):
    page = FakePage()

    class BrokenDialog(FakeDialog):
        async def accept(self, prompt_text=None):
            raise RuntimeError("dialog already handled")

    watch = DialogWatch(page, DialogAction.ACCEPT, sink, sleep=never)
    await page.fire_dialog(BrokenDialog("alert"))

    with pytest.raises(ActionExecutionError):
        await watch.wait(timeout_ms=1000)
    assert watch.state is WatchState.FAILED


class TestVerifyAlertPresent:

    async def test_present_dialog_is_dismissed(self, make_ui, sink):
        page = FakePage()
        ui = make_ui(page)
        dialog, trigger = _fire(page, "alert", "Saved")

        assert await ui.dialogs.verify_alert_present(timeout_ms=2000, trigger=trigger) is True
        assert dialog.response == ("dismiss", None)
        assert 'Dialog detected: "Saved"' in sink.messages()

    async def test_failed_dismiss_still_counts_as_present(self, make_ui, sink):
        page = FakePage()
        ui = make_ui(page)

        class StuckDialog(FakeDialog):
            async def dismiss(self):
                raise PlaywrightError("Target page, context or browser has been closed")

        async def trigger():
            await page.fire_dialog(StuckDialog("alert", "Saved"))

        assert await ui.dialogs.verify_alert_present(timeout_ms=2000, trigger=trigger) is True
        assert "Failed to dismiss detected dialog" in sink.messages("WARN")[-1]
        assert sink.messages("ERROR") == []

    async def test_absent_only_after_full_timeout(self, make_ui, clock, sink):
        page = FakePage()
        ui = make_ui(page)

        assert await ui.dialogs.verify_alert_present(timeout_ms=2000) is False

        assert clock.now >= 2.0
        assert page.listeners["dialog"] == []
        assert sink.messages("WARN")[-1] == "⚠️ No alert appeared within 2000ms"

    async def test_dialog_beats_timer(self, make_ui):
        page = FakePage()
        ui = make_ui(page)
        ui.dialogs.sleep = never
        _, trigger = _fire(page, "confirm")

        assert await asyncio.wait_for(
            ui.dialogs.verify_alert_present(timeout_ms=2000, trigger=trigger), 5
        )

    async def test_default_timeout_used(self, make_ui, clock):
        ui = make_ui(FakePage(), default_timeout=750)

        assert await ui.dialogs.verify_alert_present() is False
        assert clock.sleeps == [0.75]


@pytest.mark.parametrize(
    "source",
    sorted(Path(dialog_handler.__file__).parent.glob("*.py")),
    ids=lambda path: path.name,
)
def test_framework_sources_compile_cleanly(source):
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        compile(source.read_text(encoding="utf-8"), str(source), "exec")
