"""
================================================================================
Dialog Handler
================================================================================

One-shot coordination of JavaScript dialogs (alert / confirm / prompt /
beforeunload).

A DialogWatch subscribes to the page's next "dialog" event *before* the
action that opens the dialog runs, and moves through:

    ARMED --dialog--> FIRED --respond ok-----> HANDLED
      |                 |
      |                 +--respond error--> FAILED
      |
      +--timer----> TIMED_OUT   (listener removed)

The watch resolves its future exactly once. The timer is an injectable
``sleep`` coroutine so tests can drive the race deterministically.

Usage:
    record = await ui.dialogs.alert_accept(trigger=lambda: ui.click_element("#confirm"))

    async with ui.dialogs.arm_set_text("Alice") as watch:
        await ui.click_element("#prompt")
    assert watch.record.action is DialogAction.SET_TEXT

    present = await ui.dialogs.verify_alert_present(timeout_ms=2000)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Union

from loguru import logger
from playwright.async_api import Dialog, Error as PlaywrightError, Page

from webui_tools.common.log_sink import LogSink

from .action_base import ActionBase
from .errors import ActionExecutionError, GateTimeoutError

Sleep = Callable[[float], Awaitable[Any]]
Trigger = Union[Callable[[], Any], Awaitable[Any]]


class WatchState(str, Enum):
    """Lifecycle of a DialogWatch."""
    ARMED = "armed"
    FIRED = "fired"
    HANDLED = "handled"
    TIMED_OUT = "timed_out"
    FAILED = "failed"


class DialogAction(str, Enum):
    """Response applied to a dialog."""
    ACCEPT = "accept"
    DISMISS = "dismiss"
    SET_TEXT = "set_text"
    DETECT = "detect"


@dataclass(frozen=True)
class DialogRecord:
    """
    What a watch observed.

    Attributes:
        dialog_type: "alert", "confirm", "prompt" or "beforeunload"
        message: Text shown by the dialog
        action: Response actually applied (SET_TEXT on a non-prompt becomes DISMISS)
        text: Prompt text sent with SET_TEXT
    """
    dialog_type: str
    message: str
    action: DialogAction
    text: Optional[str] = None


class DialogWatch:
    """One-shot listener for the next dialog on a page."""

    def __init__(
        self,
        page: Page,
        action: DialogAction,
        sink: LogSink,
        text: Optional[str] = None,
        timeout_ms: Optional[int] = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self.page = page
        self.action = action
        self.sink = sink
        self.text = text
        self.timeout_ms = timeout_ms
        self._sleep = sleep
        self._future: asyncio.Future = asyncio.get_running_loop().create_future()
        self.state = WatchState.ARMED
        self.record: Optional[DialogRecord] = None
        page.once("dialog", self._on_dialog)

    # =========================================================================
    # Listener
    # =========================================================================

    async def _on_dialog(self, dialog: Dialog) -> None:
        if self.state is not WatchState.ARMED:
            return
        self.state = WatchState.FIRED
        dialog_type, message = dialog.type, dialog.message
        if self.action is DialogAction.DETECT:
            self.sink.save_log(f'Dialog detected: "{message}"')
        else:
            self.sink.save_log(f'Dialog type: "{dialog_type}". Dialog message: "{message}"')

        try:
            applied = await self._respond(dialog, dialog_type)
        except Exception as exc:
            self.state = WatchState.FAILED
            error_message = f'❌ Failed to {self.action.value} dialog: "{exc}"'
            self.sink.save_log(error_message, level="ERROR")
            error = ActionExecutionError(error_message, operation=f"dialog {self.action.value}")
            error.__cause__ = exc
            self._future.set_exception(error)
            return

        self.state = WatchState.HANDLED
        self.record = DialogRecord(dialog_type, message, applied, self.text)
        self._future.set_result(self.record)

    async def _respond(self, dialog: Dialog, dialog_type: str) -> DialogAction:
        if self.action is DialogAction.ACCEPT:
            await dialog.accept()
            self.sink.save_log("✅ Dialog accepted")
            return DialogAction.ACCEPT
        if self.action is DialogAction.SET_TEXT:
            if dialog_type == "prompt":
                await dialog.accept(self.text)
                self.sink.save_log(f'✅ Dialog accepted with text: "{self.text}"')
                return DialogAction.SET_TEXT
            self.sink.save_log("⚠️ Dialog type is not prompt, cannot set text", level="WARN")
        if self.action is DialogAction.DETECT:
            # Presence is already established; a failed dismiss does not undo it
            try:
                await dialog.dismiss()
            except PlaywrightError as exc:
                self.sink.save_log(f'⚠️ Failed to dismiss detected dialog: "{exc}"', level="WARN")
            return DialogAction.DISMISS
        await dialog.dismiss()
        self.sink.save_log("✅ Dialog dismissed")
        return DialogAction.DISMISS

    # =========================================================================
    # Waiting
    # =========================================================================

    def cancel(self) -> None:
        """Stop listening. No-op once the dialog has fired."""
        if self.state is WatchState.ARMED:
            self.page.remove_listener("dialog", self._on_dialog)
            self.state = WatchState.TIMED_OUT
            self._future.cancel()

    async def wait(self, timeout_ms: Optional[int] = None) -> Optional[DialogRecord]:
        """
        Wait for the dialog to be handled.

        Args:
            timeout_ms: Budget in milliseconds; None waits without limit

        Returns:
            The DialogRecord, or None when the timer won the race

        Raises:
            ActionExecutionError: The dialog fired but responding to it failed
        """
        if timeout_ms is None:
            timeout_ms = self.timeout_ms
        if timeout_ms is None:
            return await self._future

        timer = asyncio.ensure_future(self._sleep(timeout_ms / 1000))
        try:
            await asyncio.wait({self._future, timer}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            if not timer.done():
                timer.cancel()

        # A dialog that already fired wins even if the timer also elapsed
        if self.state is WatchState.ARMED:
            logger.debug(f"No dialog within {timeout_ms}ms, removing listener")
            self.cancel()
            return None
        return await self._future

    async def __aenter__(self) -> "DialogWatch":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.cancel()
            return
        if await self.wait() is None:
            message = f"❌ No dialog appeared within {self.timeout_ms}ms"
            self.sink.save_log(message, level="ERROR")
            raise GateTimeoutError(
                message, state="dialog", timeout_ms=self.timeout_ms,
                operation=f"dialog {self.action.value}",
            )


class DialogCoordinator(ActionBase):
    """
    Dialog keywords for one page.

    ``alert_*`` methods arm a watch, run the optional trigger, then wait.
    Without a trigger they wait for a dialog caused by something else (e.g. a
    timer on the page). ``timeout_ms=None`` waits without limit.
    """

    def __init__(self, page: Page, sleep: Sleep = asyncio.sleep, **kwargs):
        super().__init__(page, **kwargs)
        self.sleep = sleep

    def _arm(self, action: DialogAction, text: Optional[str] = None,
             timeout_ms: Optional[int] = None) -> DialogWatch:
        return DialogWatch(
            self.page, action, self.log, text=text, timeout_ms=timeout_ms, sleep=self.sleep
        )

    def arm_accept(self, timeout_ms: Optional[int] = None) -> DialogWatch:
        return self._arm(DialogAction.ACCEPT, timeout_ms=timeout_ms)

    def arm_dismiss(self, timeout_ms: Optional[int] = None) -> DialogWatch:
        return self._arm(DialogAction.DISMISS, timeout_ms=timeout_ms)

    def arm_set_text(self, text: str, timeout_ms: Optional[int] = None) -> DialogWatch:
        return self._arm(DialogAction.SET_TEXT, text=text, timeout_ms=timeout_ms)

    async def _fire(self, watch: DialogWatch, trigger: Optional[Trigger]) -> None:
        if trigger is None:
            return
        try:
            result = trigger() if callable(trigger) else trigger
            if inspect.isawaitable(result):
                await result
        except BaseException:
            watch.cancel()
            raise

    async def _handle(
        self,
        watch: DialogWatch,
        trigger: Optional[Trigger],
        step_name: Optional[str],
        operation: str,
    ) -> DialogRecord:
        await self._fire(watch, trigger)
        record = await watch.wait()
        if record is None:
            message = f"❌ Failed to {watch.action.value} dialog: no dialog within {watch.timeout_ms}ms"
            self.log.save_log(message, level="ERROR")
            raise GateTimeoutError(
                message, state="dialog", timeout_ms=watch.timeout_ms, operation=operation,
            )
        await self._capture(step_name, operation)
        return record

    async def alert_accept(
        self,
        trigger: Optional[Trigger] = None,
        timeout_ms: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> DialogRecord:
        """Accept the next dialog (OK on confirm, empty/default on prompt)."""
        return await self._handle(self.arm_accept(timeout_ms), trigger, step_name, "alert_accept")

    async def alert_dismiss(
        self,
        trigger: Optional[Trigger] = None,
        timeout_ms: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> DialogRecord:
        """Dismiss the next dialog (Cancel on confirm/prompt)."""
        return await self._handle(self.arm_dismiss(timeout_ms), trigger, step_name, "alert_dismiss")

    async def alert_set_text(
        self,
        text: str,
        trigger: Optional[Trigger] = None,
        timeout_ms: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> DialogRecord:
        """
        Answer the next prompt with ``text``.

        Non-prompt dialogs are dismissed with a warning; the returned record's
        ``action`` is then DISMISS.
        """
        return await self._handle(
            self.arm_set_text(text, timeout_ms), trigger, step_name, "alert_set_text"
        )

    async def verify_alert_present(
        self,
        timeout_ms: Optional[int] = None,
        trigger: Optional[Trigger] = None,
    ) -> bool:
        """
        Whether a dialog appears within ``timeout_ms``.

        A detected dialog is dismissed so it cannot block the page. Returns
        False no earlier than ``timeout_ms`` after arming.
        """
        timeout_ms = self._timeout(timeout_ms)
        watch = self._arm(DialogAction.DETECT, timeout_ms=timeout_ms)
        await self._fire(watch, trigger)
        if await watch.wait() is None:
            self.log.save_log(f"⚠️ No alert appeared within {timeout_ms}ms", level="WARN")
            return False
        return True


__all__ = [
    "WatchState",
    "DialogAction",
    "DialogRecord",
    "DialogWatch",
    "DialogCoordinator",
]
