# ================================================================================
# Element Actions Module
# ================================================================================
#
# Keyword-style element interaction built on ActionBase.
#
# Every action follows the same contract:
#   - resolve the target (selector string or Locator)
#   - gate on a readiness state (visible, or attached for uploads)
#   - perform one Playwright call and log the outcome
#   - capture a step screenshot when enabled
#
# Key Features:
#   - Click / right click / double click
#   - Fill, type and clear text
#   - Idempotent check / uncheck
#   - Hover, mouse move and drag and drop
#   - File upload with local path validation
#   - Text, CSS and attribute queries
#   - Boolean wait_for_element_* checks
#
# ================================================================================

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

from playwright.async_api import Error as PlaywrightError, Locator

from .action_base import ActionBase, with_retry
from .element_resolver import Selector, TargetLike, resolve, resolve_all
from .errors import ActionExecutionError, MissingPathError, NotAFileError
from .wait_engine import ElementState, await_state


class ElementActions(ActionBase):
    """
    Element interaction keywords.

    All methods accept a selector string, a Selector/Handle, or a Locator as
    the target. ``timeout`` is in milliseconds and defaults to the configured
    ``framework.default_timeout``.

    Usage:
        ui = WebUI(page, log_sink=sink)
        await ui.click_element("#submit")
        await ui.fill_text("#email", "user@example.com")
    """

    # =========================================================================
    # Locators
    # =========================================================================

    def get_web_locator(self, selector: Union[str, Selector]) -> Locator:
        """Build a Locator for ``selector`` on the current page (no I/O)."""
        return resolve(self.page, selector)

    async def get_web_locators(self, selector: Union[str, Selector]) -> List[Locator]:
        """Locators for every element matching ``selector`` right now."""
        return await resolve_all(self.page, selector)

    # =========================================================================
    # Clicks
    # =========================================================================

    @with_retry()
    async def click_element(
        self,
        target: TargetLike,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> None:
        """
        Click an element once it is visible.

        Raises:
            GateTimeoutError: Element never became visible
            ActionExecutionError: Playwright click failed
        """
        timeout = self._timeout(timeout)
        locator, identifier = self._locate(target)
        action = f'click on "{identifier}"'

        await self._gate(locator, ElementState.VISIBLE, timeout, action, identifier)
        with self._executing(action, identifier):
            await locator.click(timeout=timeout)
        self._passed(f'Successfully click on "{identifier}"')
        await self._capture(step_name, f"click_element {identifier}")

    @with_retry()
    async def right_click_element(
        self,
        target: TargetLike,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> None:
        """Right click (context menu) an element once it is visible."""
        timeout = self._timeout(timeout)
        locator, identifier = self._locate(target)
        action = f'perform right click on "{identifier}"'

        await self._gate(locator, ElementState.VISIBLE, timeout, action, identifier)
        with self._executing(action, identifier):
            await locator.click(button="right", timeout=timeout)
        self._passed(f'Successfully perform right click on "{identifier}"')
        await self._capture(step_name, f"right_click_element {identifier}")

    @with_retry()
    async def double_click_element(
        self,
        target: TargetLike,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> None:
        timeout = self._timeout(timeout)
        locator, identifier = self._locate(target)
        action = f'double click on "{identifier}"'

        await self._gate(locator, ElementState.VISIBLE, timeout, action, identifier)
        with self._executing(action, identifier):
            await locator.dblclick(timeout=timeout)
        self._passed(f'Successfully double click on "{identifier}"')
        await self._capture(step_name, f"double_click_element {identifier}")

    # =========================================================================
    # Text input
    # =========================================================================

    @with_retry()
    async def fill_text(
        self,
        target: TargetLike,
        text: str,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> None:
        """
        Replace the value of an input with ``text``.

        The element must become visible first; a hidden input fails the gate
        and ``fill`` is never attempted.
        """
        timeout = self._timeout(timeout)
        locator, identifier = self._locate(target)
        action = f'fill text: "{text}" into {identifier}'

        await self._gate(locator, ElementState.VISIBLE, timeout, action, identifier)
        with self._executing(action, identifier):
            await locator.fill(text, timeout=timeout)
        self._passed(f'Successfully filled text: "{text}" into {identifier}')
        await self._capture(step_name, f"fill_text {identifier}")

    @with_retry()
    async def fill_text_and_press_key(
        self,
        target: TargetLike,
        text: str,
        key: Optional[str] = None,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> None:
        """Fill ``text`` then, if given, press ``key`` (e.g. "Enter")."""
        timeout = self._timeout(timeout)
        locator, identifier = self._locate(target)
        action = f'fill text: "{text}" and press key: "{key}" on {identifier}'

        await self._gate(locator, ElementState.VISIBLE, timeout, action, identifier)
        with self._executing(action, identifier):
            await locator.fill(text, timeout=timeout)
            self._passed(f'Successfully filled text: "{text}" into {identifier}')
            if key:
                await locator.press(key, timeout=timeout)
                self._passed(f'Successfully pressed key: "{key}" on {identifier}')
        await self._capture(step_name, f"fill_text_and_press_key {identifier}")

    @with_retry()
    async def send_keys(
        self,
        target: TargetLike,
        text: str,
        key: Optional[str] = None,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> None:
        """
        Type ``text`` key by key into a focused element.

        Unlike ``fill_text`` this fires keydown/keyup for every character and
        appends to the existing value.
        """
        timeout = self._timeout(timeout)
        locator, identifier = self._locate(target)
        action = f'send text: "{text}" and press key: "{key}" on {identifier}'

        await self._gate(locator, ElementState.VISIBLE, timeout, action, identifier)
        with self._executing(action, identifier):
            await locator.focus(timeout=timeout)
            await locator.press_sequentially(text, timeout=timeout)
            self._passed(f'Successfully sent text: "{text}" to {identifier}')
            if key:
                await locator.press(key, timeout=timeout)
                self._passed(f'Successfully pressed key: "{key}" on {identifier}')
        await self._capture(step_name, f"send_keys {identifier}")

    @with_retry()
    async def clear_text(
        self,
        target: TargetLike,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> None:
        timeout = self._timeout(timeout)
        locator, identifier = self._locate(target)
        action = f"clear text in {identifier}"

        await self._gate(locator, ElementState.VISIBLE, timeout, action, identifier)
        with self._executing(action, identifier):
            await locator.clear(timeout=timeout)
        self._passed(f"Successfully cleared text in {identifier}")
        await self._capture(step_name, f"clear_text {identifier}")

    # =========================================================================
    # Checkboxes
    # =========================================================================

    @with_retry()
    async def check_element(
        self,
        target: TargetLike,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> bool:
        """
        Ensure a checkbox/radio is checked.

        Already-checked elements are left alone, so calling this twice is safe.

        Returns:
            True once the element is checked
        """
        timeout = self._timeout(timeout)
        locator, identifier = self._locate(target)
        action = f'check "{identifier}"'

        await self._gate(locator, ElementState.VISIBLE, timeout, action, identifier)
        with self._executing(action, identifier):
            if not await locator.is_checked():
                await locator.check(timeout=timeout)
        self._passed(f'Element with "{identifier}" is checked')
        await self._capture(step_name, f"check_element {identifier}")
        return True

    @with_retry()
    async def uncheck_element(
        self,
        target: TargetLike,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> bool:
        """Ensure a checkbox is unchecked; no-op when it already is."""
        timeout = self._timeout(timeout)
        locator, identifier = self._locate(target)
        action = f'uncheck "{identifier}"'

        await self._gate(locator, ElementState.VISIBLE, timeout, action, identifier)
        with self._executing(action, identifier):
            if await locator.is_checked():
                await locator.uncheck(timeout=timeout)
        self._passed(f'Element with "{identifier}" is unchecked')
        await self._capture(step_name, f"uncheck_element {identifier}")
        return True

    # =========================================================================
    # Mouse
    # =========================================================================

    async def hover_on_element(
        self,
        target: TargetLike,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> bool:
        """
        Hover over an element, best effort.

        Failures (including gate timeouts) are logged at ERROR and reported
        through the return value instead of being raised.

        Returns:
            True if the hover happened, False otherwise
        """
        timeout = self._timeout(timeout)
        locator, identifier = self._locate(target)

        try:
            await locator.hover(timeout=timeout)
        except Exception as exc:
            self.log.save_log(
                f'❌ Failed to hover on element: "{identifier}". Error: "{exc}"',
                level="ERROR",
            )
            return False
        self._passed(f'Successfully hovered over element: "{identifier}"')
        await self._capture(step_name, f"hover_on_element {identifier}")
        return True

    @with_retry()
    async def move_to_element(
        self,
        target: TargetLike,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> None:
        """Move the mouse pointer to the centre of the element's bounding box."""
        timeout = self._timeout(timeout)
        locator, identifier = self._locate(target)
        action = f'move over the element: "{identifier}"'

        await self._gate(locator, ElementState.VISIBLE, timeout, action, identifier)
        with self._executing(action, identifier):
            box = await locator.bounding_box()
            if not box:
                raise self._fail(ActionExecutionError(
                    f'❌ Failed to {action}. Error: "Element does not have a bounding box."',
                    operation=action,
                    target=identifier,
                ))
            await self.page.mouse.move(
                box["x"] + box["width"] / 2,
                box["y"] + box["height"] / 2,
            )
        self._passed(f'Successfully moved over the element: "{identifier}"')
        await self._capture(step_name, f"move_to_element {identifier}")

    @with_retry()
    async def drag_and_drop(
        self,
        source: TargetLike,
        destination: TargetLike,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> None:
        """Drag ``source`` onto ``destination``; both must be visible first."""
        timeout = self._timeout(timeout)
        source_locator, source_id = self._locate(source)
        target_locator, target_id = self._locate(destination)
        action = f'drag from "{source_id}" to "{target_id}"'

        await self._gate(source_locator, ElementState.VISIBLE, timeout, action, source_id)
        await self._gate(target_locator, ElementState.VISIBLE, timeout, action, target_id)
        with self._executing(action, source_id):
            await source_locator.drag_to(target_locator, timeout=timeout)
        self._passed(f'Successfully dragged from "{source_id}" to "{target_id}"')
        await self._capture(step_name, f"drag_and_drop {source_id}")

    # =========================================================================
    # Upload
    # =========================================================================

    @with_retry()
    async def upload_file(
        self,
        target: TargetLike,
        file_path: Union[str, Path],
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> None:
        """
        Set a local file on an ``<input type="file">``.

        The path is validated before the browser is touched. File inputs are
        often styled away, so the gate only requires the input to be attached.

        Raises:
            MissingPathError: ``file_path`` does not exist
            NotAFileError: ``file_path`` is not a regular file
        """
        timeout = self._timeout(timeout)
        locator, identifier = self._locate(target)
        path = Path(file_path)

        if not path.exists():
            raise self._fail(MissingPathError(
                f'File Path : "{file_path}" is not existed!',
                operation="upload_file", target=identifier,
            ))
        if not path.is_file():
            raise self._fail(NotAFileError(
                f'File Path: "{file_path}" is not a file!',
                operation="upload_file", target=identifier,
            ))

        action = f'upload file: "{file_path}" on "{identifier}"'
        await self._gate(locator, ElementState.ATTACHED, timeout, action, identifier)
        with self._executing(action, identifier):
            await locator.set_input_files(str(path), timeout=timeout)
        self._passed(f'Successfully upload file: "{file_path}" on "{identifier}"')
        await self._capture(step_name, f"upload_file {identifier}")

    # =========================================================================
    # Queries
    # =========================================================================

    async def get_text_element(
        self,
        target: TargetLike,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> str:
        """Rendered text (``innerText``) of a visible element."""
        timeout = self._timeout(timeout)
        locator, identifier = self._locate(target)
        action = f'get text from "{identifier}"'

        await self._gate(locator, ElementState.VISIBLE, timeout, action, identifier)
        with self._executing(action, identifier):
            text = await locator.inner_text(timeout=timeout) or ""
        self._passed(f'Successfully got text: "{text}" from: "{identifier}"')
        await self._capture(step_name, f"get_text_element {identifier}")
        return text

    async def get_list_elements_text(
        self,
        selector: Union[str, Selector],
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> List[str]:
        """Text of every element matching ``selector``, in document order."""
        texts = []
        for locator in await self.get_web_locators(selector):
            texts.append(await self.get_text_element(locator, timeout=timeout, step_name=step_name))
        return texts

    async def get_css_value_element(
        self,
        target: TargetLike,
        css_name: str,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> str:
        """Computed value of CSS property ``css_name`` (e.g. "background-color")."""
        timeout = self._timeout(timeout)
        locator, identifier = self._locate(target)
        action = f"get CSS property for {identifier}"

        await self._gate(locator, ElementState.VISIBLE, timeout, action, identifier)
        with self._executing(action, identifier):
            value = await locator.evaluate(
                "(element, name) => window.getComputedStyle(element).getPropertyValue(name)",
                css_name,
            )
        self._passed(f'Successfully got CSS property "{css_name}" for {identifier}: "{value}"')
        await self._capture(step_name, f"get_css_value_element {identifier}")
        return value

    async def get_attribute_element(
        self,
        target: TargetLike,
        attribute: str,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> Optional[str]:
        """
        Value of ``attribute`` on a visible element.

        Returns:
            The attribute value, or None when the attribute is absent
        """
        timeout = self._timeout(timeout)
        locator, identifier = self._locate(target)
        action = f"get attribute for {identifier}"

        await self._gate(locator, ElementState.VISIBLE, timeout, action, identifier)
        with self._executing(action, identifier):
            value = await locator.get_attribute(attribute, timeout=timeout)
        self._passed(f'Successfully got attribute "{attribute}" of {identifier} with value "{value}"')
        if value is None:
            self.log.save_log(
                f'⚠️ Attribute "{attribute}" is not present on {identifier}.', level="WARN"
            )
        await self._capture(step_name, f"get_attribute_element {identifier}")
        return value

    # =========================================================================
    # Boolean waits
    # =========================================================================

    async def _await_bool(
        self,
        target: TargetLike,
        state: ElementState,
        timeout: Optional[int],
        step_name: Optional[str],
        operation: str,
    ) -> bool:
        timeout = self._timeout(timeout)
        locator, identifier = self._locate(target)
        label = "present" if state is ElementState.ATTACHED else state.value

        try:
            outcome = await await_state(locator, state, timeout)
        except PlaywrightError as exc:
            self.log.save_log(
                f"⚠️ Failed waiting for element with {identifier} to become {label}. "
                f"Error: \"{exc}\"",
                level="WARN",
            )
            return False
        if not outcome:
            self.log.save_log(
                f"⚠️ Timeout waiting for element with {identifier} to become {label} "
                f"within {timeout}ms. Error: \"{outcome.error}\"",
                level="WARN",
            )
            return False
        self._passed(f"Element with {identifier} became {label} within {timeout}ms")
        await self._capture(step_name, f"{operation} {identifier}")
        return True

    async def wait_for_element_visible(
        self,
        target: TargetLike,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> bool:
        """True if the element became visible in time, False on timeout."""
        return await self._await_bool(
            target, ElementState.VISIBLE, timeout, step_name, "wait_for_element_visible"
        )

    async def wait_for_element_clickable(
        self,
        target: TargetLike,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> bool:
        """True if the element became visible and enabled in time."""
        return await self._await_bool(
            target, ElementState.CLICKABLE, timeout, step_name, "wait_for_element_clickable"
        )

    async def wait_for_element_present(
        self,
        target: TargetLike,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> bool:
        """True if the element got attached to the DOM in time."""
        return await self._await_bool(
            target, ElementState.ATTACHED, timeout, step_name, "wait_for_element_present"
        )


__all__ = [
    "ElementActions",
]
