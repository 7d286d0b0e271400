"""
================================================================================
Verify Actions
================================================================================

Assertion keywords. Each one logs what it compared, then either logs a pass
line or raises VerificationError (an AssertionError subclass, so pytest
reports it as an ordinary test failure).

The value assertions (verify_equals / verify_contains / verify_true /
verify_false) are synchronous and also exposed as module functions taking
a LogSink, for use outside a WebUI instance.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Optional, Union

from webui_tools.common.log_sink import LogSink

from .element_actions import ElementActions
from .element_resolver import Selector, TargetLike
from .errors import VerificationError
from .wait_engine import ElementState, await_state


HAS_ATTRIBUTE_JS = "(element, name) => element.hasAttribute(name)"


def _assertion_failed(sink: LogSink, message: str, operation: str) -> VerificationError:
    sink.save_log(message, level="ERROR")
    return VerificationError(message, operation=operation)


def verify_equals(sink: LogSink, value1: Any, value2: Any) -> None:
    """Assert ``value1 == value2``."""
    sink.save_log(f'Verify Equal: Value1 = "{value1}", Value2 = "{value2}"')
    if value1 != value2:
        raise _assertion_failed(
            sink, f'❌ Assertion failed: "{value1}" != "{value2}"', "verify_equals"
        )
    sink.save_log(f'✅ Assertion passed: "{value1}" equals "{value2}"')


def verify_contains(sink: LogSink, value1: str, value2: str) -> None:
    """Assert ``value2`` is a substring of ``value1``."""
    sink.save_log(f'Verify contains: Value1 = "{value1}", Value2 = "{value2}"')
    if value2 not in value1:
        raise _assertion_failed(
            sink, f'❌ Assertion failed: "{value1}" does not contain "{value2}"', "verify_contains"
        )
    sink.save_log(f'✅ Assertion passed: "{value1}" contains "{value2}"')


def verify_true(sink: LogSink, value: Any) -> None:
    sink.save_log(f'Verify True: value = "{value}"')
    if not value:
        raise _assertion_failed(
            sink, f'❌ Assertion failed: Expected true, but got "{value}"', "verify_true"
        )
    sink.save_log("✅ Assertion passed: value is true")


def verify_false(sink: LogSink, value: Any) -> None:
    sink.save_log(f'Verify False: value = "{value}"')
    if value:
        raise _assertion_failed(
            sink, f'❌ Assertion failed: Expected false, but got "{value}"', "verify_false"
        )
    sink.save_log("✅ Assertion passed: value is false")


class VerifyActions(ElementActions):
    """Element and page verification keywords."""

    # =========================================================================
    # Value assertions
    # =========================================================================

    def verify_equals(self, value1: Any, value2: Any) -> None:
        verify_equals(self.log, value1, value2)

    def verify_contains(self, value1: str, value2: str) -> None:
        verify_contains(self.log, value1, value2)

    def verify_true(self, value: Any) -> None:
        verify_true(self.log, value)

    def verify_false(self, value: Any) -> None:
        verify_false(self.log, value)

    # =========================================================================
    # Element state
    # =========================================================================

    async def verify_element_checked(
        self,
        target: TargetLike,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> bool:
        """
        Assert a checkbox/radio is checked.

        Raises:
            GateTimeoutError: Element never became visible
            VerificationError: Element is visible but not checked
        """
        timeout = self._timeout(timeout)
        locator, identifier = self._locate(target)
        action = f'verify "{identifier}" is checked'

        await self._gate(locator, ElementState.VISIBLE, timeout, action, identifier)
        with self._executing(action, identifier):
            checked = await locator.is_checked()
        if not checked:
            raise self._fail(VerificationError(
                f'❌ Verify failed element with "{identifier}" is not checked',
                operation="verify_element_checked", target=identifier,
            ))
        self._passed(f'Verify element with "{identifier}" is checked')
        await self._capture(step_name, f"verify_element_checked {identifier}")
        return True

    async def verify_element_visible(
        self,
        target: TargetLike,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> None:
        """Assert the element becomes visible within ``timeout``."""
        timeout = self._timeout(timeout)
        locator, identifier = self._locate(target)

        with self._executing(f'verify "{identifier}" is visible', identifier):
            outcome = await await_state(locator, ElementState.VISIBLE, timeout)
        if not outcome:
            raise self._fail(VerificationError(
                f'❌ Element with "{identifier}" is not visible!',
                operation="verify_element_visible", target=identifier,
            ))
        self._passed(f'Element with "{identifier}" is visible!')
        await self._capture(step_name, f"verify_element_visible {identifier}")

    async def verify_element_invisible(
        self,
        target: TargetLike,
        step_name: Optional[str] = None,
    ) -> None:
        """Assert the element is not visible right now (absent counts as invisible)."""
        locator, identifier = self._locate(target)

        with self._executing(f'verify "{identifier}" is invisible', identifier):
            visible = await locator.is_visible()
        if visible:
            raise self._fail(VerificationError(
                f'❌ Element with "{identifier}" is visible!',
                operation="verify_element_invisible", target=identifier,
            ))
        self._passed(f'Element with "{identifier}" is not visible!')
        await self._capture(step_name, f"verify_element_invisible {identifier}")

    async def verify_element_clickable(
        self,
        target: TargetLike,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> None:
        """Assert the element becomes visible and enabled within ``timeout``."""
        timeout = self._timeout(timeout)
        locator, identifier = self._locate(target)

        with self._executing(f'verify "{identifier}" is clickable', identifier):
            outcome = await await_state(locator, ElementState.CLICKABLE, timeout)
        if not outcome:
            raise self._fail(VerificationError(
                f'❌ Element with "{identifier}" is not enabled!',
                operation="verify_element_clickable", target=identifier,
            ))
        self._passed(f'Element with "{identifier}" is enabled!')
        await self._capture(step_name, f"verify_element_clickable {identifier}")

    async def verify_element_exists(
        self,
        selector: Union[str, Selector],
        step_name: Optional[str] = None,
    ) -> bool:
        """True if at least one element currently matches ``selector``."""
        locator, identifier = self._locate(selector)

        with self._executing(f"count elements with {identifier}", identifier):
            exists = await locator.count() > 0
        if exists:
            self._passed(f"Element with {identifier} exists")
        else:
            self.log.save_log(f"❌ Element with {identifier} does not exist")
        await self._capture(step_name, f"verify_element_exists {identifier}")
        return exists

    # =========================================================================
    # Attributes and text
    # =========================================================================

    async def verify_element_attribute_value(
        self,
        target: TargetLike,
        attribute_name: str,
        attribute_value: str,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> bool:
        """
        Assert ``attribute_name`` on the element equals ``attribute_value``.

        Raises:
            VerificationError: Values differ (or the attribute is absent)
        """
        actual = await self.get_attribute_element(
            target, attribute_name, timeout=timeout, step_name=step_name
        )
        self.log.save_log(
            f'Verify attribute "{attribute_name}": Expected = "{attribute_value}", '
            f'Actual = "{actual}"'
        )
        if actual != attribute_value:
            raise self._fail(VerificationError(
                f'❌ Assertion failed: "{actual}" does not equal "{attribute_value}"',
                operation="verify_element_attribute_value",
            ))
        self._passed(f'Assertion passed: "{actual}" equals "{attribute_value}"')
        return True

    async def verify_element_has_attribute(
        self,
        target: TargetLike,
        attribute_name: str,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> bool:
        """Whether the element carries ``attribute_name`` (any value)."""
        timeout = self._timeout(timeout)
        locator, identifier = self._locate(target)
        action = f'verify attribute "{attribute_name}" on {identifier}'

        await self._gate(locator, ElementState.ATTACHED, timeout, action, identifier)
        with self._executing(action, identifier):
            has_attribute = bool(await locator.evaluate(HAS_ATTRIBUTE_JS, attribute_name))
        if has_attribute:
            self._passed(f'Element with {identifier} has attribute "{attribute_name}".')
        else:
            self.log.save_log(
                f'⚠️ Element with {identifier} does NOT have attribute "{attribute_name}".',
                level="WARN",
            )
        await self._capture(step_name, f"verify_element_has_attribute {identifier}")
        return has_attribute

    async def verify_element_text_equal(
        self,
        target: TargetLike,
        expected_text: str,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> None:
        """Assert the element's text equals ``expected_text`` (both trimmed)."""
        text = await self.get_text_element(target, timeout=timeout, step_name=step_name)
        self.verify_equals(text.strip(), expected_text.strip())

    async def verify_element_text_contain(
        self,
        target: TargetLike,
        expected_text: str,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> None:
        """Assert the element's text contains ``expected_text`` (both trimmed)."""
        text = await self.get_text_element(target, timeout=timeout, step_name=step_name)
        self.verify_contains(text.strip(), expected_text.strip())

    async def verify_page_contains_text(self, text: str) -> bool:
        """
        Assert ``text`` occurs somewhere in the page HTML.

        Raises:
            VerificationError: The text is absent
        """
        with self._executing("verify text on page"):
            content = await self.page.content()
        if text not in content:
            raise self._fail(VerificationError(
                f'❌ The page does not contain the text: "{text}"',
                operation="verify_page_contains_text",
            ))
        self._passed(f'The page contains the text: "{text}"')
        return True


__all__ = [
    "VerifyActions",
    "verify_equals",
    "verify_contains",
    "verify_true",
    "verify_false",
    "HAS_ATTRIBUTE_JS",
]
