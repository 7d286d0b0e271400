"""
================================================================================
Select Actions
================================================================================

Keywords for ``<select>`` dropdowns: choose options by visible text, value or
index, count them, and verify what is currently selected.

Every keyword gates on the dropdown being visible first. Index verification
checks bounds before reading state and raises IndexOutOfBoundsError, which is
a resolution failure rather than a timeout.

Usage:
    await ui.select_option_by_index("#country", 1)
    assert await ui.verify_select_by_index("#country", 1)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Union

from .action_base import ActionBase, with_retry
from .element_resolver import TargetLike
from .errors import IndexOutOfBoundsError, VerificationError
from .wait_engine import ElementState


SELECTED_LABELS_JS = "select => Array.from(select.selectedOptions).map(o => o.label)"
SELECTED_VALUES_JS = "select => Array.from(select.selectedOptions).map(o => o.value)"
OPTION_SELECTED_JS = "option => option.selected"


class SelectActions(ActionBase):
    """Dropdown keywords."""

    async def _select(
        self,
        target: TargetLike,
        action: str,
        success: str,
        timeout: Optional[int],
        step_name: Optional[str],
        operation: str,
        **option,
    ) -> List[str]:
        timeout = self._timeout(timeout)
        locator, identifier = self._locate(target)
        action = f'{action} in dropdown: "{identifier}"'

        await self._gate(locator, ElementState.VISIBLE, timeout, action, identifier)
        with self._executing(action, identifier):
            selected = await locator.select_option(timeout=timeout, **option)
        self._passed(f'{success} in dropdown: "{identifier}"')
        await self._capture(step_name, f"{operation} {identifier}")
        return selected

    @with_retry()
    async def select_option_by_text(
        self,
        target: TargetLike,
        text: str,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> List[str]:
        """
        Select the option whose label is ``text``.

        Returns:
            Values of the options now selected
        """
        return await self._select(
            target,
            f'select option by text: "{text}"',
            f'Successfully selected option by text: "{text}"',
            timeout, step_name, "select_option_by_text",
            label=text,
        )

    @with_retry()
    async def select_multiple_options_by_text(
        self,
        target: TargetLike,
        options: Sequence[str],
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> List[str]:
        """Select every option whose label is in ``options`` (multi-select)."""
        labels = list(options)
        joined = ",".join(labels)
        return await self._select(
            target,
            f'select option by text: "{joined}"',
            f'Successfully selected option by text: "{joined}"',
            timeout, step_name, "select_multiple_options_by_text",
            label=labels,
        )

    @with_retry()
    async def select_option_by_value(
        self,
        target: TargetLike,
        value: str,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> List[str]:
        return await self._select(
            target,
            f'select option by value: "{value}"',
            f'Successfully selected option by value: "{value}"',
            timeout, step_name, "select_option_by_value",
            value=value,
        )

    @with_retry()
    async def select_option_by_index(
        self,
        target: TargetLike,
        index: int,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> List[str]:
        """Select the option at zero-based ``index``."""
        return await self._select(
            target,
            f'select option by index: "{index}"',
            f'Successfully selected option by index: "{index}"',
            timeout, step_name, "select_option_by_index",
            index=index,
        )

    async def verify_option_total(
        self,
        target: TargetLike,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> int:
        """Number of ``<option>`` elements in the dropdown."""
        timeout = self._timeout(timeout)
        locator, identifier = self._locate(target)
        action = f"count options in dropdown ({identifier})"

        await self._gate(locator, ElementState.VISIBLE, timeout, action, identifier)
        with self._executing(action, identifier):
            total = await locator.locator("option").count()
        self._passed(f'Total options in dropdown ({identifier}) is "{total}"')
        await self._capture(step_name, f"verify_option_total {identifier}")
        return total

    async def verify_select_by_text(
        self,
        target: TargetLike,
        options_text: Union[str, Sequence[str]],
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> bool:
        """
        Assert every label in ``options_text`` is currently selected.

        Raises:
            VerificationError: An expected option is not selected
        """
        expected = [options_text] if isinstance(options_text, str) else list(options_text)
        timeout = self._timeout(timeout)
        locator, identifier = self._locate(target)
        action = f'verify selected options by text: "{",".join(expected)}" in dropdown "{identifier}"'

        await self._gate(locator, ElementState.VISIBLE, timeout, action, identifier)
        with self._executing(action, identifier):
            selected = [label.strip() for label in await locator.evaluate(SELECTED_LABELS_JS)]
        for option in expected:
            if option.strip() not in selected:
                raise self._fail(VerificationError(
                    f'❌ Option with text "{option}" is not selected in dropdown: "{identifier}"',
                    operation="verify_select_by_text", target=identifier,
                ))
            self._passed(
                f'Verified that option with text "{option}" is selected in dropdown: "{identifier}"'
            )
        await self._capture(step_name, f"verify_select_by_text {identifier}")
        return True

    async def verify_select_by_value(
        self,
        target: TargetLike,
        value: str,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> bool:
        """
        Assert the option with ``value`` is currently selected.

        Raises:
            VerificationError: The option is not selected
        """
        timeout = self._timeout(timeout)
        locator, identifier = self._locate(target)
        action = f'verify select option by value: "{value}" in dropdown "{identifier}"'

        await self._gate(locator, ElementState.VISIBLE, timeout, action, identifier)
        with self._executing(action, identifier):
            selected = await locator.evaluate(SELECTED_VALUES_JS)
        if value not in selected:
            raise self._fail(VerificationError(
                f'❌ Option with value "{value}" is not selected in dropdown: "{identifier}"',
                operation="verify_select_by_value", target=identifier,
            ))
        self._passed(f'Option with value "{value}" is correctly selected in dropdown: "{identifier}"')
        await self._capture(step_name, f"verify_select_by_value {identifier}")
        return True

    async def verify_select_by_index(
        self,
        target: TargetLike,
        index: int,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> bool:
        """
        Whether the option at ``index`` is selected.

        Returns:
            True if selected, False otherwise

        Raises:
            IndexOutOfBoundsError: ``index`` is negative or >= the option count
        """
        timeout = self._timeout(timeout)
        locator, identifier = self._locate(target)
        action = f'verify option at index {index} in dropdown "{identifier}"'

        await self._gate(locator, ElementState.VISIBLE, timeout, action, identifier)
        options = locator.locator("option")
        with self._executing(action, identifier):
            count = await options.count()
        if index < 0 or index >= count:
            raise self._fail(IndexOutOfBoundsError(
                index, count, operation="verify_select_by_index", target=identifier,
            ))

        with self._executing(action, identifier):
            is_selected = bool(await options.nth(index).evaluate(OPTION_SELECTED_JS))
        if is_selected:
            self._passed(f'Option at index {index} in dropdown "{identifier}" is selected.')
        else:
            self.log.save_log(
                f'❌ Option at index {index} in dropdown "{identifier}" is NOT selected.'
            )
        await self._capture(step_name, f"verify_select_by_index {identifier}")
        return is_selected


__all__ = [
    "SelectActions",
    "SELECTED_LABELS_JS",
    "SELECTED_VALUES_JS",
    "OPTION_SELECTED_JS",
]
