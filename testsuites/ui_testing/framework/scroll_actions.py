"""
================================================================================
Scroll Actions
================================================================================

Scrolling keywords: align an element with the top or bottom of the viewport,
scroll the whole page, or jump to an absolute position.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure

from .action_base import ActionBase, with_retry
from .element_resolver import TargetLike
from .errors import ResolutionError
from .wait_engine import ElementState


SCROLL_INTO_VIEW_JS = (
    "(element, block) => element.scrollIntoView("
    "{behavior: 'smooth', block: block, inline: 'nearest'})"
)
SCROLL_TO_END_JS = """async () => {
    const scrollHeight = document.body.scrollHeight;
    const step = 100;
    for (let position = 0; position < scrollHeight; position += step) {
        window.scrollTo(0, position);
        await new Promise(resolve => setTimeout(resolve, 50));
    }
    window.scrollTo(0, scrollHeight);
}"""
SCROLL_SIZE_JS = (
    "() => ({width: document.documentElement.scrollWidth, "
    "height: document.documentElement.scrollHeight})"
)
SCROLL_TO_JS = (
    "({x, y, smooth}) => window.scrollTo("
    "{left: x, top: y, behavior: smooth ? 'smooth' : 'auto'})"
)


class ScrollActions(ActionBase):
    """Scroll-related keywords."""

    async def _scroll_element(self, target: TargetLike, block: str) -> str:
        locator, identifier = self._locate(target)
        action = f'scroll "{identifier}"'

        with self._executing(action, identifier):
            count = await locator.count()
        if count == 0:
            raise self._fail(ResolutionError(
                f'❌ Element with "{identifier}" does not exist!',
                operation="scroll", target=identifier,
            ))
        with self._executing(action, identifier):
            await locator.first.evaluate(SCROLL_INTO_VIEW_JS, block)
        return identifier

    @allure.step("Scroll element to top of viewport")
    async def scroll_to_element_to_top(self, target: TargetLike) -> None:
        """
        Scroll so the element sits at the top of the viewport.

        Raises:
            ResolutionError: Nothing matches the target
        """
        identifier = await self._scroll_element(target, "start")
        self._passed(f'Scrolled element with "{identifier}" to the top of the viewport!')

    @allure.step("Scroll element to bottom of viewport")
    async def scroll_to_element_to_bottom(self, target: TargetLike) -> None:
        """
        Scroll so the element sits at the bottom of the viewport.

        Raises:
            ResolutionError: Nothing matches the target
        """
        identifier = await self._scroll_element(target, "end")
        self._passed(
            f'Successfully scrolled element with "{identifier}" to the end of the viewport!'
        )

    @allure.step("Scroll to end of page")
    async def scroll_to_end_of_page(self) -> None:
        """Scroll down in steps until the bottom of the page (triggers lazy loading)."""
        with self._executing("scroll to the end of the page"):
            await self.page.evaluate(SCROLL_TO_END_JS)
        self._passed("Successfully scrolled to the end of the page")

    @allure.step("Scroll to position: ({x}, {y})")
    async def scroll_to_position(self, x: int, y: int, smooth: bool = False) -> None:
        """
        Scroll to an absolute page position.

        Args:
            x: Horizontal scroll position, 0..scrollWidth
            y: Vertical scroll position, 0..scrollHeight
            smooth: Use smooth scrolling behaviour

        Raises:
            ValueError: Position lies outside the scrollable area
        """
        with self._executing(f'scroll to x: "{x}", y: "{y}" of page'):
            size = await self.page.evaluate(SCROLL_SIZE_JS)
        if x < 0 or y < 0 or x > size["width"] or y > size["height"]:
            message = f'Invalid scroll position: x = "{x}", y = "{y}"'
            self.log.save_log(message, level="ERROR")
            raise ValueError(message)

        with self._executing(f'scroll to x: "{x}", y: "{y}" of page'):
            await self.page.evaluate(SCROLL_TO_JS, {"x": x, "y": y, "smooth": smooth})
        self._passed(f'Successfully scrolled to x: "{x}", y: "{y}" of page')

    @with_retry()
    async def scroll_into_view(
        self,
        target: TargetLike,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> None:
        """Scroll the element into view only if it is not already visible."""
        timeout = self._timeout(timeout)
        locator, identifier = self._locate(target)
        action = f'scroll "{identifier}" into view'

        await self._gate(locator, ElementState.ATTACHED, timeout, action, identifier)
        with self._executing(action, identifier):
            await locator.scroll_into_view_if_needed(timeout=timeout)
        self._passed(f'Successfully scrolled "{identifier}" into view')
        await self._capture(step_name, f"scroll_into_view {identifier}")


__all__ = [
    "ScrollActions",
]
