"""
================================================================================
Wait/Verify Engine
================================================================================

The readiness gate run before every interaction: wait until an element
reaches a state or the timeout elapses.

States and the Playwright primitive behind each:
    visible    locator.wait_for(state="visible")
    attached   locator.wait_for(state="attached")
    checked    expect(locator).to_be_checked()
    enabled    expect(locator).to_be_enabled()
    clickable  visible, then enabled, within one shared budget

A timeout does not raise here. ``await_state`` returns a WaitOutcome carrying
a GateTimeoutError so each caller picks its own contract: boolean
``wait_for_element_*`` keywords turn it into False, action keywords call
``raise_for_timeout()``.

Usage:
    outcome = await await_state(locator, ElementState.VISIBLE, 5000)
    if not outcome:
        ...
    outcome.raise_for_timeout()

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from playwright.async_api import Locator, expect
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .errors import GateTimeoutError


class ElementState(str, Enum):
    """Readiness states an element can be gated on."""
    VISIBLE = "visible"
    ATTACHED = "attached"
    CHECKED = "checked"
    ENABLED = "enabled"
    CLICKABLE = "clickable"


@dataclass(frozen=True)
class WaitSpec:
    """
    One readiness requirement.

    Attributes:
        state: State to wait for
        timeout_ms: Budget in milliseconds (0 means a single immediate check)
    """
    state: ElementState
    timeout_ms: int

    def __post_init__(self) -> None:
        if self.timeout_ms < 0:
            raise ValueError(f"timeout_ms must be non-negative, got {self.timeout_ms}")


@dataclass(frozen=True)
class WaitOutcome:
    """Result of a gate: satisfied, or the timeout that stopped it."""
    spec: WaitSpec
    error: Optional[GateTimeoutError] = None

    @property
    def satisfied(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.satisfied

    def raise_for_timeout(self) -> None:
        """Escalate a timed-out gate into a hard failure."""
        if self.error is not None:
            raise self.error


def _pw_timeout(timeout_ms: float) -> float:
    # Playwright treats 0 as "wait forever"
    return max(timeout_ms, 1)


async def _wait_enabled(locator: Locator, timeout_ms: float) -> None:
    await expect(locator).to_be_enabled(timeout=_pw_timeout(timeout_ms))


async def await_state(
    locator: Locator,
    state: Union[ElementState, str],
    timeout_ms: int,
) -> WaitOutcome:
    """
    Wait for ``locator`` to reach ``state`` within ``timeout_ms``.

    Returns:
        WaitOutcome; ``outcome.error`` is set when the budget ran out.

    Raises:
        playwright.async_api.Error: For failures that are not timeouts
            (e.g. a syntactically invalid selector)
    """
    spec = WaitSpec(ElementState(state), timeout_ms)
    try:
        if spec.state in (ElementState.VISIBLE, ElementState.ATTACHED):
            await locator.wait_for(state=spec.state.value, timeout=_pw_timeout(timeout_ms))
        elif spec.state is ElementState.CHECKED:
            await expect(locator).to_be_checked(timeout=_pw_timeout(timeout_ms))
        elif spec.state is ElementState.ENABLED:
            await _wait_enabled(locator, timeout_ms)
        else:
            loop = asyncio.get_running_loop()
            started = loop.time()
            await locator.wait_for(state="visible", timeout=_pw_timeout(timeout_ms))
            elapsed_ms = (loop.time() - started) * 1000
            await _wait_enabled(locator, timeout_ms - elapsed_ms)
    except (PlaywrightTimeoutError, AssertionError) as exc:
        return WaitOutcome(
            spec,
            GateTimeoutError(
                f"Element did not become {spec.state.value} within {timeout_ms}ms: {exc}",
                state=spec.state.value,
                timeout_ms=timeout_ms,
            ),
        )
    return WaitOutcome(spec)


__all__ = [
    "ElementState",
    "WaitSpec",
    "WaitOutcome",
    "await_state",
]
