"""
================================================================================
Element Resolver
================================================================================

Turns whatever the caller passed as a target into one canonical Playwright
Locator, so every keyword shares a single code path.

A target is either:
    - Selector("#email")              a query string, resolved via page.locator()
    - Handle(locator, "Email field")  an already-resolved Locator

Plain ``str`` and ``Locator`` values are accepted everywhere and normalised
by ``to_target()``.

Resolution performs no I/O and never fails for a bad selector: Playwright
locators are lazy, so an invalid or empty selector only surfaces when the
caller waits on or acts on the result.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Union

from playwright.async_api import Locator, Page


class ResolutionStrategy(str, Enum):
    """How a target was turned into a Locator."""
    SELECTOR = "selector"
    HANDLE = "handle"


@dataclass(frozen=True)
class Selector:
    """A query string in Playwright's selector language (CSS, XPath, text=...)."""
    query: str

    def __str__(self) -> str:
        return self.query


@dataclass(frozen=True)
class Handle:
    """
    An already-resolved Locator.

    Attributes:
        locator: Playwright Locator bound to the page that produced it
        description: Optional human-readable name used in log lines
    """
    locator: Locator
    description: Optional[str] = None


Target = Union[Selector, Handle]
TargetLike = Union[str, Selector, Handle, Locator]


def to_target(value: TargetLike) -> Target:
    """
    Normalise a caller-supplied target into the Selector/Handle variant.

    Raises:
        TypeError: For values that are neither strings nor locators
    """
    if isinstance(value, (Selector, Handle)):
        return value
    if isinstance(value, str):
        return Selector(value)
    if _is_locator(value):
        return Handle(value)
    raise TypeError(
        f"Unsupported target type {type(value).__name__!r}; "
        f"expected a selector string or a Locator"
    )


def _is_locator(value: Any) -> bool:
    if isinstance(value, Locator):
        return True
    # Locator-like doubles (e.g. frame locators wrapped by page objects)
    return callable(getattr(value, "wait_for", None)) and callable(
        getattr(value, "locator", None)
    )


def strategy_of(value: TargetLike) -> ResolutionStrategy:
    """Classify which resolution strategy a target uses."""
    target = to_target(value)
    if isinstance(target, Selector):
        return ResolutionStrategy.SELECTOR
    return ResolutionStrategy.HANDLE


def resolve(page: Page, value: TargetLike) -> Locator:
    """
    Resolve a target into a Locator.

    Args:
        page: Page used to build locators for selector targets
        value: Selector string, Selector, Handle or Locator

    Returns:
        The Locator to wait on / act on
    """
    target = to_target(value)
    if isinstance(target, Selector):
        return page.locator(target.query)
    return target.locator


def describe(value: TargetLike) -> str:
    """
    Identifier used in log lines and error messages.

    Examples:
        >>> describe("#email")
        'selector: "#email"'
        >>> describe(Handle(locator))
        'locator'
    """
    target = to_target(value)
    if isinstance(target, Selector):
        return f'selector: "{target.query}"'
    if target.description:
        return f'locator: "{target.description}"'
    return "locator"


async def resolve_all(page: Page, selector: Union[str, Selector]) -> List[Locator]:
    """
    Snapshot every element currently matching ``selector``.

    The count is read once; the returned ``nth(i)`` locators keep pointing at
    positions, so a later DOM mutation can make them refer to other elements.

    Returns:
        Locators in document order (empty list when nothing matches)
    """
    query = selector.query if isinstance(selector, Selector) else selector
    elements = page.locator(query)
    count = await elements.count()
    return [elements.nth(i) for i in range(count)]


__all__ = [
    "ResolutionStrategy",
    "Selector",
    "Handle",
    "Target",
    "TargetLike",
    "to_target",
    "strategy_of",
    "resolve",
    "describe",
    "resolve_all",
]
