"""
================================================================================
Action Base
================================================================================

Shared plumbing for every keyword class:

    1. Resolve   target -> Locator              (element_resolver)
    2. Gate      wait for the required state    (wait_engine)
    3. Execute   one Playwright call, logged success/failure
    4. Instrument screenshot on success, named after the current step

Also home of the retry decorator and the step scope used to name
screenshots without inspecting the call stack.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager, contextmanager
from contextvars import ContextVar
from functools import wraps
from typing import AsyncIterator, Callable, Iterator, Optional, Tuple, Type, Union

import allure
from loguru import logger
from playwright.async_api import Locator, Page

from webui_tools.common.global_config import get_default_timeout
from webui_tools.common.log_sink import LogSink
from webui_tools.report_tools.allure_utils import ReportContext
from webui_tools.report_tools.screenshot_recorder import ScreenshotRecorder

from .element_resolver import TargetLike, describe, resolve
from .errors import ActionExecutionError, GateTimeoutError, KeywordError
from .wait_engine import ElementState, await_state


_current_step: ContextVar[Optional[str]] = ContextVar("webui_current_step", default=None)


def current_step() -> Optional[str]:
    """Title of the innermost open ``step()`` scope, if any."""
    return _current_step.get()


class RetryConfig:
    """Configuration for retry behavior."""

    def __init__(
        self,
        max_attempts: int = 1,
        delay_seconds: float = 1.0,
        backoff_multiplier: float = 2.0,
        max_delay_seconds: float = 10.0,
        retry_on: Tuple[Type[BaseException], ...] = (ActionExecutionError,),
    ):
        """
        Initialize retry configuration.

        Args:
            max_attempts: Maximum number of attempts (1 disables retrying)
            delay_seconds: Initial delay between retries
            backoff_multiplier: Multiplier for exponential backoff
            max_delay_seconds: Maximum delay between retries
            retry_on: Exception types worth another attempt. Gate timeouts and
                precondition failures are deliberately not in the default.
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.delay_seconds = delay_seconds
        self.backoff_multiplier = backoff_multiplier
        self.max_delay_seconds = max_delay_seconds
        self.retry_on = retry_on


def with_retry(config: RetryConfig = None):
    """
    Decorator for adding retry logic to async keyword methods.

    Args:
        config: RetryConfig to use. None reads ``self.retry_config`` at call
            time, so each WebUI instance controls its own policy.
    """
    def decorator(func: Callable):
        @wraps(func)
        async def wrapper(self, *args, **kwargs):
            retry = config or self.retry_config
            delay = retry.delay_seconds

            for attempt in range(retry.max_attempts):
                try:
                    return await func(self, *args, **kwargs)
                except retry.retry_on as e:
                    if attempt >= retry.max_attempts - 1:
                        if retry.max_attempts > 1:
                            logger.error(
                                f"All {retry.max_attempts} attempts failed for "
                                f"{func.__name__}: {e}"
                            )
                        raise
                    logger.warning(
                        f"Attempt {attempt + 1}/{retry.max_attempts} failed for "
                        f"{func.__name__}: {e}. Retrying in {delay}s..."
                    )
                    await asyncio.sleep(delay)
                    delay = min(delay * retry.backoff_multiplier, retry.max_delay_seconds)

        return wrapper
    return decorator


class ActionBase:
    """
    Common state and helpers for keyword classes.

    Attributes:
        page: Page the keywords act on
        log: Run LogSink receiving one line per keyword outcome
        report: Report context for step screenshots (None disables them)
        screenshots: Screenshot service
        default_timeout: Gate timeout in milliseconds when a call passes none
        retry_config: Retry policy applied by ``with_retry``
    """

    def __init__(
        self,
        page: Page,
        log_sink: Optional[LogSink] = None,
        report: Optional[ReportContext] = None,
        screenshots: Optional[ScreenshotRecorder] = None,
        default_timeout: Optional[int] = None,
        retry_config: Optional[RetryConfig] = None,
    ):
        self.page = page
        self.log = log_sink or LogSink()
        self.report = report
        self.screenshots = screenshots or ScreenshotRecorder()
        self.default_timeout = (
            default_timeout if default_timeout is not None else get_default_timeout()
        )
        self.retry_config = retry_config or RetryConfig()

    # =========================================================================
    # Step scope
    # =========================================================================

    @asynccontextmanager
    async def step(self, name: str) -> AsyncIterator[None]:
        """
        Open a named report step.

        Screenshots taken by keywords inside the block are named ``name``
        unless the keyword call passes its own ``step_name``.

        Usage:
            async with ui.step("Fill information on User Registration Page"):
                await ui.fill_text("#email", "a@b.com")
        """
        token = _current_step.set(name)
        try:
            with allure.step(name):
                yield
        finally:
            _current_step.reset(token)

    # =========================================================================
    # Three-phase helpers
    # =========================================================================

    def _timeout(self, timeout: Optional[int]) -> int:
        return self.default_timeout if timeout is None else timeout

    def _locate(self, target: TargetLike) -> Tuple[Locator, str]:
        return resolve(self.page, target), describe(target)

    async def _gate(
        self,
        locator: Locator,
        state: Union[ElementState, str],
        timeout: int,
        action: str,
        identifier: str,
    ) -> None:
        """Wait for ``state``; log and raise GateTimeoutError when it never comes."""
        with self._executing(action, identifier):
            outcome = await await_state(locator, state, timeout)
        if not outcome:
            message = f"❌ Failed to {action}. Error: \"{outcome.error}\""
            self.log.save_log(message, level="ERROR")
            raise GateTimeoutError(
                message,
                state=outcome.spec.state.value,
                timeout_ms=timeout,
                operation=action,
                target=identifier,
            ) from outcome.error

    @contextmanager
    def _executing(self, action: str, identifier: Optional[str] = None) -> Iterator[None]:
        """Wrap library errors into ActionExecutionError after logging them."""
        try:
            yield
        except KeywordError:
            raise
        except Exception as exc:
            message = f"❌ Failed to {action}. Error: \"{exc}\""
            self.log.save_log(message, level="ERROR")
            raise ActionExecutionError(message, operation=action, target=identifier) from exc

    def _passed(self, message: str) -> None:
        self.log.save_log(f"✅ {message}")

    def _fail(self, error: KeywordError) -> KeywordError:
        """Log ``error`` at ERROR level and hand it back for raising."""
        self.log.save_log(str(error), level="ERROR")
        return error

    async def _capture(self, step_name: Optional[str], fallback: str) -> None:
        name = step_name or current_step() or fallback
        await self.screenshots.capture(self.page, name, self.report)


__all__ = [
    "ActionBase",
    "RetryConfig",
    "with_retry",
    "current_step",
]
