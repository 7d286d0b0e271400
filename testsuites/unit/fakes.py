"""
In-memory stand-ins for the Playwright objects the keyword library touches.

Only the calls the keywords make are modelled. Every locator records the
method names it received in ``calls`` so tests can assert that an action
was (or was not) attempted.
"""

import asyncio
from typing import Any, Callable, Dict, List, Optional, Tuple

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from webui_tools.common.log_sink import LogSink
from testsuites.ui_testing.framework.scroll_actions import (
    SCROLL_SIZE_JS,
    SCROLL_TO_END_JS,
    SCROLL_TO_JS,
)
from testsuites.ui_testing.framework.select_actions import (
    OPTION_SELECTED_JS,
    SELECTED_LABELS_JS,
    SELECTED_VALUES_JS,
)
from testsuites.ui_testing.framework.verify_actions import HAS_ATTRIBUTE_JS


class RecordingSink(LogSink):
    """Console-less LogSink that keeps (level, message) pairs."""

    def __init__(self):
        super().__init__()
        self.lines: List[Tuple[str, str]] = []

    def save_log(self, message, level="INFO", silent=False):
        self.lines.append((level.upper(), str(message)))
        super().save_log(message, level=level, silent=True)

    def messages(self, level: Optional[str] = None) -> List[str]:
        return [text for lvl, text in self.lines if level is None or lvl == level]


class FakeReport:
    def __init__(self):
        self.artifacts = []

    def attach(self, artifact) -> None:
        self.artifacts.append(artifact)


class FakeOption:
    def __init__(self, select: "FakeLocator", index: int):
        self.select = select
        self.index = index

    async def evaluate(self, script, arg=None):
        assert script == OPTION_SELECTED_JS
        return self.index in self.select.selected


class FakeOptionList:
    def __init__(self, select: "FakeLocator"):
        self.select = select

    async def count(self) -> int:
        return len(self.select.options)

    def nth(self, index: int) -> FakeOption:
        return FakeOption(self.select, index)


class FakeLocator:
    """
    A single element (or a set of ``count`` identical matches).

    Args:
        visible / attached / enabled / checked: Element state
        options: (value, label) pairs for a <select>
        on_click: Callable invoked by click(), e.g. to fire a dialog
    """

    def __init__(
        self,
        selector: str = "",
        visible: bool = True,
        attached: bool = True,
        enabled: bool = True,
        checked: bool = False,
        text: str = "",
        attributes: Optional[Dict[str, str]] = None,
        css: Optional[Dict[str, str]] = None,
        options: Optional[List[Tuple[str, str]]] = None,
        box: Optional[Dict[str, float]] = None,
        count: Optional[int] = None,
        on_click: Optional[Callable[[], Any]] = None,
        fail_on: Optional[Dict[str, Exception]] = None,
    ):
        self.selector = selector
        self.visible = visible
        self.attached = attached
        self.enabled = enabled
        self.checked = checked
        self.text = text
        self.value = ""
        self.attributes = attributes or {}
        self.css = css or {}
        self.options = options or []
        self.selected = set()
        self.box = box
        self._count = count
        self.on_click = on_click
        self.fail_on = fail_on or {}
        self.calls: List[str] = []
        self.args: Dict[str, Any] = {}

    def _record(self, name: str, *args, **kwargs) -> None:
        self.calls.append(name)
        self.args[name] = (args, kwargs)
        if name in self.fail_on:
            raise self.fail_on[name]

    # State

    async def wait_for(self, state="visible", timeout=None):
        self._record("wait_for", state=state, timeout=timeout)
        reached = self.visible if state == "visible" else self.attached
        if not reached:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {state}")

    async def is_checked(self) -> bool:
        return self.checked

    async def is_visible(self) -> bool:
        return self.visible

    async def count(self) -> int:
        if self._count is not None:
            return self._count
        return 1 if self.attached else 0

    def nth(self, index: int) -> "FakeLocator":
        return self

    @property
    def first(self) -> "FakeLocator":
        return self

    def locator(self, selector: str):
        assert selector == "option"
        return FakeOptionList(self)

    # Actions

    async def click(self, timeout=None, button="left"):
        self._record("click", timeout=timeout, button=button)
        if self.on_click is not None:
            result = self.on_click()
            if asyncio.iscoroutine(result):
                await result

    async def dblclick(self, timeout=None):
        self._record("dblclick", timeout=timeout)

    async def fill(self, text, timeout=None):
        self._record("fill", text, timeout=timeout)
        self.value = text

    async def focus(self, timeout=None):
        self._record("focus", timeout=timeout)

    async def press_sequentially(self, text, timeout=None):
        self._record("press_sequentially", text, timeout=timeout)
        self.value += text

    async def press(self, key, timeout=None):
        self._record("press", key, timeout=timeout)

    async def clear(self, timeout=None):
        self._record("clear", timeout=timeout)
        self.value = ""

    async def check(self, timeout=None):
        self._record("check", timeout=timeout)
        self.checked = True

    async def uncheck(self, timeout=None):
        self._record("uncheck", timeout=timeout)
        self.checked = False

    async def hover(self, timeout=None):
        self._record("hover", timeout=timeout)
        if not self.visible:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded while hovering")

    async def bounding_box(self):
        return self.box

    async def drag_to(self, target, timeout=None):
        self._record("drag_to", target, timeout=timeout)

    async def set_input_files(self, files, timeout=None):
        self._record("set_input_files", files, timeout=timeout)

    async def scroll_into_view_if_needed(self, timeout=None):
        self._record("scroll_into_view_if_needed", timeout=timeout)

    async def inner_text(self, timeout=None):
        return self.text

    async def get_attribute(self, name, timeout=None):
        return self.attributes.get(name)

    async def select_option(self, timeout=None, label=None, value=None, index=None):
        self._record("select_option", label=label, value=value, index=index)
        if index is not None:
            chosen = {index}
        elif value is not None:
            chosen = {i for i, (v, _) in enumerate(self.options) if v == value}
        else:
            labels = [label] if isinstance(label, str) else list(label)
            chosen = {i for i, (_, lbl) in enumerate(self.options) if lbl in labels}
        self.selected = chosen
        return [self.options[i][0] for i in sorted(chosen)]

    async def evaluate(self, script, arg=None):
        self._record("evaluate", script, arg)
        ordered = sorted(self.selected)
        if script == SELECTED_LABELS_JS:
            return [self.options[i][1] for i in ordered]
        if script == SELECTED_VALUES_JS:
            return [self.options[i][0] for i in ordered]
        if script == HAS_ATTRIBUTE_JS:
            return arg in self.attributes
        if "getComputedStyle" in script:
            return self.css.get(arg, "")
        return None


class FakeMouse:
    def __init__(self):
        self.moves: List[Tuple[float, float]] = []

    async def move(self, x, y):
        self.moves.append((x, y))


class FakeDialog:
    def __init__(self, dialog_type: str = "alert", message: str = ""):
        self.type = dialog_type
        self.message = message
        self.response: Optional[Tuple[str, Optional[str]]] = None

    async def accept(self, prompt_text: Optional[str] = None):
        self.response = ("accept", prompt_text)

    async def dismiss(self):
        self.response = ("dismiss", None)


class FakeDownload:
    def __init__(self, suggested_filename: str, content: bytes = b""):
        self.suggested_filename = suggested_filename
        self.content = content

    async def save_as(self, path):
        with open(path, "wb") as f:
            f.write(self.content)


class _DownloadInfo:
    def __init__(self, future: asyncio.Future):
        self._future = future

    @property
    def value(self) -> asyncio.Future:
        return self._future


class _ExpectDownload:
    def __init__(self, page: "FakePage"):
        self.page = page
        self.future = asyncio.get_running_loop().create_future()

    async def __aenter__(self) -> _DownloadInfo:
        self.page._download_waiters.append(self.future)
        return _DownloadInfo(self.future)

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.future in self.page._download_waiters:
            self.page._download_waiters.remove(self.future)
        if exc_type is None and not self.future.done():
            self.future.set_exception(PlaywrightTimeoutError("Timeout waiting for download"))


class FakePage:
    """
    Page holding a fixed selector -> FakeLocator table.

    Unknown selectors resolve to a detached, invisible locator.
    """

    def __init__(self, elements: Optional[Dict[str, FakeLocator]] = None, url: str = "about:blank"):
        self.elements = elements or {}
        self.url = url
        self.page_title = ""
        self.html = ""
        self.scroll_size = {"width": 1920, "height": 3000}
        self.viewport_size: Optional[Dict[str, int]] = {"width": 1920, "height": 1080}
        self.mouse = FakeMouse()
        self.context = None
        self.closed = False
        self.visits: List[str] = []
        self.evaluations: List[Tuple[str, Any]] = []
        self.screenshots = 0
        self.listeners: Dict[str, List[Callable]] = {}
        self._download_waiters: List[asyncio.Future] = []

    def locator(self, selector: str) -> FakeLocator:
        if selector not in self.elements:
            self.elements[selector] = FakeLocator(selector, visible=False, attached=False)
        return self.elements[selector]

    async def goto(self, url, timeout=None):
        self.visits.append(url)
        self.url = url

    async def title(self) -> str:
        return self.page_title

    async def content(self) -> str:
        return self.html

    async def evaluate(self, script, arg=None):
        self.evaluations.append((script, arg))
        if script == SCROLL_SIZE_JS:
            return dict(self.scroll_size)
        if script in (SCROLL_TO_JS, SCROLL_TO_END_JS):
            return None
        raise AssertionError(f"unexpected script: {script}")

    async def set_viewport_size(self, size):
        self.viewport_size = dict(size)

    async def screenshot(self, path=None, full_page=False) -> bytes:
        self.screenshots += 1
        return b"\x89PNG"

    async def close(self):
        self.closed = True

    def is_closed(self) -> bool:
        return self.closed

    # Events

    def once(self, event: str, handler: Callable) -> None:
        self.listeners.setdefault(event, []).append(handler)

    def remove_listener(self, event: str, handler: Callable) -> None:
        self.listeners.get(event, []).remove(handler)

    async def fire_dialog(self, dialog: FakeDialog) -> None:
        """Deliver ``dialog`` to the registered one-shot listeners."""
        handlers, self.listeners["dialog"] = self.listeners.get("dialog", []), []
        for handler in handlers:
            await handler(dialog)

    def expect_download(self, timeout=None) -> _ExpectDownload:
        return _ExpectDownload(self)

    def start_download(self, download: FakeDownload) -> None:
        """Emit a download; only a waiter armed beforehand receives it."""
        for waiter in self._download_waiters:
            if not waiter.done():
                waiter.set_result(download)
                return


class FakeExpectation:
    """Replacement for ``playwright.async_api.expect(locator)``."""

    def __init__(self, locator: FakeLocator):
        self.locator = locator

    async def to_be_checked(self, timeout=None):
        if not self.locator.checked:
            raise AssertionError("Locator expected to be checked")

    async def to_be_enabled(self, timeout=None):
        if not self.locator.enabled:
            raise AssertionError("Locator expected to be enabled")


class FakeClock:
    """Injectable ``sleep`` that advances virtual time without waiting."""

    def __init__(self):
        self.now = 0.0
        self.sleeps: List[float] = []

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
        await asyncio.sleep(0)


async def never(seconds: float) -> None:
    """A timer that never fires."""
    await asyncio.Event().wait()
