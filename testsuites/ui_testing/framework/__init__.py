"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based keyword library for web UI automation.

Components:
    - element_resolver: Selector / Locator targets resolved to one Locator
    - wait_engine: Readiness gates (visible, attached, checked, enabled, clickable)
    - web_ui: WebUI facade bundling element, select, verify, scroll and page keywords
    - dialog_handler: One-shot JavaScript dialog coordination
    - download_manager: Download capture and download directory helpers
    - page_base: Base page object for common operations
    - browser_manager: Browser lifecycle management

Author: Automation Team
License: MIT
================================================================================
"""

from .action_base import RetryConfig, current_step
from .browser_manager import BrowserManager, BrowserUnavailableError
from .dialog_handler import DialogAction, DialogRecord, WatchState
from .download_manager import DownloadRecord
from .element_resolver import Handle, Selector
from .errors import (
    ActionExecutionError,
    GateTimeoutError,
    IndexOutOfBoundsError,
    KeywordError,
    MissingDirectoryError,
    MissingPathError,
    NotAFileError,
    PreconditionError,
    ResolutionError,
    VerificationError,
)
from .page_base import BasePage
from .wait_engine import ElementState
from .web_ui import WebUI

__all__ = [
    "WebUI",
    "BasePage",
    "BrowserManager",
    "BrowserUnavailableError",
    "RetryConfig",
    "current_step",
    "Selector",
    "Handle",
    "ElementState",
    "DialogAction",
    "DialogRecord",
    "WatchState",
    "DownloadRecord",
    "KeywordError",
    "ResolutionError",
    "IndexOutOfBoundsError",
    "GateTimeoutError",
    "PreconditionError",
    "MissingPathError",
    "NotAFileError",
    "MissingDirectoryError",
    "ActionExecutionError",
    "VerificationError",
]
