"""
================================================================================
Step Screenshot Recorder
================================================================================

Captures a full-page screenshot after each successful keyword step and hands
it to the current test's report context.

Capture is a no-op unless the "screenshot all steps" switch is on
(config ``framework.screenshot_all_steps`` / env
``FRAMEWORK__SCREENSHOT_ALL_STEPS=yes``) and a report context is supplied.

================================================================================
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from loguru import logger
from playwright.async_api import Page

from webui_tools.common.global_config import screenshots_enabled
from webui_tools.data_generator.text_generator import generate_random_text
from webui_tools.report_tools.allure_utils import ReportContext, ScreenshotArtifact


class ScreenshotRecorder:
    """
    Step screenshot service shared by the keyword library.

    Usage:
        recorder = ScreenshotRecorder(enabled=True)
        await recorder.capture(page, "Click Register button", report_context)
    """

    def __init__(self, enabled: Optional[bool] = None, full_page: bool = True):
        """
        Args:
            enabled: Force capture on/off. None reads the configuration.
            full_page: Capture the full scrollable page.
        """
        self._enabled = enabled
        self.full_page = full_page

    @property
    def enabled(self) -> bool:
        if self._enabled is None:
            return screenshots_enabled()
        return self._enabled

    async def capture(
        self,
        page: Page,
        step_name: str,
        report: Optional[ReportContext],
    ) -> Optional[ScreenshotArtifact]:
        """
        Take a screenshot and attach it to the report.

        Returns:
            The attached artifact, or None when capture is disabled.
        """
        if not self.enabled or report is None:
            return None

        image = await page.screenshot(full_page=self.full_page)
        artifact = ScreenshotArtifact(step_name=step_name, image_bytes=image)
        report.attach(artifact)
        logger.debug(f"📸 Screenshot for step \"{step_name}\" captured and attached.")
        return artifact

    async def save_to_disk(
        self,
        page: Page,
        directory: Union[str, Path] = "screenshots",
    ) -> Path:
        """
        Save a randomly named full-page PNG outside the report.

        Args:
            page: Page to capture
            directory: Target directory, created if missing

        Returns:
            Path of the written file
        """
        target_dir = Path(directory)
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / f"{generate_random_text()}.png"
        await page.screenshot(path=str(path), full_page=self.full_page)
        logger.debug(f"Screenshot saved: {path}")
        return path


__all__ = [
    "ScreenshotRecorder",
]
