"""
================================================================================
Download Manager
================================================================================

Captures browser downloads and inspects the download directory.

``download_file`` arms Playwright's one-shot download expectation strictly
before clicking the trigger, then saves the first download to
``<download dir>/<suggested filename>``. Further downloads started by the
same click are not captured.

The download directory comes from config ``downloads.dir`` and defaults to
``~/Downloads``.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, Union

from webui_tools.common.global_config import get_config

from .action_base import ActionBase
from .element_resolver import TargetLike
from .errors import MissingDirectoryError, VerificationError
from .wait_engine import ElementState


@dataclass(frozen=True)
class DownloadRecord:
    """A saved download."""
    suggested_filename: str
    path: Path


def default_download_directory() -> Path:
    configured = get_config("downloads.dir")
    if configured:
        return Path(configured).expanduser()
    return Path.home() / "Downloads"


class DownloadCoordinator(ActionBase):
    """
    Download keywords for one page.

    Args:
        page: Page whose downloads are captured
        download_dir: Directory downloads are saved to
        sleep: Coroutine used between polls of the directory
    """

    def __init__(
        self,
        page,
        download_dir: Optional[Union[str, Path]] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        **kwargs,
    ):
        super().__init__(page, **kwargs)
        self.download_dir = Path(download_dir) if download_dir else default_download_directory()
        self.sleep = sleep

    def get_download_directory(self) -> Path:
        return self.download_dir

    def _require_directory(self, directory: Path, operation: str) -> Path:
        if not directory.is_dir():
            raise self._fail(MissingDirectoryError(
                f'❌ The folder "{directory}" does not exist', operation=operation,
            ))
        return directory

    # =========================================================================
    # Capture
    # =========================================================================

    async def download_file(
        self,
        target: TargetLike,
        timeout: Optional[int] = None,
        step_name: Optional[str] = None,
    ) -> DownloadRecord:
        """
        Click ``target`` and save the download it starts.

        Raises:
            MissingDirectoryError: Download directory does not exist (nothing clicked)
            GateTimeoutError: Trigger never became visible
            ActionExecutionError: No download started, or saving it failed
        """
        directory = self._require_directory(self.download_dir, "download_file")
        timeout = self._timeout(timeout)
        locator, identifier = self._locate(target)
        action = f'download file from "{identifier}"'

        await self._gate(locator, ElementState.VISIBLE, timeout, action, identifier)
        with self._executing(action, identifier):
            async with self.page.expect_download(timeout=max(timeout, 1)) as download_info:
                await locator.click(timeout=timeout)
            download = await download_info.value
            destination = directory / download.suggested_filename
            await download.save_as(destination)

        self._passed(f'Successfully download file to : "{destination}"')
        await self._capture(step_name, f"download_file {identifier}")
        return DownloadRecord(download.suggested_filename, destination)

    # =========================================================================
    # Directory inspection
    # =========================================================================

    def count_files_in_download_directory(self) -> int:
        directory = self._require_directory(self.download_dir, "count_files")
        count = sum(1 for item in directory.iterdir() if item.is_file())
        self.log.save_log(f'Count File in folder is: "{count}"')
        return count

    def verify_file_contains_in_download_directory(self, file_name: str) -> bool:
        """True if any entry name contains ``file_name``."""
        directory = self._require_directory(self.download_dir, "verify_file_contains")
        if any(file_name in item.name for item in directory.iterdir()):
            self._passed(f'Found file "{file_name}" in download directory')
            return True
        self.log.save_log(f'❌ Not found file "{file_name}" in download directory')
        return False

    def verify_file_equals_in_download_directory(self, file_name: str) -> bool:
        """True if an entry is named exactly ``file_name``."""
        directory = self._require_directory(self.download_dir, "verify_file_equals")
        if (directory / file_name).exists():
            self._passed(f'Found file "{file_name}" in download directory')
            return True
        self.log.save_log(f'❌ Not found file "{file_name}" in download directory')
        return False

    async def _poll(self, check: Callable[[str], bool], file_name: str,
                    timeout: int, operation: str) -> bool:
        for elapsed in range(timeout + 1):
            if check(file_name):
                self._passed(f'Found file "{file_name}" in download directory after "{elapsed}"s')
                return True
            if elapsed < timeout:
                await self.sleep(1)
        raise self._fail(VerificationError(
            f'❌ Not found file "{file_name}" in download directory after "{timeout}"s',
            operation=operation,
        ))

    async def verify_download_file_equals_name_completed_wait_timeout(
        self, file_name: str, timeout: int
    ) -> bool:
        """
        Poll once a second for up to ``timeout`` seconds for ``file_name``.

        Raises:
            VerificationError: File never appeared
        """
        return await self._poll(
            self.verify_file_equals_in_download_directory, file_name, timeout,
            "verify_download_file_equals_name_completed_wait_timeout",
        )

    async def verify_download_file_contains_name_completed_wait_timeout(
        self, file_name: str, timeout: int
    ) -> bool:
        """Like the equals variant, matching any name containing ``file_name``."""
        return await self._poll(
            self.verify_file_contains_in_download_directory, file_name, timeout,
            "verify_download_file_contains_name_completed_wait_timeout",
        )

    # =========================================================================
    # Cleanup
    # =========================================================================

    def delete_all_files_in_directory(self, directory: Union[str, Path]) -> int:
        """
        Remove every regular file directly inside ``directory``.

        Subdirectories are left alone.

        Returns:
            Number of files removed
        """
        directory = self._require_directory(Path(directory), "delete_all_files")
        removed = 0
        for item in directory.iterdir():
            if item.is_file():
                item.unlink()
                removed += 1
                self.log.save_log(f'Remove file: "{item}"')
        return removed

    def delete_all_files_in_download_directory(self) -> int:
        return self.delete_all_files_in_directory(self.download_dir)


__all__ = [
    "DownloadRecord",
    "DownloadCoordinator",
    "default_download_directory",
]
