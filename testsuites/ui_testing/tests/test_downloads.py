"""
================================================================================
Download UI Tests (Async / Playwright)
================================================================================

Download capture and download-directory helpers against
testdata/downloads.html. Downloads land in a per-test temporary directory.

================================================================================
"""

from pathlib import Path

import allure
import pytest

from testsuites.ui_testing.framework.errors import MissingDirectoryError
from testsuites.ui_testing.framework.web_ui import WebUI


@pytest.fixture
async def downloads_page(web_ui: WebUI, site_url: str) -> WebUI:
    await web_ui.open_url(f"{site_url}/downloads.html")
    return web_ui


@allure.epic("UI Testing")
@allure.feature("Downloads")
@pytest.mark.downloads
class TestDownloads:
    """File download capture (async)."""

    @allure.title("Clicking a download link saves the file")
    @pytest.mark.P1
    async def test_download_file(self, downloads_page: WebUI, download_dir: Path):
        record = await downloads_page.downloads.download_file("#download-report")

        assert record.suggested_filename == "report.txt"
        assert record.path == download_dir / "report.txt"
        assert record.path.read_text() == "quarterly report"
        assert downloads_page.downloads.count_files_in_download_directory() == 1
        assert downloads_page.downloads.verify_file_equals_in_download_directory("report.txt")
        assert await downloads_page.downloads.verify_download_file_contains_name_completed_wait_timeout(
            "report", 3
        )

    @allure.title("Only the first of several downloads is captured")
    @pytest.mark.P2
    async def test_download_file_captures_one(self, downloads_page: WebUI, download_dir: Path):
        record = await downloads_page.downloads.download_file("#download-two")

        assert record.suggested_filename == "first.txt"
        assert [p.name for p in download_dir.iterdir()] == ["first.txt"]

    @allure.title("Missing download directory fails before clicking")
    @pytest.mark.P2
    async def test_download_file_missing_directory(self, downloads_page: WebUI, tmp_path: Path):
        downloads_page.downloads.download_dir = tmp_path / "does-not-exist"

        with pytest.raises(MissingDirectoryError):
            await downloads_page.downloads.download_file("#download-report")
