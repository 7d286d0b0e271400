"""
================================================================================
Allure Report Utilities
================================================================================

This module provides utilities for enhancing Allure test reports with
step screenshots and custom attachments.

Features:
- Attachment helpers (text, JSON, PNG)
- ScreenshotArtifact: the payload produced by one keyword step
- AllureReportContext: per-test report target handed to the keyword library

================================================================================
"""

import json
from dataclasses import dataclass
from typing import Any, Protocol

import allure


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_json(data: Any, name: str = "Data"):
    """
    Attach JSON data to Allure report.

    Args:
        data: Data to attach (will be JSON serialized)
        name: Attachment name
    """
    json_str = json.dumps(data, indent=2, default=str)
    allure.attach(
        json_str,
        name=name,
        attachment_type=allure.attachment_type.JSON
    )


def attach_text(text: str, name: str = "Text"):
    """
    Attach text content to Allure report.

    Args:
        text: Text to attach
        name: Attachment name
    """
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


def attach_png(body: bytes, name: str = "Screenshot"):
    """
    Attach a PNG image to Allure report.

    Args:
        body: Raw PNG bytes
        name: Attachment name
    """
    allure.attach(
        body,
        name=name,
        attachment_type=allure.attachment_type.PNG
    )


# ================================================================================
# Report Context
# ================================================================================

@dataclass(frozen=True)
class ScreenshotArtifact:
    """One screenshot taken after a successful keyword step."""
    step_name: str
    image_bytes: bytes


class ReportContext(Protocol):
    """Anything that can receive step screenshots for the current test."""

    def attach(self, artifact: ScreenshotArtifact) -> None:
        ...


class AllureReportContext:
    """
    Report context that forwards step screenshots to the running Allure test.

    The UI conftest creates one per test; passing ``None`` instead disables
    step screenshots for that caller.
    """

    def __init__(self, test_name: str = ""):
        self.test_name = test_name
        self.attached = 0

    def attach(self, artifact: ScreenshotArtifact) -> None:
        attach_png(artifact.image_bytes, name=artifact.step_name)
        self.attached += 1

    def __repr__(self) -> str:
        return f"AllureReportContext(test_name={self.test_name!r})"


__all__ = [
    "attach_json",
    "attach_text",
    "attach_png",
    "ScreenshotArtifact",
    "ReportContext",
    "AllureReportContext",
]
