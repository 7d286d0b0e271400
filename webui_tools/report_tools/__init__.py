"""Allure attachments, step screenshots and lifecycle logging."""

from .allure_utils import AllureReportContext, ReportContext, ScreenshotArtifact
from .lifecycle_reporter import LifecycleReporter
from .screenshot_recorder import ScreenshotRecorder

__all__ = [
    "AllureReportContext",
    "ReportContext",
    "ScreenshotArtifact",
    "ScreenshotRecorder",
    "LifecycleReporter",
]
