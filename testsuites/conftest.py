"""
================================================================================
Test Suites Pytest Configuration
================================================================================

Registers project-wide markers and auto-marks tests by directory.

================================================================================
"""

from pathlib import Path

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests driving a real browser"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: UI tests (need Playwright browsers installed)"
    )
    config.addinivalue_line(
        "markers", "unit: Fast tests of the keyword core against in-memory fakes"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "dialogs: Tests related to JavaScript dialog handling"
    )
    config.addinivalue_line(
        "markers", "downloads: Tests related to file downloads"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-add 'ui' / 'unit' markers based on the test's directory."""
    for item in items:
        path = str(item.fspath)
        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)
        if "unit" in Path(path).parts:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Playwright WebUI Keyword Framework",
        "=" * 60,
        "",
    ]
