"""
================================================================================
WebUI Tools
================================================================================

Instrumentation and support utilities shared by the WebUI keyword framework.

Modules:
    - common: Configuration loading, loguru setup and the per-run LogSink
    - report_tools: Allure attachments, step screenshots and lifecycle logging
    - data_generator: Random test data helpers

Example:
    from webui_tools.common import LogSink, init_logger

    init_logger()
    sink = LogSink("logs")
    sink.create_log_file()
    sink.save_log("============ Start running tests ============")

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
    "data_generator",
]
