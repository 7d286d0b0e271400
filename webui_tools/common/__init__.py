"""
================================================================================
WebUI Tools Common Utilities
================================================================================

Shared configuration management and logging for the framework.

Exports:
    - get_config / set_config / reload_config: dot-path configuration access
    - init_logger: loguru console initialisation
    - LogSink: dated, append-only run log file

Usage:
    from webui_tools.common import get_config, init_logger

    init_logger()
    timeout = get_config("framework.default_timeout", 30000)

================================================================================
"""

from .global_config import (
    get_config,
    get_default_timeout,
    init_logger,
    reload_config,
    screenshots_enabled,
    set_config,
)
from .log_sink import LogLevel, LogSink

__all__ = [
    "get_config",
    "set_config",
    "reload_config",
    "get_default_timeout",
    "screenshots_enabled",
    "init_logger",
    "LogSink",
    "LogLevel",
]
