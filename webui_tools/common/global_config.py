"""
================================================================================
Global Configuration for the WebUI Framework
================================================================================

This module provides centralized configuration management for the keyword
framework, including console logging setup and configuration file loading.

Features:
    - Module-level configuration cache, loaded once per process
    - YAML-based configuration loading (config/config.yaml + config/{ENV}.yaml)
    - Environment variable support (FRAMEWORK__DEFAULT_TIMEOUT=5000)
    - Centralized Loguru console configuration

Author: Automation Team
License: MIT
================================================================================
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional
import yaml
from loguru import logger

# Global configuration storage
_config: Dict[str, Any] = {}
_logger_initialized: bool = False

DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | {message}"
)

_TRUTHY = {"yes", "y", "true", "1", "on"}


def _console_filter(record: Dict[str, Any]) -> bool:
    """Drop records that were logged with ``silent=True``."""
    return not record["extra"].get("silent", False)


def init_logger(level: str = None, format_str: str = None) -> None:
    """
    Initializes the global Loguru logger with consistent configuration.

    This function should be called once at the start of a test session so
    that keyword log lines are echoed to the console with level colours.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        format_str: Custom log format string. Defaults to config value.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    # Load config first to get logging settings
    _ensure_config_loaded()

    log_level = level or get_config("logging.level", "INFO")
    log_format = format_str or get_config("logging.format", DEFAULT_LOG_FORMAT)

    # Remove default logger and add configured one
    logger.remove()
    logger.add(
        sys.stderr,
        level=str(log_level).upper(),
        format=log_format,
        filter=_console_filter,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {log_level}")


def _ensure_config_loaded() -> None:
    """
    Ensures the configuration is loaded.
    """
    global _config
    if not _config:
        _load_config()


def _find_config_dir() -> Optional[Path]:
    """Return the first existing configuration directory."""
    possible_config_dirs = [
        Path(os.getenv("WEBUI_CONFIG_DIR", "config")),
        Path(__file__).parent.parent.parent / "config",
    ]
    for dir_path in possible_config_dirs:
        if dir_path.exists():
            return dir_path
    return None


def _load_config() -> None:
    """
    Loads configuration from YAML files and environment variables.

    Configuration loading order:
        1. Built-in defaults
        2. Default configuration file (config/config.yaml)
        3. Environment-specific configuration (config/{ENV}.yaml)
        4. Environment variables (override YAML settings)
    """
    global _config

    _config = _get_defaults()

    config_dir = _find_config_dir()
    if not config_dir:
        logger.warning("No configuration directory found. Using defaults.")
    else:
        default_config_path = config_dir / "config.yaml"
        if default_config_path.exists():
            with open(default_config_path, "r", encoding="utf-8") as f:
                _config = _deep_merge(_config, yaml.safe_load(f) or {})
            logger.debug(f"Loaded configuration from {default_config_path}")

        env = os.getenv("ENVIRONMENT", os.getenv("ENV", "dev"))
        env_config_path = config_dir / f"{env}.yaml"
        if env_config_path.exists():
            with open(env_config_path, "r", encoding="utf-8") as f:
                env_config = yaml.safe_load(f) or {}
            _config = _deep_merge(_config, env_config)
            logger.debug(f"Merged environment config: {env_config_path}")

    _apply_env_overrides()


def _get_defaults() -> Dict[str, Any]:
    """
    Returns default configuration values.
    """
    return {
        "logging": {
            "level": "INFO",
            "format": DEFAULT_LOG_FORMAT,
            "dir": "logs",
        },
        "framework": {
            "base_url": "http://localhost:3000",
            "default_timeout": 30000,
            "screenshot_all_steps": "no",
        },
        "browser": {
            "name": "chromium",
            "headless": True,
        },
        "downloads": {
            "dir": None,
        },
    }


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merges two dictionaries, with override taking precedence.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _apply_env_overrides() -> None:
    """
    Applies environment variable overrides to the configuration.

    Environment variable naming convention:
        - Use double underscore to separate nested keys
        - Example: FRAMEWORK__SCREENSHOT_ALL_STEPS=yes overrides
          framework.screenshot_all_steps
    """
    global _config

    for key, value in os.environ.items():
        if "__" in key and not key.startswith("_"):
            parts = [p.lower() for p in key.split("__")]
            _set_nested(_config, parts, value)


def _set_nested(d: Dict, keys: list, value: Any) -> None:
    """
    Sets a nested dictionary value using a list of keys.
    """
    for key in keys[:-1]:
        nested = d.get(key)
        if not isinstance(nested, dict):
            nested = {}
            d[key] = nested
        d = nested
    d[keys[-1]] = value


def get_config(key: str, default: Any = None) -> Any:
    """
    Retrieves a configuration value using a dot-separated key path.

    Args:
        key: Dot-separated key path (e.g., "logging.level", "framework.base_url").
        default: Default value to return if key is not found.

    Returns:
        The configuration value, or the default if not found.

    Examples:
        >>> get_config("framework.default_timeout", 30000)
        30000
        >>> get_config("downloads.dir")
        None
    """
    _ensure_config_loaded()

    keys = key.split(".")
    value = _config

    for k in keys:
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default

    return value


def set_config(key: str, value: Any) -> None:
    """
    Sets a configuration value at runtime.

    Args:
        key: Dot-separated key path.
        value: Value to set.
    """
    _ensure_config_loaded()

    keys = key.split(".")
    _set_nested(_config, keys, value)


def reload_config() -> None:
    """
    Reloads the configuration from files and environment.
    """
    global _config
    _config = {}
    _load_config()
    logger.info("Configuration reloaded.")


def as_bool(value: Any) -> bool:
    """Interpret yes/no style config values (env overrides arrive as strings)."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUTHY


def get_default_timeout() -> int:
    """Default gate timeout in milliseconds."""
    return int(get_config("framework.default_timeout", 30000))


def screenshots_enabled() -> bool:
    """Whether every successful step should attach a screenshot."""
    return as_bool(get_config("framework.screenshot_all_steps", "no"))
