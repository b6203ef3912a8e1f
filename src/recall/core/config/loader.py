"""
Configuration loading with multi-layer merging.

Implements the configuration precedence chain:
    defaults < user config < project config < env vars
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from .env import load_layered_env
from .models import RecallConfig

logger = logging.getLogger(__name__)

# Global cache to avoid reloading config multiple times per process
_config_cache: RecallConfig | None = None

_FALSE_VALUES = ("false", "0", "no", "off", "")


def get_xdg_config_home() -> Path:
    """
    Get XDG config home directory.

    Returns:
        Path to config directory (defaults to ~/.config)
    """
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_user_config_path() -> Path:
    """Path to ~/.config/recall/config.json (or XDG equivalent)."""
    return get_xdg_config_home() / "recall" / "config.json"


def get_project_config_path(cwd: Path | None = None) -> Path:
    """
    Get path to project configuration file.

    Args:
        cwd: Working directory to search from (defaults to current directory)

    Returns:
        Path to .recall.json in that directory
    """
    if cwd is None:
        cwd = Path.cwd()
    return cwd / ".recall.json"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Values in `override` take precedence over values in `base`; nested
    dicts are merged, not replaced.

    Example:
        >>> deep_merge({"a": 1, "b": {"x": 10}}, {"b": {"y": 20}})
        {'a': 1, 'b': {'x': 10, 'y': 20}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Load a JSON file, returning None if it doesn't exist or is invalid.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON object, or None if missing, unparseable, or not an object
    """
    if not path.exists():
        return None

    try:
        with path.open() as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        # A broken config file should not stop the engine
        logger.warning("Failed to parse config at %s: %s", path, e)
        return None

    if isinstance(data, dict):
        return data
    logger.warning("Ignoring config at %s: top level is not an object", path)
    return None


def _set_nested(config_dict: dict[str, Any], section: str, key: str, value: Any) -> None:
    config_dict.setdefault(section, {})
    config_dict[section][key] = value


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Supported env vars:
        RECALL_DB_PATH - overrides database.path
        RECALL_PATTERNS_ENABLED - overrides patterns.enabled
        RECALL_CHRONOLOGICAL - overrides patterns.chronological
        RECALL_SUGGESTIONS_ENABLED - overrides suggestions.enabled

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Configuration dictionary with env var overrides applied
    """
    result = config_dict.copy()

    if db_path := os.environ.get("RECALL_DB_PATH"):
        _set_nested(result, "database", "path", str(Path(db_path).expanduser()))

    bool_overrides = {
        "RECALL_PATTERNS_ENABLED": ("patterns", "enabled"),
        "RECALL_CHRONOLOGICAL": ("patterns", "chronological"),
        "RECALL_SUGGESTIONS_ENABLED": ("suggestions", "enabled"),
    }
    for env_var, (section, key) in bool_overrides.items():
        raw = os.environ.get(env_var)
        if raw is None:
            continue
        _set_nested(result, section, key, raw.strip().lower() not in _FALSE_VALUES)

    return result


def get_default_config() -> dict[str, Any]:
    """
    Get hardcoded default configuration.

    The database path default is computed by the model, so it is not
    listed here.
    """
    return {
        "patterns": {"enabled": True, "chronological": True},
        "suggestions": {"enabled": True},
        "history": {"max_size": 10000, "auto_cleanup_days": 90},
    }


def load_config(project_dir: Path | None = None, use_cache: bool = True) -> RecallConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Environment variables (RECALL_*), including values from .env files
        2. Project config (.recall.json)
        3. User config (~/.config/recall/config.json)
        4. Hardcoded defaults

    Args:
        project_dir: Project directory to load .recall.json and .env from
        use_cache: If True, return cached config from previous load

    Returns:
        Validated RecallConfig instance

    Raises:
        ValidationError: If the merged config fails Pydantic validation
    """
    global _config_cache

    if use_cache and _config_cache is not None:
        return _config_cache

    if loaded := load_layered_env(project_dir=project_dir):
        logger.debug("Loaded %s from .env files", ", ".join(sorted(loaded)))

    merged = get_default_config()

    if user_config := load_json_file(get_user_config_path()):
        merged = deep_merge(merged, user_config)

    if project_config := load_json_file(get_project_config_path(project_dir)):
        merged = deep_merge(merged, project_config)

    merged = apply_env_overrides(merged)

    config = RecallConfig(**merged)

    _config_cache = config

    return config


def clear_cache() -> None:
    """
    Clear the cached configuration.

    Useful for testing or when config files change during execution.
    """
    global _config_cache
    _config_cache = None
