"""
Configuration models and loading.

This module provides Pydantic models for recall configuration
with multi-layer merging: defaults < user < project < env vars.
"""

from .loader import (
    clear_cache,
    get_project_config_path,
    get_user_config_path,
    get_xdg_config_home,
    load_config,
)
from .models import (
    DatabaseConfig,
    HistoryConfig,
    PatternsConfig,
    RecallConfig,
    SuggestionsConfig,
)

__all__ = [
    # Models
    "DatabaseConfig",
    "HistoryConfig",
    "PatternsConfig",
    "RecallConfig",
    "SuggestionsConfig",
    # Loader functions
    "clear_cache",
    "get_project_config_path",
    "get_user_config_path",
    "get_xdg_config_home",
    "load_config",
]
