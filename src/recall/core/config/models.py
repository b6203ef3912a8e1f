"""
Configuration data models for recall.

These models define the structure of .recall.json and
~/.config/recall/config.json files, with validation via Pydantic.
"""

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


def default_database_path() -> Path:
    """Default location of the command database ($XDG_DATA_HOME/recall/commands.db)."""
    data_home = os.environ.get("XDG_DATA_HOME")
    base = Path(data_home) if data_home else Path.home() / ".local" / "share"
    return base / "recall" / "commands.db"


class DatabaseConfig(BaseModel):
    """Where the command store lives."""

    path: Path = Field(
        default_factory=default_database_path,
        description="Path to the SQLite command database"
    )


class PatternsConfig(BaseModel):
    """
    Pattern detection settings.

    ``chronological`` controls the direction of sequence windows: when
    True the history is put in oldest-first order before windowing, so a
    sequence [A, B] means "A is usually followed by B".
    """
    enabled: bool = Field(
        default=True,
        description="Run pattern detection"
    )
    chronological: bool = Field(
        default=True,
        description="Window the history oldest-first (False: newest-first)"
    )


class SuggestionsConfig(BaseModel):
    """Suggestion generation settings."""
    enabled: bool = Field(
        default=True,
        description="Generate next-command suggestions"
    )


class HistoryConfig(BaseModel):
    """
    Retention limits for the execution history.

    Applied by ``SQLiteCommandStore.prune_history``.
    """
    max_size: int = Field(
        default=10000,
        ge=1,
        description="Keep at most this many history entries"
    )
    auto_cleanup_days: int = Field(
        default=90,
        ge=1,
        description="Forget commands unused for this many days"
    )


class RecallConfig(BaseModel):
    """
    Top-level recall configuration.

    Loaded from defaults, user config, project config, and env vars.

    Example:
        >>> config = RecallConfig(patterns=PatternsConfig(chronological=False))
        >>> config.patterns.chronological
        False
        >>> config.suggestions.enabled
        True
    """
    model_config = ConfigDict(extra="ignore")

    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig,
        description="Command database location"
    )
    patterns: PatternsConfig = Field(
        default_factory=PatternsConfig,
        description="Pattern detection"
    )
    suggestions: SuggestionsConfig = Field(
        default_factory=SuggestionsConfig,
        description="Suggestion generation"
    )
    history: HistoryConfig = Field(
        default_factory=HistoryConfig,
        description="History retention"
    )
