"""
Data models for records owned by the command store.

These models mirror the rows of the SQLite schema and are what the
store hands back to the pattern detector and suggestion engine.
"""

import json
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PatternKind(str, Enum):
    """Kinds of command pattern.

    The value is the string stored in ``command_patterns.pattern_type``.
    """

    SEQUENTIAL = "sequence"  # A is usually followed by B
    FREQUENCY = "frequency"  # Heavily used commands of one tool
    TIME_BASED = "time_based"
    CONTEXT_BASED = "context_based"


def _decode_json_list(value: Any) -> Any:
    if value is None:
        return []
    if isinstance(value, str):
        return json.loads(value) if value else []
    return value


class CommandEvent(BaseModel):
    """A recorded command as seen by the engine.

    ``usage_count`` is the number of times this exact command has been
    recorded for the project; ``timestamp`` is when this event happened
    (for history queries) or when the command was last used (for usage
    queries).
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., description="Command row id")
    project_path: str = Field(..., description="Project scope the command was run in")
    command: str = Field(..., description="Command text")
    timestamp: datetime = Field(..., description="When the command ran (UTC)")
    usage_count: int = Field(default=1, ge=1, description="Times this command was recorded")
    exit_code: int | None = Field(default=None, description="Exit status, if known")
    execution_time_ms: int | None = Field(default=None, ge=0)
    tags: list[str] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def decode_tags(cls, v: Any) -> Any:
        """Accept the JSON text stored in the tags column."""
        return _decode_json_list(v)

    @property
    def succeeded(self) -> bool | None:
        """True/False for a known exit status, None when unknown."""
        if self.exit_code is None:
            return None
        return self.exit_code == 0


class StoredPattern(BaseModel):
    """A pattern row persisted by a detection run."""

    id: int
    kind: PatternKind
    commands: list[str]
    project_path: str | None = None
    confidence: float = Field(..., ge=0.0, le=1.0)
    occurrences: int = Field(default=1, ge=1)
    last_seen: datetime
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("commands", mode="before")
    @classmethod
    def decode_commands(cls, v: Any) -> Any:
        return _decode_json_list(v)

    @field_validator("metadata", mode="before")
    @classmethod
    def decode_metadata(cls, v: Any) -> Any:
        if v is None or v == "":
            return {}
        if isinstance(v, str):
            return json.loads(v)
        return v


class StoredSuggestion(BaseModel):
    """A suggestion row with its accept/reject feedback counters."""

    id: int
    project_path: str
    context: str | None = None
    suggested_command: str
    reason: str | None = None
    confidence: float = Field(..., ge=0.0, le=1.0)
    times_accepted: int = Field(default=0, ge=0)
    times_rejected: int = Field(default=0, ge=0)
    created_at: datetime
    last_suggested: datetime | None = None

    @property
    def acceptance_rate(self) -> float:
        """Share of feedback that was an accept, 0.0 with no feedback yet."""
        total = self.times_accepted + self.times_rejected
        if total == 0:
            return 0.0
        return self.times_accepted / total


class PersistenceFailure(BaseModel):
    """A best-effort write that failed and was skipped.

    Returned next to detection and suggestion results instead of being
    raised, so callers still get their results.
    """

    operation: str = Field(..., description="Store method that failed")
    subject: str = Field(..., description="What was being written (command text)")
    error: str = Field(..., description="Error message")


class StoreStats(BaseModel):
    """Row counts for the main store tables."""

    total_commands: int = 0
    total_executions: int = 0
    total_patterns: int = 0
    total_suggestions: int = 0
