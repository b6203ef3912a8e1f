"""
Data models for the suggestion system.

Defines the SmartSuggestion model and the result of one generation run.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from recall.core.context.models import ContextSnapshot
from recall.core.store.models import PersistenceFailure


class SuggestionSource(str, Enum):
    """Strategy that produced a suggestion."""

    PATTERN = "pattern"  # Next step of a detected sequence
    CONTEXT = "context"  # Project type or git branch
    TIME = "time"  # Day of week and time of day


class SmartSuggestion(BaseModel):
    """A command to run next, with the reason it is suggested.

    Example:
        >>> suggestion = SmartSuggestion(
        ...     command="git push",
        ...     reason="You usually run 'git push' after 'git commit -m wip'",
        ...     confidence=0.8,
        ...     source=SuggestionSource.PATTERN,
        ... )
        >>> suggestion.id is None
        True
    """

    model_config = ConfigDict(frozen=True)

    command: str = Field(..., min_length=1, description="Command to run")
    reason: str = Field(..., min_length=1, description="Why it is suggested")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Heuristic score 0.0-1.0")
    source: SuggestionSource = Field(..., description="Strategy that produced it")
    id: int | None = Field(default=None, description="Stored suggestion id, once persisted")


class SuggestionResult(BaseModel):
    """Suggestions from one run, the context they were made for, and write failures."""

    snapshot: ContextSnapshot
    suggestions: list[SmartSuggestion] = Field(default_factory=list)
    persistence_failures: list[PersistenceFailure] = Field(default_factory=list)
