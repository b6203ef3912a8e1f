"""
Service layer data models.

Defines Pydantic models returned by the service layer to callers such as
a CLI or a shell hook.
"""

from pydantic import BaseModel, Field

from recall.core.patterns.models import Pattern
from recall.core.store.models import PersistenceFailure
from recall.core.suggestions.models import SmartSuggestion


class AnalysisReport(BaseModel):
    """Result of one analysis run.

    Holds the detected patterns and the ranked suggestions for one scope,
    plus any best-effort writes that failed along the way.
    """

    pattern_count: int = Field(default=0, ge=0, description="Number of patterns detected")
    suggestion_count: int = Field(default=0, ge=0, description="Number of suggestions returned")
    patterns: list[Pattern] = Field(default_factory=list, description="Detected patterns")
    suggestions: list[SmartSuggestion] = Field(
        default_factory=list, description="Suggestions, highest confidence first"
    )
    persistence_failures: list[PersistenceFailure] = Field(
        default_factory=list, description="Pattern and suggestion writes that failed"
    )

    @property
    def has_persistence_failures(self) -> bool:
        return bool(self.persistence_failures)
