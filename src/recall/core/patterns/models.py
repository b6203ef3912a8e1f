"""
Data models for the pattern detector.
"""

from pydantic import BaseModel, ConfigDict, Field

from recall.core.store.models import PatternKind, PersistenceFailure


class Pattern(BaseModel):
    """A recurring command pattern found by one detection run.

    Patterns are frozen: a later run produces new patterns rather than
    updating old ones.

    Example:
        >>> pattern = Pattern(
        ...     kind=PatternKind.SEQUENTIAL,
        ...     commands=["git add .", "git commit", "git push"],
        ...     confidence=0.6,
        ...     occurrences=3,
        ... )
        >>> pattern.is_sequence
        True
    """

    model_config = ConfigDict(frozen=True)

    kind: PatternKind = Field(..., description="How the pattern was detected")
    commands: list[str] = Field(
        ...,
        min_length=1,
        description="Command texts; ordered for sequential patterns"
    )
    confidence: float = Field(..., ge=0.0, le=1.0, description="Heuristic score 0.0-1.0")
    occurrences: int = Field(..., ge=1, description="Times seen (summed usage for frequency)")
    project_path: str | None = Field(default=None, description="Scope the run was limited to")

    @property
    def is_sequence(self) -> bool:
        """Whether the pattern has at least two commands to predict from."""
        return len(self.commands) >= 2

    @property
    def category(self) -> str:
        """Tool name shared by the pattern's first command."""
        return extract_category(self.commands[0])


class PatternDetectionResult(BaseModel):
    """Patterns from one run plus any persistence failures."""

    patterns: list[Pattern] = Field(default_factory=list)
    persistence_failures: list[PersistenceFailure] = Field(default_factory=list)


def extract_category(command: str) -> str:
    """
    Get the category (first word) of a command.

    Example:
        >>> extract_category("docker compose up -d")
        'docker'
        >>> extract_category("   ")
        'other'
    """
    parts = command.split()
    return parts[0] if parts else "other"
