"""
Data models describing the context a suggestion is generated in.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TimeOfDay(str, Enum):
    """Coarse time-of-day buckets (local time)."""

    MORNING = "morning"  # 06:00 - 11:59
    AFTERNOON = "afternoon"  # 12:00 - 17:59
    EVENING = "evening"  # 18:00 - 21:59
    NIGHT = "night"  # 22:00 - 05:59

    @classmethod
    def from_hour(cls, hour: int) -> "TimeOfDay":
        """Bucket an hour of the day (0-23)."""
        if 6 <= hour <= 11:
            return cls.MORNING
        if 12 <= hour <= 17:
            return cls.AFTERNOON
        if 18 <= hour <= 21:
            return cls.EVENING
        return cls.NIGHT


class DayOfWeek(str, Enum):
    """Day of the week, in ``datetime.weekday()`` order."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def from_datetime(cls, moment: datetime) -> "DayOfWeek":
        return list(cls)[moment.weekday()]


class ProjectType(str, Enum):
    """Primary toolchain of a project, detected from marker files."""

    NODE = "node"  # package.json
    RUST = "rust"  # Cargo.toml
    PYTHON = "python"  # requirements.txt, setup.py, pyproject.toml
    GO = "go"  # go.mod
    JAVA = "java"  # pom.xml
    RUBY = "ruby"  # Gemfile
    OTHER = "other"


class ContextSnapshot(BaseModel):
    """Immutable view of where and when the user is working.

    Taken fresh for every suggestion request and never stored on its own.

    Example:
        >>> snapshot = ContextSnapshot(
        ...     working_directory="/home/me/app",
        ...     time_of_day=TimeOfDay.MORNING,
        ...     day_of_week=DayOfWeek.MONDAY,
        ...     git_branch="feature/login",
        ...     project_type=ProjectType.NODE,
        ... )
        >>> snapshot.on_feature_branch
        True
    """

    model_config = ConfigDict(frozen=True)

    working_directory: str = Field(..., min_length=1, description="Project scope for queries")
    time_of_day: TimeOfDay
    day_of_week: DayOfWeek
    git_branch: str | None = Field(default=None, description="Current git branch, if any")
    project_type: ProjectType | None = Field(default=None, description="Detected toolchain")

    @classmethod
    def at(
        cls,
        moment: datetime,
        working_directory: str,
        git_branch: str | None = None,
        project_type: ProjectType | None = None,
    ) -> "ContextSnapshot":
        """Build a snapshot whose time fields are derived from ``moment``."""
        return cls(
            working_directory=working_directory,
            time_of_day=TimeOfDay.from_hour(moment.hour),
            day_of_week=DayOfWeek.from_datetime(moment),
            git_branch=git_branch,
            project_type=project_type,
        )

    @property
    def on_feature_branch(self) -> bool:
        """Whether the branch name looks like a feature branch."""
        if not self.git_branch:
            return False
        return "feature" in self.git_branch or "feat" in self.git_branch
