"""
Pytest configuration and shared fixtures.

Provides fixtures for temporary command stores, fixed context snapshots
and helpers for recording command history.
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from recall.core.config import clear_cache
from recall.core.context.models import ContextSnapshot, DayOfWeek, ProjectType, TimeOfDay
from recall.core.store import CommandEvent, SQLiteCommandStore

PROJECT = "/work/app"

# Base time for recorded history; events are spaced one second apart
HISTORY_START = datetime(2026, 10, 1, 9, 0, tzinfo=timezone.utc)


class StaticContextProvider:
    """Context provider that always returns the same snapshot."""

    def __init__(self, snapshot: ContextSnapshot):
        self._snapshot = snapshot
        self.calls = 0

    def snapshot(self) -> ContextSnapshot:
        self.calls += 1
        return self._snapshot


# ==============================================================================
# Configuration
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """
    Keep configuration loading away from the real user environment.

    Points XDG directories at the temp dir, removes RECALL_* variables
    and clears the config cache before and after each test.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg-data"))
    for var in (
        "RECALL_DB_PATH",
        "RECALL_PATTERNS_ENABLED",
        "RECALL_CHRONOLOGICAL",
        "RECALL_SUGGESTIONS_ENABLED",
    ):
        monkeypatch.delenv(var, raising=False)

    clear_cache()
    yield
    clear_cache()


# ==============================================================================
# Store Fixtures
# ==============================================================================


@pytest.fixture
def db_path(tmp_path) -> Path:
    """Path for a temporary command database."""
    return tmp_path / "data" / "commands.db"


@pytest.fixture
def store(db_path) -> SQLiteCommandStore:
    """Empty SQLite command store in a temp directory."""
    return SQLiteCommandStore(db_path)


@pytest.fixture
def git_cycle() -> list[str]:
    """The add/commit/push cycle repeated three times, oldest first."""
    return ["git add .", "git commit -m 'test'", "git push"] * 3


# ==============================================================================
# Context Fixtures
# ==============================================================================


@pytest.fixture
def quiet_snapshot() -> ContextSnapshot:
    """Wednesday evening, no branch, no project type: no context or time suggestions."""
    return ContextSnapshot(
        working_directory=PROJECT,
        time_of_day=TimeOfDay.EVENING,
        day_of_week=DayOfWeek.WEDNESDAY,
    )


@pytest.fixture
def busy_snapshot() -> ContextSnapshot:
    """Monday morning in a Node project on a feature branch."""
    return ContextSnapshot(
        working_directory=PROJECT,
        time_of_day=TimeOfDay.MORNING,
        day_of_week=DayOfWeek.MONDAY,
        git_branch="feature/login",
        project_type=ProjectType.NODE,
    )


# ==============================================================================
# Helper Fixtures
# ==============================================================================


@pytest.fixture
def record_history(store):
    """
    Record commands oldest-first with increasing timestamps.

    Returns a function ``record(commands, project_path=PROJECT)`` that
    returns the command row ids. Later calls continue after earlier ones.
    """
    recorded = 0

    def record(commands: list[str], project_path: str = PROJECT) -> list[int]:
        nonlocal recorded
        ids = []
        for command in commands:
            timestamp = HISTORY_START + timedelta(seconds=recorded)
            ids.append(store.record_command(project_path, command, timestamp=timestamp))
            recorded += 1
        return ids

    return record


@pytest.fixture
def make_event():
    """Factory for CommandEvent objects that don't need a database."""

    def factory(command: str, usage_count: int = 1, event_id: int = 1) -> CommandEvent:
        return CommandEvent(
            id=event_id,
            project_path=PROJECT,
            command=command,
            timestamp=HISTORY_START,
            usage_count=usage_count,
        )

    return factory


@pytest.fixture
def static_provider():
    """Factory for StaticContextProvider instances."""
    return StaticContextProvider
