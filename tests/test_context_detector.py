"""
Tests for context sensing.

Tests time bucketing, project type detection, scope resolution and the
ContextDetector snapshot with a fixed clock and a patched git lookup.
"""

import subprocess
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from recall.core.context import (
    ContextDetector,
    ContextProvider,
    ContextSnapshot,
    ContextUnavailableError,
    DayOfWeek,
    ProjectType,
    TimeOfDay,
    detect_project_type,
)
from recall.utils.git import get_current_branch
from recall.utils.project import find_project_root, get_markers, resolve_scope

# 2026-10-12 is a Monday
MONDAY_9AM = datetime(2026, 10, 12, 9, 0)
FRIDAY_3PM = datetime(2026, 10, 16, 15, 0)


class TestTimeOfDay:
    """Test hour bucketing."""

    @pytest.mark.parametrize(
        "hour,expected",
        [
            (0, TimeOfDay.NIGHT),
            (5, TimeOfDay.NIGHT),
            (6, TimeOfDay.MORNING),
            (11, TimeOfDay.MORNING),
            (12, TimeOfDay.AFTERNOON),
            (17, TimeOfDay.AFTERNOON),
            (18, TimeOfDay.EVENING),
            (21, TimeOfDay.EVENING),
            (22, TimeOfDay.NIGHT),
            (23, TimeOfDay.NIGHT),
        ],
    )
    def test_from_hour(self, hour, expected):
        """Test each bucket boundary."""
        assert TimeOfDay.from_hour(hour) == expected


class TestDayOfWeek:
    """Test weekday mapping."""

    def test_monday(self):
        """Test a Monday maps to MONDAY."""
        assert DayOfWeek.from_datetime(MONDAY_9AM) == DayOfWeek.MONDAY

    def test_friday(self):
        """Test a Friday maps to FRIDAY."""
        assert DayOfWeek.from_datetime(FRIDAY_3PM) == DayOfWeek.FRIDAY

    def test_sunday(self):
        """Test the last weekday maps to SUNDAY."""
        assert DayOfWeek.from_datetime(datetime(2026, 10, 18)) == DayOfWeek.SUNDAY


class TestContextSnapshot:
    """Test the snapshot model."""

    def test_at_derives_time_fields(self):
        """Test time fields are derived from the moment."""
        snapshot = ContextSnapshot.at(FRIDAY_3PM, working_directory="/work/app")

        assert snapshot.time_of_day == TimeOfDay.AFTERNOON
        assert snapshot.day_of_week == DayOfWeek.FRIDAY
        assert snapshot.git_branch is None
        assert snapshot.project_type is None

    def test_frozen(self):
        """Test snapshots can't be modified."""
        snapshot = ContextSnapshot.at(MONDAY_9AM, working_directory="/work/app")

        with pytest.raises(ValidationError):
            snapshot.git_branch = "main"

    def test_empty_working_directory_rejected(self):
        """Test a snapshot needs a working directory."""
        with pytest.raises(ValueError):
            ContextSnapshot.at(MONDAY_9AM, working_directory="")

    @pytest.mark.parametrize(
        "branch,expected",
        [
            ("feature/login", True),
            ("feat/search", True),
            ("main", False),
            (None, False),
        ],
    )
    def test_on_feature_branch(self, branch, expected):
        """Test feature branch detection by name."""
        snapshot = ContextSnapshot.at(MONDAY_9AM, working_directory="/w", git_branch=branch)
        assert snapshot.on_feature_branch is expected


class TestDetectProjectType:
    """Test project type detection from marker files."""

    @pytest.mark.parametrize(
        "marker,expected",
        [
            ("package.json", ProjectType.NODE),
            ("Cargo.toml", ProjectType.RUST),
            ("requirements.txt", ProjectType.PYTHON),
            ("setup.py", ProjectType.PYTHON),
            ("pyproject.toml", ProjectType.PYTHON),
            ("go.mod", ProjectType.GO),
            ("pom.xml", ProjectType.JAVA),
            ("Gemfile", ProjectType.RUBY),
        ],
    )
    def test_marker(self, tmp_path, marker, expected):
        """Test each marker file maps to its project type."""
        (tmp_path / marker).write_text("")
        assert detect_project_type(tmp_path) == expected

    def test_no_marker(self, tmp_path):
        """Test a directory without markers is OTHER."""
        assert detect_project_type(tmp_path) == ProjectType.OTHER

    def test_first_match_wins(self, tmp_path):
        """Test Node wins over Python when both markers exist."""
        (tmp_path / "package.json").write_text("{}")
        (tmp_path / "pyproject.toml").write_text("")
        assert detect_project_type(tmp_path) == ProjectType.NODE


class TestProjectRoot:
    """Test project root and scope resolution."""

    def test_find_root_from_nested_dir(self, tmp_path):
        """Test the root is found from a subdirectory."""
        project = tmp_path / "app"
        nested = project / "src" / "deep"
        nested.mkdir(parents=True)
        (project / "Cargo.toml").write_text("")

        assert find_project_root(nested) == project.resolve()
        assert resolve_scope(nested) == project.resolve()

    def test_get_markers(self, tmp_path):
        """Test listing markers in a directory."""
        (tmp_path / "package.json").write_text("{}")
        (tmp_path / ".git").mkdir()

        assert get_markers(tmp_path) == [".git", "package.json"]

    def test_resolve_scope_without_root(self, tmp_path):
        """Test the directory itself is the scope when no root is found."""
        with patch("recall.utils.project.find_project_root", return_value=None):
            assert resolve_scope(tmp_path) == tmp_path.resolve()


class TestGetCurrentBranch:
    """Test git branch lookup."""

    def test_branch_name(self, tmp_path):
        """Test the branch is read from git."""
        completed = subprocess.CompletedProcess(args=[], returncode=0, stdout="feature/x\n")
        with patch("recall.utils.git.subprocess.run", return_value=completed) as run:
            assert get_current_branch(tmp_path) == "feature/x"

        assert run.call_args.kwargs["cwd"] == tmp_path

    def test_not_a_repo(self, tmp_path):
        """Test None outside a git repository."""
        error = subprocess.CalledProcessError(128, ["git"])
        with patch("recall.utils.git.subprocess.run", side_effect=error):
            assert get_current_branch(tmp_path) is None

    def test_git_missing(self, tmp_path):
        """Test None when git isn't installed."""
        with patch("recall.utils.git.subprocess.run", side_effect=FileNotFoundError):
            assert get_current_branch(tmp_path) is None


class TestContextDetector:
    """Test the default context provider."""

    @pytest.fixture
    def node_project(self, tmp_path) -> Path:
        project = tmp_path / "web"
        (project / "src").mkdir(parents=True)
        (project / "package.json").write_text("{}")
        return project

    def test_is_context_provider(self):
        """Test the detector satisfies the ContextProvider protocol."""
        assert isinstance(ContextDetector(), ContextProvider)

    def test_snapshot(self, node_project):
        """Test a snapshot combines directory, clock, git and markers."""
        detector = ContextDetector(start=node_project / "src", clock=lambda: MONDAY_9AM)

        with patch(
            "recall.core.context.detector.get_current_branch", return_value="feature/login"
        ):
            snapshot = detector.snapshot()

        assert snapshot.working_directory == str(node_project.resolve())
        assert snapshot.time_of_day == TimeOfDay.MORNING
        assert snapshot.day_of_week == DayOfWeek.MONDAY
        assert snapshot.git_branch == "feature/login"
        assert snapshot.project_type == ProjectType.NODE
        assert snapshot.on_feature_branch

    def test_snapshot_is_fresh_each_time(self, node_project):
        """Test every call reads the clock again."""
        moments = iter([MONDAY_9AM, FRIDAY_3PM])
        detector = ContextDetector(start=node_project, clock=lambda: next(moments))

        with patch("recall.core.context.detector.get_current_branch", return_value=None):
            first = detector.snapshot()
            second = detector.snapshot()

        assert first.day_of_week == DayOfWeek.MONDAY
        assert second.day_of_week == DayOfWeek.FRIDAY
        assert second.time_of_day == TimeOfDay.AFTERNOON

    def test_unresolvable_directory(self):
        """Test a vanished working directory raises ContextUnavailableError."""
        detector = ContextDetector(clock=lambda: MONDAY_9AM)

        with patch(
            "recall.core.context.detector.resolve_scope",
            side_effect=FileNotFoundError("cwd was deleted"),
        ):
            with pytest.raises(ContextUnavailableError, match="cwd was deleted"):
                detector.snapshot()
