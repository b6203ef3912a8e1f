"""
Suggestion strategies.

Each strategy looks at one kind of evidence and proposes commands:
- patterns: the next step of a detected sequence, given the last command
- context: fixed commands for the project type, plus pushing feature branches
- time: weekly routines (Monday morning pull, Friday afternoon status)
"""

from __future__ import annotations

from recall.core.context.models import ContextSnapshot, DayOfWeek, ProjectType, TimeOfDay
from recall.core.patterns.models import Pattern
from recall.core.suggestions.models import SmartSuggestion, SuggestionSource

# (command, reason, confidence) per project type; every type is listed
PROJECT_TYPE_SUGGESTIONS: dict[ProjectType, list[tuple[str, str, float]]] = {
    ProjectType.NODE: [
        ("npm install", "Node project: install dependencies", 0.7),
        ("npm test", "Node project: run tests", 0.65),
    ],
    ProjectType.RUST: [
        ("cargo build", "Rust project: build project", 0.7),
        ("cargo test", "Rust project: run tests", 0.65),
    ],
    ProjectType.PYTHON: [
        ("pip install -r requirements.txt", "Python project: install dependencies", 0.7),
        ("python -m pytest", "Python project: run tests", 0.65),
    ],
    ProjectType.GO: [],
    ProjectType.JAVA: [],
    ProjectType.RUBY: [],
    ProjectType.OTHER: [],
}

FEATURE_BRANCH_CONFIDENCE = 0.6

# (day, time of day, command, reason, confidence)
ROUTINE_SUGGESTIONS: list[tuple[DayOfWeek, TimeOfDay, str, str, float]] = [
    (
        DayOfWeek.MONDAY,
        TimeOfDay.MORNING,
        "git pull",
        "Monday morning: sync with latest changes",
        0.65,
    ),
    (
        DayOfWeek.FRIDAY,
        TimeOfDay.AFTERNOON,
        "git status",
        "Friday afternoon: check for uncommitted changes",
        0.6,
    ),
]


def predict_next_in_sequence(last_command: str, sequence: list[str]) -> str | None:
    """
    Get the command that follows ``last_command`` in a sequence.

    Only the first occurrence of ``last_command`` is considered.

    Example:
        >>> predict_next_in_sequence("git add .", ["git add .", "git commit", "git push"])
        'git commit'
        >>> predict_next_in_sequence("git push", ["git add .", "git commit", "git push"]) is None
        True
    """
    for i, command in enumerate(sequence):
        if command == last_command:
            return sequence[i + 1] if i + 1 < len(sequence) else None
    return None


def suggest_from_patterns(
    patterns: list[Pattern], last_command: str | None
) -> list[SmartSuggestion]:
    """
    Suggest the next step of every pattern that contains the last command.

    Args:
        patterns: Detected patterns
        last_command: Most recent command in the scope (None if no history)
    """
    if last_command is None:
        return []

    suggestions: list[SmartSuggestion] = []
    for pattern in patterns:
        if not pattern.is_sequence:
            continue

        next_command = predict_next_in_sequence(last_command, pattern.commands)
        if next_command is None or not next_command.strip():
            continue

        suggestions.append(
            SmartSuggestion(
                command=next_command,
                reason=f"You usually run '{next_command}' after '{last_command}'",
                confidence=pattern.confidence,
                source=SuggestionSource.PATTERN,
            )
        )

    return suggestions


def suggest_from_context(snapshot: ContextSnapshot) -> list[SmartSuggestion]:
    """Suggest commands for the project type and the current git branch."""
    suggestions: list[SmartSuggestion] = []

    if snapshot.project_type is not None:
        suggestions.extend(
            SmartSuggestion(
                command=command,
                reason=reason,
                confidence=confidence,
                source=SuggestionSource.CONTEXT,
            )
            for command, reason, confidence in PROJECT_TYPE_SUGGESTIONS[snapshot.project_type]
        )

    if snapshot.on_feature_branch:
        suggestions.append(
            SmartSuggestion(
                command="git push",
                reason=f"On feature branch '{snapshot.git_branch}': push changes",
                confidence=FEATURE_BRANCH_CONFIDENCE,
                source=SuggestionSource.CONTEXT,
            )
        )

    return suggestions


def suggest_from_time(snapshot: ContextSnapshot) -> list[SmartSuggestion]:
    """Suggest routine commands for the day of week and time of day."""
    return [
        SmartSuggestion(
            command=command,
            reason=reason,
            confidence=confidence,
            source=SuggestionSource.TIME,
        )
        for day, time_of_day, command, reason, confidence in ROUTINE_SUGGESTIONS
        if snapshot.day_of_week == day and snapshot.time_of_day == time_of_day
    ]
