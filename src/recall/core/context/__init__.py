"""
Working-context sensing for recall suggestions.
"""

from recall.core.context.detector import (
    ContextDetector,
    ContextProvider,
    ContextUnavailableError,
    detect_project_type,
)
from recall.core.context.models import ContextSnapshot, DayOfWeek, ProjectType, TimeOfDay

__all__ = [
    "ContextSnapshot",
    "DayOfWeek",
    "ProjectType",
    "TimeOfDay",
    "ContextDetector",
    "ContextProvider",
    "ContextUnavailableError",
    "detect_project_type",
]
