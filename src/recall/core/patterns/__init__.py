"""
Command pattern detection for recall.

Mines the command history for repeated sequences and heavily used
tools.
"""

from recall.core.patterns.detector import (
    MIN_CONFIDENCE,
    MIN_PATTERN_OCCURRENCES,
    PatternDetector,
    extract_sequences,
)
from recall.core.patterns.models import Pattern, PatternDetectionResult, extract_category

__all__ = [
    "MIN_CONFIDENCE",
    "MIN_PATTERN_OCCURRENCES",
    "Pattern",
    "PatternDetectionResult",
    "PatternDetector",
    "extract_category",
    "extract_sequences",
]
