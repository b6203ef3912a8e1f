"""
Service layer for recall.

Services compose the detector and the engine into one API surface that a
CLI or a shell hook can call. They return typed models and never print.

Modules:
    analysis: Analyzer runs pattern detection followed by suggestions.
    models: Data models returned by services (AnalysisReport).
"""

from recall.core.services.analysis import Analyzer
from recall.core.services.models import AnalysisReport

__all__ = [
    "Analyzer",
    "AnalysisReport",
]
