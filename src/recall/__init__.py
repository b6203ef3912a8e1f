"""
Recall - Shell Command Pattern Miner

Learns recurring command sequences and heavily used tools from shell
history and suggests what to run next.
"""

__version__ = "0.1.0"

# Re-export core models for convenience
from recall.core.config.models import RecallConfig
from recall.core.patterns.models import Pattern
from recall.core.store.models import PatternKind
from recall.core.suggestions.models import SmartSuggestion

__all__ = ["RecallConfig", "Pattern", "PatternKind", "SmartSuggestion", "__version__"]
