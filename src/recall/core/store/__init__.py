"""
Command store for recall.

Defines the storage contract the engine depends on and a SQLite
implementation of it.

Main components:
- base.py: CommandStore protocol and store errors
- models.py: CommandEvent, StoredPattern, StoredSuggestion
- schema.py / connection.py: SQLite schema and connection management
- sqlite.py: SQLiteCommandStore
"""

from recall.core.store.base import CommandStore, StoreError, SuggestionNotFoundError
from recall.core.store.models import (
    CommandEvent,
    PatternKind,
    PersistenceFailure,
    StoredPattern,
    StoredSuggestion,
    StoreStats,
)
from recall.core.store.sqlite import SQLiteCommandStore

__all__ = [
    # Contract
    "CommandStore",
    "StoreError",
    "SuggestionNotFoundError",
    # Models
    "CommandEvent",
    "PatternKind",
    "PersistenceFailure",
    "StoredPattern",
    "StoredSuggestion",
    "StoreStats",
    # Implementation
    "SQLiteCommandStore",
]
