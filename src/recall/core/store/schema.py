"""
SQLite schema for the recall command store.

Schema Design:
- commands: One row per distinct (project_path, command) with a usage counter
- command_history: Append-only execution log, one row per recorded execution
- command_patterns: Patterns persisted by the pattern detector
- suggestions: Suggestions persisted by the suggestion engine, with feedback
- schema_info: Version tracking for migrations

The commands table answers "how often" (usage_count) while command_history
answers "in what order", which sequence mining needs.
"""

import sqlite3

# Schema version for migrations
SCHEMA_VERSION = 1

# Pattern types accepted by command_patterns.pattern_type
PATTERN_TYPES = [
    "sequence",
    "frequency",
    "time_based",
    "context_based",
]


SCHEMA_DDL = """
-- Schema version tracking
CREATE TABLE IF NOT EXISTS schema_info (
    version INTEGER PRIMARY KEY,
    applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    description TEXT
);

-- Distinct commands per project
CREATE TABLE IF NOT EXISTS commands (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    project_path TEXT NOT NULL,
    command TEXT NOT NULL,
    timestamp TIMESTAMP NOT NULL,
    usage_count INTEGER NOT NULL DEFAULT 1 CHECK(usage_count >= 1),
    execution_time_ms INTEGER,
    exit_code INTEGER,
    tags JSON,
    UNIQUE(project_path, command)
);

-- Ordered execution log
CREATE TABLE IF NOT EXISTS command_history (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    command_id INTEGER NOT NULL,
    executed_at TIMESTAMP NOT NULL,
    exit_code INTEGER,
    FOREIGN KEY (command_id) REFERENCES commands(id) ON DELETE CASCADE
);

-- Detected patterns
CREATE TABLE IF NOT EXISTS command_patterns (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    pattern_type TEXT NOT NULL CHECK(pattern_type IN ('sequence', 'frequency',
                                                      'time_based', 'context_based')),
    commands JSON NOT NULL,
    project_path TEXT,
    confidence_score REAL NOT NULL DEFAULT 0.0,
    occurrences INTEGER NOT NULL DEFAULT 1,
    last_seen TIMESTAMP NOT NULL,
    metadata JSON
);

-- Generated suggestions and their feedback counters
CREATE TABLE IF NOT EXISTS suggestions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    project_path TEXT NOT NULL,
    context TEXT,
    suggested_command TEXT NOT NULL,
    reason TEXT,
    confidence REAL NOT NULL DEFAULT 0.0,
    times_accepted INTEGER NOT NULL DEFAULT 0,
    times_rejected INTEGER NOT NULL DEFAULT 0,
    created_at TIMESTAMP NOT NULL,
    last_suggested TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_commands_project ON commands(project_path);
CREATE INDEX IF NOT EXISTS idx_commands_usage ON commands(usage_count DESC);
CREATE INDEX IF NOT EXISTS idx_history_command ON command_history(command_id);
CREATE INDEX IF NOT EXISTS idx_history_executed ON command_history(executed_at DESC);
CREATE INDEX IF NOT EXISTS idx_patterns_project ON command_patterns(project_path);
CREATE INDEX IF NOT EXISTS idx_suggestions_project ON suggestions(project_path);
"""


def create_schema(conn: sqlite3.Connection) -> None:
    """
    Create the database schema.

    Idempotent: every statement uses IF NOT EXISTS.

    Args:
        conn: SQLite database connection

    Example:
        >>> import sqlite3
        >>> conn = sqlite3.connect(":memory:")
        >>> create_schema(conn)
        >>> cursor = conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
        >>> tables = [row[0] for row in cursor.fetchall()]
        >>> assert "commands" in tables
        >>> assert "command_history" in tables
    """
    conn.executescript(SCHEMA_DDL)

    conn.execute(
        """
        INSERT OR REPLACE INTO schema_info (version, description)
        VALUES (?, ?)
        """,
        (SCHEMA_VERSION, "Commands, execution history, patterns and suggestions"),
    )

    conn.commit()


def get_schema_version(conn: sqlite3.Connection) -> int | None:
    """
    Get the current schema version from the database.

    Returns:
        Current schema version, or None if schema_info table doesn't exist
    """
    try:
        cursor = conn.execute("SELECT MAX(version) AS version FROM schema_info")
        row = cursor.fetchone()
    except sqlite3.OperationalError:
        # schema_info table doesn't exist
        return None

    if row is None:
        return None
    # Works with both the tuple and the dict row factory
    version = row["version"] if isinstance(row, dict) else row[0]
    return int(version) if version is not None else None


def needs_migration(conn: sqlite3.Connection) -> bool:
    """Check if database needs migration to the current schema version."""
    current_version = get_schema_version(conn)
    if current_version is None:
        return True
    return current_version < SCHEMA_VERSION


def validate_pattern_type(pattern_type: str) -> None:
    """
    Validate that a pattern type is one the schema accepts.

    Raises:
        ValueError: If pattern type is invalid
    """
    if pattern_type not in PATTERN_TYPES:
        raise ValueError(
            f"Invalid pattern type: {pattern_type}. Must be one of: {', '.join(PATTERN_TYPES)}"
        )
