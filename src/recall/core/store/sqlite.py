"""
SQLite implementation of the command store.

Commands are deduplicated per project in the ``commands`` table
(repeats increment ``usage_count``) while every execution is appended
to ``command_history`` so that history-order queries see one event per
run. Both writes happen in a single transaction.
"""

from __future__ import annotations

import json
import logging
import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

from recall.core.store.base import StoreError, SuggestionNotFoundError
from recall.core.store.connection import get_connection, init_db
from recall.core.store.models import (
    CommandEvent,
    PatternKind,
    StoredPattern,
    StoredSuggestion,
    StoreStats,
)
from recall.core.store.schema import validate_pattern_type

logger = logging.getLogger(__name__)

# Maximum number of connections open at once per store instance
MAX_CONNECTIONS = 5


def _utc(ts: datetime | None = None) -> datetime:
    if ts is None:
        return datetime.now(timezone.utc)
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def _format_ts(ts: datetime) -> str:
    # Fixed-width ISO text so ORDER BY on the column is chronological
    return _utc(ts).isoformat(timespec="microseconds")


def _row_to_pattern(row: dict[str, Any]) -> StoredPattern:
    return StoredPattern(
        id=row["id"],
        kind=PatternKind(row["pattern_type"]),
        commands=row["commands"],
        project_path=row["project_path"],
        confidence=row["confidence_score"],
        occurrences=row["occurrences"],
        last_seen=row["last_seen"],
        metadata=row["metadata"],
    )


class SQLiteCommandStore:
    """
    Command store backed by a SQLite database file.

    Each operation opens its own short-lived connection; at most
    ``max_connections`` are open at the same time. Every ``sqlite3.Error``
    is re-raised as :class:`StoreError`.

    Example:
        >>> store = SQLiteCommandStore(tmp_path / "commands.db")
        >>> store.record_command("/work/app", "git status")
        1
        >>> [e.command for e in store.recent_events("/work/app", 10)]
        ['git status']
    """

    def __init__(self, db_path: Path | str, max_connections: int = MAX_CONNECTIONS):
        """
        Initialize the store, creating the database if needed.

        Args:
            db_path: Path to the SQLite database file
            max_connections: Upper bound on concurrently open connections

        Raises:
            StoreError: If the database cannot be created
        """
        self.db_path = Path(db_path)
        self._slots = threading.BoundedSemaphore(max_connections)

        try:
            init_db(self.db_path).close()
        except (sqlite3.Error, OSError) as e:
            raise StoreError(f"Cannot open command store at {self.db_path}: {e}") from e

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        with self._slots:
            try:
                with get_connection(self.db_path) as conn:
                    yield conn
            except sqlite3.Error as e:
                raise StoreError(f"Command store operation failed: {e}") from e

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def record_command(
        self,
        project_path: str,
        command: str,
        *,
        exit_code: int | None = None,
        execution_time_ms: int | None = None,
        tags: list[str] | None = None,
        timestamp: datetime | None = None,
    ) -> int:
        """
        Record one execution of a command.

        Inserts the command or increments its usage count, and appends an
        entry to the execution history, atomically.

        Args:
            project_path: Project the command ran in
            command: Command text (already sanitized)
            exit_code: Exit status if known
            execution_time_ms: Duration if known
            tags: Optional tags; existing tags are kept when None
            timestamp: When it ran (defaults to now, UTC)

        Returns:
            The command row id

        Raises:
            StoreError: If the command is blank
        """
        if not command.strip():
            raise StoreError("Cannot record a blank command")

        executed_at = _format_ts(_utc(timestamp))
        tags_json = json.dumps(tags) if tags is not None else None

        with self._connection() as conn:
            row = conn.execute(
                """
                INSERT INTO commands
                    (project_path, command, timestamp, execution_time_ms, exit_code, tags)
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(project_path, command) DO UPDATE SET
                    usage_count = usage_count + 1,
                    timestamp = excluded.timestamp,
                    execution_time_ms = excluded.execution_time_ms,
                    exit_code = excluded.exit_code,
                    tags = COALESCE(excluded.tags, tags)
                RETURNING id
                """,
                (project_path, command, executed_at, execution_time_ms, exit_code, tags_json),
            ).fetchall()[0]
            command_id = int(row["id"])

            conn.execute(
                """
                INSERT INTO command_history (command_id, executed_at, exit_code)
                VALUES (?, ?, ?)
                """,
                (command_id, executed_at, exit_code),
            )
            conn.commit()

        return command_id

    def get_command(self, command_id: int) -> CommandEvent | None:
        """Look up a command by id, or None if it doesn't exist."""
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM commands WHERE id = ?", (command_id,)).fetchone()
        return CommandEvent(**row) if row else None

    def recent_events(self, project_path: str | None, limit: int) -> list[CommandEvent]:
        """Return up to ``limit`` executions, most recent first."""
        query = """
            SELECT c.id, c.project_path, c.command, h.executed_at AS timestamp,
                   c.usage_count, h.exit_code, c.execution_time_ms, c.tags
            FROM command_history h
            JOIN commands c ON c.id = h.command_id
        """
        params: tuple[Any, ...]
        if project_path is not None:
            query += " WHERE c.project_path = ?"
            params = (project_path, limit)
        else:
            params = (limit,)
        query += " ORDER BY h.executed_at DESC, h.id DESC LIMIT ?"

        with self._connection() as conn:
            rows = conn.execute(query, params).fetchall()
        return [CommandEvent(**row) for row in rows]

    def most_used_events(self, project_path: str | None, limit: int) -> list[CommandEvent]:
        """Return up to ``limit`` distinct commands, highest usage first."""
        if project_path is not None:
            query = """
                SELECT * FROM commands WHERE project_path = ?
                ORDER BY usage_count DESC, timestamp DESC, id ASC LIMIT ?
            """
            params: tuple[Any, ...] = (project_path, limit)
        else:
            query = """
                SELECT * FROM commands
                ORDER BY usage_count DESC, timestamp DESC, id ASC LIMIT ?
            """
            params = (limit,)

        with self._connection() as conn:
            rows = conn.execute(query, params).fetchall()
        return [CommandEvent(**row) for row in rows]

    def prune_history(
        self,
        *,
        older_than_days: int | None = None,
        max_events: int | None = None,
        now: datetime | None = None,
    ) -> int:
        """
        Drop old history.

        Commands not used within ``older_than_days`` are deleted together
        with their history, older history entries of surviving commands are
        dropped, and the history is then trimmed to the newest
        ``max_events`` entries.

        Returns:
            Number of history entries removed
        """
        with self._connection() as conn:
            before = conn.execute("SELECT COUNT(*) AS n FROM command_history").fetchone()["n"]

            if older_than_days is not None:
                cutoff = _format_ts(_utc(now) - timedelta(days=older_than_days))
                conn.execute("DELETE FROM commands WHERE timestamp < ?", (cutoff,))
                conn.execute("DELETE FROM command_history WHERE executed_at < ?", (cutoff,))

            if max_events is not None:
                conn.execute(
                    """
                    DELETE FROM command_history WHERE id NOT IN (
                        SELECT id FROM command_history
                        ORDER BY executed_at DESC, id DESC LIMIT ?
                    )
                    """,
                    (max_events,),
                )

            conn.commit()
            after = conn.execute("SELECT COUNT(*) AS n FROM command_history").fetchone()["n"]

        removed = int(before) - int(after)
        if removed:
            logger.debug("Pruned %d history entries", removed)
        return removed

    # ------------------------------------------------------------------
    # Patterns
    # ------------------------------------------------------------------

    def store_pattern(
        self,
        kind: PatternKind,
        commands: list[str],
        project_path: str | None,
        confidence: float,
        metadata: dict[str, Any],
        occurrences: int = 1,
    ) -> int:
        """
        Persist a detected pattern and return its id.

        Raises:
            StoreError: If ``kind`` is not a known pattern type
        """
        pattern_type = kind.value if isinstance(kind, PatternKind) else str(kind)
        try:
            validate_pattern_type(pattern_type)
        except ValueError as e:
            raise StoreError(f"Cannot store pattern: {e}") from e

        with self._connection() as conn:
            cursor = conn.execute(
                """
                INSERT INTO command_patterns
                    (pattern_type, commands, project_path, confidence_score,
                     occurrences, last_seen, metadata)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    pattern_type,
                    json.dumps(commands),
                    project_path,
                    confidence,
                    occurrences,
                    _format_ts(_utc()),
                    json.dumps(metadata),
                ),
            )
            conn.commit()
            return int(cursor.lastrowid or 0)

    def get_patterns(self, project_path: str | None = None) -> list[StoredPattern]:
        """
        Get stored patterns, highest confidence first.

        With a project path, patterns stored without a scope are included.
        """
        if project_path is not None:
            query = """
                SELECT * FROM command_patterns
                WHERE project_path = ? OR project_path IS NULL
                ORDER BY confidence_score DESC
            """
            params: tuple[Any, ...] = (project_path,)
        else:
            query = "SELECT * FROM command_patterns ORDER BY confidence_score DESC"
            params = ()

        with self._connection() as conn:
            rows = conn.execute(query, params).fetchall()
        return [_row_to_pattern(row) for row in rows]

    # ------------------------------------------------------------------
    # Suggestions
    # ------------------------------------------------------------------

    def store_suggestion(
        self,
        project_path: str,
        context: str | None,
        command: str,
        reason: str | None,
        confidence: float,
    ) -> int:
        """Persist a generated suggestion and return its id."""
        with self._connection() as conn:
            cursor = conn.execute(
                """
                INSERT INTO suggestions
                    (project_path, context, suggested_command, reason, confidence, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (project_path, context, command, reason, confidence, _format_ts(_utc())),
            )
            conn.commit()
            return int(cursor.lastrowid or 0)

    def get_suggestion(self, suggestion_id: int) -> StoredSuggestion | None:
        """Look up a stored suggestion by id."""
        with self._connection() as conn:
            row = conn.execute(
                "SELECT * FROM suggestions WHERE id = ?", (suggestion_id,)
            ).fetchone()
        return StoredSuggestion(**row) if row else None

    def get_suggestions(
        self, project_path: str, context: str | None = None
    ) -> list[StoredSuggestion]:
        """Get stored suggestions for a project, highest confidence first."""
        if context is not None:
            query = """
                SELECT * FROM suggestions WHERE project_path = ? AND context = ?
                ORDER BY confidence DESC, id ASC
            """
            params: tuple[Any, ...] = (project_path, context)
        else:
            query = """
                SELECT * FROM suggestions WHERE project_path = ?
                ORDER BY confidence DESC, id ASC
            """
            params = (project_path,)

        with self._connection() as conn:
            rows = conn.execute(query, params).fetchall()
        return [StoredSuggestion(**row) for row in rows]

    def record_feedback(self, suggestion_id: int, accepted: bool) -> None:
        """
        Record that a suggestion was accepted or rejected.

        Raises:
            SuggestionNotFoundError: If no suggestion has this id
        """
        column = "times_accepted" if accepted else "times_rejected"
        with self._connection() as conn:
            cursor = conn.execute(
                f"UPDATE suggestions SET {column} = {column} + 1, last_suggested = ? "
                "WHERE id = ?",
                (_format_ts(_utc()), suggestion_id),
            )
            if cursor.rowcount == 0:
                raise SuggestionNotFoundError(f"Suggestion not found: {suggestion_id}")
            conn.commit()

    # ------------------------------------------------------------------
    # Stats
    # ------------------------------------------------------------------

    def stats(self) -> StoreStats:
        """Count rows in the main tables."""
        with self._connection() as conn:
            row = conn.execute(
                """
                SELECT
                    (SELECT COUNT(*) FROM commands) AS total_commands,
                    (SELECT COUNT(*) FROM command_history) AS total_executions,
                    (SELECT COUNT(*) FROM command_patterns) AS total_patterns,
                    (SELECT COUNT(*) FROM suggestions) AS total_suggestions
                """
            ).fetchone()
        return StoreStats(**row)
