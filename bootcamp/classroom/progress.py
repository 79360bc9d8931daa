"""
Progress stores - Persist lesson completion per (instructor, level).

Stores user progress separately from catalog content:
- Lesson completion status
- Quiz scores
- Completion timestamps

Aggregates (stats, bootcamp completion) are computed against the catalog,
so records for lessons that no longer exist are ignored.
"""

import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional, Protocol

from bootcamp.schemas import LessonProgress, LevelProgress, ProgressStats, compute_stats

from .catalog import CatalogProvider


logger = logging.getLogger(__name__)

DEFAULT_PROGRESS_DIR = Path.home() / ".bootcamp"
DEFAULT_PROGRESS_DB = DEFAULT_PROGRESS_DIR / "progress.db"


class ProgressStore(Protocol):
    """Persistence contract used by the ProgressController."""

    def save(self, instructor: str, level: str, lesson_id: str,
             completed: bool, score: Optional[float]) -> None:
        ...

    def load(self, instructor: str, level: str) -> Optional[LevelProgress]:
        ...

    def get_stats(self, instructor: str) -> ProgressStats:
        ...

    def is_completed(self, instructor: str) -> bool:
        ...


def aggregate_stats(
    catalog: CatalogProvider,
    instructor: str,
    completed_by_level: dict[str, set[str]],
) -> ProgressStats:
    """
    Compute stats across every level of an instructor.

    Args:
        catalog: Catalog defining which lessons exist
        instructor: Instructor ID
        completed_by_level: Completed lesson IDs keyed by level ID

    Returns:
        ProgressStats over all lessons of the instructor
    """
    total = 0
    completed = 0
    for level in catalog.get_levels(instructor):
        done = completed_by_level.get(level.id, set())
        total += len(level.lessons)
        completed += sum(1 for lesson in level.lessons if lesson.id in done)
    return compute_stats(completed, total)


class SqliteProgressStore:
    """
    Track student progress in SQLite database.

    Progress is stored separately from content (catalog.yaml) so that:
    - Content can be updated without losing progress
    - Progress is user-specific, content is shared
    """

    def __init__(self, catalog: CatalogProvider, db_path: Optional[Path] = None):
        """
        Initialize progress store.

        Args:
            catalog: Catalog used to compute aggregate statistics
            db_path: Path to progress.db (default: ~/.bootcamp/progress.db)
        """
        self.catalog = catalog
        self.db_path = Path(db_path) if db_path else DEFAULT_PROGRESS_DB
        self._ensure_database()

    def _ensure_database(self):
        """Create database and tables if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS lesson_progress (
                    instructor TEXT NOT NULL,
                    level TEXT NOT NULL,
                    lesson_id TEXT NOT NULL,
                    completed INTEGER NOT NULL DEFAULT 0,
                    quiz_score REAL,
                    timestamp TEXT,
                    position INTEGER NOT NULL,
                    PRIMARY KEY (instructor, level, lesson_id)
                );

                CREATE INDEX IF NOT EXISTS idx_lesson_progress_instructor
                ON lesson_progress(instructor);
            """)
            conn.commit()
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    # -------------------------------------------------------------------------
    # Lesson Progress
    # -------------------------------------------------------------------------

    def save(self, instructor: str, level: str, lesson_id: str,
             completed: bool, score: Optional[float]) -> None:
        """Upsert the record for a lesson. Existing records keep their position."""
        conn = self._get_connection()
        try:
            now = datetime.now().isoformat()
            conn.execute(
                """INSERT INTO lesson_progress
                     (instructor, level, lesson_id, completed, quiz_score, timestamp, position)
                   VALUES (?, ?, ?, ?, ?, ?,
                     (SELECT COALESCE(MAX(position), -1) + 1 FROM lesson_progress
                      WHERE instructor = ? AND level = ?))
                   ON CONFLICT(instructor, level, lesson_id) DO UPDATE SET
                     completed = excluded.completed,
                     quiz_score = excluded.quiz_score,
                     timestamp = excluded.timestamp""",
                (instructor, level, lesson_id, int(completed), score, now,
                 instructor, level)
            )
            conn.commit()
        finally:
            conn.close()
        logger.info(f"Saved progress {instructor}/{level}/{lesson_id} (score={score})")

    def load(self, instructor: str, level: str) -> Optional[LevelProgress]:
        """Get saved progress for a level, or None if nothing was saved."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT lesson_id, completed, quiz_score, timestamp
                   FROM lesson_progress
                   WHERE instructor = ? AND level = ?
                   ORDER BY position""",
                (instructor, level)
            )
            rows = cursor.fetchall()
            if not rows:
                return None

            return LevelProgress(
                instructor=instructor,
                level=level,
                lessons=[
                    LessonProgress(
                        lesson_id=row["lesson_id"],
                        completed=bool(row["completed"]),
                        quiz_score=row["quiz_score"],
                        timestamp=datetime.fromisoformat(row["timestamp"]) if row["timestamp"] else None,
                    )
                    for row in rows
                ],
            )
        finally:
            conn.close()

    def get_completed_lesson_ids(self, instructor: str) -> dict[str, set[str]]:
        """Get completed lesson IDs keyed by level."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT level, lesson_id FROM lesson_progress
                   WHERE instructor = ? AND completed = 1""",
                (instructor,)
            )
            result: dict[str, set[str]] = {}
            for row in cursor.fetchall():
                result.setdefault(row["level"], set()).add(row["lesson_id"])
            return result
        finally:
            conn.close()

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    def get_stats(self, instructor: str) -> ProgressStats:
        """Get completion statistics across all levels of an instructor."""
        return aggregate_stats(
            self.catalog, instructor, self.get_completed_lesson_ids(instructor)
        )

    def is_completed(self, instructor: str) -> bool:
        """True iff the instructor has lessons and every one is completed."""
        stats = self.get_stats(instructor)
        return stats.total > 0 and stats.completed == stats.total

    # -------------------------------------------------------------------------
    # Reset
    # -------------------------------------------------------------------------

    def reset_level(self, instructor: str, level: str):
        """Reset all progress for one level."""
        conn = self._get_connection()
        try:
            conn.execute(
                "DELETE FROM lesson_progress WHERE instructor = ? AND level = ?",
                (instructor, level)
            )
            conn.commit()
        finally:
            conn.close()

    def reset_all(self, instructor: str):
        """Reset all progress for an instructor."""
        conn = self._get_connection()
        try:
            conn.execute(
                "DELETE FROM lesson_progress WHERE instructor = ?",
                (instructor,)
            )
            conn.commit()
        finally:
            conn.close()


class InMemoryProgressStore:
    """Progress store kept in a dict. Used by tests and throwaway sessions."""

    def __init__(self, catalog: CatalogProvider):
        self.catalog = catalog
        self._levels: dict[tuple[str, str], list[LessonProgress]] = {}

    def save(self, instructor: str, level: str, lesson_id: str,
             completed: bool, score: Optional[float]) -> None:
        records = self._levels.setdefault((instructor, level), [])
        now = datetime.now()
        for i, record in enumerate(records):
            if record.lesson_id == lesson_id:
                records[i] = record.model_copy(
                    update={"completed": completed, "quiz_score": score, "timestamp": now}
                )
                return
        records.append(LessonProgress(
            lesson_id=lesson_id, completed=completed, quiz_score=score, timestamp=now,
        ))

    def load(self, instructor: str, level: str) -> Optional[LevelProgress]:
        records = self._levels.get((instructor, level))
        if not records:
            return None
        return LevelProgress(
            instructor=instructor,
            level=level,
            lessons=[record.model_copy() for record in records],
        )

    def get_stats(self, instructor: str) -> ProgressStats:
        completed_by_level = {
            level: {r.lesson_id for r in records if r.completed}
            for (owner, level), records in self._levels.items()
            if owner == instructor
        }
        return aggregate_stats(self.catalog, instructor, completed_by_level)

    def is_completed(self, instructor: str) -> bool:
        stats = self.get_stats(instructor)
        return stats.total > 0 and stats.completed == stats.total

    def reset_level(self, instructor: str, level: str):
        self._levels.pop((instructor, level), None)

    def reset_all(self, instructor: str):
        for key in [k for k in self._levels if k[0] == instructor]:
            del self._levels[key]
