"""
ProgressStore - Persist module completions in ~/.fluentflow/progress.db.

Stores per-learner completion records separately from module content:
- First completion time
- Best score
- Number of completed attempts

The progression engine only needs the set of completed IDs; the rest is
for display.
"""

import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional

from fluentflow.schemas import LearnerProgress, ModuleCompletion


DEFAULT_PROGRESS_DIR = Path.home() / ".fluentflow"
DEFAULT_PROGRESS_DB = DEFAULT_PROGRESS_DIR / "progress.db"


class ProgressStore:
    """
    Track module completions in a SQLite database.

    Each method opens its own connection, so one store can be shared by
    readers without holding a connection open.
    """

    def __init__(self, db_path: Optional[Path] = None, learner_id: str = "default"):
        """
        Initialize progress store.

        Args:
            db_path: Path to progress.db (default: ~/.fluentflow/progress.db)
            learner_id: Learner identifier for multi-user support
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_PROGRESS_DB
        self.learner_id = learner_id
        self._ensure_database()

    def _ensure_database(self):
        """Create database and tables if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS module_completions (
                    learner_id TEXT NOT NULL,
                    module_id TEXT NOT NULL,
                    completed_at TEXT NOT NULL,
                    best_score REAL,
                    attempts INTEGER NOT NULL DEFAULT 1,
                    PRIMARY KEY (learner_id, module_id)
                );

                CREATE INDEX IF NOT EXISTS idx_module_completions_learner
                ON module_completions(learner_id);
            """)
            conn.commit()
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    @staticmethod
    def _row_to_completion(row: sqlite3.Row) -> ModuleCompletion:
        return ModuleCompletion(
            module_id=row["module_id"],
            completed_at=datetime.fromisoformat(row["completed_at"]),
            best_score=row["best_score"],
            attempts=row["attempts"],
        )

    # -------------------------------------------------------------------------
    # Completions
    # -------------------------------------------------------------------------

    def record_completion(self, module_id: str, score: Optional[float] = None):
        """
        Record a completed attempt of a module.

        The first completion time is kept, the best score wins and the
        attempt counter goes up by one.
        """
        conn = self._get_connection()
        try:
            now = datetime.now().isoformat()
            conn.execute(
                """INSERT INTO module_completions (learner_id, module_id, completed_at, best_score, attempts)
                   VALUES (?, ?, ?, ?, 1)
                   ON CONFLICT(learner_id, module_id) DO UPDATE SET
                     best_score = CASE
                       WHEN best_score IS NULL THEN excluded.best_score
                       WHEN excluded.best_score IS NULL THEN best_score
                       ELSE MAX(best_score, excluded.best_score)
                     END,
                     attempts = attempts + 1""",
                (self.learner_id, module_id, now, score)
            )
            conn.commit()
        finally:
            conn.close()

    def get_completion(self, module_id: str) -> Optional[ModuleCompletion]:
        """Get the completion record for a module, if any."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT module_id, completed_at, best_score, attempts
                   FROM module_completions
                   WHERE learner_id = ? AND module_id = ?""",
                (self.learner_id, module_id)
            )
            row = cursor.fetchone()
            return self._row_to_completion(row) if row else None
        finally:
            conn.close()

    def get_completed_module_ids(self) -> list[str]:
        """Get completed module IDs, oldest completion first."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT module_id FROM module_completions
                   WHERE learner_id = ?
                   ORDER BY completed_at, rowid""",
                (self.learner_id,)
            )
            return [row["module_id"] for row in cursor.fetchall()]
        finally:
            conn.close()

    def get_learner_progress(self) -> LearnerProgress:
        """Get full learner progress object."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT module_id, completed_at, best_score, attempts
                   FROM module_completions
                   WHERE learner_id = ?
                   ORDER BY completed_at, rowid""",
                (self.learner_id,)
            )
            completions = {
                row["module_id"]: self._row_to_completion(row)
                for row in cursor.fetchall()
            }
        finally:
            conn.close()

        return LearnerProgress(learner_id=self.learner_id, completions=completions)

    # -------------------------------------------------------------------------
    # Reset
    # -------------------------------------------------------------------------

    def reset_module(self, module_id: str):
        """Forget the completion of one module."""
        conn = self._get_connection()
        try:
            conn.execute(
                "DELETE FROM module_completions WHERE learner_id = ? AND module_id = ?",
                (self.learner_id, module_id)
            )
            conn.commit()
        finally:
            conn.close()

    def reset_all_progress(self):
        """Reset all progress for the current learner."""
        conn = self._get_connection()
        try:
            conn.execute(
                "DELETE FROM module_completions WHERE learner_id = ?",
                (self.learner_id,)
            )
            conn.commit()
        finally:
            conn.close()
