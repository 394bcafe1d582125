"""
ProgressTracker - Track completed and bookmarked modules in ~/.curriculumkit/progress.db.

Stores learner progress separately from the curriculum artifact:
- Completed module ids
- Bookmarked module ids

Storage goes through a small repository interface so the corrupt-state
policy lives in one place and the tracker can be tested with a fake.
"""

import json
import logging
import sqlite3
from pathlib import Path
from typing import Optional, Protocol

from curriculumkit.schemas import ProgressRecord


logger = logging.getLogger(__name__)

DEFAULT_PROGRESS_DIR = Path.home() / ".curriculumkit"
DEFAULT_PROGRESS_DB = DEFAULT_PROGRESS_DIR / "progress.db"

COMPLETED_KEY = "completedModules"
BOOKMARKS_KEY = "bookmarks"


class StorageError(Exception):
    """Raised when progress cannot be persisted."""
    pass


class ProgressRepository(Protocol):
    def load(self) -> ProgressRecord:
        """Return the stored record, or an empty one if none is usable."""
        ...

    def save(self, record: ProgressRecord) -> None:
        """Persist the whole record; raise StorageError on failure."""
        ...


# -----------------------------------------------------------------------------
# SQLite key-value repository
# -----------------------------------------------------------------------------


def _decode_ids(key: str, raw: Optional[str]) -> frozenset[str]:
    """Decode one stored JSON array; corrupt values decode to an empty set."""
    if raw is None:
        return frozenset()
    if not isinstance(raw, str):
        logger.warning(f"Stored progress '{key}' is not text; starting empty")
        return frozenset()
    try:
        value = json.loads(raw)
    except (ValueError, RecursionError):
        logger.warning(f"Stored progress '{key}' is not valid JSON; starting empty")
        return frozenset()
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        logger.warning(f"Stored progress '{key}' is not a list of ids; starting empty")
        return frozenset()
    return frozenset(value)


class SqliteProgressRepository:
    """
    Persist progress as two JSON string arrays in a SQLite key-value table.

    Both keys are written in one transaction, so an interrupted save leaves
    the previous state intact. A file that is not a readable database loads
    as empty and is moved aside on the next save.
    """

    def __init__(self, db_path: Optional[Path] = None):
        """
        Initialize repository.

        Args:
            db_path: Path to progress.db (default: ~/.curriculumkit/progress.db)
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_PROGRESS_DB

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_table(self, conn: sqlite3.Connection):
        conn.execute("""
            CREATE TABLE IF NOT EXISTS progress_state (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
        """)

    def load(self) -> ProgressRecord:
        if not self.db_path.exists():
            return ProgressRecord()

        try:
            conn = self._get_connection()
            try:
                cursor = conn.execute(
                    "SELECT key, value FROM progress_state WHERE key IN (?, ?)",
                    (COMPLETED_KEY, BOOKMARKS_KEY)
                )
                stored = {row["key"]: row["value"] for row in cursor.fetchall()}
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.warning(f"Cannot read progress database {self.db_path}: {e}; starting empty")
            return ProgressRecord()

        return ProgressRecord(
            completed_module_ids=_decode_ids(COMPLETED_KEY, stored.get(COMPLETED_KEY)),
            bookmarked_module_ids=_decode_ids(BOOKMARKS_KEY, stored.get(BOOKMARKS_KEY)),
        )

    def _write(self, record: ProgressRecord):
        conn = self._get_connection()
        try:
            with conn:
                self._ensure_table(conn)
                conn.executemany(
                    """INSERT INTO progress_state (key, value) VALUES (?, ?)
                       ON CONFLICT(key) DO UPDATE SET value = excluded.value""",
                    [
                        (COMPLETED_KEY, json.dumps(sorted(record.completed_module_ids))),
                        (BOOKMARKS_KEY, json.dumps(sorted(record.bookmarked_module_ids))),
                    ]
                )
        finally:
            conn.close()

    def _set_aside_corrupt_file(self):
        """Rename an unreadable database to <name>.corrupt so a fresh one can be created."""
        backup_path = self.db_path.with_name(f"{self.db_path.name}.corrupt")
        self.db_path.replace(backup_path)
        logger.warning(f"Progress database {self.db_path} was corrupt; moved to {backup_path}")

    def save(self, record: ProgressRecord) -> None:
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            try:
                self._write(record)
            except sqlite3.OperationalError:
                raise
            except sqlite3.DatabaseError:
                # not a database at all: start over with the full record
                self._set_aside_corrupt_file()
                self._write(record)
        except (OSError, sqlite3.Error) as e:
            raise StorageError(f"Cannot save progress to {self.db_path}: {e}") from e


# -----------------------------------------------------------------------------
# Tracker
# -----------------------------------------------------------------------------


class ProgressTracker:
    """
    Cached, write-through view of the learner's progress.

    The record is hydrated once from the repository. Every mutation is saved
    before the cache changes; if saving fails the cache keeps the previous
    record and the failure is logged, never raised.
    """

    def __init__(self, repository: Optional[ProgressRepository] = None):
        """
        Initialize progress tracker.

        Args:
            repository: Storage backend (default: SQLite at ~/.curriculumkit/progress.db)
        """
        self.repository = repository or SqliteProgressRepository()
        self._record = self.repository.load()

    @property
    def record(self) -> ProgressRecord:
        return self._record

    @property
    def completed_module_ids(self) -> frozenset[str]:
        return self._record.completed_module_ids

    @property
    def bookmarked_module_ids(self) -> frozenset[str]:
        return self._record.bookmarked_module_ids

    def _commit(self, record: ProgressRecord) -> bool:
        """Persist then adopt a new record. Returns False if saving failed."""
        try:
            self.repository.save(record)
        except StorageError as e:
            logger.error(f"Progress not saved: {e}")
            return False
        self._record = record
        return True

    # -------------------------------------------------------------------------
    # Completion
    # -------------------------------------------------------------------------

    def is_completed(self, module_id: str) -> bool:
        return module_id in self._record.completed_module_ids

    def toggle_completed(self, module_id: str) -> bool:
        """
        Flip completion for a module.

        Returns:
            Whether the module is completed afterwards (unchanged if the
            save failed)
        """
        self._commit(self._record.with_completed_toggled(module_id))
        return self.is_completed(module_id)

    def mark_completed(self, module_id: str) -> bool:
        if not self.is_completed(module_id):
            self._commit(self._record.with_completed(module_id, True))
        return self.is_completed(module_id)

    def mark_incomplete(self, module_id: str) -> bool:
        if self.is_completed(module_id):
            self._commit(self._record.with_completed(module_id, False))
        return self.is_completed(module_id)

    # -------------------------------------------------------------------------
    # Bookmarks
    # -------------------------------------------------------------------------

    def is_bookmarked(self, module_id: str) -> bool:
        return module_id in self._record.bookmarked_module_ids

    def toggle_bookmark(self, module_id: str) -> bool:
        """Flip the bookmark for a module; returns whether it is bookmarked afterwards."""
        self._commit(self._record.with_bookmark_toggled(module_id))
        return self.is_bookmarked(module_id)

    # -------------------------------------------------------------------------
    # Reset
    # -------------------------------------------------------------------------

    def reset(self) -> bool:
        """Clear completed modules and bookmarks. Returns False if saving failed."""
        return self._commit(ProgressRecord())
