"""
SQLite File Metadata Repository Implementation

Concrete SQLite-based implementation of FileMetadataRepository.
Stores one row per file in ``files(id, uploaded_at, expires_at)``.
"""

import logging
import os
import sqlite3
import threading
from typing import List, Optional

from ephemera.domain.errors import FileIdConflictError, StorageError
from ephemera.domain.file_storage.entities import StoredFile
from ephemera.domain.file_storage.repositories import FileMetadataRepository

logger = logging.getLogger(__name__)

DB_FILE_NAME = "files.db"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS files (
    id TEXT NOT NULL PRIMARY KEY,
    uploaded_at INTEGER,
    expires_at INTEGER
)
"""


class SqliteFileMetadataRepository(FileMetadataRepository):
    """
    SQLite implementation of FileMetadataRepository.

    Owns a single connection shared by all callers. Every statement runs
    under one lock, which is the only mutual exclusion the store needs.
    WAL journaling keeps readers in other processes from blocking writes.
    """

    def __init__(self, db_path: str):
        """
        Open (and create if needed) the metadata database.

        Args:
            db_path: Path of the SQLite database file, or ":memory:"

        Raises:
            StorageError: If the database could not be opened or initialized
        """
        self.db_path = db_path
        self._lock = threading.RLock()

        try:
            if db_path != ":memory:":
                os.makedirs(os.path.dirname(os.path.abspath(db_path)), exist_ok=True)
            self._db = sqlite3.connect(db_path, check_same_thread=False)
            self._init()
        except (OSError, sqlite3.Error) as e:
            raise StorageError(
                f"Could not open file meta db at {db_path}: {e}", original_error=e
            ) from e

        logger.debug(f"Opened file meta db at {db_path}")

    @classmethod
    def in_directory(cls, folder_path: str) -> 'SqliteFileMetadataRepository':
        """Open the metadata database inside a directory."""
        return cls(os.path.join(folder_path, DB_FILE_NAME))

    def _init(self) -> None:
        with self._lock:
            if self.db_path != ":memory:":
                self._db.execute("PRAGMA journal_mode=WAL")
            self._db.execute(_SCHEMA)
            self._db.commit()

    @staticmethod
    def _to_entity(row) -> StoredFile:
        return StoredFile(id=row[0], uploaded_at=int(row[1]), expires_at=int(row[2]))

    def _query(self, sql: str, params: tuple = ()) -> list:
        with self._lock:
            try:
                return self._db.execute(sql, params).fetchall()
            except sqlite3.Error as e:
                raise StorageError(f"File meta db query failed: {e}", original_error=e) from e

    def _rollback(self) -> None:
        try:
            self._db.rollback()
        except sqlite3.Error as e:
            logger.warning(f"File meta db rollback failed: {e}")

    def save(self, file: StoredFile) -> None:
        with self._lock:
            try:
                self._db.execute(
                    "INSERT INTO files(id, uploaded_at, expires_at) VALUES(?, ?, ?)",
                    (file.id, file.uploaded_at, file.expires_at),
                )
                self._db.commit()
            except sqlite3.IntegrityError as e:
                self._rollback()
                raise FileIdConflictError(file.id) from e
            except (sqlite3.Error, OverflowError, ValueError) as e:
                # OverflowError: a value outside SQLite INTEGER range
                self._rollback()
                raise StorageError(
                    f"Could not write metadata for {file.id}: {e}", original_error=e
                ) from e

    def get(self, file_id: str) -> Optional[StoredFile]:
        rows = self._query(
            "SELECT id, uploaded_at, expires_at FROM files WHERE id = ?", (file_id,)
        )
        if not rows:
            return None
        return self._to_entity(rows[0])

    def exists(self, file_id: str) -> bool:
        return bool(self._query("SELECT 1 FROM files WHERE id = ?", (file_id,)))

    def list_all(self) -> List[StoredFile]:
        rows = self._query("SELECT id, uploaded_at, expires_at FROM files ORDER BY uploaded_at")
        return [self._to_entity(row) for row in rows]

    def list_expired(self, now: int) -> List[StoredFile]:
        # expires_at > 0 excludes the never-expire sentinel
        rows = self._query(
            "SELECT id, uploaded_at, expires_at FROM files "
            "WHERE expires_at > 0 AND expires_at <= ?",
            (int(now),),
        )
        return [self._to_entity(row) for row in rows]

    def delete(self, file_id: str) -> None:
        with self._lock:
            try:
                self._db.execute("DELETE FROM files WHERE id = ?", (file_id,))
                self._db.commit()
            except sqlite3.Error as e:
                self._rollback()
                raise StorageError(
                    f"Could not delete metadata for {file_id}: {e}", original_error=e
                ) from e

    def count(self) -> int:
        return int(self._query("SELECT COUNT(*) FROM files")[0][0])

    def health_check(self) -> bool:
        try:
            self._query("SELECT 1")
            return True
        except StorageError:
            return False

    def close(self) -> None:
        with self._lock:
            self._db.close()
