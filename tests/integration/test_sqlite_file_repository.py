"""
Integration tests for SqliteFileMetadataRepository.
"""

import sqlite3
import threading

import pytest

from ephemera.domain.errors import FileIdConflictError, StorageError
from ephemera.domain.file_storage.entities import StoredFile
from ephemera.infrastructure import SqliteFileMetadataRepository


def _file(file_id, uploaded_at=100, expires_at=-1):
    return StoredFile(id=file_id, uploaded_at=uploaded_at, expires_at=expires_at)


class TestSchema:

    def test_creates_database_file(self, tmp_path):
        repo = SqliteFileMetadataRepository.in_directory(str(tmp_path / "new" / "dir"))
        try:
            assert (tmp_path / "new" / "dir" / "files.db").is_file()
        finally:
            repo.close()

    def test_existing_rows_survive_reopen(self, tmp_path):
        repo = SqliteFileMetadataRepository.in_directory(str(tmp_path))
        repo.save(_file("abc"))
        repo.close()

        reopened = SqliteFileMetadataRepository.in_directory(str(tmp_path))
        try:
            assert reopened.get("abc") == _file("abc")
        finally:
            reopened.close()

    def test_table_layout(self, sqlite_repository):
        conn = sqlite3.connect(sqlite_repository.db_path)
        try:
            columns = [row[1] for row in conn.execute("PRAGMA table_info(files)")]
        finally:
            conn.close()

        assert columns == ["id", "uploaded_at", "expires_at"]

    def test_unopenable_path(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        with pytest.raises(StorageError):
            SqliteFileMetadataRepository.in_directory(str(blocker))

    def test_in_memory(self):
        repo = SqliteFileMetadataRepository(":memory:")
        try:
            repo.save(_file("abc"))
            assert repo.count() == 1
        finally:
            repo.close()


class TestCrud:

    def test_save_and_get(self, sqlite_repository):
        sqlite_repository.save(_file("abc", 100, 200))

        assert sqlite_repository.get("abc") == _file("abc", 100, 200)
        assert sqlite_repository.exists("abc")

    def test_get_missing(self, sqlite_repository):
        assert sqlite_repository.get("missing") is None
        assert not sqlite_repository.exists("missing")

    def test_duplicate_id_is_a_conflict(self, sqlite_repository):
        sqlite_repository.save(_file("abc", 100))

        with pytest.raises(FileIdConflictError):
            sqlite_repository.save(_file("abc", 999))

        assert sqlite_repository.get("abc").uploaded_at == 100

    def test_out_of_range_timestamp_is_a_storage_error(self, sqlite_repository):
        with pytest.raises(StorageError):
            sqlite_repository.save(_file("abc", 100, 2**63))

        assert sqlite_repository.count() == 0
        sqlite_repository.save(_file("abc", 100, 200))
        assert sqlite_repository.exists("abc")

    def test_delete_is_idempotent(self, sqlite_repository):
        sqlite_repository.save(_file("abc"))

        sqlite_repository.delete("abc")
        sqlite_repository.delete("abc")

        assert sqlite_repository.count() == 0

    def test_list_all_ordered_by_upload(self, sqlite_repository):
        sqlite_repository.save(_file("late", 300))
        sqlite_repository.save(_file("early", 100))

        assert [f.id for f in sqlite_repository.list_all()] == ["early", "late"]

    def test_health_check(self, sqlite_repository):
        assert sqlite_repository.health_check()


class TestListExpired:

    def test_selects_due_records(self, sqlite_repository):
        sqlite_repository.save(_file("past", 0, 50))
        sqlite_repository.save(_file("now", 0, 100))
        sqlite_repository.save(_file("future", 0, 101))
        sqlite_repository.save(_file("never", 0, -1))

        expired = {f.id for f in sqlite_repository.list_expired(100)}

        assert expired == {"past", "now"}

    def test_never_excluded_at_any_time(self, sqlite_repository):
        sqlite_repository.save(_file("never", 0, -1))

        assert sqlite_repository.list_expired(2**62) == []


class TestConcurrency:

    def test_parallel_saves(self, sqlite_repository):
        errors = []

        def worker(n):
            try:
                for i in range(50):
                    sqlite_repository.save(_file(f"w{n}f{i}", i))
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert sqlite_repository.count() == 200

    def test_only_one_writer_wins_an_id(self, sqlite_repository):
        results = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            try:
                sqlite_repository.save(_file("contested"))
                results.append("saved")
            except FileIdConflictError:
                results.append("conflict")

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count("saved") == 1
        assert results.count("conflict") == 7
