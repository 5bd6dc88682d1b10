"""
Integration tests for FileManager over local storage and SQLite.

Walks through the store/read/sweep lifecycle with real files on disk.
"""

import io
import threading

import pytest

from ephemera.domain.errors import InvalidTtlError, StorageWriteFailedError, StoredFileNotFoundError
from ephemera.domain.file_storage import EXPIRE_NEVER, FileManager
from tests.fixtures.mock_repositories import SequenceIdGenerator


class TestLifecycle:

    def test_store_read_and_sweep(self, local_file_manager, local_storage, sqlite_repository):
        # Arrange
        clock = local_file_manager.test_clock

        # Act
        stored = local_file_manager.store_file(io.BytesIO(b"short lived"), 60)

        # Assert: readable, recorded, on disk
        assert local_file_manager.get_file(stored.id).read() == b"short lived"
        assert sqlite_repository.get(stored.id) == stored
        assert (local_storage.base_path / stored.id).is_file()

        clock.advance(59)
        assert local_file_manager.cleanup().deleted == 0

        clock.advance(1)
        report = local_file_manager.cleanup()

        assert report.deleted == 1
        assert not (local_storage.base_path / stored.id).exists()
        assert sqlite_repository.get(stored.id) is None
        with pytest.raises(StoredFileNotFoundError):
            local_file_manager.get_file(stored.id)

    def test_zero_ttl_is_swept_immediately(self, local_file_manager):
        stored = local_file_manager.store_file(io.BytesIO(b"x"), 0)

        assert local_file_manager.cleanup().deleted == 1
        with pytest.raises(StoredFileNotFoundError):
            local_file_manager.get_file_info(stored.id)

    def test_never_expiring_file_survives_sweeps(self, local_file_manager):
        stored = local_file_manager.store_file(io.BytesIO(b"forever"), EXPIRE_NEVER)
        local_file_manager.test_clock.advance(10 * 365 * 24 * 3600)

        local_file_manager.cleanup()

        assert local_file_manager.get_file(stored.id).read() == b"forever"

    def test_orphan_content_blocks_id(self, sqlite_repository, local_storage):
        """Content on disk without a row is never overwritten."""
        local_storage.create("orphan", io.BytesIO(b"old bytes"))
        manager = FileManager(
            sqlite_repository,
            local_storage,
            id_generator=SequenceIdGenerator(["orphan", "fresh"]),
        )

        stored = manager.store_file(io.BytesIO(b"new bytes"))

        assert stored.id == "fresh"
        assert local_storage.get("orphan").read() == b"old bytes"

    def test_metadata_failure_leaves_no_file(self, local_file_manager, local_storage, sqlite_repository):
        sqlite_repository.close()

        with pytest.raises(StorageWriteFailedError):
            local_file_manager.store_file(io.BytesIO(b"data"))

        assert list(local_storage.base_path.iterdir()) == []

    def test_content_missing_at_sweep(self, local_file_manager, local_storage, sqlite_repository):
        stored = local_file_manager.store_file(io.BytesIO(b"x"), 0)
        (local_storage.base_path / stored.id).unlink()

        report = local_file_manager.cleanup()

        assert report.deleted == 1
        assert sqlite_repository.count() == 0

    def test_ttl_past_64_bit_limit_leaves_no_file(self, local_file_manager, local_storage, sqlite_repository):
        with pytest.raises(InvalidTtlError):
            local_file_manager.store_file(io.BytesIO(b"hello"), 2**63)

        assert list(local_storage.base_path.iterdir()) == []
        assert sqlite_repository.count() == 0

    def test_unstorable_timestamp_leaves_no_file(self, local_storage, sqlite_repository):
        """A row SQLite cannot hold is rolled back together with its content."""
        manager = FileManager(sqlite_repository, local_storage, clock=lambda: 2**63)

        with pytest.raises(StorageWriteFailedError):
            manager.store_file(io.BytesIO(b"hello"), EXPIRE_NEVER)

        assert list(local_storage.base_path.iterdir()) == []
        assert sqlite_repository.count() == 0


class TestConcurrentStores:

    def test_parallel_uploads_get_distinct_ids(self, local_file_manager, local_storage, sqlite_repository):
        ids = []
        lock = threading.Lock()

        def worker(n):
            for i in range(20):
                stored = local_file_manager.store_file(io.BytesIO(f"{n}-{i}".encode()), 60)
                with lock:
                    ids.append(stored.id)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(set(ids)) == 100
        assert sqlite_repository.count() == 100
        assert len(list(local_storage.base_path.iterdir())) == 100
