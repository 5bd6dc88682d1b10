"""
Integration fixtures: real local storage and SQLite over temporary directories.
"""

import pytest

from ephemera.domain.file_storage import FileManager
from ephemera.infrastructure import LocalFileStorageRepository, SqliteFileMetadataRepository
from tests.fixtures.mock_repositories import FakeClock


@pytest.fixture
def local_storage(tmp_path):
    """Yields a LocalFileStorageRepository rooted in a temporary directory."""
    return LocalFileStorageRepository(str(tmp_path / "files"))


@pytest.fixture
def sqlite_repository(tmp_path):
    """Yields a SqliteFileMetadataRepository in a temporary directory."""
    repository = SqliteFileMetadataRepository.in_directory(str(tmp_path / "meta"))
    yield repository
    repository.close()


@pytest.fixture
def local_file_manager(sqlite_repository, local_storage):
    """FileManager over real storage with a manually advanced clock."""
    clock = FakeClock()
    manager = FileManager(sqlite_repository, local_storage, clock=clock)
    manager.test_clock = clock
    return manager
