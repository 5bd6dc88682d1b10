"""
Storage Factory

Builds the content and metadata repositories from application config.
"""

import logging

from ephemera.domain.file_storage.repositories import FileMetadataRepository
from ephemera.domain.file_storage.storage_repository import IFileStorageRepository
from ephemera.domain.errors import StorageError

from .local_file_storage_repository import LocalFileStorageRepository
from .sqlite_file_repository import SqliteFileMetadataRepository

logger = logging.getLogger(__name__)


class StorageFactory:
    """Factory for the production storage adapters."""

    @staticmethod
    def create_storage(storage_path: str) -> IFileStorageRepository:
        """
        Create local filesystem content storage.

        Args:
            storage_path: Content root directory

        Raises:
            RuntimeError: If the storage directory cannot be initialized
        """
        try:
            storage = LocalFileStorageRepository(storage_path)
        except StorageError as e:
            raise RuntimeError(f"Failed to initialize local storage: {e}") from e

        logger.info(f"Storage factory: Using local filesystem storage at {storage_path}")
        return storage

    @staticmethod
    def create_metadata_repository(meta_db_path: str) -> FileMetadataRepository:
        """
        Create the SQLite metadata repository.

        Args:
            meta_db_path: Directory holding the metadata database

        Raises:
            RuntimeError: If the database cannot be opened
        """
        try:
            repository = SqliteFileMetadataRepository.in_directory(meta_db_path)
        except StorageError as e:
            raise RuntimeError(f"Could not connect to file meta db: {e}") from e

        logger.info(f"Storage factory: Using file meta db at {repository.db_path}")
        return repository
