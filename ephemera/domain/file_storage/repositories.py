"""
File Metadata Repositories

Repository interface for file lifecycle metadata persistence.
Concrete implementations are in the infrastructure layer.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from .entities import StoredFile


class FileMetadataRepository(ABC):
    """
    Abstract repository interface for file metadata persistence.

    Implementations own their connection and serialize writes internally.
    No operation spans more than one call; callers that need atomicity
    across calls apply their own compensation.
    """

    @abstractmethod
    def save(self, file: StoredFile) -> None:
        """
        Insert a new metadata record.

        Args:
            file: StoredFile to insert

        Raises:
            FileIdConflictError: If a record with the same id already exists
            StorageError: If the record could not be written
        """
        pass  # pragma: no cover

    @abstractmethod
    def get(self, file_id: str) -> Optional[StoredFile]:
        """
        Retrieve a record by file id.

        Args:
            file_id: File identifier

        Returns:
            StoredFile if found, None otherwise
        """
        pass  # pragma: no cover

    @abstractmethod
    def exists(self, file_id: str) -> bool:
        """
        Check if a record exists for the file id.

        Args:
            file_id: File identifier

        Returns:
            True if exists, False otherwise
        """
        pass  # pragma: no cover

    @abstractmethod
    def list_all(self) -> List[StoredFile]:
        """
        List every stored record.

        Returns:
            All StoredFile records
        """
        pass  # pragma: no cover

    @abstractmethod
    def list_expired(self, now: int) -> List[StoredFile]:
        """
        List records whose expiry lies in (0, now].

        Records with the never-expire sentinel are never returned.

        Args:
            now: Reference time in Unix seconds

        Returns:
            Expired StoredFile records
        """
        pass  # pragma: no cover

    @abstractmethod
    def delete(self, file_id: str) -> None:
        """
        Delete a record. Deleting a missing id is not an error.

        Args:
            file_id: File identifier
        """
        pass  # pragma: no cover

    @abstractmethod
    def count(self) -> int:
        """
        Count stored records.

        Returns:
            Number of records
        """
        pass  # pragma: no cover
