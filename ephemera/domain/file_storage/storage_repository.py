"""
File Storage Repository Interface

Abstract interface for physical file content storage. Keeps the domain
layer independent of where the bytes actually live.
"""

from abc import ABC, abstractmethod
from typing import BinaryIO, Optional

DEFAULT_CHUNK_SIZE = 64 * 1024


class IFileStorageRepository(ABC):
    """
    Content store keyed by file id.

    Contract Guarantees:
    - Every method validates the file id against the safe charset before a
      path is built from it (InvalidFileIdError otherwise)
    - All content lives directly under one root: no sharding, no subdirectories
    - create() streams with bounded memory and never overwrites existing content
    - get() and delete() report a missing id with StoredFileNotFoundError,
      distinct from other I/O failures (StorageError)
    """

    @abstractmethod
    def create(self, file_id: str, content: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> int:
        """
        Stream content into a new file.

        The target is created exclusively before any input is read, so a
        conflict never consumes the input stream.

        Args:
            file_id: File identifier
            content: Binary input stream
            chunk_size: Copy buffer size in bytes

        Returns:
            Number of bytes written

        Raises:
            FileIdConflictError: If content already exists for the id
            ContentWriteError: If the copy failed; ``written`` tells whether
                any bytes were flushed to disk
        """
        pass  # pragma: no cover

    @abstractmethod
    def get(self, file_id: str) -> BinaryIO:
        """
        Open stored content for reading.

        The caller is responsible for closing the returned stream.

        Args:
            file_id: File identifier

        Returns:
            Readable binary stream

        Raises:
            StoredFileNotFoundError: If no content exists for the id
        """
        pass  # pragma: no cover

    @abstractmethod
    def delete(self, file_id: str) -> None:
        """
        Delete stored content.

        Args:
            file_id: File identifier

        Raises:
            StoredFileNotFoundError: If no content exists for the id
            StorageError: On any other failure (e.g. permissions)
        """
        pass  # pragma: no cover

    @abstractmethod
    def exists(self, file_id: str) -> bool:
        """
        Check if content exists for the id.

        Args:
            file_id: File identifier

        Returns:
            True if the file exists, False otherwise
        """
        pass  # pragma: no cover

    @abstractmethod
    def get_size(self, file_id: str) -> Optional[int]:
        """
        Get the stored content size in bytes.

        Returns:
            Size in bytes, None if the content does not exist
        """
        pass  # pragma: no cover
