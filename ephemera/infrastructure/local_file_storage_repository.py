"""
Local File Storage Repository Implementation

Concrete implementation of IFileStorageRepository for the local filesystem.
All content lives in one flat directory, one file per file id.
"""

import logging
from pathlib import Path
from typing import BinaryIO, Optional

from ephemera.domain.errors import (
    ContentWriteError,
    FileIdConflictError,
    StorageError,
    StoredFileNotFoundError,
)
from ephemera.domain.file_storage.storage_repository import (
    DEFAULT_CHUNK_SIZE,
    IFileStorageRepository,
)
from ephemera.domain.file_storage.value_objects import validate_file_id

logger = logging.getLogger(__name__)


class LocalFileStorageRepository(IFileStorageRepository):
    """
    Local filesystem implementation of IFileStorageRepository.

    Thread Safety:
        New files are created with exclusive mode, so two writers can never
        share a file. Reads of distinct files are independent.

    Attributes:
        base_path: Directory holding all stored content
    """

    def __init__(self, base_path: str = "/var/lib/ephemera/files"):
        """
        Initialize the local file storage repository.

        Args:
            base_path: Directory for file content
        """
        self.base_path = Path(base_path)
        self._ensure_base_directory()

    def _ensure_base_directory(self) -> None:
        """
        Ensure the base storage directory exists.

        Raises:
            StorageError: If the directory could not be created
        """
        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(
                f"Failed to create storage directory: {self.base_path}", original_error=e
            ) from e

    def _path_for(self, file_id: str) -> Path:
        # Validation happens before the path is built
        return self.base_path / validate_file_id(file_id)

    def is_available(self) -> bool:
        """Check if the storage directory exists and is a directory."""
        return self.base_path.is_dir()

    # IFileStorageRepository interface methods

    def create(self, file_id: str, content: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> int:
        """
        Stream content into a new file under the storage root.

        Implements IFileStorageRepository.create() for the local filesystem.
        The file is opened in exclusive mode before any input is read.

        Args:
            file_id: File identifier
            content: Binary input stream
            chunk_size: Copy buffer size in bytes

        Returns:
            Number of bytes written

        Raises:
            InvalidFileIdError: If the id is not safe
            FileIdConflictError: If the file already exists
            ContentWriteError: If opening or copying failed
        """
        full_path = self._path_for(file_id)
        self._ensure_base_directory()

        try:
            f = open(full_path, "xb")
        except FileExistsError as e:
            raise FileIdConflictError(file_id) from e
        except OSError as e:
            raise ContentWriteError(
                f"Could not create file {file_id}: {e}", written=False, original_error=e
            ) from e

        written = 0
        try:
            with f:
                while True:
                    chunk = content.read(chunk_size)
                    if not chunk:
                        break
                    f.write(chunk)
                    written += len(chunk)
        except Exception as e:
            # The file exists on disk from here on, even if empty
            raise ContentWriteError(
                f"Failed to write file {file_id} after {written} bytes: {e}",
                written=True,
                original_error=e,
            ) from e

        return written

    def get(self, file_id: str) -> BinaryIO:
        """
        Open stored content for reading.

        Implements IFileStorageRepository.get() for the local filesystem.
        Returns an open file handle so the content can be streamed.

        Raises:
            InvalidFileIdError: If the id is not safe
            StoredFileNotFoundError: If the file does not exist
            StorageError: If the file could not be opened
        """
        full_path = self._path_for(file_id)

        try:
            return open(full_path, "rb")
        except (FileNotFoundError, IsADirectoryError) as e:
            raise StoredFileNotFoundError(file_id) from e
        except OSError as e:
            raise StorageError(f"Failed to open file {file_id}: {e}", original_error=e) from e

    def delete(self, file_id: str) -> None:
        """
        Delete a file from storage.

        Implements IFileStorageRepository.delete() for the local filesystem.

        Raises:
            InvalidFileIdError: If the id is not safe
            StoredFileNotFoundError: If the file does not exist
            StorageError: If the file could not be deleted
        """
        full_path = self._path_for(file_id)

        try:
            full_path.unlink()
        except FileNotFoundError as e:
            raise StoredFileNotFoundError(file_id) from e
        except OSError as e:
            raise StorageError(f"Failed to delete file {file_id}: {e}", original_error=e) from e

    def exists(self, file_id: str) -> bool:
        """
        Check if a file exists.

        Implements IFileStorageRepository.exists() for the local filesystem.

        Raises:
            InvalidFileIdError: If the id is not safe
            StorageError: If the file could not be inspected
        """
        full_path = self._path_for(file_id)

        try:
            return full_path.is_file()
        except OSError as e:
            raise StorageError(f"Could not check file {file_id}: {e}", original_error=e) from e

    def get_size(self, file_id: str) -> Optional[int]:
        """
        Get the size of a file in bytes.

        Returns:
            File size in bytes, None if the file does not exist
        """
        full_path = self._path_for(file_id)

        try:
            return full_path.stat().st_size
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning(f"Could not stat file {file_id}: {e}")
            return None
