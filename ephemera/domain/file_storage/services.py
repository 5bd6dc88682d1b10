"""
File Storage Services

Domain service that coordinates id generation, content storage and
lifecycle metadata for uploaded files.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import BinaryIO, Callable, List, Optional

from ephemera.domain.errors import (
    ContentWriteError,
    FileIdConflictError,
    IdExhaustedError,
    InvalidTtlError,
    StorageError,
    StorageWriteFailedError,
    StoredFileNotFoundError,
)

from .entities import StoredFile
from .id_generator import generate_file_id
from .metrics import IFileMetrics
from .repositories import FileMetadataRepository
from .storage_repository import IFileStorageRepository
from .value_objects import EXPIRE_NEVER, MAX_TIMESTAMP, validate_file_id

logger = logging.getLogger(__name__)

DEFAULT_FILE_ID_LENGTH = 8
DEFAULT_MAX_ID_ATTEMPTS = 5


@dataclass
class CleanupReport:
    """Aggregate result of one expiration sweep."""
    deleted: int = 0
    failed: int = 0
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "deleted": self.deleted,
            "failed": self.failed,
            "errors": list(self.errors),
        }


class FileManager:
    """
    Domain service for ephemeral file storage.

    Stores new files (id -> content -> metadata, with rollback on partial
    failure), serves content by id and sweeps expired entries. This is the
    only component that deletes content or metadata.

    Reads through get_file() never consult metadata: a file stays readable
    while its bytes exist, even past its expiry, until the next sweep.
    """

    def __init__(
        self,
        metadata_repository: FileMetadataRepository,
        storage_repository: IFileStorageRepository,
        file_id_length: int = DEFAULT_FILE_ID_LENGTH,
        max_id_attempts: int = DEFAULT_MAX_ID_ATTEMPTS,
        id_generator: Callable[[int], str] = generate_file_id,
        clock: Callable[[], float] = time.time,
        metrics: Optional[IFileMetrics] = None,
    ):
        """
        Initialize FileManager with repositories.

        Args:
            metadata_repository: Repository for lifecycle metadata
            storage_repository: Repository for file content
            file_id_length: Length of generated ids
            max_id_attempts: Collision retry bound
            id_generator: Callable producing an id for a given length
            clock: Callable returning the current time in Unix seconds
            metrics: Optional counters for stored and expired files
        """
        if max_id_attempts < 1:
            raise ValueError("max_id_attempts must be >= 1")

        self.metadata_repo = metadata_repository
        self.storage_repo = storage_repository
        self.file_id_length = file_id_length
        self.max_id_attempts = max_id_attempts
        self._generate_id = id_generator
        self._clock = clock
        self.metrics = metrics

    def _now(self) -> int:
        return int(self._clock())

    def store_file(
        self,
        content: BinaryIO,
        ttl_seconds: int = EXPIRE_NEVER,
        expected_size: Optional[int] = None,
    ) -> StoredFile:
        """
        Store a new file and record its lifecycle metadata.

        Content is always written before the metadata row. If anything fails
        after bytes reached the disk, the content is removed again so no
        orphan is left behind.

        Args:
            content: Binary input stream
            ttl_seconds: Seconds until expiry, or EXPIRE_NEVER
            expected_size: Declared content length; a short copy is a failure

        Returns:
            The stored record

        Raises:
            InvalidTtlError: If ttl is negative and not EXPIRE_NEVER, or the expiry
                would not fit in a 64-bit timestamp
            IdExhaustedError: If no free id was found within the retry bound
            StorageWriteFailedError: If content or metadata could not be written
        """
        if ttl_seconds != EXPIRE_NEVER and ttl_seconds < 0:
            raise InvalidTtlError(ttl_seconds)

        now = self._now()
        if ttl_seconds != EXPIRE_NEVER and ttl_seconds > MAX_TIMESTAMP - now:
            raise InvalidTtlError(ttl_seconds)

        file_id, written = self._create_content(content)

        try:
            stored_file = self._record_metadata(file_id, ttl_seconds, now, written, expected_size)
        except Exception:
            self._discard_content(file_id)
            raise

        if self.metrics is not None:
            self.metrics.inc_files_uploaded()

        expires_in = "never" if stored_file.never_expires else f"{ttl_seconds}s"
        logger.info(f"Stored file {file_id} ({written} bytes, expiresIn: {expires_in})")
        return stored_file

    def _record_metadata(
        self,
        file_id: str,
        ttl_seconds: int,
        now: int,
        written: int,
        expected_size: Optional[int],
    ) -> StoredFile:
        """
        Save the metadata row for content that is already on disk.

        The caller removes the content again if this raises.
        """
        if expected_size is not None and written != expected_size:
            raise StorageWriteFailedError(
                f"Incomplete upload for {file_id}: got {written} of {expected_size} bytes"
            )

        stored_file = StoredFile.create(file_id, ttl_seconds, now=now)

        try:
            self.metadata_repo.save(stored_file)
        except StorageError as e:
            logger.error(f"Could not write metadata for {file_id}, removing content: {e}")
            raise StorageWriteFailedError(
                f"Could not write metadata for {file_id}", original_error=e
            ) from e

        return stored_file

    def _create_content(self, content: BinaryIO) -> tuple[str, int]:
        """
        Mint a free id and stream the content under it.

        Returns:
            Tuple of (accepted file id, bytes written)
        """
        for attempt in range(1, self.max_id_attempts + 1):
            file_id = self._generate_id(self.file_id_length)

            try:
                taken = self.metadata_repo.exists(file_id)
            except StorageError as e:
                raise StorageWriteFailedError(
                    f"Could not check file id {file_id}", original_error=e
                ) from e

            if taken:
                logger.warning(f"Generated file id {file_id} already in use (attempt {attempt})")
                continue

            try:
                written = self.storage_repo.create(file_id, content)
            except FileIdConflictError:
                logger.warning(f"Content for file id {file_id} already exists (attempt {attempt})")
                continue
            except ContentWriteError as e:
                if e.written:
                    self._discard_content(file_id)
                raise StorageWriteFailedError(
                    f"Could not save file {file_id} to storage", original_error=e
                ) from e

            return file_id, written

        logger.error(
            f"Exhausted {self.max_id_attempts} attempts to generate a free file id "
            f"(length {self.file_id_length})"
        )
        raise IdExhaustedError(self.max_id_attempts)

    def _discard_content(self, file_id: str) -> None:
        """Remove partially or orphaned written content."""
        try:
            self.storage_repo.delete(file_id)
        except StoredFileNotFoundError:
            pass
        except StorageError as e:
            logger.error(f"Could not remove content for {file_id}: {e}")

    def cleanup(self, now: Optional[int] = None) -> CleanupReport:
        """
        Delete every file whose expiry lies in (0, now].

        Content is deleted before its metadata row. A failure on one file is
        recorded and the sweep moves on.

        Args:
            now: Reference time in Unix seconds (default: current time)

        Returns:
            CleanupReport with deleted/failed counts

        Raises:
            StorageError: If the expired records could not be queried
        """
        now = self._now() if now is None else now
        report = CleanupReport()

        logger.info("Cleanup expired files")
        expired_files = self.metadata_repo.list_expired(now)
        if not expired_files:
            logger.info("No expired files found.")
            return report

        for file in expired_files:
            if file.never_expires:
                continue

            try:
                self._delete_expired(file)
            except Exception as e:
                report.failed += 1
                report.errors.append(f"{file.id}: {e}")
                logger.error(f"Could not delete expired file {file.id}: {e}", exc_info=True)
                continue

            report.deleted += 1
            if self.metrics is not None:
                self.metrics.inc_files_expired()
            logger.info(f"Deleted file {file.id} (expired at {file.expires_at_datetime()})")

        logger.info(f"Cleanup completed - Deleted: {report.deleted}, Failed: {report.failed}")
        return report

    def _delete_expired(self, file: StoredFile) -> None:
        if self.storage_repo.exists(file.id):
            try:
                self.storage_repo.delete(file.id)
            except StoredFileNotFoundError:
                pass
        self.metadata_repo.delete(file.id)

    def get_file(self, file_id: str) -> BinaryIO:
        """
        Open the content of a file for reading.

        Args:
            file_id: File identifier, possibly client supplied

        Returns:
            Readable binary stream (caller closes it)

        Raises:
            InvalidFileIdError: If the id is not safe
            StoredFileNotFoundError: If no content exists
        """
        validate_file_id(file_id)
        return self.storage_repo.get(file_id)

    def get_file_info(self, file_id: str) -> StoredFile:
        """
        Retrieve the metadata record of a file.

        Raises:
            InvalidFileIdError: If the id is not safe
            StoredFileNotFoundError: If no record exists
        """
        validate_file_id(file_id)
        file = self.metadata_repo.get(file_id)
        if file is None:
            raise StoredFileNotFoundError(file_id)
        return file

    def get_file_size(self, file_id: str) -> Optional[int]:
        validate_file_id(file_id)
        return self.storage_repo.get_size(file_id)

    def list_files(self) -> List[StoredFile]:
        """List the metadata records of all stored files."""
        return self.metadata_repo.list_all()

    def count_files(self) -> int:
        return self.metadata_repo.count()
