"""
File Storage Domain

Handles id generation, content storage, lifecycle metadata and expiry sweeps.
"""

from .entities import StoredFile
from .id_generator import generate_file_id
from .metrics import IFileMetrics
from .repositories import FileMetadataRepository
from .services import CleanupReport, FileManager
from .storage_repository import IFileStorageRepository
from .value_objects import EXPIRE_NEVER, FILE_ID_CHARSET, is_valid_file_id, validate_file_id

__all__ = [
    "StoredFile",
    "FileManager",
    "CleanupReport",
    "FileMetadataRepository",
    "IFileStorageRepository",
    "IFileMetrics",
    "EXPIRE_NEVER",
    "FILE_ID_CHARSET",
    "generate_file_id",
    "is_valid_file_id",
    "validate_file_id",
]
