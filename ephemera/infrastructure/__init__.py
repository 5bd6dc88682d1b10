"""Infrastructure layer for local disk, SQLite, config files and metrics."""

from .auth_config_loader import load_auth_config
from .local_file_storage_repository import LocalFileStorageRepository
from .prometheus_metrics import PrometheusFileMetrics
from .sqlite_file_repository import SqliteFileMetadataRepository
from .storage_factory import StorageFactory

__all__ = [
    "LocalFileStorageRepository",
    "PrometheusFileMetrics",
    "SqliteFileMetadataRepository",
    "StorageFactory",
    "load_auth_config",
]
