"""
Application Configuration

Reads all runtime settings from environment variables.
"""

import os
from typing import Optional

from ephemera.domain.errors import ConfigError
from ephemera.domain.file_storage.id_generator import MIN_FILE_ID_LENGTH

SIZE_MEGABYTE = 1 << 20


def _env_int(name: str, default: int, minimum: Optional[int] = None) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e
    if minimum is not None and value < minimum:
        raise ConfigError(f"{name} must be >= {minimum}, got {value}")
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class AppConfig:
    """Application configuration."""

    def __init__(self):
        self.api_version = os.getenv("API_VERSION", "v1")
        self.log_level = os.getenv("LOG_LEVEL", "INFO")

        # Storage locations
        self.file_storage_path = os.getenv("FILE_STORAGE_PATH", "/var/lib/ephemera/files/")
        self.file_meta_db_path = os.getenv("FILE_META_DB_PATH", "/var/lib/ephemera/")

        # Id generation
        self.file_name_length = _env_int("FILE_NAME_LENGTH", 8, minimum=MIN_FILE_ID_LENGTH)
        self.file_id_max_attempts = _env_int("FILE_ID_MAX_ATTEMPTS", 5, minimum=1)

        # Upload limits, in megabytes
        self.file_max_size_mb = _env_int("FILE_MAX_SIZE", 100, minimum=1)

        # Sweep interval in minutes
        self.file_expiration_cycle = _env_int("FILE_EXPIRATION_CYCLE", 15, minimum=1)
        self.cleanup_on_startup = _env_bool("CLEANUP_ON_STARTUP", True)

        self.file_serving_enabled = _env_bool("FILE_SERVING_ENABLED", True)
        self.metrics_enabled = _env_bool("METRICS_ENABLED", True)
        self.auth_config_path = os.getenv("AUTH_CONFIG_PATH", "/etc/ephemera/auth.yml")

        # Celery transport
        self.broker_url = os.getenv("CELERY_BROKER_URL", "redis://localhost:6379/0")
        self.result_backend = os.getenv("CELERY_RESULT_BACKEND", "redis://localhost:6379/0")

    @property
    def file_max_size_bytes(self) -> int:
        return self.file_max_size_mb * SIZE_MEGABYTE

    @property
    def cleanup_interval_seconds(self) -> float:
        return float(self.file_expiration_cycle * 60)
