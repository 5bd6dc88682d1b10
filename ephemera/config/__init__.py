"""Configuration for the application, Celery and logging."""

from .app_config import AppConfig
from .logging_config import configure_logging

__all__ = ["AppConfig", "configure_logging"]
