"""
Application Services Layer

Orchestrates domain services and coordinates use cases.
"""

from .dependency_container import DependencyContainer, DependencyNotFoundError
from .upload_service import UploadRejectedError, UploadService, parse_expiration

__all__ = [
    'DependencyContainer',
    'DependencyNotFoundError',
    'UploadRejectedError',
    'UploadService',
    'parse_expiration',
]
