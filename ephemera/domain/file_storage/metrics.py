"""
File Storage Metrics Interface

Counters the storage engine reports to. Keeps the domain layer independent
of the metrics backend.
"""

from abc import ABC, abstractmethod


class IFileMetrics(ABC):
    """Counters for the storage engine's lifecycle events."""

    @abstractmethod
    def inc_files_uploaded(self) -> None:
        """Count one successfully stored file."""
        pass

    @abstractmethod
    def inc_files_expired(self) -> None:
        """Count one file deleted by an expiration sweep."""
        pass
