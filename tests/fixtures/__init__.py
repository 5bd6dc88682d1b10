"""Shared test fixtures: in-memory repositories, fake clock and id sequences."""

from .mock_repositories import (
    FakeClock,
    InMemoryFileMetadataRepository,
    InMemoryFileStorageRepository,
    SequenceIdGenerator,
)

__all__ = [
    "FakeClock",
    "InMemoryFileMetadataRepository",
    "InMemoryFileStorageRepository",
    "SequenceIdGenerator",
]
