"""
File Storage Entities

Domain entities for stored file lifecycle management.
"""

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from .value_objects import EXPIRE_NEVER


@dataclass
class StoredFile:
    """
    Entity representing an uploaded file and its lifecycle timestamps.

    Timestamps are Unix seconds. ``expires_at`` is EXPIRE_NEVER (-1) for
    files that never expire.
    """
    id: str
    uploaded_at: int
    expires_at: int

    @classmethod
    def create(cls, file_id: str, ttl_seconds: int, now: Optional[int] = None) -> 'StoredFile':
        """
        Factory method to create a new stored file record.

        Args:
            file_id: Accepted file identifier
            ttl_seconds: Time to live in seconds, or EXPIRE_NEVER
            now: Upload time in Unix seconds (default: current time)

        Returns:
            New StoredFile instance
        """
        uploaded_at = int(time.time()) if now is None else int(now)
        if ttl_seconds == EXPIRE_NEVER:
            expires_at = EXPIRE_NEVER
        else:
            expires_at = uploaded_at + int(ttl_seconds)

        return cls(id=file_id, uploaded_at=uploaded_at, expires_at=expires_at)

    @property
    def never_expires(self) -> bool:
        return self.expires_at < 0

    def is_expired(self, now: Optional[int] = None) -> bool:
        """
        Check if the file has logically expired.

        Args:
            now: Reference time in Unix seconds (default: current time)

        Returns:
            True if expired, False otherwise
        """
        if self.never_expires:
            return False
        now = int(time.time()) if now is None else now
        return now >= self.expires_at

    def get_remaining_seconds(self, now: Optional[int] = None) -> Optional[int]:
        """
        Get remaining seconds until expiration.

        Returns:
            Seconds remaining (0 if expired), None if the file never expires
        """
        if self.never_expires:
            return None
        now = int(time.time()) if now is None else now
        return max(0, self.expires_at - now)

    def expires_at_datetime(self) -> Optional[datetime]:
        if self.never_expires:
            return None
        return datetime.fromtimestamp(self.expires_at, tz=timezone.utc)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "uploaded_at": self.uploaded_at,
            "expires_at": self.expires_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'StoredFile':
        """Create StoredFile from dictionary."""
        return cls(
            id=data["id"],
            uploaded_at=int(data["uploaded_at"]),
            expires_at=int(data["expires_at"]),
        )

    def __str__(self) -> str:
        uploaded = datetime.fromtimestamp(self.uploaded_at, tz=timezone.utc)
        return f"StoredFile<{self.id}, {uploaded.isoformat()}>"
