"""
Upload Service

Application service for the upload use case: token and content type
checks in front of the file storage engine.
"""

import json
import logging
from typing import Any, BinaryIO, Dict, Optional

from ephemera.domain.auth import AuthConfig
from ephemera.domain.errors import ApplicationError, ErrorCategory
from ephemera.domain.file_storage.entities import StoredFile
from ephemera.domain.file_storage.mime_types import is_valid_mime_type, normalize_content_type
from ephemera.domain.file_storage.services import FileManager
from ephemera.domain.file_storage.value_objects import EXPIRE_NEVER, MAX_TIMESTAMP

logger = logging.getLogger(__name__)


class UploadRejectedError(ApplicationError):
    """Raised when an upload request fails a policy check."""

    def __init__(
        self,
        category: ErrorCategory,
        http_status_code: int,
        technical_message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(category, technical_message, context)
        self.http_status_code = http_status_code


def parse_expiration(raw_metadata: Optional[str]) -> int:
    """
    Read the requested ttl from the upload's ``metadata`` form field.

    The field holds JSON like ``{"expiration": 3600}``. A missing or
    unreadable field, or a value outside the signed 64-bit range, means
    the file never expires.

    Args:
        raw_metadata: Raw form value, or None

    Returns:
        TTL in seconds, or EXPIRE_NEVER
    """
    if not raw_metadata:
        return EXPIRE_NEVER

    try:
        metadata = json.loads(raw_metadata)
    except ValueError:
        return EXPIRE_NEVER

    if not isinstance(metadata, dict):
        return EXPIRE_NEVER

    expiration = metadata.get("expiration", EXPIRE_NEVER)
    if isinstance(expiration, bool) or not isinstance(expiration, int):
        return EXPIRE_NEVER
    if not -MAX_TIMESTAMP - 1 <= expiration <= MAX_TIMESTAMP:
        return EXPIRE_NEVER
    return expiration


class UploadService:
    """
    Application service for authorizing and storing uploads.

    Holds the loaded auth config. Multipart parsing and request framing
    stay in the API layer.
    """

    def __init__(self, file_manager: FileManager, auth_config: AuthConfig, max_size_bytes: int):
        """
        Initialize UploadService.

        Args:
            file_manager: Storage engine
            auth_config: Valid upload tokens
            max_size_bytes: Maximum accepted request size
        """
        self.file_manager = file_manager
        self.auth_config = auth_config
        self.max_size_bytes = max_size_bytes

    def check_token(self, token: str) -> None:
        """
        Raises:
            UploadRejectedError: 401 if the token is unknown
        """
        if not self.auth_config.has_token(token):
            raise UploadRejectedError(ErrorCategory.UNAUTHORIZED, 401, "the token is not valid")

    def check_size(self, content_length: Optional[int]) -> None:
        """
        Raises:
            UploadRejectedError: 411 without a length, 413 above the limit
        """
        if content_length is None:
            raise UploadRejectedError(ErrorCategory.LENGTH_REQUIRED, 411)
        if content_length > self.max_size_bytes:
            raise UploadRejectedError(
                ErrorCategory.FILE_TOO_LARGE,
                413,
                f"content size must not exceed {self.max_size_bytes} bytes",
            )

    def check_content_type(self, token: str, raw_content_type: Optional[str]) -> str:
        """
        Validate the file's content type against the whitelist and the token.

        Returns:
            Normalized content type

        Raises:
            UploadRejectedError: 400 if not whitelisted, 403 if the token may not upload it
        """
        content_type = normalize_content_type(raw_content_type)
        if not is_valid_mime_type(content_type):
            raise UploadRejectedError(
                ErrorCategory.UNSUPPORTED_MEDIA_TYPE, 400, f"content type of file is not valid: {content_type!r}"
            )
        if not self.auth_config.can_upload(token, content_type):
            logger.info(f"Rejected upload of {content_type}: not allowed for this token")
            raise UploadRejectedError(
                ErrorCategory.FORBIDDEN, 403, f"token may not upload {content_type}"
            )
        return content_type

    def upload(
        self,
        content: BinaryIO,
        ttl_seconds: int = EXPIRE_NEVER,
        expected_size: Optional[int] = None,
    ) -> StoredFile:
        """
        Store an already authorized upload.

        Raises:
            InvalidTtlError, IdExhaustedError, StorageWriteFailedError: from the engine
        """
        return self.file_manager.store_file(content, ttl_seconds, expected_size=expected_size)
