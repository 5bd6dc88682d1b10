"""
Supported Content Types

Whitelist of MIME types that may be uploaded, with their file extensions.
"""

from typing import Optional

MIME_TYPES = {
    "application/pdf": "pdf",
    "application/json": "json",
    "application/gzip": "gz",
    "application/vnd.rar": "rar",
    "application/zip": "zip",
    "application/x-7z-compressed": "7z",
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/gif": "gif",
    "image/svg+xml": "svg",
    "text/csv": "csv",
    "text/plain": "txt",
    "audio/mpeg": "mp3",
    "audio/ogg": "ogg",
    "audio/opus": "opus",
    "audio/webm": "weba",
    "video/mp4": "mp4",
    "video/mpeg": "mpeg",
    "video/webm": "webm",
}

DEFAULT_MIME_TYPE = "application/octet-stream"


def normalize_content_type(content_type: Optional[str]) -> str:
    """
    Reduce a Content-Type header value to its bare MIME type.

    Headers such as "text/plain; charset=utf-8" or "image/png, image/jpeg"
    carry extra values; only the first type is kept.
    """
    if not content_type:
        return ""
    if ";" in content_type:
        content_type = content_type.split(";")[0]
    elif "," in content_type:
        content_type = content_type.split(",")[0]
    return content_type.strip().lower()


def is_valid_mime_type(content_type: str) -> bool:
    return content_type in MIME_TYPES


def get_extension(content_type: str) -> str:
    """Return the file extension for a MIME type, or the generic octet-stream type."""
    return MIME_TYPES.get(content_type, DEFAULT_MIME_TYPE)
