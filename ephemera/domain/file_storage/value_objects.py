"""
File Storage Value Objects

Identifier and expiry constants with their validation.
"""

import re
import string

from ephemera.domain.errors import InvalidFileIdError

# Characters a file id may contain. Nothing here is meaningful in a path.
FILE_ID_CHARSET = string.ascii_letters + string.digits
MAX_FILE_ID_LENGTH = 64

# Never sentinel for ttl and expires_at
EXPIRE_NEVER = -1

# Largest timestamp the metadata store can hold (signed 64-bit)
MAX_TIMESTAMP = (1 << 63) - 1

_FILE_ID_PATTERN = re.compile(r"^[A-Za-z0-9]{1,%d}$" % MAX_FILE_ID_LENGTH)


def is_valid_file_id(value) -> bool:
    """
    Check whether a value can be used directly as a filename component.

    Args:
        value: Candidate identifier

    Returns:
        True if the value is a non-empty string drawn from FILE_ID_CHARSET
    """
    if not isinstance(value, str):
        return False
    return _FILE_ID_PATTERN.fullmatch(value) is not None


def validate_file_id(value) -> str:
    """
    Validate a file id before any path is built from it.

    Args:
        value: Candidate identifier (generated or client supplied)

    Returns:
        The identifier unchanged

    Raises:
        InvalidFileIdError: If the identifier is not safe
    """
    if not is_valid_file_id(value):
        raise InvalidFileIdError(value)
    return value

