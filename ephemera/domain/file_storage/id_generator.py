"""
File Id Generator

Produces short, unpredictable identifiers that are safe to use as filenames.
Collision detection against existing files is the caller's job.
"""

import base64
import secrets

from ephemera.domain.errors import InvalidLengthError

MIN_FILE_ID_LENGTH = 2

# base64url output mapped onto [A-Za-z0-9]; "9" is escaped first so the
# mapping stays unambiguous.
_ESCAPES = (("9", "99"), ("-", "90"), ("_", "91"))


def _escape(encoded: str) -> str:
    for old, new in _ESCAPES:
        encoded = encoded.replace(old, new)
    return encoded


def generate_file_id(length: int) -> str:
    """
    Generate a random file id.

    Draws 128 random bits, encodes them as unpadded URL-safe base64 and
    escapes the non-alphanumeric characters. The result is truncated to
    ``length`` when longer and returned as-is otherwise (never padded).

    Args:
        length: Desired id length (>= 2)

    Returns:
        Identifier drawn from FILE_ID_CHARSET

    Raises:
        InvalidLengthError: If length is not an int or is below 2
    """
    if isinstance(length, bool) or not isinstance(length, int) or length < MIN_FILE_ID_LENGTH:
        raise InvalidLengthError(length)

    raw = secrets.token_bytes(16)
    encoded = _escape(base64.urlsafe_b64encode(raw).decode("ascii").rstrip("="))

    if length >= len(encoded):
        return encoded
    return encoded[:length]
