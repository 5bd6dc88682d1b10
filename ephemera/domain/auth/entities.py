"""
Auth Entities

Upload tokens and the content types each token may upload.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class TokenConfig:
    """
    A valid upload token.

    An empty ``file_types`` list allows every supported content type.
    """
    token: str
    file_types: List[str] = field(default_factory=list)

    def allows(self, content_type: str) -> bool:
        return not self.file_types or content_type in self.file_types


@dataclass
class AuthConfig:
    """Set of valid upload tokens."""
    valid_tokens: List[TokenConfig] = field(default_factory=list)

    @classmethod
    def empty(cls) -> 'AuthConfig':
        return cls(valid_tokens=[])

    @classmethod
    def from_dict(cls, data: dict) -> 'AuthConfig':
        """
        Build from the parsed auth file.

        Expected shape::

            validTokens:
              - token: "secret"
                fileTypes: ["image/png"]
        """
        tokens = []
        for entry in (data or {}).get("validTokens") or []:
            token = entry.get("token")
            if not token:
                continue
            tokens.append(
                TokenConfig(token=str(token), file_types=list(entry.get("fileTypes") or []))
            )
        return cls(valid_tokens=tokens)

    def has_token(self, token: str) -> bool:
        if not token:
            return False
        return any(t.token == token for t in self.valid_tokens)

    def can_upload(self, token: str, content_type: str) -> bool:
        """
        Check if a token may upload a file of the given content type.

        Args:
            token: Bearer token from the request
            content_type: Normalized MIME type of the file

        Returns:
            True if allowed, False otherwise
        """
        if not token:
            return False
        return any(t.token == token and t.allows(content_type) for t in self.valid_tokens)


def extract_bearer_token(header_value: str) -> str:
    """
    Extract the token of an "Authorization: Bearer <token>" header.

    Returns:
        The token, or an empty string if the header is not a Bearer token
    """
    if not header_value or not header_value.startswith("Bearer "):
        return ""
    return header_value[len("Bearer "):].strip()
