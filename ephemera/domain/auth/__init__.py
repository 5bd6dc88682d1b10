"""
Auth Domain

Token based upload authorization.
"""

from .entities import AuthConfig, TokenConfig, extract_bearer_token

__all__ = [
    "AuthConfig",
    "TokenConfig",
    "extract_bearer_token",
]
