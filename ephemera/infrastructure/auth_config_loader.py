"""
Auth Config Loader

Reads the YAML file listing valid upload tokens.
"""

import logging
from pathlib import Path

import yaml

from ephemera.domain.auth import AuthConfig

logger = logging.getLogger(__name__)


def auth_config_from_data(data: str) -> AuthConfig:
    """
    Parse auth config YAML text.

    Raises:
        yaml.YAMLError: If the text is not valid YAML
    """
    parsed = yaml.safe_load(data) or {}
    if not isinstance(parsed, dict):
        raise yaml.YAMLError("auth config must be a mapping")
    return AuthConfig.from_dict(parsed)


def load_auth_config(path: str) -> AuthConfig:
    """
    Load the auth config from a local file.

    A missing or broken file leaves the service running with no valid
    tokens, so nobody can upload.

    Args:
        path: Path of the YAML file

    Returns:
        Loaded AuthConfig, or an empty one on failure
    """
    try:
        config = auth_config_from_data(Path(path).read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Could not open auth config at {path}: {e}")
        return AuthConfig.empty()

    logger.info(f"Loaded {len(config.valid_tokens)} valid tokens")
    return config
