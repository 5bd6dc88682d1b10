"""
Shared pytest fixtures and configuration for the Ephemera test suite.

This module provides:
- Hypothesis configuration for property-based testing
- In-memory repositories and a FileManager wired to them
- A Flask application built from temporary directories
"""

import pytest
from unittest.mock import patch

# Hypothesis configuration
from hypothesis import settings, HealthCheck, Phase

from ephemera.domain.auth import AuthConfig, TokenConfig
from ephemera.domain.file_storage import FileManager
from tests.fixtures.mock_repositories import (
    FakeClock,
    InMemoryFileMetadataRepository,
    InMemoryFileStorageRepository,
)

# Register Hypothesis profiles
settings.register_profile(
    "default",
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.target, Phase.shrink],
)
settings.register_profile(
    "ci",
    max_examples=200,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.register_profile(
    "dev",
    max_examples=10,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.load_profile("default")


UPLOAD_TOKEN = "upload-token"
IMAGES_ONLY_TOKEN = "images-token"


# =============================================================================
# Repository and Service Fixtures
# =============================================================================

@pytest.fixture
def metadata_repository():
    """Provide an empty in-memory metadata repository."""
    return InMemoryFileMetadataRepository()


@pytest.fixture
def storage_repository():
    """Provide an empty in-memory content repository."""
    return InMemoryFileStorageRepository()


@pytest.fixture
def fake_clock():
    """Provide a manually advanced clock."""
    return FakeClock()


@pytest.fixture
def file_manager(metadata_repository, storage_repository, fake_clock):
    """Provide a FileManager over the in-memory repositories."""
    return FileManager(metadata_repository, storage_repository, clock=fake_clock)


@pytest.fixture
def auth_config():
    """Provide an auth config with one unrestricted and one images-only token."""
    return AuthConfig(
        valid_tokens=[
            TokenConfig(token=UPLOAD_TOKEN),
            TokenConfig(token=IMAGES_ONLY_TOKEN, file_types=["image/png", "image/jpeg"]),
        ]
    )


# =============================================================================
# Application Fixtures
# =============================================================================

@pytest.fixture
def app_env(tmp_path, monkeypatch):
    """
    Point every path setting at a temporary directory.

    Returns the temporary directory so tests can inspect stored content.
    """
    auth_file = tmp_path / "auth.yml"
    auth_file.write_text(
        "validTokens:\n"
        f"  - token: {UPLOAD_TOKEN}\n"
        f"  - token: {IMAGES_ONLY_TOKEN}\n"
        "    fileTypes: [image/png, image/jpeg]\n",
        encoding="utf-8",
    )

    monkeypatch.setenv("FILE_STORAGE_PATH", str(tmp_path / "files"))
    monkeypatch.setenv("FILE_META_DB_PATH", str(tmp_path / "meta"))
    monkeypatch.setenv("AUTH_CONFIG_PATH", str(auth_file))
    monkeypatch.setenv("FILE_MAX_SIZE", "1")
    monkeypatch.setenv("CELERY_BROKER_URL", "memory://")
    monkeypatch.setenv("CELERY_RESULT_BACKEND", "cache+memory://")
    monkeypatch.setenv("METRICS_ENABLED", "true")
    monkeypatch.delenv("PROMETHEUS_MULTIPROC_DIR", raising=False)
    return tmp_path


@pytest.fixture
def app(app_env):
    """Create the Flask application over temporary storage."""
    from app_factory import create_app

    with patch("ephemera.api.health.broker_health_check", return_value=True):
        application = create_app()
        application.config["TESTING"] = True
        yield application

    application.file_manager.metadata_repo.close()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


# =============================================================================
# Pytest Configuration Hooks
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (real filesystem and SQLite)"
    )
    config.addinivalue_line(
        "markers", "contract: Contract tests (verify interface compliance)"
    )
    config.addinivalue_line(
        "markers", "property: Property-based tests using Hypothesis"
    )


def pytest_collection_modifyitems(config, items):
    """
    Automatically mark tests based on their location.

    - tests/unit/* -> @pytest.mark.unit
    - tests/integration/* -> @pytest.mark.integration
    - tests/contracts/* -> @pytest.mark.contract
    - tests/property/* -> @pytest.mark.property
    """
    for item in items:
        test_path = str(item.fspath)

        if "/unit/" in test_path or "\\unit\\" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path or "\\integration\\" in test_path:
            item.add_marker(pytest.mark.integration)
        elif "/contracts/" in test_path or "\\contracts\\" in test_path:
            item.add_marker(pytest.mark.contract)
        elif "/property/" in test_path or "\\property\\" in test_path:
            item.add_marker(pytest.mark.property)
