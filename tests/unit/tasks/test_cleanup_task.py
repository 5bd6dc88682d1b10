"""
Unit tests for cleanup_task

Tests that the Celery cleanup task resolves the FileManager from the
DependencyContainer, reports the sweep result and handles exceptions
gracefully.
"""

import importlib
from unittest.mock import MagicMock, Mock, patch

import pytest

from ephemera.config.celery_config import CLEANUP_TASK_NAME
from ephemera.domain.file_storage.services import CleanupReport, FileManager


@pytest.fixture
def cleanup_task_module(app_env):
    """Import the task module with the Celery app built over temporary storage."""
    return importlib.import_module("ephemera.tasks.cleanup_task")


@pytest.fixture
def mock_file_manager():
    """Mock FileManager for testing."""
    mock = Mock()
    mock.cleanup.return_value = CleanupReport(deleted=3, failed=1, errors=["abc: boom"])
    return mock


@pytest.fixture
def mock_container(mock_file_manager):
    """Mock DependencyContainer."""
    mock = MagicMock()

    def resolve_side_effect(service_type):
        if service_type == FileManager:
            return mock_file_manager
        raise ValueError(f"Unknown service type: {service_type}")

    mock.resolve.side_effect = resolve_side_effect
    return mock


class TestCleanupTaskRegistration:

    def test_task_is_registered_under_beat_name(self, cleanup_task_module):
        from celery_app import celery_app

        assert cleanup_task_module.cleanup_expired_files.name == CLEANUP_TASK_NAME
        assert CLEANUP_TASK_NAME in celery_app.tasks

    def test_task_module_is_imported_by_worker(self, cleanup_task_module):
        from celery_app import celery_app

        assert "ephemera.tasks.cleanup_task" in celery_app.conf.imports


class TestCleanupTaskExecution:

    def test_resolves_file_manager_from_container(
        self, cleanup_task_module, mock_container, mock_file_manager
    ):
        with patch("celery_app.flask_app") as mock_flask_app:
            mock_flask_app.container = mock_container

            cleanup_task_module.cleanup_expired_files()

        mock_container.resolve.assert_called_once_with(FileManager)
        mock_file_manager.cleanup.assert_called_once_with()

    def test_returns_report(self, cleanup_task_module, mock_container):
        with patch("celery_app.flask_app") as mock_flask_app:
            mock_flask_app.container = mock_container

            result = cleanup_task_module.cleanup_expired_files()

        assert result == {"deleted": 3, "failed": 1, "errors": ["abc: boom"]}

    def test_failure_is_reported_not_raised(self, cleanup_task_module, mock_container, mock_file_manager):
        mock_file_manager.cleanup.side_effect = RuntimeError("db gone")

        with patch("celery_app.flask_app") as mock_flask_app:
            mock_flask_app.container = mock_container

            result = cleanup_task_module.cleanup_expired_files()

        assert result["deleted"] == 0
        assert result["failed"] == 0
        assert "Cleanup task failed: db gone" in result["errors"][0]

    def test_runs_against_real_services(self, cleanup_task_module):
        import io

        from celery_app import flask_app

        flask_app.file_manager.store_file(io.BytesIO(b"old"), 0)

        result = cleanup_task_module.cleanup_expired_files()

        assert result["deleted"] >= 1
        assert result["failed"] == 0
