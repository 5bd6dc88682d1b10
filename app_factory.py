"""
Application Factory

Creates and configures the Flask application with all dependencies.
The factory pattern keeps tests able to inject configuration and
override services.
"""

import logging
from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS

from ephemera.api.health import get_health_status
from ephemera.application.dependency_container import DependencyContainer
from ephemera.application.upload_service import UploadService
from ephemera.config import AppConfig, configure_logging
from ephemera.config.celery_config import make_celery
from ephemera.domain.auth import AuthConfig
from ephemera.domain.file_storage import FileManager, IFileMetrics
from ephemera.domain.file_storage.repositories import FileMetadataRepository
from ephemera.domain.file_storage.storage_repository import IFileStorageRepository
from ephemera.infrastructure import PrometheusFileMetrics, StorageFactory, load_auth_config

logger = logging.getLogger(__name__)


def create_app(config: Optional[AppConfig] = None) -> Flask:
    """
    Create and configure Flask application.

    Args:
        config: Application configuration, uses default if None

    Returns:
        Configured Flask application

    Raises:
        RuntimeError: If content storage or the metadata database cannot be initialized
    """
    if config is None:
        config = AppConfig()

    configure_logging(config.log_level)

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = config.file_max_size_bytes
    app.app_config = config

    CORS(
        app,
        resources={
            r"/*": {
                "origins": "*",
                "methods": ["GET", "HEAD", "POST", "OPTIONS"],
                "allow_headers": ["Content-Type", "Authorization"],
                "expose_headers": ["Content-Type", "Content-Length"],
                "max_age": 3600,
            }
        },
    )

    _initialize_services(app, config)
    _initialize_celery(app, config)
    _register_blueprints(app, config)
    _register_health_endpoint(app)

    if config.cleanup_on_startup:
        _run_startup_cleanup(app)

    return app


def _initialize_services(app: Flask, config: AppConfig) -> None:
    """
    Build repositories and services and register them in a DependencyContainer.

    The container is the single place services come from: API resources use
    the shortcuts attached to the app, tasks resolve through ``app.container``.

    Args:
        app: Flask application
        config: Application configuration
    """
    container = DependencyContainer()

    storage_repository = StorageFactory.create_storage(config.file_storage_path)
    metadata_repository = StorageFactory.create_metadata_repository(config.file_meta_db_path)
    container.register_singleton(IFileStorageRepository, storage_repository)
    container.register_singleton(FileMetadataRepository, metadata_repository)

    file_metrics = PrometheusFileMetrics() if config.metrics_enabled else None
    if file_metrics is not None:
        container.register_singleton(IFileMetrics, file_metrics)

    file_manager = FileManager(
        metadata_repository,
        storage_repository,
        file_id_length=config.file_name_length,
        max_id_attempts=config.file_id_max_attempts,
        metrics=file_metrics,
    )
    container.register_singleton(FileManager, file_manager)

    auth_config = load_auth_config(config.auth_config_path)
    container.register_singleton(AuthConfig, auth_config)

    upload_service = UploadService(file_manager, auth_config, config.file_max_size_bytes)
    container.register_singleton(UploadService, upload_service)

    app.container = container
    app.file_manager = file_manager
    app.upload_service = upload_service
    app.file_metrics = file_metrics

    logger.info(
        f"Application services initialized ({container.registration_count()} registrations)"
    )


def _initialize_celery(app: Flask, config: AppConfig) -> None:
    """
    Attach the Celery instance. Uploads keep working without it; only the
    periodic sweep depends on the broker.
    """
    try:
        app.celery = make_celery(app, config)
        logger.info(
            f"Celery initialized, sweeping every {config.file_expiration_cycle} minutes"
        )
    except Exception as e:
        logger.warning(f"Could not initialize Celery: {e}")
        app.celery = None


def _register_blueprints(app: Flask, config: AppConfig) -> None:
    """
    Register API blueprints.

    Args:
        app: Flask application
        config: Application configuration
    """
    from ephemera.api.v1 import api_v1_bp

    app.register_blueprint(api_v1_bp)
    logger.info(
        f"API {config.api_version} registered at /api/{config.api_version} "
        f"with Swagger UI at /api/{config.api_version}/docs"
    )

    if config.file_serving_enabled:
        from ephemera.api.static_files import static_files_bp

        app.register_blueprint(static_files_bp)
        logger.info("Static file serving enabled at /<file_id>")

    if config.metrics_enabled:
        from ephemera.api.metrics import metrics_bp

        app.register_blueprint(metrics_bp)
        logger.info("Prometheus metrics enabled at /metrics")


def _register_health_endpoint(app: Flask) -> None:
    """
    Register health check endpoint.

    Args:
        app: Flask application
    """

    @app.route("/health", methods=["GET"])
    def health():
        """
        Health check endpoint.
        Returns overall health status of the application and its dependencies.
        """
        health_status, status_code = get_health_status(app)
        return jsonify(health_status), status_code


def _run_startup_cleanup(app: Flask) -> None:
    try:
        report = app.file_manager.cleanup()
        logger.info(f"Startup cleanup deleted {report.deleted} files, {report.failed} failed")
    except Exception as e:
        logger.error(f"Startup cleanup failed: {e}", exc_info=True)
