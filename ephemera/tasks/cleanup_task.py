"""
Cleanup Task

Celery beat task for the periodic sweep of expired files.
Thin wrapper that delegates to the FileManager.
"""

import logging

from celery_app import celery_app
from ephemera.config.celery_config import CLEANUP_TASK_NAME

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, name=CLEANUP_TASK_NAME)
def cleanup_expired_files(self):
    """
    Periodic task that deletes expired files and their metadata.

    Runs every FILE_EXPIRATION_CYCLE minutes from the beat schedule. A file
    that fails to delete is counted and retried on the next run.

    Returns:
        dict: Cleanup report with deleted/failed counts and errors
    """
    logger.info("Starting cleanup task")

    try:
        # Resolve the engine through the container, never build it here
        from celery_app import flask_app
        from ephemera.domain.file_storage import FileManager

        file_manager = flask_app.container.resolve(FileManager)
        report = file_manager.cleanup()

        logger.info(f"Cleanup completed - Deleted: {report.deleted}, Failed: {report.failed}")
        if report.errors:
            logger.warning(f"Cleanup errors: {report.errors}")

        return report.to_dict()

    except Exception as e:
        error_msg = f"Cleanup task failed: {e}"
        logger.error(error_msg, exc_info=True)
        return {"deleted": 0, "failed": 0, "errors": [error_msg]}
