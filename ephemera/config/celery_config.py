"""
Celery Configuration

Configures Celery with Flask integration, Redis broker and the periodic
expiration sweep.
"""

from celery import Celery
from kombu import Queue

from .app_config import AppConfig

CLEANUP_TASK_NAME = "ephemera.tasks.cleanup_expired_files"


class CeleryConfig:
    """Celery configuration settings."""

    # Task settings
    task_serializer = "json"
    accept_content = ["json"]
    result_serializer = "json"
    timezone = "UTC"
    enable_utc = True

    # Worker settings
    worker_prefetch_multiplier = 1
    task_acks_late = True

    # Task routing
    task_routes = {
        CLEANUP_TASK_NAME: {"queue": "cleanup_queue"},
    }

    # Queue definitions
    task_default_queue = "default"
    task_queues = (
        Queue("default", routing_key="default"),
        Queue("cleanup_queue", routing_key="cleanup"),
    )

    # A sweep never needs more than one interval
    task_soft_time_limit = 600
    task_time_limit = 900

    # Result backend settings
    result_expires = 3600  # 1 hour


def build_beat_schedule(config: AppConfig) -> dict:
    """
    Build the beat schedule for the expiration sweep.

    Args:
        config: Application configuration

    Returns:
        Celery beat_schedule mapping
    """
    return {
        "cleanup-expired-files": {
            "task": CLEANUP_TASK_NAME,
            "schedule": config.cleanup_interval_seconds,
        },
    }


def make_celery(app, config: AppConfig) -> Celery:
    """
    Create Celery instance with Flask app context.

    Args:
        app: Flask application instance
        config: Application configuration

    Returns:
        Configured Celery instance
    """
    celery = Celery(
        app.import_name,
        backend=config.result_backend,
        broker=config.broker_url,
    )

    celery.config_from_object(CeleryConfig)
    celery.conf.beat_schedule = build_beat_schedule(config)

    # Ensure tasks run within Flask app context
    class ContextTask(celery.Task):
        """Make celery tasks work with Flask app context."""

        def __call__(self, *args, **kwargs):
            with app.app_context():
                return self.run(*args, **kwargs)

    celery.Task = ContextTask
    return celery
