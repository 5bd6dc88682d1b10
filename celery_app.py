"""
Celery Application Instance

Creates the Celery app instance for use by workers and the beat scheduler.
Uses the app factory so the task sees the same services as the API.
"""

from app_factory import create_app

# Create Flask app with all services initialized (including dependency container)
flask_app = create_app()

# Get Celery instance from Flask app
celery_app = flask_app.celery

# Task modules import celery_app at module level; registering them by name
# lets the worker import them once celery_app exists.
celery_app.conf.imports = ("ephemera.tasks.cleanup_task",)
