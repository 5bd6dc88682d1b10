"""
Health Status

Collects the status of storage, metadata and the sweep scheduler.
"""

from flask import Flask

from ephemera.domain.errors import StorageError
from ephemera.infrastructure.broker_health import broker_health_check


def get_health_status(app: Flask) -> tuple[dict, int]:
    """
    Get health status of all system components.

    Storage and metadata are critical; the broker only drives the periodic
    sweep, so losing it degrades the service without taking uploads down.

    Args:
        app: Flask application instance

    Returns:
        Tuple of (health_status_dict, http_status_code)
    """
    health_status = {
        "status": "ok",
        "message": "backend ready",
        "storage": "unknown",
        "metadata": "unknown",
        "files": None,
        "celery": "unknown",
        "broker": "unknown",
    }

    file_manager = getattr(app, "file_manager", None)
    if file_manager is None:
        health_status["storage"] = "unavailable"
        health_status["metadata"] = "unavailable"
        health_status["status"] = "degraded"
    else:
        storage_repo = file_manager.storage_repo
        is_available = getattr(storage_repo, "is_available", None)
        if is_available is None or is_available():
            health_status["storage"] = "available"
        else:
            health_status["storage"] = "unavailable"
            health_status["status"] = "degraded"

        try:
            health_status["files"] = file_manager.count_files()
            health_status["metadata"] = "connected"
        except StorageError as e:
            health_status["metadata"] = f"error: {e}"
            health_status["status"] = "degraded"

    if getattr(app, "celery", None) is not None:
        health_status["celery"] = "available"
    else:
        health_status["celery"] = "unavailable"
        health_status["status"] = "degraded"

    config = getattr(app, "app_config", None)
    if config is not None:
        health_status["broker"] = (
            "connected" if broker_health_check(config.broker_url) else "disconnected"
        )
        if health_status["broker"] != "connected":
            health_status["status"] = "degraded"

    status_code = 200 if health_status["status"] == "ok" else 503
    return health_status, status_code
