"""
Metrics Endpoint

Exposes the upload and expiry counters for Prometheus scraping.
"""

from flask import Blueprint, Response, abort, current_app

metrics_bp = Blueprint("metrics", __name__)


@metrics_bp.route("/metrics", methods=["GET"])
def metrics():
    file_metrics = getattr(current_app, "file_metrics", None)
    if file_metrics is None:
        abort(404)

    body, content_type = file_metrics.render()
    return Response(body, content_type=content_type)
