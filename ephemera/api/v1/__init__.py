"""
API v1 - Ephemera REST API

This module contains the versioned API endpoints with OpenAPI/Swagger documentation.
"""

import os

from flask import Blueprint
from flask_restx import Api

API_VERSION = os.getenv("API_VERSION", "v1")

api_v1_bp = Blueprint("api_v1", __name__, url_prefix=f"/api/{API_VERSION}")

api = Api(
    api_v1_bp,
    version="1.0",
    title="Ephemera API",
    description="Ephemeral file hosting: upload a file, share its id until it expires",
    doc="/docs",
    authorizations={
        "bearer": {"type": "apiKey", "in": "header", "name": "Authorization"},
    },
)

# Import namespaces after api is created to avoid circular imports
from .namespaces import files_ns, system_ns  # noqa: E402

api.add_namespace(files_ns, path="/files")
api.add_namespace(system_ns, path="/system")
