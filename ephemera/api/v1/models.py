"""
API Models for request/response validation and Swagger documentation
"""

from flask_restx import fields
from werkzeug.datastructures import FileStorage

from ephemera.api.v1 import api

# =============================================================================
# Request Parsers
# =============================================================================

upload_parser = api.parser()
upload_parser.add_argument(
    "file", location="files", type=FileStorage, required=True, help="File to upload"
)
upload_parser.add_argument(
    "metadata",
    location="form",
    type=str,
    required=False,
    help='JSON such as {"expiration": 3600}; seconds until expiry, -1 or missing = never',
)
upload_parser.add_argument(
    "Authorization", location="headers", type=str, required=True, help="Bearer <token>"
)

# =============================================================================
# Response Models
# =============================================================================

stored_file_response = api.model(
    "StoredFile",
    {
        "id": fields.String(description="File identifier", example="N2YwODUx"),
        "uploaded_at": fields.Integer(description="Upload time (Unix seconds)"),
        "expires_at": fields.Integer(
            description="Expiry time (Unix seconds), -1 if the file never expires"
        ),
        "expires_in": fields.Integer(
            description="Seconds until expiry", allow_null=True
        ),
    },
)

file_info_response = api.inherit(
    "FileInfo",
    stored_file_response,
    {
        "size": fields.Integer(description="Content size in bytes", allow_null=True),
        "expired": fields.Boolean(description="Whether the file is past its expiry"),
    },
)

file_list_response = api.model(
    "FileList",
    {
        "files": fields.List(fields.Nested(stored_file_response)),
        "count": fields.Integer(description="Number of files"),
    },
)

error_response = api.model(
    "ErrorResponse",
    {
        "error": fields.String(description="Error category"),
        "title": fields.String(description="Short error title"),
        "message": fields.String(description="User-friendly error message"),
        "action": fields.String(description="Suggested action"),
    },
)

health_response = api.model(
    "HealthResponse",
    {
        "status": fields.String(description="Overall health status", enum=["ok", "degraded"]),
        "message": fields.String(description="Health message"),
        "storage": fields.String(description="Content storage status"),
        "metadata": fields.String(description="Metadata database status"),
        "files": fields.Integer(description="Number of stored files", allow_null=True),
        "celery": fields.String(description="Celery availability status"),
        "broker": fields.String(description="Broker connection status"),
    },
)
