"""
API Namespaces - Organized endpoint groups
"""

from typing import Optional

from flask import current_app, request
from flask_restx import Namespace, Resource

from ephemera.api.health import get_health_status
from ephemera.api.v1.models import (
    error_response,
    file_info_response,
    file_list_response,
    health_response,
    stored_file_response,
    upload_parser,
)
from ephemera.application.upload_service import UploadRejectedError, parse_expiration
from ephemera.domain.auth import extract_bearer_token
from ephemera.domain.errors import (
    ErrorCategory,
    IdExhaustedError,
    InvalidFileIdError,
    InvalidTtlError,
    StorageError,
    StorageWriteFailedError,
    StoredFileNotFoundError,
    create_error_response,
)
from ephemera.domain.file_storage.entities import StoredFile


def _serialize_file(file: StoredFile, size: Optional[int] = None, with_info: bool = False) -> dict:
    data = file.to_dict()
    data["expires_in"] = file.get_remaining_seconds()
    if with_info:
        data["size"] = size
        data["expired"] = file.is_expired()
    return data


# =============================================================================
# Files Namespace - Upload and metadata operations
# =============================================================================

files_ns = Namespace("files", description="File upload and metadata operations")


@files_ns.route("")
class FileCollection(Resource):
    """Upload files and list stored files"""

    @files_ns.doc("upload_file", security="bearer")
    @files_ns.expect(upload_parser)
    @files_ns.response(200, "Stored", stored_file_response)
    @files_ns.response(400, "Bad Request", error_response)
    @files_ns.response(401, "Unauthorized", error_response)
    @files_ns.response(403, "Forbidden", error_response)
    @files_ns.response(411, "Length Required", error_response)
    @files_ns.response(413, "File Too Large", error_response)
    @files_ns.response(500, "Storage Failed", error_response)
    def post(self):
        """
        Upload a file

        Stores exactly one file from the multipart form field ``file``. The
        optional ``metadata`` field sets the expiration in seconds.
        """
        upload_service = getattr(current_app, "upload_service", None)
        if upload_service is None:
            return create_error_response(
                ErrorCategory.SYSTEM_ERROR, "Upload service not initialized", status_code=503
            )

        token = extract_bearer_token(request.headers.get("Authorization", ""))

        try:
            upload_service.check_token(token)

            files = request.files.getlist("file")
            if len(files) > 1:
                return create_error_response(
                    ErrorCategory.INVALID_REQUEST, "too many files in form", status_code=400
                )
            if not files:
                return create_error_response(
                    ErrorCategory.INVALID_REQUEST, "no file in form", status_code=400
                )
            file = files[0]

            upload_service.check_size(request.content_length)

            content_type = upload_service.check_content_type(token, file.content_type)
            ttl = parse_expiration(request.form.get("metadata"))

            size_mb = request.content_length / 1024 / 1024
            current_app.logger.info(
                f"Received valid upload request (type: {content_type}, size: {size_mb:.3f}mb)"
            )

            stored_file = upload_service.upload(
                file.stream, ttl, expected_size=file.content_length or None
            )

        except UploadRejectedError as e:
            current_app.logger.info(f"Upload rejected: {e.category.value} {e.technical_message}")
            return e.to_dict(), e.http_status_code
        except InvalidTtlError as e:
            return create_error_response(ErrorCategory.INVALID_REQUEST, str(e), status_code=400)
        except IdExhaustedError as e:
            current_app.logger.error(f"Could not mint a file id: {e}")
            return create_error_response(ErrorCategory.STORAGE_FAILED, str(e), status_code=500)
        except StorageWriteFailedError as e:
            current_app.logger.error(f"Could not store file: {e}")
            return create_error_response(ErrorCategory.STORAGE_FAILED, str(e), status_code=500)

        return _serialize_file(stored_file), 200

    @files_ns.doc("list_files", security="bearer")
    @files_ns.response(200, "Success", file_list_response)
    @files_ns.response(401, "Unauthorized", error_response)
    @files_ns.response(500, "Internal Server Error", error_response)
    def get(self):
        """
        List stored files

        Returns the lifecycle metadata of every stored file. Requires a valid token.
        """
        upload_service = getattr(current_app, "upload_service", None)
        if upload_service is None:
            return create_error_response(
                ErrorCategory.SYSTEM_ERROR, "Upload service not initialized", status_code=503
            )

        try:
            upload_service.check_token(extract_bearer_token(request.headers.get("Authorization", "")))
            files = current_app.file_manager.list_files()
        except UploadRejectedError as e:
            return e.to_dict(), e.http_status_code
        except StorageError as e:
            current_app.logger.exception(f"Error listing files: {e}")
            return create_error_response(ErrorCategory.SYSTEM_ERROR, str(e), status_code=500)

        return {"files": [_serialize_file(f) for f in files], "count": len(files)}, 200


@files_ns.route("/<string:file_id>")
@files_ns.param("file_id", "The file identifier")
class FileInfo(Resource):
    """File metadata operations"""

    @files_ns.doc("get_file_info")
    @files_ns.response(200, "Success", file_info_response)
    @files_ns.response(400, "Invalid File Id", error_response)
    @files_ns.response(404, "File Not Found", error_response)
    def get(self, file_id):
        """
        Get file metadata

        Returns upload time, expiry and size of a stored file.
        """
        file_manager = getattr(current_app, "file_manager", None)
        if file_manager is None:
            return create_error_response(
                ErrorCategory.SYSTEM_ERROR, "File service not initialized", status_code=503
            )

        try:
            file = file_manager.get_file_info(file_id)
            size = file_manager.get_file_size(file_id)
        except InvalidFileIdError as e:
            return create_error_response(ErrorCategory.INVALID_FILE_ID, str(e), status_code=400)
        except StoredFileNotFoundError as e:
            return create_error_response(ErrorCategory.FILE_NOT_FOUND, str(e), status_code=404)
        except StorageError as e:
            current_app.logger.exception(f"Error reading metadata for {file_id}: {e}")
            return create_error_response(ErrorCategory.SYSTEM_ERROR, str(e), status_code=500)

        return _serialize_file(file, size=size, with_info=True), 200


# =============================================================================
# System Namespace - System health and monitoring
# =============================================================================

system_ns = Namespace("system", description="System health and monitoring operations")


@system_ns.route("/health")
class Health(Resource):
    """System health check"""

    @system_ns.doc("health_check")
    @system_ns.response(200, "Healthy", health_response)
    @system_ns.response(503, "Service Degraded", health_response)
    def get(self):
        """
        Check system health and service availability

        Returns the status of content storage, the metadata database,
        Celery and its broker.
        """
        return get_health_status(current_app)
