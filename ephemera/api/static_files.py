"""
Static File Serving

Serves stored content directly by file id. Reads go straight to the
content store and do not look at metadata, so an expired file stays
downloadable until the next sweep deletes it.
"""

from flask import Blueprint, abort, current_app, send_file

from ephemera.domain.errors import InvalidFileIdError, StorageError, StoredFileNotFoundError

static_files_bp = Blueprint("static_files", __name__)


@static_files_bp.route("/<string:file_id>", methods=["GET", "HEAD"])
def serve_file(file_id: str):
    """Stream the content stored under ``file_id``."""
    file_manager = getattr(current_app, "file_manager", None)
    if file_manager is None:
        abort(503)

    try:
        stream = file_manager.get_file(file_id)
    except (InvalidFileIdError, StoredFileNotFoundError):
        abort(404)
    except StorageError as e:
        current_app.logger.error(f"Could not open file {file_id}: {e}")
        abort(500)

    return send_file(
        stream,
        mimetype="application/octet-stream",
        download_name=file_id,
        max_age=0,
    )
