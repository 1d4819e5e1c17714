import logging

from flask import Blueprint, request, jsonify, current_app, send_from_directory

from models.base import utcnow
from utils.auth import current_username
from utils.responses import handle_errors, error_response
from utils.uploads import save_uploads, media_kind, upload_folder, MEDIA_EXTENSIONS

logger = logging.getLogger(__name__)

uploads_bp = Blueprint("uploads", __name__)


@uploads_bp.route("/api/upload-media", methods=["POST"])
@handle_errors("Failed to upload media")
def upload_media():
    files = request.files.getlist("media")
    if not files:
        return error_response("No files uploaded", 400)

    uploaded_by = request.form.get("uploadedBy") or current_username() or "Unknown"
    saved = save_uploads(files, MEDIA_EXTENSIONS, current_app.config["MEDIA_MAX_SIZE"], field="media")
    uploaded = []
    for storage, stored_name, size in saved:
        uploaded.append({
            "name": storage.filename,
            "filename": stored_name,
            "url": f"/uploads/{stored_name}",
            "type": media_kind(storage.mimetype),
            "size": size,
            "uploadedAt": utcnow(),
            "uploadedBy": uploaded_by
        })

    logger.info("Stored %d media file(s) for %s", len(uploaded), uploaded_by)
    return jsonify({"success": True, "files": uploaded})


@uploads_bp.route("/uploads/<path:filename>", methods=["GET"])
def uploaded_file(filename):
    return send_from_directory(upload_folder(), filename)
