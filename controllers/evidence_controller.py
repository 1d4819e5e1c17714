import logging

from flask import Blueprint, request, jsonify, current_app

from models.base import serialize
from models.evidence import Evidence, MEDIA_TYPES
from utils.auth import current_username
from utils.responses import handle_errors, error_response, not_found, request_data
from utils.uploads import save_uploads, remove_uploads, media_kind, MEDIA_EXTENSIONS

logger = logging.getLogger(__name__)

evidence_bp = Blueprint("evidence", __name__, url_prefix="/api/evidence")


# -----------------------------
# VIEW EVIDENCE
# -----------------------------
@evidence_bp.route("", methods=["GET"])
@handle_errors("Failed to fetch evidence")
def list_evidence():
    query = {}
    if request.args.get("status"):
        query["status"] = request.args["status"]
    if request.args.get("type"):
        query["type"] = request.args["type"]

    evidence = [serialize(e) for e in Evidence.find_all(query)]
    return jsonify({"evidence": evidence})


@evidence_bp.route("/stats", methods=["GET"])
@handle_errors("Failed to fetch evidence statistics")
def evidence_stats():
    return jsonify({"stats": Evidence.get_stats()})


@evidence_bp.route("/case/<case_id>", methods=["GET"])
@handle_errors("Failed to fetch evidence")
def evidence_for_case(case_id):
    return jsonify({"evidence": [serialize(e) for e in Evidence.find_by_case_id(case_id)]})


@evidence_bp.route("/ob/<ob_id>", methods=["GET"])
@handle_errors("Failed to fetch evidence")
def evidence_for_ob(ob_id):
    return jsonify({"evidence": [serialize(e) for e in Evidence.find_by_ob_id(ob_id)]})


@evidence_bp.route("/<evidence_id>", methods=["GET"])
@handle_errors("Failed to fetch evidence")
def get_evidence(evidence_id):
    evidence = Evidence.find_by_id(evidence_id)
    if not evidence:
        return not_found("Evidence")
    return jsonify({"evidence": serialize(evidence)})


# -----------------------------
# ADD EVIDENCE
# -----------------------------
@evidence_bp.route("", methods=["POST"])
@handle_errors("Failed to create evidence")
def add_evidence():
    evidence = Evidence.create(request_data(request))
    logger.info("Evidence created: %s", evidence["evidenceNumber"])
    return jsonify({
        "success": True,
        "evidence": serialize(evidence),
        "message": "Evidence created successfully"
    }), 201


# -----------------------------
# EDIT EVIDENCE
# -----------------------------
@evidence_bp.route("/<evidence_id>", methods=["PUT"])
@handle_errors("Failed to update evidence")
def edit_evidence(evidence_id):
    if not Evidence.update(evidence_id, request_data(request)):
        return not_found("Evidence")
    return jsonify({
        "success": True,
        "evidence": serialize(Evidence.find_by_id(evidence_id)),
        "message": "Evidence updated successfully"
    })


# -----------------------------
# CHAIN OF CUSTODY
# -----------------------------
@evidence_bp.route("/<evidence_id>/custody", methods=["POST"])
@handle_errors("Failed to add custody entry")
def add_custody_entry(evidence_id):
    data = request_data(request)
    if not data.get("action") or not data.get("officer"):
        return error_response("Missing required fields: action, officer", 400)

    if not Evidence.add_custody_entry(evidence_id, data):
        return not_found("Evidence")

    logger.info("Custody entry '%s' added to evidence %s", data["action"], evidence_id)
    return jsonify({
        "success": True,
        "evidence": serialize(Evidence.find_by_id(evidence_id)),
        "message": "Custody entry added successfully"
    })


# -----------------------------
# MEDIA ATTACHMENTS
# -----------------------------
@evidence_bp.route("/<evidence_id>/media", methods=["POST"])
@handle_errors("Failed to add media")
def add_media(evidence_id):
    if Evidence.find_by_id(evidence_id) is None:
        return not_found("Evidence")

    files = request.files.getlist("media") or request.files.getlist("file")
    if files:
        uploaded_by = request.form.get("uploadedBy") or current_username()
        saved = save_uploads(files, MEDIA_EXTENSIONS, current_app.config["MEDIA_MAX_SIZE"], field="media")
        media = []
        for storage, stored_name, size in saved:
            media.append({
                "name": storage.filename,
                "filename": stored_name,
                "url": f"/uploads/{stored_name}",
                "type": media_kind(storage.mimetype),
                "size": size,
                "uploadedBy": uploaded_by
            })
    else:
        data = request_data(request)
        if not data.get("name") or not data.get("url") or not data.get("type"):
            return error_response("Missing required fields: name, url, type", 400)
        if data["type"] not in MEDIA_TYPES:
            return error_response(f"Invalid media type. Must be one of: {', '.join(MEDIA_TYPES)}", 400)
        media = [{
            "name": data["name"],
            "url": data["url"],
            "type": data["type"],
            "uploadedBy": data.get("uploadedBy") or current_username()
        }]

    stored = [m["filename"] for m in media if "filename" in m]
    try:
        added = Evidence.add_media(evidence_id, media)
    except Exception:
        remove_uploads(stored)
        raise
    if not added:
        remove_uploads(stored)
        return not_found("Evidence")

    return jsonify({
        "success": True,
        "media": media,
        "message": "Media added successfully"
    })


# -----------------------------
# DELETE EVIDENCE
# -----------------------------
@evidence_bp.route("/<evidence_id>", methods=["DELETE"])
@handle_errors("Failed to delete evidence")
def delete_evidence(evidence_id):
    if not Evidence.delete(evidence_id):
        return not_found("Evidence")
    logger.info("Evidence deleted: %s", evidence_id)
    return jsonify({"success": True, "message": "Evidence deleted successfully"})
