import logging

from flask import Blueprint, request, jsonify, current_app

from models.base import parse_date
from models.geofiles import Geofile, normalize, parse_tags, parse_coordinates, FILE_TYPES
from utils.auth import current_username
from utils.responses import handle_errors, error_response, not_found, request_data
from utils.uploads import check_upload, save_upload, remove_uploads, file_extension, GEOFILE_EXTENSIONS

logger = logging.getLogger(__name__)

geofiles_bp = Blueprint("geofiles", __name__, url_prefix="/api/geofiles")


def _list_filters(args):
    filters = {
        "search": args.get("search"),
        "fileType": args.get("fileType"),
        "accessLevel": args.get("accessLevel"),
        "dateFrom": parse_date(args.get("dateFrom"), "dateFrom"),
        "dateTo": parse_date(args.get("dateTo"), "dateTo"),
    }
    if args.get("tags"):
        filters["tags"] = [t.strip() for t in args["tags"].split(",") if t.strip()]
    return filters


# -----------------------------
# VIEW GEOFILES
# -----------------------------
@geofiles_bp.route("", methods=["GET"])
@handle_errors("Failed to fetch geofiles")
def list_geofiles():
    return jsonify({"geofiles": Geofile.find_all(_list_filters(request.args))})


@geofiles_bp.route("/stats/summary", methods=["GET"])
@handle_errors("Failed to fetch geofile statistics")
def geofile_stats():
    return jsonify({"stats": Geofile.get_stats()})


@geofiles_bp.route("/search/by-location", methods=["GET"])
@handle_errors("Failed to search geofiles by location")
def search_by_location():
    try:
        lat = float(request.args["lat"])
        lng = float(request.args["lng"])
        radius = float(request.args.get("radius", 1000))
    except (KeyError, ValueError):
        return error_response("lat and lng are required numeric parameters", 400)

    return jsonify({"geofiles": Geofile.find_near(lat, lng, radius)})


@geofiles_bp.route("/<geofile_id>", methods=["GET"])
@handle_errors("Failed to fetch geofile")
def get_geofile(geofile_id):
    if not Geofile.update_access(geofile_id):
        return not_found("Geofile")
    return jsonify({"geofile": normalize(Geofile.find_by_id(geofile_id))})


# -----------------------------
# ADD GEOFILE
# -----------------------------
@geofiles_bp.route("", methods=["POST"])
@handle_errors("Failed to create geofile")
def add_geofile():
    data = request_data(request)
    data["uploadedBy"] = current_username() or data.get("uploadedBy")

    if "coordinates" in data:
        data["coordinates"] = parse_coordinates(data["coordinates"])

    geofile = Geofile.create(data)
    logger.info("Geofile created: %s", geofile["filename"])
    return jsonify({
        "success": True,
        "geofile": normalize(geofile),
        "message": "Geofile created successfully"
    }), 201


@geofiles_bp.route("/upload", methods=["POST"])
@handle_errors("Failed to upload geofile")
def upload_geofile():
    data = request.form.to_dict()
    if not (data.get("filename") or "").strip():
        return error_response("Name/Label is required", 400)

    storage = request.files.get("file")
    if storage and not storage.filename:
        storage = None
    if storage:
        check_upload(storage, GEOFILE_EXTENSIONS, current_app.config["GEOFILE_MAX_SIZE"])
        data["fileType"] = data.get("fileType") or file_extension(storage.filename).lstrip(".")

    data["fileType"] = (data.get("fileType") or "geojson").lower()
    if data["fileType"] not in FILE_TYPES:
        return error_response("Invalid file type. Allowed types: " + ", ".join(FILE_TYPES), 400)

    if "coordinates" in data:
        data["coordinates"] = parse_coordinates(data["coordinates"])
    data["uploadedBy"] = current_username() or data.get("uploadedBy")

    if storage is None:
        geofile = Geofile.create(data)
    else:
        stored_name, size = save_upload(
            storage, GEOFILE_EXTENSIONS, current_app.config["GEOFILE_MAX_SIZE"], field="file"
        )
        data["originalName"] = storage.filename
        data["storedFilename"] = stored_name
        data["fileUrl"] = f"/uploads/{stored_name}"
        data["fileSize"] = size
        data["mimeType"] = storage.mimetype
        try:
            geofile = Geofile.create(data)
        except Exception:
            remove_uploads([stored_name])
            raise

    logger.info("Geofile uploaded: %s (%s)", geofile["filename"], geofile["fileType"])
    return jsonify({
        "success": True,
        "geofile": normalize(geofile),
        "message": "Geofile uploaded successfully"
    }), 201


# -----------------------------
# EDIT GEOFILE
# -----------------------------
@geofiles_bp.route("/<geofile_id>", methods=["PUT"])
@handle_errors("Failed to update geofile")
def edit_geofile(geofile_id):
    data = request_data(request)
    if "coordinates" in data:
        data["coordinates"] = parse_coordinates(data["coordinates"])

    if not Geofile.update(geofile_id, data):
        return not_found("Geofile")
    return jsonify({
        "success": True,
        "geofile": normalize(Geofile.find_by_id(geofile_id)),
        "message": "Geofile updated successfully"
    })


@geofiles_bp.route("/<geofile_id>/link-case/<case_id>", methods=["POST", "PUT"])
@handle_errors("Failed to link geofile to case")
def link_case(geofile_id, case_id):
    if not Geofile.link_case(geofile_id, case_id):
        return not_found("Geofile")
    return jsonify({"success": True, "message": "Geofile linked to case successfully"})


@geofiles_bp.route("/<geofile_id>/add-tags", methods=["POST", "PUT"])
@handle_errors("Failed to add tags")
def add_tags(geofile_id):
    tags = parse_tags(request_data(request).get("tags"))
    if not tags:
        return error_response("Tags must be a non-empty array", 400)

    if not Geofile.add_tags(geofile_id, tags):
        return not_found("Geofile")
    return jsonify({
        "success": True,
        "geofile": normalize(Geofile.find_by_id(geofile_id)),
        "message": "Tags added successfully"
    })


# -----------------------------
# DOWNLOADS
# -----------------------------
@geofiles_bp.route("/<geofile_id>/download", methods=["GET"])
@handle_errors("Failed to download geofile")
def download_geofile(geofile_id):
    if not Geofile.increment_download(geofile_id):
        return not_found("Geofile")

    geofile = Geofile.find_by_id(geofile_id)
    download_url = geofile.get("fileUrl")
    if not download_url and geofile.get("storedFilename"):
        download_url = f"/uploads/{geofile['storedFilename']}"

    return jsonify({
        "downloadUrl": download_url,
        "filename": geofile.get("originalName") or geofile.get("filename"),
        "fileType": geofile.get("fileType"),
        "fileSize": geofile.get("fileSize")
    })


@geofiles_bp.route("/<geofile_id>/download", methods=["POST"])
@handle_errors("Failed to record download")
def record_download(geofile_id):
    if not Geofile.increment_download(geofile_id):
        return not_found("Geofile")
    return jsonify({"success": True, "message": "Download recorded successfully"})


# -----------------------------
# DELETE GEOFILE
# -----------------------------
@geofiles_bp.route("/<geofile_id>", methods=["DELETE"])
@handle_errors("Failed to delete geofile")
def delete_geofile(geofile_id):
    if not Geofile.delete(geofile_id):
        return not_found("Geofile")
    logger.info("Geofile deleted: %s", geofile_id)
    return jsonify({"success": True, "message": "Geofile deleted successfully"})
