import logging

from flask import Blueprint, request, jsonify

from models.base import serialize, parse_date
from models.ob_entries import OBEntry
from utils.auth import current_user_id
from utils.responses import handle_errors, not_found, request_data

logger = logging.getLogger(__name__)

ob_entries_bp = Blueprint("ob_entries", __name__, url_prefix="/api/ob-entries")


@ob_entries_bp.route("", methods=["GET"])
@handle_errors("Failed to fetch OB entries")
def list_entries():
    entries = OBEntry.find_by_date_range(
        start=parse_date(request.args.get("dateFrom"), "dateFrom"),
        end=parse_date(request.args.get("dateTo"), "dateTo"),
        status=request.args.get("status")
    )
    return jsonify({"obEntries": [serialize(e) for e in entries]})


@ob_entries_bp.route("/<entry_id>", methods=["GET"])
@handle_errors("Failed to fetch OB entry")
def get_entry(entry_id):
    entry = OBEntry.find_by_id(entry_id)
    if not entry:
        return not_found("OB entry")
    return jsonify({"obEntry": serialize(entry)})


@ob_entries_bp.route("", methods=["POST"])
@handle_errors("Failed to create OB entry")
def add_entry():
    data = request_data(request)
    data["recordingOfficerId"] = current_user_id()

    entry = OBEntry.create(data)
    logger.info("OB entry created: %s", entry["obNumber"])
    return jsonify({"obEntry": serialize(entry)}), 201


@ob_entries_bp.route("/<entry_id>", methods=["PUT"])
@handle_errors("Failed to update OB entry")
def edit_entry(entry_id):
    if not OBEntry.update(entry_id, request_data(request)):
        return not_found("OB entry")
    return jsonify({"obEntry": serialize(OBEntry.find_by_id(entry_id))})


@ob_entries_bp.route("/<entry_id>", methods=["DELETE"])
@handle_errors("Failed to delete OB entry")
def delete_entry(entry_id):
    if not OBEntry.delete(entry_id):
        return not_found("OB entry")
    logger.info("OB entry deleted: %s", entry_id)
    return jsonify({"message": "OB entry deleted successfully"})
