import logging

from flask import Blueprint, request, jsonify

from models.base import serialize
from models.officers import Officer
from utils.responses import handle_errors, not_found, request_data

logger = logging.getLogger(__name__)

officers_bp = Blueprint("officers", __name__, url_prefix="/api/officers")


@officers_bp.route("", methods=["GET"])
@handle_errors("Failed to fetch officers")
def list_officers():
    department = request.args.get("department")
    officers = Officer.find_by_department(department) if department else Officer.find_all()
    return jsonify({"officers": [serialize(o) for o in officers]})


@officers_bp.route("/<officer_id>", methods=["GET"])
@handle_errors("Failed to fetch officer")
def get_officer(officer_id):
    officer = Officer.find_by_id(officer_id)
    if not officer:
        return not_found("Officer")
    return jsonify({"officer": serialize(officer)})


@officers_bp.route("", methods=["POST"])
@handle_errors("Failed to create officer")
def add_officer():
    officer = Officer.create(request_data(request))
    logger.info("Officer created: %s", officer["badgeNumber"])
    return jsonify({"officer": serialize(officer)}), 201


@officers_bp.route("/<officer_id>", methods=["PUT"])
@handle_errors("Failed to update officer")
def edit_officer(officer_id):
    if not Officer.update(officer_id, request_data(request)):
        return not_found("Officer")
    return jsonify({"officer": serialize(Officer.find_by_id(officer_id))})


@officers_bp.route("/<officer_id>", methods=["DELETE"])
@handle_errors("Failed to delete officer")
def delete_officer(officer_id):
    if not Officer.delete(officer_id):
        return not_found("Officer")
    logger.info("Officer deleted: %s", officer_id)
    return jsonify({"message": "Officer deleted successfully"})
