import logging

from flask import Blueprint, request, jsonify

from models.base import serialize
from models.cases import Case
from utils.auth import current_user_id
from utils.responses import handle_errors, not_found, request_data

logger = logging.getLogger(__name__)

cases_bp = Blueprint("cases", __name__, url_prefix="/api/cases")


@cases_bp.route("", methods=["GET"])
@handle_errors("Failed to fetch cases")
def list_cases():
    query = {}
    if request.args.get("status"):
        query["status"] = request.args["status"]
    if request.args.get("assignedOfficer"):
        query["assignedOfficer"] = request.args["assignedOfficer"]

    cases = [serialize(c) for c in Case.find_all(query)]
    return jsonify({"cases": cases})


@cases_bp.route("/<case_id>", methods=["GET"])
@handle_errors("Failed to fetch case")
def get_case(case_id):
    case = Case.find_by_id(case_id)
    if not case:
        return not_found("Case")
    return jsonify({"case": serialize(case)})


@cases_bp.route("", methods=["POST"])
@handle_errors("Failed to create case")
def add_case():
    data = request_data(request)
    data["createdById"] = current_user_id()

    case = Case.create(data)
    logger.info("Case created: %s", case["caseNumber"])
    return jsonify({"case": serialize(case)}), 201


@cases_bp.route("/<case_id>", methods=["PUT"])
@handle_errors("Failed to update case")
def edit_case(case_id):
    if not Case.update(case_id, request_data(request)):
        return not_found("Case")
    return jsonify({"case": serialize(Case.find_by_id(case_id))})


@cases_bp.route("/<case_id>", methods=["DELETE"])
@handle_errors("Failed to delete case")
def delete_case(case_id):
    # Evidence and geofiles pointing at the case are left as they are
    if not Case.delete(case_id):
        return not_found("Case")
    logger.info("Case deleted: %s", case_id)
    return jsonify({"message": "Case deleted successfully"})
