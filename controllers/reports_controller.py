import logging

from flask import Blueprint, request, jsonify

from models.base import serialize
from models.reports import Report
from utils.auth import current_username
from utils.responses import handle_errors, not_found, request_data

logger = logging.getLogger(__name__)

reports_bp = Blueprint("reports", __name__, url_prefix="/api/reports")


@reports_bp.route("", methods=["GET"])
@handle_errors("Failed to fetch reports")
def list_reports():
    query = {}
    for field in ("status", "type", "priority"):
        if request.args.get(field):
            query[field] = request.args[field]
    return jsonify({"reports": [serialize(r) for r in Report.find_all(query)]})


@reports_bp.route("/<report_id>", methods=["GET"])
@handle_errors("Failed to fetch report")
def get_report(report_id):
    report = Report.find_by_id(report_id)
    if not report:
        return not_found("Report")
    return jsonify({"report": serialize(report)})


@reports_bp.route("", methods=["POST"])
@handle_errors("Failed to create report")
def add_report():
    data = request_data(request)
    data["requestedBy"] = current_username() or data.get("requestedBy")

    report = Report.create(data)
    logger.info("Report created: %s", report["reportNumber"])
    return jsonify({"report": serialize(report)}), 201


@reports_bp.route("/<report_id>", methods=["PUT"])
@handle_errors("Failed to update report")
def edit_report(report_id):
    if not Report.update(report_id, request_data(request)):
        return not_found("Report")
    return jsonify({"report": serialize(Report.find_by_id(report_id))})


@reports_bp.route("/<report_id>", methods=["DELETE"])
@handle_errors("Failed to delete report")
def delete_report(report_id):
    if not Report.delete(report_id):
        return not_found("Report")
    logger.info("Report deleted: %s", report_id)
    return jsonify({"message": "Report deleted successfully"})
