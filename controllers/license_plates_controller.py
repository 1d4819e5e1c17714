import logging

from flask import Blueprint, request, jsonify

from models.base import serialize
from models.license_plates import LicensePlate
from utils.auth import current_user_id
from utils.responses import handle_errors, not_found, request_data

logger = logging.getLogger(__name__)

license_plates_bp = Blueprint("license_plates", __name__, url_prefix="/api/license-plates")


@license_plates_bp.route("", methods=["GET"])
@handle_errors("Failed to fetch license plates")
def list_plates():
    status = request.args.get("status")
    plates = LicensePlate.find_by_status(status) if status else LicensePlate.find_all()
    return jsonify({"licensePlates": [serialize(p) for p in plates]})


@license_plates_bp.route("/search/<plate_number>", methods=["GET"])
@handle_errors("Failed to search license plate")
def search_plate(plate_number):
    plate = LicensePlate.find_by_plate_number(plate_number)
    if not plate:
        return not_found("License plate")
    return jsonify({"licensePlate": serialize(plate)})


@license_plates_bp.route("/<plate_id>", methods=["GET"])
@handle_errors("Failed to fetch license plate")
def get_plate(plate_id):
    plate = LicensePlate.find_by_id(plate_id)
    if not plate:
        return not_found("License plate")
    return jsonify({"licensePlate": serialize(plate)})


@license_plates_bp.route("", methods=["POST"])
@handle_errors("Failed to create license plate")
def add_plate():
    data = request_data(request)
    data["addedById"] = current_user_id()

    plate = LicensePlate.create(data)
    logger.info("License plate created: %s", plate["plateNumber"])
    return jsonify({"licensePlate": serialize(plate)}), 201


@license_plates_bp.route("/<plate_id>", methods=["PUT"])
@handle_errors("Failed to update license plate")
def edit_plate(plate_id):
    if not LicensePlate.update(plate_id, request_data(request)):
        return not_found("License plate")
    return jsonify({"licensePlate": serialize(LicensePlate.find_by_id(plate_id))})


@license_plates_bp.route("/<plate_id>", methods=["DELETE"])
@handle_errors("Failed to delete license plate")
def delete_plate(plate_id):
    if not LicensePlate.delete(plate_id):
        return not_found("License plate")
    logger.info("License plate deleted: %s", plate_id)
    return jsonify({"message": "License plate deleted successfully"})
