import logging

from flask import Blueprint, request, jsonify

from models.base import serialize
from models.vehicles import PoliceVehicle
from utils.responses import handle_errors, error_response, not_found, request_data

logger = logging.getLogger(__name__)

vehicles_bp = Blueprint("vehicles", __name__, url_prefix="/api/police-vehicles")


@vehicles_bp.route("", methods=["GET"])
@handle_errors("Failed to fetch police vehicles")
def list_vehicles():
    status = request.args.get("status")
    vehicles = PoliceVehicle.find_by_status(status) if status else PoliceVehicle.find_all()
    return jsonify({"vehicles": [serialize(v) for v in vehicles]})


@vehicles_bp.route("/<vehicle_id>", methods=["GET"])
@handle_errors("Failed to fetch police vehicle")
def get_vehicle(vehicle_id):
    vehicle = PoliceVehicle.find_by_id(vehicle_id)
    if not vehicle:
        return not_found("Police vehicle")
    return jsonify({"vehicle": serialize(vehicle)})


@vehicles_bp.route("", methods=["POST"])
@handle_errors("Failed to create police vehicle")
def add_vehicle():
    vehicle = PoliceVehicle.create(request_data(request))
    logger.info("Police vehicle created: %s", vehicle["vehicleId"])
    return jsonify({"vehicle": serialize(vehicle)}), 201


@vehicles_bp.route("/<vehicle_id>", methods=["PUT"])
@handle_errors("Failed to update police vehicle")
def edit_vehicle(vehicle_id):
    if not PoliceVehicle.update(vehicle_id, request_data(request)):
        return not_found("Police vehicle")
    return jsonify({"vehicle": serialize(PoliceVehicle.find_by_id(vehicle_id))})


# -----------------------------
# LIVE TRACKING
# -----------------------------
@vehicles_bp.route("/<vehicle_id>/location", methods=["PATCH"])
@handle_errors("Failed to update vehicle location")
def update_location(vehicle_id):
    location = request_data(request).get("location")
    if location is None:
        return error_response("location is required", 400)
    if not PoliceVehicle.update_location(vehicle_id, location):
        return not_found("Police vehicle")
    return jsonify({"vehicle": serialize(PoliceVehicle.find_by_id(vehicle_id))})


@vehicles_bp.route("/<vehicle_id>/status", methods=["PATCH"])
@handle_errors("Failed to update vehicle status")
def update_status(vehicle_id):
    status = request_data(request).get("status")
    if not status:
        return error_response("status is required", 400)
    if not PoliceVehicle.update_status(vehicle_id, status):
        return not_found("Police vehicle")
    logger.info("Police vehicle %s is now %s", vehicle_id, status)
    return jsonify({"vehicle": serialize(PoliceVehicle.find_by_id(vehicle_id))})


@vehicles_bp.route("/<vehicle_id>", methods=["DELETE"])
@handle_errors("Failed to delete police vehicle")
def delete_vehicle(vehicle_id):
    if not PoliceVehicle.delete(vehicle_id):
        return not_found("Police vehicle")
    logger.info("Police vehicle deleted: %s", vehicle_id)
    return jsonify({"message": "Police vehicle deleted successfully"})
