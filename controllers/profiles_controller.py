import logging

from flask import Blueprint, request, jsonify

from models.base import serialize
from models.profiles import Profile
from models.users import User
from utils.auth import login_required, current_user_id
from utils.exceptions import NotFoundError
from utils.responses import handle_errors, not_found, request_data

logger = logging.getLogger(__name__)

profiles_bp = Blueprint("profiles", __name__, url_prefix="/api/profiles")
profile_bp = Blueprint("profile", __name__, url_prefix="/api/profile")


# -----------------------------
# PROFILE RECORDS
# -----------------------------
@profiles_bp.route("", methods=["GET"])
@handle_errors("Failed to fetch profiles")
def list_profiles():
    return jsonify({"profiles": [serialize(p) for p in Profile.find_all()]})


@profiles_bp.route("/<profile_id>", methods=["GET"])
@handle_errors("Failed to fetch profile")
def get_profile(profile_id):
    profile = Profile.find_by_id(profile_id)
    if not profile:
        return not_found("Profile")
    return jsonify({"profile": serialize(profile)})


@profiles_bp.route("", methods=["POST"])
@handle_errors("Failed to create profile")
def add_profile():
    data = request_data(request)
    data.pop("password", None)
    profile = Profile.create(data)
    return jsonify({"profile": serialize(profile)}), 201


@profiles_bp.route("/<profile_id>", methods=["PUT"])
@handle_errors("Failed to update profile")
def edit_profile(profile_id):
    if not Profile.update(profile_id, request_data(request)):
        return not_found("Profile")
    return jsonify({"profile": serialize(Profile.find_by_id(profile_id))})


@profiles_bp.route("/<profile_id>", methods=["DELETE"])
@handle_errors("Failed to delete profile")
def delete_profile(profile_id):
    if not Profile.delete(profile_id):
        return not_found("Profile")
    return jsonify({"message": "Profile deleted successfully"})


# -----------------------------
# CURRENT USER'S PROFILE
# -----------------------------
def _current_user():
    return User.find_by_id(current_user_id())


@profile_bp.route("", methods=["GET"])
@login_required
@handle_errors("Failed to fetch profile")
def my_profile():
    user = _current_user()
    if user is None:
        raise NotFoundError("User not found")
    profile = Profile.get_or_create_for_user(user)
    return jsonify({"user": serialize(profile)})


@profile_bp.route("", methods=["PUT"])
@login_required
@handle_errors("Failed to update profile")
def update_my_profile():
    user = _current_user()
    if user is None:
        raise NotFoundError("User not found")
    profile = Profile.update_for_user(user, request_data(request))
    logger.info("Profile updated for %s", user["username"])
    return jsonify({"user": serialize(profile)})
