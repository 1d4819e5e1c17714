import logging

from flask import Blueprint, request, jsonify

from models.users import User
from utils.auth import admin_required
from utils.responses import handle_errors, error_response, not_found, request_data

logger = logging.getLogger(__name__)

users_bp = Blueprint("users", __name__, url_prefix="/api/users")

PROTECTED_USERNAME = "admin"


# -----------------------------
# VIEW USERS
# -----------------------------
@users_bp.route("", methods=["GET"])
@admin_required
@handle_errors("Failed to fetch users")
def list_users():
    users = [User.public(u) for u in User.find_all()]
    return jsonify({"users": users})


@users_bp.route("/<user_id>", methods=["GET"])
@admin_required
@handle_errors("Failed to fetch user")
def get_user(user_id):
    user = User.find_by_id(user_id)
    if not user:
        return not_found("User")
    return jsonify({"user": User.public(user)})


# -----------------------------
# ADD USER
# -----------------------------
@users_bp.route("", methods=["POST"])
@admin_required
@handle_errors("Failed to create user")
def add_user():
    user = User.register(request_data(request))
    logger.info("Admin created user %s", user["username"])
    return jsonify({"user": User.public(user)}), 201


# -----------------------------
# EDIT USER
# -----------------------------
@users_bp.route("/<user_id>", methods=["PUT"])
@admin_required
@handle_errors("Failed to update user")
def edit_user(user_id):
    data = request_data(request)
    user = User.find_by_id(user_id)
    if not user:
        return not_found("User")

    # The built-in admin account cannot be renamed
    if user.get("username") == PROTECTED_USERNAME and data.get("username", PROTECTED_USERNAME) != PROTECTED_USERNAME:
        return error_response("Cannot rename admin account", 400)

    if not User.update(user_id, data):
        return not_found("User")
    return jsonify({"message": "User updated successfully", "user": User.public(User.find_by_id(user_id))})


# -----------------------------
# DELETE USER
# -----------------------------
@users_bp.route("/<user_id>", methods=["DELETE"])
@admin_required
@handle_errors("Failed to delete user")
def delete_user(user_id):
    user = User.find_by_id(user_id)
    if not user:
        return not_found("User")

    if user.get("username") == PROTECTED_USERNAME:
        return error_response("Cannot delete admin account", 400)

    if not User.delete(user_id):
        return not_found("User")

    logger.info("User deleted: %s", user["username"])
    return jsonify({"message": "User deleted successfully"})
