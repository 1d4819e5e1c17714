import logging

from flask import Blueprint, request, jsonify, current_app

from models.users import User, validate_password
from models.password_reset import PasswordResetToken
from utils.auth import login_user, logout_user, current_user_id
from utils.exceptions import AuthenticationError, AuthorizationError, NotFoundError
from utils.responses import handle_errors, error_response, request_data

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


# -----------------------------
# LOGIN
# -----------------------------
@auth_bp.route("/login", methods=["POST"])
@handle_errors("Login failed")
def login():
    data = request_data(request)
    username = data.get("username") or ""
    password = data.get("password") or ""

    if not isinstance(username, str) or not isinstance(password, str):
        return error_response("Username and password must be strings", 400)

    username = username.strip()
    if not username or not password:
        return error_response("Username and password are required", 400)

    user = User.verify_password(username, password)
    if not user:
        logger.info("Failed login for user %s", username)
        raise AuthenticationError("Invalid credentials")

    if not user.get("isActive", True):
        logger.info("Login refused, account deactivated: %s", username)
        raise AuthorizationError("Account is deactivated")

    user["lastLoginAt"] = User.touch_last_login(user["_id"])
    login_user(user)

    logger.info("Login successful for user %s", username)
    return jsonify({"user": User.public(user)})


# -----------------------------
# REGISTER
# -----------------------------
@auth_bp.route("/register", methods=["POST"])
@handle_errors("Registration failed")
def register():
    data = request_data(request)
    if not data:
        return jsonify({"success": False, "message": "Request body is empty"}), 400

    # Self-registration never grants admin
    data["role"] = "user"
    data.pop("isActive", None)

    user = User.register(data)
    logger.info("User registered: %s", user["username"])

    return jsonify({
        "success": True,
        "message": "User registered successfully",
        "user": User.public(user)
    }), 201


# -----------------------------
# LOGOUT
# -----------------------------
@auth_bp.route("/logout", methods=["POST"])
def logout():
    return logout_user()


# -----------------------------
# CURRENT USER
# -----------------------------
@auth_bp.route("/me", methods=["GET"])
@handle_errors("Failed to fetch current user")
def me():
    user_id = current_user_id()
    if not user_id:
        return error_response("Not authenticated", 401)

    user = User.find_by_id(user_id)
    if not user:
        raise NotFoundError("User not found")

    return jsonify({"user": User.public(user)})


# -----------------------------
# FORGOT / RESET PASSWORD
# -----------------------------
@auth_bp.route("/forgot-password", methods=["POST"])
@handle_errors("Failed to create reset token")
def forgot_password():
    data = request_data(request)
    username = (data.get("username") or "").strip()
    if not username:
        return error_response("Username is required", 400)

    user = User.find_by_username(username)
    if not user:
        # Same answer whether or not the account exists
        return jsonify({"message": "If the username exists, a reset token has been generated"})

    token = PasswordResetToken.create(user["_id"])
    logger.info("Password reset token generated for %s", username)

    body = {"message": "If the username exists, a reset token has been generated"}
    if current_app.config.get("EXPOSE_RESET_TOKEN"):
        body["token"] = token
    return jsonify(body)


@auth_bp.route("/reset-password", methods=["POST"])
@handle_errors("Failed to reset password")
def reset_password():
    data = request_data(request)
    token = data.get("token")
    password = data.get("password")

    if not token or not password:
        return error_response("Token and password are required", 400)
    validate_password(password)

    record = PasswordResetToken.find_valid(token)
    if not record:
        return error_response("Invalid or expired token", 400)

    if not User.set_password(record["userId"], password):
        raise NotFoundError("User not found")
    PasswordResetToken.delete(token)

    logger.info("Password reset for user id %s", record["userId"])
    return jsonify({"message": "Password updated successfully"})
