from functools import wraps
from flask import session, jsonify

# This decorator makes sure that only logged-in users can access protected routes
def login_required(view_function):
    @wraps(view_function)
    def decorated_function(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"message": "Authentication required"}), 401
        return view_function(*args, **kwargs)
    return decorated_function


# Admin-only routes: the role is cached in the session at login
def admin_required(view_function):
    @wraps(view_function)
    def decorated_function(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"message": "Authentication required"}), 401
        user = session.get("user") or {}
        if user.get("role") != "admin":
            return jsonify({"message": "Admin access required"}), 403
        return view_function(*args, **kwargs)
    return decorated_function


def current_user_id():
    return session.get("user_id")


def login_user(user):
    """Store the id and a cached copy of the public user fields in the session."""
    user_id = str(user["_id"])
    session.clear()
    session.permanent = True
    session["user_id"] = user_id
    session["user"] = {
        "id": user_id,
        "username": user.get("username"),
        "role": user.get("role", "user"),
        "firstName": user.get("firstName"),
        "lastName": user.get("lastName"),
    }


def logout_user():
    session.clear()
    return jsonify({"message": "Logged out successfully"})


def current_username():
    return (session.get("user") or {}).get("username")
