import logging
from functools import wraps

from flask import jsonify
from pymongo.errors import DuplicateKeyError
from werkzeug.exceptions import HTTPException

from utils.exceptions import PoliceRecordsError

logger = logging.getLogger(__name__)


def error_response(message, status_code=400, **extra):
    body = {"message": message}
    body.update(extra)
    return jsonify(body), status_code


def not_found(what):
    return error_response(f"{what} not found", 404)


def server_error(message, exc):
    """Log the failure and forward the underlying error message to the client."""
    logger.exception("%s: %s", message, exc)
    return error_response(message, 500, error=str(exc))


def request_data(request):
    """JSON body, or form fields for multipart/urlencoded requests."""
    data = request.get_json(silent=True)
    if data is None:
        data = request.form.to_dict() if request.form else {}
    if not isinstance(data, dict):
        return {}
    return data


def duplicate_message(exc):
    """'<field> already exists' from a DuplicateKeyError when the key is known."""
    details = getattr(exc, "details", None) or {}
    pattern = details.get("keyPattern") or details.get("keyValue") or {}
    field = next(iter(pattern), None)
    return f"{field or 'Record'} already exists"


def handle_errors(failure_message):
    """
    Route decorator: known errors become their JSON status, anything else
    is logged and answered with a 500 carrying ``failure_message``.
    """
    def decorator(view_function):
        @wraps(view_function)
        def decorated_function(*args, **kwargs):
            try:
                return view_function(*args, **kwargs)
            except PoliceRecordsError as e:
                return error_response(e.message, e.status_code)
            except DuplicateKeyError as e:
                logger.warning("%s: duplicate key %s", failure_message, e)
                return error_response(duplicate_message(e), 409)
            except HTTPException:
                raise
            except Exception as e:
                return server_error(failure_message, e)
        return decorated_function
    return decorator
