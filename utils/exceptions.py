"""
Exception types raised by the models and mapped to HTTP responses by the app.
"""
from typing import Optional


class PoliceRecordsError(Exception):
    """Base exception for the records API."""
    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


class ConfigurationError(PoliceRecordsError):
    """Raised when required settings are missing or invalid."""
    pass


class ValidationError(PoliceRecordsError):
    """Raised when request input is missing or malformed."""
    status_code = 400


class ConflictError(PoliceRecordsError):
    """Raised when a unique field is already taken."""
    status_code = 409



class NotFoundError(PoliceRecordsError):
    """Raised when a document does not exist."""
    status_code = 404


class AuthenticationError(PoliceRecordsError):
    """Raised when the caller is not logged in or gave bad credentials."""
    status_code = 401


class AuthorizationError(PoliceRecordsError):
    """Raised when the caller may not perform the action."""
    status_code = 403
