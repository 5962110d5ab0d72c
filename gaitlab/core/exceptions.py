"""
Custom exceptions for the gait data backend.

All custom exceptions are defined here for easy discovery and consistent
error handling. Each one carries a human-readable message, a machine-usable
reason code and the HTTP status the API layer answers with.
"""
from typing import Optional


class GaitLabError(Exception):
    """Base exception for all gait data backend errors."""
    reason = "error"
    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        """Convert error to the JSON body returned to clients"""
        body = {"message": self.message, "reason": self.reason}
        if self.details:
            body["errorDetails"] = self.details
        return body


class ValidationError(GaitLabError):
    """Raised when required input is missing or malformed."""
    reason = "validation"
    status_code = 400


class ConflictError(GaitLabError):
    """Raised when a session name is already taken."""
    reason = "conflict"
    status_code = 409


class NotFoundError(GaitLabError):
    """Raised when a session name is unknown."""
    reason = "not_found"
    status_code = 404


class IncompleteStateError(GaitLabError):
    """Raised when a closed window is required but the session is still open.

    Not a fault: the session is in a valid transitional state.
    """
    reason = "incomplete"
    status_code = 202

    def __init__(self, message: str, start_time: Optional[str] = None):
        super().__init__(message)
        self.start_time = start_time


class StoreError(GaitLabError):
    """Raised when the backing store reports a failure without a recognized cause."""
    reason = "store_error"
    status_code = 500


class UnexpectedError(GaitLabError):
    """Raised for any other fault propagating out of an operation."""
    reason = "unexpected"
    status_code = 500
