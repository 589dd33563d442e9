# exceptions.py
"""
Domain errors raised by the service layer.

Each error carries the HTTP status it maps to; the handlers installed in
main.py turn them into ``{"success": false, "message": ...}`` responses.
"""


class LandlordProError(Exception):
    """Base class for all errors the API reports to clients."""

    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
        self.message = message


class ValidationError(LandlordProError):
    """Missing or malformed input."""

    status_code = 400


class AuthenticationError(LandlordProError):
    """Missing, invalid or expired credentials."""

    status_code = 401


class AuthorizationError(LandlordProError):
    """Role or ownership mismatch."""

    status_code = 403


class NotFoundError(LandlordProError):
    status_code = 404


class ConflictError(LandlordProError):
    """Unique constraint would be violated (email, code, floor level)."""

    status_code = 409
