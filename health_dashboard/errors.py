# health_dashboard/errors.py


class APIError(Exception):
    """Error that maps directly onto a JSON error envelope."""

    status_code = 500

    def __init__(self, message, status_code=None, details=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details

    def to_dict(self):
        payload = {"success": False, "error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class BadRequestError(APIError):
    status_code = 400


class AuthenticationError(APIError):
    status_code = 401


class NotFoundError(APIError):
    status_code = 404


class DatabaseConnectionError(RuntimeError):
    """Raised when the database stays unreachable after every retry."""
