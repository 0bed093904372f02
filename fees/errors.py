# School Fee Tracker - error taxonomy (each maps to an HTTP status)


class FeesError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class AuthenticationError(FeesError):
    status_code = 401
    message = "Unauthorized"


class AuthorizationError(FeesError):
    status_code = 403
    message = "Forbidden"


class NotFoundError(FeesError):
    status_code = 404
    message = "Not found"


class ValidationError(FeesError):
    status_code = 400
    message = "Missing required fields"
