"""
Error kinds raised by the API.

Every error carries an HTTP status and renders to the JSON envelope:

    {"success": false, "error": "<message>", "errors": [...]}

ApiErrorMiddleware turns them into responses; anything else raised by a
view becomes a generic 500 envelope.
"""


class BlogEngineError(Exception):
    """Base class for errors that map to a client-facing envelope."""

    status_code = 500
    default_message = "Server Error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_response(self):
        return {"success": False, "error": self.message}


class ValidationError(BlogEngineError):
    """Bad or missing input, with per-field detail."""

    status_code = 400
    default_message = "Validation failed"

    def __init__(self, message=None, errors=None):
        super().__init__(message)
        self.errors = list(errors or [])

    @classmethod
    def for_field(cls, field, message):
        return cls(message, errors=[{"field": field, "message": message}])

    def to_response(self):
        data = super().to_response()
        if self.errors:
            data["errors"] = self.errors
        return data


class AuthenticationError(BlogEngineError):
    status_code = 401
    default_message = "Not authorized to access this route"


class AuthorizationError(BlogEngineError):
    status_code = 403
    default_message = "Not allowed to perform this action"


class NotFoundError(BlogEngineError):
    status_code = 404
    default_message = "Resource not found"


class ConflictError(BlogEngineError):
    status_code = 409
    default_message = "Resource already exists"


class UnexpectedError(BlogEngineError):
    """Infrastructure failure. The message never includes internal detail."""
