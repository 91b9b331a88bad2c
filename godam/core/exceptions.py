"""
Domain exceptions raised by the service layer.

Each carries the HTTP status it maps to; ``godam.common.error_handlers``
renders them as ``{"success": false, "error": message}``. Datastore
failures surface as ``DatastoreError`` with a fixed message so a client
never learns which step of a write failed.
"""


class GodamError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(GodamError):
    """Missing or malformed input, detected before any write."""
    status_code = 400
    default_message = "Missing required fields"


class NotFound(GodamError):
    status_code = 404
    default_message = "Resource not found"


class Conflict(GodamError):
    """Business-rule conflict such as a duplicate attendance mark."""
    status_code = 400
    default_message = "Conflicting request"


class DatastoreError(GodamError):
    status_code = 500
