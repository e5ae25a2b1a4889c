"""
Domain errors raised by the authenticator, the decision function and the
entity managers. Each carries the HTTP status it is rendered with by the
exception handler registered in `main.create_app`.
"""
from typing import Optional


class TaskManagementError(Exception):
    """Base class for expected, caller-recoverable failures."""

    status_code = 500
    default_detail = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class InvalidRequest(TaskManagementError):
    """Malformed or missing input. The detail explains what is wrong."""

    status_code = 400
    default_detail = "Invalid request"


class Unauthorized(TaskManagementError):
    """No usable credentials. The detail never says which part failed."""

    status_code = 401
    default_detail = "Unauthorized"

    def __init__(self):
        super().__init__(self.default_detail)


class Forbidden(TaskManagementError):
    """The current user is known but not allowed to perform the operation."""

    status_code = 403
    default_detail = "Forbidden"

    def __init__(self):
        super().__init__(self.default_detail)


class NotFound(TaskManagementError):
    status_code = 404
    default_detail = "Not found"


class Conflict(TaskManagementError):
    """The write would break a uniqueness or referential rule."""

    status_code = 409
    default_detail = "Conflict"


class StorageError(TaskManagementError):
    """A database write failed and was rolled back."""

    status_code = 500
    default_detail = "Database error"

    def __init__(self):
        super().__init__(self.default_detail)
