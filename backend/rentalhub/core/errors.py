# rentalhub/core/errors.py
"""
Service-level error taxonomy.

Services raise these; main.py maps them onto HTTP responses.
Messages are safe to show to clients, storage details never go in here.
"""


class ServiceError(Exception):
    status_code: int = 500
    default_message: str = "internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidArgument(ServiceError):
    """Missing or malformed request fields, bad enum values."""

    status_code = 400
    default_message = "bad request"


class Unauthorized(ServiceError):
    status_code = 401
    default_message = "unauthorized"


class NotFound(ServiceError):
    status_code = 404
    default_message = "not found"

    @classmethod
    def of(cls, entity: str) -> "NotFound":
        return cls(f"{entity} not found")


class Conflict(ServiceError):
    """The current state of a resource forbids the requested change."""

    status_code = 409
    default_message = "conflict"


class Internal(ServiceError):
    """Storage or transaction failure. The cause is logged, never returned."""

    status_code = 500
    default_message = "internal server error"
