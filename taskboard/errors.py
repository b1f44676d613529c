"""Error kinds raised by the resource handlers.

Each kind carries the HTTP status it maps to and a message that is safe to
show to the client. ``main`` renders them as ``{"error": message}``.
"""


class ApiError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ApiError):
    """Missing, malformed or referentially invalid input."""

    status_code = 400


class NotFoundError(ApiError):
    """No row exists for the requested id."""

    status_code = 404


class ConflictError(ApiError):
    """Unique-constraint violation (duplicate email).

    Reported as 400 to keep the existing client contract.
    """

    status_code = 400


class InternalError(ApiError):
    status_code = 500

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message)
