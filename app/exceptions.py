"""Error kinds raised by services and mapped to HTTP responses."""


class ApiError(Exception):
    """Base for every failure surfaced to API callers."""

    status_code = 500
    default_message = 'Something went wrong'

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidArgument(ApiError):
    """Malformed pagination, identifiers or request body."""

    status_code = 400
    default_message = 'Invalid request'


class Unauthorized(ApiError):
    """Missing, invalid or revoked credential."""

    status_code = 401
    default_message = 'Authentication required'


class NotFound(ApiError):
    """Missing resource, or one the caller does not own."""

    status_code = 404
    default_message = 'Resource not found'


class Conflict(ApiError):
    """Uniqueness violation."""

    status_code = 409
    default_message = 'Resource already exists'


class Internal(ApiError):
    """Unexpected datastore or server failure."""

    status_code = 500
