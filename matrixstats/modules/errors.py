"""
Error taxonomy shared by all Matrixstats modules.

Every failure a caller can provoke is a ServiceError subclass carrying the
HTTP status and the user-facing message. Anything else that escapes a
request handler is treated as an InternalError at the boundary.
"""


class ServiceError(Exception):
    """Base class for request-level failures."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.message)
        self.detail = detail or self.message


class InvalidCredentials(ServiceError):
    """Identifier/secret pair did not match a configured credential."""

    status_code = 401
    message = "Invalid credentials"


class MissingToken(ServiceError):
    """No bearer token was presented."""

    status_code = 401
    message = "Authorization token required"


class InvalidToken(ServiceError):
    """Token signature or structure did not verify."""

    status_code = 403
    message = "Invalid token"


class ExpiredToken(InvalidToken):
    """Token verified but its expiry has elapsed."""


class InvalidBatch(ServiceError):
    """Statistics request did not carry a usable list of matrices."""

    status_code = 400
    message = "No valid matrices were provided"


class InternalError(ServiceError):
    """Unexpected failure while handling a request."""

    status_code = 500
    message = "Internal server error"
