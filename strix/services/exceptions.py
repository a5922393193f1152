"""Domain exceptions for the service layer.

Each error carries the HTTP status it is rendered with; the exception
handlers in ``strix.main`` turn them into the error envelope. Nothing here
depends on FastAPI.
"""


class StrixError(Exception):
    """Base for every error the services report to callers."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class BadRequestError(StrixError):
    """Missing or malformed input, invalid dates."""

    status_code = 400


class InvalidCredentialsError(StrixError):
    """Unknown email or wrong password."""

    status_code = 400

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class ConflictError(StrixError):
    """Username or email already taken."""

    status_code = 400


class UnauthenticatedError(StrixError):
    """No bearer token supplied."""

    status_code = 401


class InactiveUserError(StrixError):
    """Account exists but is disabled."""

    status_code = 401

    def __init__(self, message: str = "User is inactive") -> None:
        super().__init__(message)


class ForbiddenError(StrixError):
    """Invalid/expired token, or the caller may not touch the resource."""

    status_code = 403


class NotFoundError(StrixError):
    """Entity does not exist."""

    status_code = 404


class StoreError(StrixError):
    """The backing store failed (connectivity, constraint violation...)."""

    status_code = 500


class TokenVerificationError(Exception):
    """A bearer token failed signature, expiry or structure checks.

    Raised by the token service only; the auth gate translates it into
    ``ForbiddenError``.
    """
