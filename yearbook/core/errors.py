"""Typed service errors. The API layer maps them to HTTP responses."""


class YearbookError(Exception):
    """Base error for every failure surfaced by the services."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class BadRequestError(YearbookError):
    """Missing or malformed input."""

    status_code = 400


class UnauthorizedError(YearbookError):
    """
    Missing, invalid or expired credential.

    token_expired is set only for a validly signed access token past its exp,
    so clients can call the refresh endpoint instead of forcing a new login.
    """

    status_code = 401

    def __init__(self, message: str, token_expired: bool = False) -> None:
        self.token_expired = token_expired
        super().__init__(message)


class ForbiddenError(YearbookError):
    """Authenticated, but the principal lacks the role or ownership required."""

    status_code = 403


class NotFoundError(YearbookError):
    status_code = 404


class ConflictError(YearbookError):
    """Uniqueness violation."""

    status_code = 409


class InternalError(YearbookError):
    """Store failure; the API answers with a generic message and never the cause."""

    status_code = 500
