"""
errors.py — FinTrack exception hierarchy
Validation failures are raised before any gateway call; gateway failures are
surfaced unchanged; a missing session is its own error.
"""


class FinTrackError(Exception):
    """Base class for every error raised by FinTrack."""


class ValidationError(FinTrackError):
    """Input constraints were violated. Nothing was sent to the gateway."""

    def __init__(self, errors: list[str] | str):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class GatewayError(FinTrackError):
    """The remote data gateway reported a failure (network, constraint, not found...)."""

    def __init__(self, message: str, status_code: int | None = None, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code


class NotAuthenticatedError(FinTrackError):
    """An operation that needs a user was attempted without a session."""

    def __init__(self, message: str = "User not authenticated"):
        super().__init__(message)
