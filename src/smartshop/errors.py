"""
Failure taxonomy for the SmartShop data layer.

These exceptions are raised inside the layer (HTTP adapter, contract decoding,
local validation) and converted into ``Result`` failures at the repository
boundary. Callers of the repository never see them raised.
"""

from typing import Optional


class RepositoryError(Exception):
    """Base class for every expected failure of the data layer."""

    def __init__(self, message: str, error_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, error_code={self.error_code!r})"

    def __eq__(self, other: object) -> bool:
        return (
            type(self) is type(other)
            and self.message == other.message
            and self.error_code == other.error_code
        )

    def __hash__(self) -> int:
        return hash((type(self), self.message, self.error_code))


class ValidationError(RepositoryError):
    """Caller input violates a local contract; no request was sent."""


class InvalidTransitionError(ValidationError):
    """A download status change that the state machine does not allow."""


class AuthError(RepositoryError):
    """Missing, expired or rejected credentials. The caller must log in again."""


class NotFoundError(RepositoryError):
    """The backend has no record for the requested id."""


class TransportError(RepositoryError):
    """Connectivity failure, timeout, 5xx or an unparseable body. Safe to retry later."""


class ServerError(RepositoryError):
    """The backend answered with ``success=false``; message and code are shown verbatim."""


class DecodeError(RepositoryError):
    """The response does not match the declared shape."""
