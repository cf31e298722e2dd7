# errors.py
"""Domain errors raised by the services and mapped to HTTP responses."""

from typing import Any, Dict


class BandAllocationError(Exception):
    """Base error carrying the HTTP status and any extra response fields."""

    status_code = 500

    def __init__(self, message: str, **extra: Any):
        super().__init__(message)
        self.message = message
        self.extra: Dict[str, Any] = extra

    def to_dict(self) -> Dict[str, Any]:
        return {"success": False, "error": self.message, **self.extra}


class ValidationError(BandAllocationError):
    status_code = 400


class AuthenticationError(BandAllocationError):
    status_code = 401


class ForbiddenError(BandAllocationError):
    status_code = 403


class NotFoundError(BandAllocationError):
    status_code = 404


class ConflictError(BandAllocationError):
    """Uniqueness violation on a band number or a username."""

    status_code = 409


class StoreError(BandAllocationError):
    status_code = 500
