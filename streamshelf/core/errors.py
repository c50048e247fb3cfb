"""
Service errors - one class per failure kind the API surfaces.
"""
from __future__ import annotations


class ServiceError(Exception):
    kind = "internal_error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.kind, "detail": self.message}


class ValidationError(ServiceError):
    """Missing or malformed input. Always caller-fixable."""
    kind = "validation_error"
    status_code = 400


class NotFound(ServiceError):
    kind = "not_found"
    status_code = 404

    def __init__(self, resource: str, message: str | None = None):
        super().__init__(message or f"{resource.capitalize()} not found")
        self.resource = resource

    def to_dict(self) -> dict:
        return {"error": self.kind, "resource": self.resource, "detail": self.message}


class Conflict(ServiceError):
    kind = "conflict"
    status_code = 409

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason

    def to_dict(self) -> dict:
        return {"error": self.kind, "reason": self.reason, "detail": self.message}


class UpstreamFailure(ServiceError):
    """The stream provider rejected or failed a call."""
    kind = "upstream_failure"
    status_code = 502


class InternalError(ServiceError):
    kind = "internal_error"
    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
