"""Service-layer errors mapped to HTTP responses by kitchenops.resilience."""

from __future__ import annotations

from typing import Any, Dict, Optional


class ServiceError(RuntimeError):
    status_code = 400

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or {}


class NotFoundError(ServiceError):
    status_code = 404


class ConflictError(ServiceError):
    status_code = 409


class ValidationError(ServiceError, ValueError):
    status_code = 422

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(message, errors={field: [message]})
