"""Global resilience and error-handler registration.

Synopsis:
Registers teardown and error handlers for database rollback safety, JSON
maintenance fallbacks, CSRF failures, and the domain/service error families.

Glossary:
- Resilience handler: Global request teardown/error behavior for known failures.
- Domain error: ProductionPlanningError raised by capacity/deduction logic.
- Service error: ServiceError raised by CRUD services (404/409/422).
"""

from __future__ import annotations

import logging

from flask import request
from flask_wtf.csrf import CSRFError
from sqlalchemy.exc import DBAPIError, OperationalError
from werkzeug.exceptions import HTTPException

from .extensions import db
from .services.errors import ServiceError, ValidationError
from .services.production_planning.errors import InsufficientStockError, ProductionPlanningError
from .utils.api_responses import APIResponse
from .utils.error_messages import ErrorMessages as EM

logger = logging.getLogger(__name__)


def _safe_rollback() -> None:
    try:
        db.session.rollback()
    except Exception as exc:
        logger.warning("Session rollback failed: %s", exc)


def register_resilience_handlers(app) -> None:
    """Install global DB rollback plus JSON handlers for known failures."""

    @app.teardown_request
    def _rollback_on_error(exc):
        if exc is not None:
            _safe_rollback()

    @app.errorhandler(OperationalError)
    @app.errorhandler(DBAPIError)
    def _db_error_handler(error):
        _safe_rollback()
        logger.error("Database error on %s %s: %s", request.method, request.path, error)
        return APIResponse.error(EM.SERVICE_UNAVAILABLE, status_code=503)

    @app.errorhandler(CSRFError)
    def _csrf_error_handler(err: CSRFError):
        """Log diagnostics so clients can see *why* CSRF failed."""
        details = {
            "path": request.path,
            "endpoint": request.endpoint,
            "remote_addr": request.headers.get("X-Forwarded-For", request.remote_addr),
            "user_agent": request.user_agent.string if request.user_agent else None,
            "reason": err.description,
        }
        logger.warning("CSRF validation failed: %s", details)
        return APIResponse.error(
            EM.CSRF_FAILED,
            errors={"error": "csrf_validation_failed", "reason": err.description},
            status_code=400,
        )

    @app.errorhandler(ProductionPlanningError)
    def _production_error_handler(err: ProductionPlanningError):
        _safe_rollback()
        payload = err.to_dict()
        if isinstance(err, InsufficientStockError):
            logger.info("Production rejected for insufficient stock: %s", err.message)
        return APIResponse.error(err.message, errors=payload, status_code=err.status_code)

    @app.errorhandler(ServiceError)
    def _service_error_handler(err: ServiceError):
        _safe_rollback()
        if isinstance(err, ValidationError):
            return APIResponse.validation_error(err.errors, message=err.message)
        return APIResponse.error(err.message, errors=err.errors, status_code=err.status_code)

    @app.errorhandler(HTTPException)
    def _http_error_handler(err: HTTPException):
        if err.code == 429:
            return APIResponse.error(EM.RATE_LIMITED, status_code=429)
        if err.code == 404:
            return APIResponse.not_found("Endpoint")
        if err.code == 405:
            return APIResponse.error(EM.METHOD_NOT_ALLOWED, status_code=405)
        return APIResponse.error(err.description or err.name, status_code=err.code or 500)

    @app.errorhandler(Exception)
    def _unhandled_error_handler(err: Exception):
        _safe_rollback()
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return APIResponse.error(EM.INTERNAL_ERROR, status_code=500)
