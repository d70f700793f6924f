"""JSON envelopes shared by every API view and error handler.

Success: {"success": true, "message": ..., "data": ...}
Failure: {"success": false, "message": ..., "errors": {...}}
"""

from typing import Any, Dict, List, Optional, Tuple

from flask import Response, jsonify

from .error_messages import ErrorMessages as EM

ResponseTuple = Tuple[Response, int]


class APIResponse:
    @staticmethod
    def success(data: Any = None, message: str = "Success", status_code: int = 200) -> ResponseTuple:
        return jsonify({'success': True, 'message': message, 'data': data}), status_code

    @staticmethod
    def created(data: Any = None, message: str = "Created") -> ResponseTuple:
        return APIResponse.success(data, message=message, status_code=201)

    @staticmethod
    def error(message: str, errors: Optional[Dict] = None, status_code: int = 400) -> ResponseTuple:
        return jsonify({'success': False, 'message': message, 'errors': errors or {}}), status_code

    @staticmethod
    def validation_error(errors: Dict[str, List[str]], message: str = EM.VALIDATION_FAILED) -> ResponseTuple:
        """422 with per-field messages"""
        return APIResponse.error(message, errors=errors, status_code=422)

    @staticmethod
    def not_found(resource: str = "Resource") -> ResponseTuple:
        return APIResponse.error(f"{resource} not found", status_code=404)


__all__ = ['APIResponse']
