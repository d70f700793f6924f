"""
Production Planning Errors

Every failure raised by the capacity estimator and the stock deduction
applier derives from ProductionPlanningError so the HTTP layer can map the
whole family in one handler.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class ProductionPlanningError(RuntimeError):
    code = "production_planning_error"
    status_code = 400

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.code,
            "message": self.message,
            **self.details,
        }


class InvalidRecipeError(ProductionPlanningError):
    """Recipe has no ingredients to estimate against."""
    code = "invalid_recipe"
    status_code = 422


class InvalidInputError(ProductionPlanningError):
    """Malformed quantity: non-numeric, non-positive requirement, negative stock."""
    code = "invalid_input"
    status_code = 422

    def __init__(self, message: str, *, field: Optional[str] = None, index: Optional[int] = None):
        details: Dict[str, Any] = {}
        if field is not None:
            details["field"] = field
        if index is not None:
            details["index"] = index
        super().__init__(message, details=details)
        self.field = field
        self.index = index


class InsufficientStockError(ProductionPlanningError):
    """At least one ingredient cannot cover the requested production quantity."""
    code = "insufficient_stock"
    status_code = 409

    def __init__(self, shortages: List[Dict[str, Any]], message: Optional[str] = None):
        self.shortages = shortages
        if message is None:
            message = "; ".join(_describe_shortage(s) for s in shortages)
        super().__init__(message, details={"shortages": shortages})

    @property
    def material(self):
        """First failing material, for callers that surface a single line."""
        return self.shortages[0]["material"] if self.shortages else None


def _describe_shortage(shortage: Dict[str, Any]) -> str:
    unit = shortage.get("unit") or ""
    required = f"{shortage['required']} {unit}".strip()
    available = f"{shortage['available']} {unit}".strip()
    return f"Insufficient stock for {shortage['material']}. Required: {required}, Available: {available}"
