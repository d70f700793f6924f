"""Typed field readers for JSON/form payloads.

Each reader raises ValidationError naming the offending field, so routes can
stay free of parsing branches.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from flask import request

from ..services.errors import ValidationError

_MISSING = object()

# matches the Numeric(14, 3) quantity columns
QUANTITY_PLACES = 3


def request_payload() -> dict:
    """Smart request content handling"""
    if request.is_json:
        data = request.get_json(silent=True)
        if data is None:
            raise ValidationError("Request body must be valid JSON")
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data
    if request.form:
        return request.form.to_dict()
    return {}


def text(data: Mapping[str, Any], field: str, *, required: bool = False, max_length: int = None,
         default: Optional[str] = None) -> Optional[str]:
    value = data.get(field, _MISSING)
    if value is _MISSING or value is None:
        if required:
            raise ValidationError.for_field(field, f"{field} is required")
        return default
    value = str(value).strip()
    if not value:
        if required:
            raise ValidationError.for_field(field, f"{field} is required")
        return default
    if max_length and len(value) > max_length:
        raise ValidationError.for_field(field, f"{field} must be at most {max_length} characters")
    return value


def decimal(data: Mapping[str, Any], field: str, *, required: bool = False, default: Any = None,
            minimum: Optional[Decimal] = None, positive: bool = False,
            places: Optional[int] = None) -> Optional[Decimal]:
    value = data.get(field, _MISSING)
    if value is _MISSING or value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise ValidationError.for_field(field, f"{field} is required")
        return None if default is None else Decimal(str(default))
    if isinstance(value, bool):
        raise ValidationError.for_field(field, f"{field} must be a number")
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError.for_field(field, f"{field} must be a number") from None
    if not result.is_finite():
        raise ValidationError.for_field(field, f"{field} must be a number")
    if places is not None and result.normalize().as_tuple().exponent < -places:
        raise ValidationError.for_field(field, f"{field} allows at most {places} decimal places")
    if positive and result <= 0:
        raise ValidationError.for_field(field, f"{field} must be greater than 0")
    if minimum is not None and result < minimum:
        raise ValidationError.for_field(field, f"{field} cannot be less than {minimum}")
    return result


def integer(data: Mapping[str, Any], field: str, *, required: bool = False, default: Optional[int] = None,
            minimum: Optional[int] = None) -> Optional[int]:
    value = data.get(field, _MISSING)
    if value is _MISSING or value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise ValidationError.for_field(field, f"{field} is required")
        return default
    if isinstance(value, bool):
        raise ValidationError.for_field(field, f"{field} must be a whole number")
    try:
        as_decimal = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError.for_field(field, f"{field} must be a whole number") from None
    if not as_decimal.is_finite() or as_decimal != as_decimal.to_integral_value():
        raise ValidationError.for_field(field, f"{field} must be a whole number")
    result = int(as_decimal)
    if minimum is not None and result < minimum:
        raise ValidationError.for_field(field, f"{field} must be at least {minimum}")
    return result


def iso_date(data: Mapping[str, Any], field: str, *, required: bool = False,
             default: Optional[date] = None) -> Optional[date]:
    value = data.get(field, _MISSING)
    if value is _MISSING or value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise ValidationError.for_field(field, f"{field} is required")
        return default
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        raise ValidationError.for_field(field, f"{field} must be a date in YYYY-MM-DD format") from None


def choice(data: Mapping[str, Any], field: str, choices, *, default: Optional[str] = None) -> Optional[str]:
    value = text(data, field, default=default)
    if value is None:
        return None
    value = value.lower()
    if value not in choices:
        raise ValidationError.for_field(field, f"{field} must be one of: {', '.join(choices)}")
    return value


def item_list(data: Mapping[str, Any], field: str, *, required: bool = False, allow_empty: bool = False) -> list:
    """List of objects; allow_empty keeps [] for callers that report it themselves."""
    value = data.get(field)
    if value is None:
        if required:
            raise ValidationError.for_field(field, f"{field} is required")
        return []
    if not isinstance(value, list) or not all(isinstance(entry, Mapping) for entry in value):
        raise ValidationError.for_field(field, f"{field} must be a list of objects")
    if required and not value and not allow_empty:
        raise ValidationError.for_field(field, f"At least one entry in {field} is required")
    return value
