"""
Input validation shared by the estimator and the deduction applier.

Both entry points normalise their ingredient records here first, so a
malformed recipe is rejected before any arithmetic happens.
"""

from collections.abc import Iterable, Mapping
from decimal import Decimal, InvalidOperation
from typing import Any, List

from .errors import InvalidInputError, InvalidRecipeError
from .types import IngredientStock


def to_decimal(value: Any, *, field: str, index: int = None) -> Decimal:
    """Convert a numeric value to Decimal without float drift."""
    if value is None or isinstance(value, bool):
        raise InvalidInputError(f"{field} must be a number", field=field, index=index)
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, (float, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise InvalidInputError(f"{field} must be a number", field=field, index=index) from None
    else:
        raise InvalidInputError(f"{field} must be a number", field=field, index=index)

    if not result.is_finite():
        raise InvalidInputError(f"{field} must be a finite number", field=field, index=index)
    return result


def normalize_ingredients(ingredients: Iterable[Any]) -> List[IngredientStock]:
    """Coerce records to IngredientStock with Decimal quantities, rejecting bad lines."""
    if ingredients is None:
        raise InvalidRecipeError("Recipe has no ingredients defined")
    if isinstance(ingredients, (str, bytes, Mapping)) or not isinstance(ingredients, Iterable):
        raise InvalidInputError("ingredients must be a list", field="ingredients")

    normalized = []
    for index, raw in enumerate(ingredients):
        if isinstance(raw, IngredientStock):
            line = raw
        elif isinstance(raw, Mapping):
            line = IngredientStock.from_mapping(raw)
        else:
            raise InvalidInputError("Ingredient must be a mapping or IngredientStock", index=index)

        required = to_decimal(line.required_per_unit, field="required_per_unit", index=index)
        available = to_decimal(line.available_stock, field="available_stock", index=index)

        if required <= 0:
            raise InvalidInputError(
                f"Required quantity for {line.name or 'ingredient'} must be greater than 0",
                field="required_per_unit",
                index=index,
            )
        if available < 0:
            raise InvalidInputError(
                f"Available stock for {line.name or 'ingredient'} cannot be negative",
                field="available_stock",
                index=index,
            )

        normalized.append(
            IngredientStock(
                material_id=line.material_id,
                name=line.name,
                unit=line.unit,
                required_per_unit=required,
                available_stock=available,
            )
        )

    if not normalized:
        raise InvalidRecipeError("Recipe has no ingredients defined")
    return normalized


def to_production_quantity(value: Any) -> int:
    """Production quantity is a whole number of units, at least one."""
    if isinstance(value, bool):
        raise InvalidInputError("quantity_produced must be a whole number", field="quantity_produced")
    quantity = to_decimal(value, field="quantity_produced")
    if quantity != quantity.to_integral_value():
        raise InvalidInputError("quantity_produced must be a whole number", field="quantity_produced")
    if quantity < 1:
        raise InvalidInputError("quantity_produced must be at least 1", field="quantity_produced")
    return int(quantity)
