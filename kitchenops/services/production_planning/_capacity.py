"""
Capacity Calculator

Pure function: how many whole units the current stock snapshot can produce,
and which ingredient runs out first.
"""

from typing import Any, Iterable

from ._validation import normalize_ingredients
from .types import CapacityEstimate, IngredientEstimate


def estimate(ingredients: Iterable[Any]) -> CapacityEstimate:
    """
    Compute producible units per ingredient and overall.

    possible_units = floor(available / required) for each line;
    max_producible is the minimum across lines. On ties the first line in
    input order is reported as limiting.
    """
    lines = normalize_ingredients(ingredients)

    per_ingredient = []
    for line in lines:
        # both operands are non-negative so // is floor division
        possible_units = int(line.available_stock // line.required_per_unit)
        per_ingredient.append(
            IngredientEstimate(
                material_id=line.material_id,
                name=line.name,
                unit=line.unit,
                required_per_unit=line.required_per_unit,
                available_stock=line.available_stock,
                possible_units=possible_units,
                sufficient=line.available_stock >= line.required_per_unit,
            )
        )

    max_producible = min(item.possible_units for item in per_ingredient)
    limiting_index = next(
        index for index, item in enumerate(per_ingredient) if item.possible_units == max_producible
    )

    return CapacityEstimate(
        per_ingredient=per_ingredient,
        max_producible=max_producible,
        limiting_index=limiting_index,
    )
