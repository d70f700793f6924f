"""
Stock Deduction Applier

Computes per-material stock deltas for a confirmed production quantity.
Every ingredient is validated before any delta is produced: either the whole
batch is coverable or nothing is returned.
"""

from typing import Any, Iterable, List

from ._validation import normalize_ingredients, to_production_quantity
from .errors import InsufficientStockError
from .types import StockDeduction


def apply_production(ingredients: Iterable[Any], quantity_produced: Any) -> List[StockDeduction]:
    """Return (material_id, used_quantity, new_stock) per line, or raise."""
    quantity = to_production_quantity(quantity_produced)
    lines = normalize_ingredients(ingredients)

    shortages = []
    for line in lines:
        needed = line.required_per_unit * quantity
        if line.available_stock < needed:
            shortages.append({
                'material_id': line.material_id,
                'material': line.name,
                'unit': line.unit,
                'required': float(needed),
                'available': float(line.available_stock),
            })

    if shortages:
        raise InsufficientStockError(shortages)

    deductions = []
    for line in lines:
        used = line.required_per_unit * quantity
        deductions.append(
            StockDeduction(
                material_id=line.material_id,
                used_quantity=used,
                new_stock=line.available_stock - used,
            )
        )
    return deductions
