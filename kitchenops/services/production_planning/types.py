"""
Production Planning Types

Core data structures for capacity estimation and stock deduction.
Quantities are Decimal throughout; conversion to float happens only in
to_dict() for API responses.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional

from ...utils.serialization import round_half_up


@dataclass(frozen=True)
class IngredientStock:
    """One recipe line joined with the current stock of its raw material."""
    material_id: Optional[int]
    name: str
    unit: str
    required_per_unit: Any
    available_stock: Any

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "IngredientStock":
        """Accept either the long field names or the short required/available aliases."""
        return cls(
            material_id=data.get("material_id"),
            name=data.get("name") or "",
            unit=data.get("unit") or "",
            required_per_unit=data.get("required_per_unit", data.get("required")),
            available_stock=data.get("available_stock", data.get("available")),
        )


@dataclass(frozen=True)
class IngredientEstimate:
    material_id: Optional[int]
    name: str
    unit: str
    required_per_unit: Decimal
    available_stock: Decimal
    possible_units: int
    sufficient: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'material_id': self.material_id,
            'name': self.name,
            'unit': self.unit,
            'required_per_unit': float(self.required_per_unit),
            'available_stock': float(self.available_stock),
            'possible_units': self.possible_units,
            'sufficient': self.sufficient,
        }


@dataclass(frozen=True)
class CapacityEstimate:
    """How many units the current stock supports, and which ingredient caps it."""
    per_ingredient: List[IngredientEstimate]
    max_producible: int
    limiting_index: int

    @property
    def limiting(self) -> IngredientEstimate:
        return self.per_ingredient[self.limiting_index]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'max_producible': self.max_producible,
            'limiting': self.limiting.to_dict(),
            'limiting_index': self.limiting_index,
            'per_ingredient': [item.to_dict() for item in self.per_ingredient],
        }


@dataclass(frozen=True)
class StockDeduction:
    material_id: Optional[int]
    used_quantity: Decimal
    new_stock: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            'material_id': self.material_id,
            'used_quantity': float(self.used_quantity),
            'new_stock': float(self.new_stock),
        }


@dataclass
class RecipeEstimate:
    """Capacity estimate plus the recipe context shown alongside it."""
    recipe_id: int
    product_id: int
    product_name: str
    yield_quantity: int
    time_required_mins: int
    capacity: CapacityEstimate

    @property
    def estimated_hours(self) -> int:
        return round_half_up(Decimal(self.time_required_mins * self.capacity.max_producible) / 60)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'recipe_id': self.recipe_id,
            'product_id': self.product_id,
            'product_name': self.product_name,
            'yield_quantity': self.yield_quantity,
            'time_required_mins': self.time_required_mins,
            'estimated_hours': self.estimated_hours,
            **self.capacity.to_dict(),
        }
