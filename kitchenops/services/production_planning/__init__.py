"""
Production Planning Package

Pure capacity and stock-deduction arithmetic for recipes:
- How many whole units current stock supports, and the limiting ingredient
- All-or-nothing stock deltas for a confirmed production quantity

Persistence lives in ProductionService, which snapshots stock from the
database, calls these functions and writes the result back atomically.
"""

from ._capacity import estimate
from ._deduction import apply_production
from .errors import (
    InsufficientStockError,
    InvalidInputError,
    InvalidRecipeError,
    ProductionPlanningError,
)
from .service import ProductionService
from .types import (
    CapacityEstimate,
    IngredientEstimate,
    IngredientStock,
    RecipeEstimate,
    StockDeduction,
)

__all__ = [
    'estimate',
    'apply_production',
    'ProductionService',
    'CapacityEstimate',
    'IngredientEstimate',
    'IngredientStock',
    'RecipeEstimate',
    'StockDeduction',
    'ProductionPlanningError',
    'InvalidRecipeError',
    'InvalidInputError',
    'InsufficientStockError',
]
