import logging
from decimal import Decimal
from typing import List, Optional

from flask import current_app
from sqlalchemy import update

from ...models import db, ProductionLog, ProductionLogMaterial, RawMaterial, Recipe
from ...utils.serialization import quantize_money
from ...utils.timezone_utils import TimezoneUtils
from ..cache_invalidation import invalidate_dashboard_cache
from ..errors import NotFoundError, ValidationError
from ._capacity import estimate
from ._deduction import apply_production
from ._validation import to_production_quantity
from .errors import InsufficientStockError
from .types import IngredientStock, RecipeEstimate

logger = logging.getLogger(__name__)

DEFAULT_HOURLY_RATE = Decimal('15')


class ProductionService:
    """Database-facing side of production planning."""

    @staticmethod
    def get_recipe(recipe_id: int) -> Recipe:
        recipe = db.session.get(Recipe, recipe_id)
        if recipe is None:
            raise NotFoundError(f"Recipe {recipe_id} not found")
        return recipe

    @staticmethod
    def build_snapshot(recipe: Recipe) -> List[IngredientStock]:
        """Freeze each recipe line together with the stock currently on hand."""
        snapshot = []
        for line in recipe.ingredients:
            material = line.raw_material
            snapshot.append(
                IngredientStock(
                    material_id=line.raw_material_id,
                    name=material.name,
                    unit=material.unit,
                    required_per_unit=Decimal(str(line.quantity)),
                    available_stock=Decimal(str(material.stock_quantity or 0)),
                )
            )
        return snapshot

    @staticmethod
    def estimate_for_recipe(recipe_id: int) -> RecipeEstimate:
        recipe = ProductionService.get_recipe(recipe_id)
        capacity = estimate(ProductionService.build_snapshot(recipe))
        return RecipeEstimate(
            recipe_id=recipe.id,
            product_id=recipe.product_id,
            product_name=recipe.product.name if recipe.product else '',
            yield_quantity=recipe.yield_quantity,
            time_required_mins=recipe.time_required_mins or 0,
            capacity=capacity,
        )

    @staticmethod
    def hourly_rate() -> Decimal:
        raw = current_app.config.get('PRODUCTION_HOURLY_RATE', DEFAULT_HOURLY_RATE)
        return Decimal(str(raw))

    @staticmethod
    def calculate_production_cost(time_spent_mins: Optional[int]) -> Decimal:
        """Labour cost only: time spent at the configured hourly rate."""
        if not time_spent_mins:
            return quantize_money(0)
        return quantize_money(Decimal(time_spent_mins) / Decimal(60) * ProductionService.hourly_rate())

    @staticmethod
    def log_production(recipe_id: int, quantity, time_spent_mins: Optional[int] = None,
                       operator_notes: Optional[str] = None, production_date=None) -> ProductionLog:
        """
        Record a production run and deduct its ingredients from stock.

        The snapshot check rejects obvious shortages before anything is
        written. Each deduction is then a conditional UPDATE guarded by
        stock_quantity >= used, so a concurrent run that consumed the stock
        in between makes the affected row count zero and the whole
        transaction rolls back.
        """
        quantity = to_production_quantity(quantity)
        if time_spent_mins is not None and time_spent_mins < 0:
            raise ValidationError.for_field('time_spent_mins', 'time_spent_mins cannot be negative')

        recipe = ProductionService.get_recipe(recipe_id)
        snapshot = ProductionService.build_snapshot(recipe)

        try:
            deductions = apply_production(snapshot, quantity)
        except InsufficientStockError as exc:
            logger.warning("Production of recipe %s x%s rejected: %s", recipe.id, quantity, exc.message)
            raise

        lines_by_material = {line.material_id: line for line in snapshot}
        now = TimezoneUtils.utc_now()

        try:
            for deduction in deductions:
                result = db.session.execute(
                    update(RawMaterial)
                    .where(
                        RawMaterial.id == deduction.material_id,
                        RawMaterial.stock_quantity >= deduction.used_quantity,
                    )
                    .values(
                        stock_quantity=RawMaterial.stock_quantity - deduction.used_quantity,
                        updated_at=now,
                    )
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount != 1:
                    line = lines_by_material[deduction.material_id]
                    db.session.rollback()
                    current = db.session.get(RawMaterial, deduction.material_id)
                    available = Decimal(str(current.stock_quantity or 0)) if current else Decimal(0)
                    logger.warning(
                        "Concurrent stock change for %s while logging recipe %s; production aborted",
                        line.name, recipe.id,
                    )
                    raise InsufficientStockError([{
                        'material_id': deduction.material_id,
                        'material': line.name,
                        'unit': line.unit,
                        'required': float(deduction.used_quantity),
                        'available': float(available),
                    }])

            log = ProductionLog(
                product_id=recipe.product_id,
                recipe_id=recipe.id,
                quantity=quantity,
                time_spent_mins=time_spent_mins,
                operator_notes=operator_notes,
                production_cost=ProductionService.calculate_production_cost(time_spent_mins),
                production_date=production_date or TimezoneUtils.business_today(),
            )
            for deduction in deductions:
                log.materials.append(
                    ProductionLogMaterial(
                        raw_material_id=deduction.material_id,
                        quantity_used=deduction.used_quantity,
                        cost_per_unit=Decimal('0'),
                    )
                )
            db.session.add(log)
            db.session.commit()
        except InsufficientStockError:
            raise
        except Exception:
            db.session.rollback()
            raise

        invalidate_dashboard_cache()
        logger.info(
            "Logged production of %s x%s (recipe %s, log %s)",
            recipe.product.name if recipe.product else recipe.product_id, quantity, recipe.id, log.id,
        )
        return log

    @staticmethod
    def list_logs(limit: Optional[int] = None) -> List[ProductionLog]:
        query = ProductionLog.query.order_by(
            ProductionLog.production_date.desc(), ProductionLog.id.desc()
        )
        if limit:
            query = query.limit(limit)
        return query.all()

    @staticmethod
    def get_log(log_id: int) -> ProductionLog:
        log = db.session.get(ProductionLog, log_id)
        if log is None:
            raise NotFoundError(f"Production log {log_id} not found")
        return log
