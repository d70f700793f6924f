import logging
from decimal import Decimal
from typing import Any, List, Mapping

from sqlalchemy.orm import selectinload

from ..models import db, Product, ProductionLog, RawMaterial, Recipe, RecipeIngredient
from ..utils import payload
from .errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class RecipeService:
    @staticmethod
    def list_recipes() -> List[Recipe]:
        return (
            Recipe.query
            .options(
                selectinload(Recipe.product),
                selectinload(Recipe.ingredients).selectinload(RecipeIngredient.raw_material),
            )
            .order_by(Recipe.id.asc())
            .all()
        )

    @staticmethod
    def get_recipe(recipe_id: int) -> Recipe:
        recipe = db.session.get(Recipe, recipe_id)
        if recipe is None:
            raise NotFoundError(f"Recipe {recipe_id} not found")
        return recipe

    @staticmethod
    def _parse_ingredients(data: Mapping[str, Any]) -> List[RecipeIngredient]:
        """Validate ingredient lines; every line must name a known material once."""
        entries = payload.item_list(data, 'ingredients', required=True)
        lines = []
        seen = set()
        for index, entry in enumerate(entries):
            material_id = payload.integer(entry, 'raw_material_id', required=True, minimum=1)
            quantity = payload.decimal(entry, 'quantity', required=True, positive=True,
                                       places=payload.QUANTITY_PLACES)
            if material_id in seen:
                raise ValidationError(
                    "Each raw material can appear only once in a recipe",
                    errors={'ingredients': {str(index): ['duplicate raw material']}},
                )
            if db.session.get(RawMaterial, material_id) is None:
                raise ValidationError(
                    f"Raw material {material_id} not found",
                    errors={'ingredients': {str(index): ['unknown raw material']}},
                )
            seen.add(material_id)
            lines.append(RecipeIngredient(raw_material_id=material_id, quantity=quantity))
        return lines

    @staticmethod
    def _resolve_product(data: Mapping[str, Any], required: bool) -> Product:
        product_id = payload.integer(data, 'product_id', required=required, minimum=1)
        if product_id is None:
            return None
        product = db.session.get(Product, product_id)
        if product is None:
            raise ValidationError.for_field('product_id', f"Product {product_id} not found")
        return product

    @staticmethod
    def create_recipe(data: Mapping[str, Any]) -> Recipe:
        product = RecipeService._resolve_product(data, required=True)
        recipe = Recipe(
            product_id=product.id,
            yield_quantity=payload.integer(data, 'yield_quantity', default=1, minimum=1),
            time_required_mins=payload.integer(data, 'time_required_mins', default=0, minimum=0),
            instructions=payload.text(data, 'instructions'),
        )
        recipe.ingredients = RecipeService._parse_ingredients(data)
        db.session.add(recipe)
        db.session.commit()
        logger.info("Created recipe %s for product %s with %s ingredients",
                    recipe.id, product.name, len(recipe.ingredients))
        return recipe

    @staticmethod
    def update_recipe(recipe_id: int, data: Mapping[str, Any]) -> Recipe:
        """Update recipe fields; a supplied ingredient list replaces the existing lines."""
        recipe = RecipeService.get_recipe(recipe_id)
        product = RecipeService._resolve_product(data, required=False)
        yield_quantity = payload.integer(data, 'yield_quantity', minimum=1)
        time_required = payload.integer(data, 'time_required_mins', minimum=0)

        if product is not None:
            recipe.product_id = product.id
        if yield_quantity is not None:
            recipe.yield_quantity = yield_quantity
        if time_required is not None:
            recipe.time_required_mins = time_required
        if 'instructions' in data:
            recipe.instructions = payload.text(data, 'instructions')

        if 'ingredients' in data:
            lines = RecipeService._parse_ingredients(data)
            recipe.ingredients.clear()
            # flush the orphans first so the unique (recipe, material) pair can be reused
            db.session.flush()
            recipe.ingredients.extend(lines)

        db.session.commit()
        logger.info("Updated recipe %s", recipe.id)
        return recipe

    @staticmethod
    def delete_recipe(recipe_id: int) -> None:
        recipe = RecipeService.get_recipe(recipe_id)
        # production history is kept; it just loses the recipe link
        ProductionLog.query.filter_by(recipe_id=recipe.id).update(
            {ProductionLog.recipe_id: None}, synchronize_session=False
        )
        db.session.delete(recipe)
        db.session.commit()
        logger.info("Deleted recipe %s", recipe_id)

    @staticmethod
    def total_requirements(recipe: Recipe, quantity: int) -> List[dict]:
        """Material needed for `quantity` units alongside what is on hand."""
        rows = []
        for line in recipe.ingredients:
            needed = Decimal(str(line.quantity)) * quantity
            stock = Decimal(str(line.raw_material.stock_quantity or 0))
            rows.append({
                'raw_material_id': line.raw_material_id,
                'name': line.raw_material.name,
                'unit': line.raw_material.unit,
                'required': float(needed),
                'available': float(stock),
                'sufficient': stock >= needed,
            })
        return rows
