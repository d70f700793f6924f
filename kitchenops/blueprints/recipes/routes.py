from flask import request

from ...services.production_planning import ProductionService
from ...services.recipe_service import RecipeService
from ...utils import payload
from ...utils.api_responses import APIResponse
from ...utils.error_messages import SuccessMessages as SM
from . import recipes_bp


@recipes_bp.route('', methods=['GET'])
def list_recipes():
    return APIResponse.success([recipe.to_dict() for recipe in RecipeService.list_recipes()])


@recipes_bp.route('', methods=['POST'])
def create_recipe():
    recipe = RecipeService.create_recipe(payload.request_payload())
    return APIResponse.created(recipe.to_dict(), message=SM.RECIPE_CREATED)


@recipes_bp.route('/<int:recipe_id>', methods=['GET'])
def get_recipe(recipe_id):
    return APIResponse.success(RecipeService.get_recipe(recipe_id).to_dict())


@recipes_bp.route('/<int:recipe_id>', methods=['PUT', 'PATCH'])
def update_recipe(recipe_id):
    recipe = RecipeService.update_recipe(recipe_id, payload.request_payload())
    return APIResponse.success(recipe.to_dict(), message=SM.RECIPE_UPDATED)


@recipes_bp.route('/<int:recipe_id>', methods=['DELETE'])
def delete_recipe(recipe_id):
    RecipeService.delete_recipe(recipe_id)
    return APIResponse.success(message=SM.RECIPE_DELETED)


@recipes_bp.route('/<int:recipe_id>/estimate', methods=['GET'])
def estimate_recipe(recipe_id):
    """Maximum producible units from current stock and the limiting ingredient."""
    return APIResponse.success(ProductionService.estimate_for_recipe(recipe_id).to_dict())


@recipes_bp.route('/<int:recipe_id>/requirements', methods=['GET'])
def recipe_requirements(recipe_id):
    quantity = payload.integer(request.args, 'quantity', default=1, minimum=1)
    recipe = RecipeService.get_recipe(recipe_id)
    return APIResponse.success({
        'recipe_id': recipe.id,
        'quantity': quantity,
        'requirements': RecipeService.total_requirements(recipe, quantity),
    })
