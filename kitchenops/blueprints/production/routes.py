from flask import request

from ...services.production_planning import ProductionService, apply_production, estimate
from ...utils import payload
from ...utils.api_responses import APIResponse
from ...utils.error_messages import SuccessMessages as SM
from . import production_bp


@production_bp.route('', methods=['GET'])
def list_production_logs():
    limit = payload.integer(request.args, 'limit', minimum=1)
    return APIResponse.success([log.to_dict() for log in ProductionService.list_logs(limit=limit)])


@production_bp.route('', methods=['POST'])
def log_production():
    data = payload.request_payload()
    recipe_id = payload.integer(data, 'recipe_id', required=True, minimum=1)
    quantity = payload.integer(data, 'quantity', required=True, minimum=1)
    time_spent = payload.integer(data, 'time_spent_mins', minimum=0)
    log = ProductionService.log_production(
        recipe_id,
        quantity,
        time_spent_mins=time_spent,
        operator_notes=payload.text(data, 'operator_notes'),
        production_date=payload.iso_date(data, 'production_date'),
    )
    return APIResponse.created(log.to_dict(), message=SM.PRODUCTION_LOGGED)


@production_bp.route('/<int:log_id>', methods=['GET'])
def get_production_log(log_id):
    return APIResponse.success(ProductionService.get_log(log_id).to_dict())


@production_bp.route('/estimate', methods=['POST'])
def estimate_capacity():
    """Capacity for an ad-hoc ingredient list, without touching the database."""
    data = payload.request_payload()
    result = estimate(payload.item_list(data, 'ingredients', required=True, allow_empty=True))
    return APIResponse.success(result.to_dict())


@production_bp.route('/check', methods=['POST'])
def check_production():
    """Dry run of stock deduction for an ad-hoc ingredient list."""
    data = payload.request_payload()
    ingredients = payload.item_list(data, 'ingredients', required=True, allow_empty=True)
    deductions = apply_production(ingredients, data.get('quantity_produced'))
    return APIResponse.success([deduction.to_dict() for deduction in deductions])
