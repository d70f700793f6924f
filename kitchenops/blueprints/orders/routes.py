from flask import request

from ...services.order_service import OrderService
from ...utils import payload
from ...utils.api_responses import APIResponse
from ...utils.error_messages import SuccessMessages as SM
from . import orders_bp


@orders_bp.route('', methods=['GET'])
def list_orders():
    status = payload.text(request.args, 'status')
    return APIResponse.success([order.to_dict() for order in OrderService.list_orders(status=status)])


@orders_bp.route('', methods=['POST'])
def create_order():
    order = OrderService.create_order(payload.request_payload())
    return APIResponse.created(order.to_dict(), message=SM.ORDER_CREATED)


@orders_bp.route('/<int:order_id>', methods=['GET'])
def get_order(order_id):
    return APIResponse.success(OrderService.get_order(order_id).to_dict())


@orders_bp.route('/<int:order_id>', methods=['PUT', 'PATCH'])
def update_order(order_id):
    order = OrderService.update_order(order_id, payload.request_payload())
    return APIResponse.success(order.to_dict(), message=SM.ORDER_UPDATED)


@orders_bp.route('/<int:order_id>/status', methods=['POST'])
def update_order_status(order_id):
    data = payload.request_payload()
    order = OrderService.update_status(order_id, data.get('status'))
    return APIResponse.success(order.to_dict(), message=SM.ORDER_UPDATED)


@orders_bp.route('/<int:order_id>', methods=['DELETE'])
def delete_order(order_id):
    OrderService.delete_order(order_id)
    return APIResponse.success(message=SM.ORDER_DELETED)
