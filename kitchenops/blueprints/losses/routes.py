from ...services.loss_service import LossService
from ...utils.api_responses import APIResponse
from ...utils.error_messages import SuccessMessages as SM
from ...utils.payload import request_payload
from ...utils.serialization import as_money
from . import losses_bp


@losses_bp.route('', methods=['GET'])
def list_losses():
    losses = LossService.list_losses()
    return APIResponse.success({
        'losses': [loss.to_dict() for loss in losses],
        'total_loss_value': as_money(LossService.total_loss_value()),
        'average_loss_value': as_money(LossService.average_loss_value()),
    })


@losses_bp.route('', methods=['POST'])
def create_loss():
    loss = LossService.create_loss(request_payload())
    return APIResponse.created(loss.to_dict(), message=SM.LOSS_LOGGED)


@losses_bp.route('/<int:loss_id>', methods=['DELETE'])
def delete_loss(loss_id):
    LossService.delete_loss(loss_id)
    return APIResponse.success(message=SM.LOSS_DELETED)
