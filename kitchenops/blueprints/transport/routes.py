from ...services.transport_service import TransportService
from ...utils import payload
from ...utils.api_responses import APIResponse
from ...utils.error_messages import SuccessMessages as SM
from . import transport_bp


@transport_bp.route('', methods=['GET'])
def list_transport_runs():
    return APIResponse.success([run.to_dict() for run in TransportService.list_runs()])


@transport_bp.route('', methods=['POST'])
def create_transport_run():
    run = TransportService.create_run(payload.request_payload())
    return APIResponse.created(run.to_dict(), message=SM.TRANSPORT_LOGGED)


@transport_bp.route('/<int:run_id>', methods=['GET'])
def get_transport_run(run_id):
    return APIResponse.success(TransportService.get_run(run_id).to_dict())


@transport_bp.route('/<int:run_id>/deliveries/<int:delivery_id>', methods=['PATCH'])
def update_delivery(run_id, delivery_id):
    data = payload.request_payload()
    delivery = TransportService.update_delivery_status(run_id, delivery_id, data.get('delivery_status'))
    return APIResponse.success(delivery.to_dict(), message=SM.DELIVERY_UPDATED)


@transport_bp.route('/<int:run_id>', methods=['DELETE'])
def delete_transport_run(run_id):
    TransportService.delete_run(run_id)
    return APIResponse.success(message=SM.TRANSPORT_DELETED)
