from ...services.client_service import ClientService
from ...utils.api_responses import APIResponse
from ...utils.error_messages import SuccessMessages as SM
from ...utils.payload import request_payload
from . import clients_bp


@clients_bp.route('', methods=['GET'])
def list_clients():
    return APIResponse.success(ClientService.serialize_with_stats(ClientService.list_clients()))


@clients_bp.route('', methods=['POST'])
def create_client():
    client = ClientService.create_client(request_payload())
    return APIResponse.created(client.to_dict(), message=SM.CLIENT_CREATED)


@clients_bp.route('/<int:client_id>', methods=['GET'])
def get_client(client_id):
    client = ClientService.get_client(client_id)
    return APIResponse.success(ClientService.serialize_with_stats([client])[0])


@clients_bp.route('/<int:client_id>', methods=['PUT', 'PATCH'])
def update_client(client_id):
    client = ClientService.update_client(client_id, request_payload())
    return APIResponse.success(client.to_dict(), message=SM.CLIENT_UPDATED)


@clients_bp.route('/<int:client_id>', methods=['DELETE'])
def delete_client(client_id):
    ClientService.delete_client(client_id)
    return APIResponse.success(message=SM.CLIENT_DELETED)
