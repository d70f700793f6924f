from flask import Response

from ...services import stock_report
from ...services.inventory_service import RawMaterialService
from ...utils.api_responses import APIResponse
from ...utils.error_messages import SuccessMessages as SM
from ...utils.payload import request_payload
from . import inventory_bp


@inventory_bp.route('', methods=['GET'])
def list_materials():
    return APIResponse.success([material.to_dict() for material in RawMaterialService.list_materials()])


@inventory_bp.route('', methods=['POST'])
def create_material():
    material = RawMaterialService.create_material(request_payload())
    return APIResponse.created(material.to_dict(), message=SM.MATERIAL_CREATED)


@inventory_bp.route('/<int:material_id>', methods=['GET'])
def get_material(material_id):
    return APIResponse.success(RawMaterialService.get_material(material_id).to_dict())


@inventory_bp.route('/<int:material_id>', methods=['PUT', 'PATCH'])
def update_material(material_id):
    material = RawMaterialService.update_material(material_id, request_payload())
    return APIResponse.success(material.to_dict(), message=SM.MATERIAL_UPDATED)


@inventory_bp.route('/<int:material_id>', methods=['DELETE'])
def delete_material(material_id):
    RawMaterialService.delete_material(material_id)
    return APIResponse.success(message=SM.MATERIAL_DELETED)


@inventory_bp.route('/low-stock', methods=['GET'])
def low_stock():
    return APIResponse.success([material.to_dict() for material in RawMaterialService.list_low_stock()])


@inventory_bp.route('/stock-overview', methods=['GET'])
def stock_overview():
    return APIResponse.success(stock_report.stock_summary())


@inventory_bp.route('/export', methods=['GET'])
def export_stock():
    """Download the stock sheet as CSV."""
    return Response(
        stock_report.export_stock_csv(),
        mimetype='text/csv',
        headers={'Content-Disposition': f'attachment; filename={stock_report.export_filename()}'},
    )
