from flask import request

from ...services.grn_service import GoodsReceiptService
from ...utils import payload
from ...utils.api_responses import APIResponse
from ...utils.error_messages import SuccessMessages as SM
from . import discrepancies_bp, receiving_bp


@receiving_bp.route('', methods=['GET'])
def list_grns():
    return APIResponse.success([grn.to_dict() for grn in GoodsReceiptService.list_grns()])


@receiving_bp.route('/next-number', methods=['GET'])
def next_grn_number():
    grn_date = payload.iso_date(request.args, 'date')
    return APIResponse.success({'grn_number': GoodsReceiptService.generate_grn_number(grn_date)})


@receiving_bp.route('', methods=['POST'])
def create_grn():
    grn = GoodsReceiptService.create_grn(payload.request_payload())
    data = grn.to_dict()
    data['discrepancies'] = [row.to_dict() for row in grn.discrepancies]
    return APIResponse.created(data, message=SM.GRN_CREATED.format(grn_number=grn.grn_number))


@receiving_bp.route('/<int:grn_id>', methods=['GET'])
def get_grn(grn_id):
    grn = GoodsReceiptService.get_grn(grn_id)
    data = grn.to_dict()
    data['discrepancies'] = [row.to_dict() for row in grn.discrepancies]
    return APIResponse.success(data)


@receiving_bp.route('/<int:grn_id>/receive', methods=['POST'])
def receive_grn(grn_id):
    grn = GoodsReceiptService.receive_grn(grn_id)
    return APIResponse.success(grn.to_dict(), message=SM.GRN_RECEIVED.format(grn_number=grn.grn_number))


@receiving_bp.route('/<int:grn_id>/discrepancies', methods=['POST'])
def refresh_discrepancies(grn_id):
    rows = GoodsReceiptService.refresh_discrepancies(grn_id)
    return APIResponse.success([row.to_dict() for row in rows])


@discrepancies_bp.route('', methods=['GET'])
def discrepancy_report():
    args = request.args
    report = GoodsReceiptService.discrepancy_report(
        discrepancy_type=payload.text(args, 'type'),
        date_from=payload.iso_date(args, 'date_from'),
        date_to=payload.iso_date(args, 'date_to'),
        vendor=payload.text(args, 'vendor'),
    )
    return APIResponse.success(report)
