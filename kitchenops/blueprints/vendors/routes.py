from ...services.vendor_service import VendorService
from ...utils.api_responses import APIResponse
from ...utils.error_messages import SuccessMessages as SM
from ...utils.payload import request_payload
from . import vendors_bp


@vendors_bp.route('', methods=['GET'])
def list_vendors():
    return APIResponse.success(VendorService.serialize_with_stats(VendorService.list_vendors()))


@vendors_bp.route('', methods=['POST'])
def create_vendor():
    vendor = VendorService.create_vendor(request_payload())
    return APIResponse.created(vendor.to_dict(), message=SM.VENDOR_CREATED)


@vendors_bp.route('/<int:vendor_id>', methods=['GET'])
def get_vendor(vendor_id):
    vendor = VendorService.get_vendor(vendor_id)
    return APIResponse.success(VendorService.serialize_with_stats([vendor])[0])


@vendors_bp.route('/<int:vendor_id>', methods=['PUT', 'PATCH'])
def update_vendor(vendor_id):
    vendor = VendorService.update_vendor(vendor_id, request_payload())
    return APIResponse.success(vendor.to_dict(), message=SM.VENDOR_UPDATED)


@vendors_bp.route('/<int:vendor_id>', methods=['DELETE'])
def delete_vendor(vendor_id):
    VendorService.delete_vendor(vendor_id)
    return APIResponse.success(message=SM.VENDOR_DELETED)
