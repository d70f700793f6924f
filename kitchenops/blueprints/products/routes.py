from ...services.catalog_service import ProductService
from ...utils.api_responses import APIResponse
from ...utils.error_messages import SuccessMessages as SM
from ...utils.payload import request_payload
from . import products_bp


@products_bp.route('', methods=['GET'])
def list_products():
    return APIResponse.success([product.to_dict() for product in ProductService.list_products()])


@products_bp.route('', methods=['POST'])
def create_product():
    product = ProductService.create_product(request_payload())
    return APIResponse.created(product.to_dict(), message=SM.PRODUCT_CREATED)


@products_bp.route('/<int:product_id>', methods=['GET'])
def get_product(product_id):
    return APIResponse.success(ProductService.get_product(product_id).to_dict())


@products_bp.route('/<int:product_id>', methods=['PUT', 'PATCH'])
def update_product(product_id):
    product = ProductService.update_product(product_id, request_payload())
    return APIResponse.success(product.to_dict(), message=SM.PRODUCT_UPDATED)


@products_bp.route('/<int:product_id>', methods=['DELETE'])
def delete_product(product_id):
    ProductService.delete_product(product_id)
    return APIResponse.success(message=SM.PRODUCT_DELETED)
