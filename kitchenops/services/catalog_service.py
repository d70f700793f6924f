import logging
from decimal import Decimal
from typing import Any, List, Mapping

from ..models import db, LossLog, OrderItem, Product, ProductionLog
from ..utils import payload
from .cache_invalidation import invalidate_dashboard_cache
from .errors import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


class ProductService:
    @staticmethod
    def list_products() -> List[Product]:
        return Product.query.order_by(Product.name.asc()).all()

    @staticmethod
    def get_product(product_id: int) -> Product:
        product = db.session.get(Product, product_id)
        if product is None:
            raise NotFoundError(f"Product {product_id} not found")
        return product

    @staticmethod
    def _apply(product: Product, data: Mapping[str, Any], partial: bool = False) -> None:
        required = not partial
        name = payload.text(data, 'name', required=required, max_length=128)
        category = payload.text(data, 'category', required=required, max_length=64)
        price = payload.decimal(data, 'price', minimum=Decimal('0'))

        if name is not None:
            product.name = name
        if category is not None:
            product.category = category
        if 'description' in data or not partial:
            product.description = payload.text(data, 'description')
        if price is not None:
            product.price = price
        elif not partial:
            product.price = Decimal('0')

    @staticmethod
    def create_product(data: Mapping[str, Any]) -> Product:
        product = Product()
        ProductService._apply(product, data)
        db.session.add(product)
        db.session.commit()
        invalidate_dashboard_cache()
        logger.info("Created product %s (%s)", product.name, product.id)
        return product

    @staticmethod
    def update_product(product_id: int, data: Mapping[str, Any]) -> Product:
        product = ProductService.get_product(product_id)
        ProductService._apply(product, data, partial=True)
        db.session.commit()
        logger.info("Updated product %s", product.id)
        return product

    @staticmethod
    def delete_product(product_id: int) -> None:
        """Delete a product and its recipes; refused while history references it."""
        product = ProductService.get_product(product_id)
        in_use = (
            db.session.query(OrderItem.id).filter_by(product_id=product.id).first()
            or db.session.query(ProductionLog.id).filter_by(product_id=product.id).first()
            or db.session.query(LossLog.id).filter_by(product_id=product.id).first()
        )
        if in_use:
            logger.warning("Refused to delete product %s: referenced by orders or logs", product.id)
            raise ConflictError(f"Product '{product.name}' is referenced by orders or logs and cannot be deleted")
        db.session.delete(product)
        db.session.commit()
        invalidate_dashboard_cache()
        logger.info("Deleted product %s", product_id)
