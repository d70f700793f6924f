import logging
from decimal import Decimal
from typing import Any, List, Mapping, Optional

from sqlalchemy.orm import selectinload

from ..models import db, Client, Order, OrderItem, Product, ORDER_STATUSES
from ..utils import payload
from ..utils.serialization import quantize_money
from .errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class OrderService:
    @staticmethod
    def list_orders(status: Optional[str] = None) -> List[Order]:
        query = Order.query.options(
            selectinload(Order.client),
            selectinload(Order.items).selectinload(OrderItem.product),
        )
        if status:
            if status not in ORDER_STATUSES:
                raise ValidationError.for_field('status', f"status must be one of: {', '.join(ORDER_STATUSES)}")
            query = query.filter(Order.status == status)
        return query.order_by(Order.order_date.desc(), Order.id.desc()).all()

    @staticmethod
    def get_order(order_id: int) -> Order:
        order = db.session.get(Order, order_id)
        if order is None:
            raise NotFoundError(f"Order {order_id} not found")
        return order

    @staticmethod
    def _build_items(data: Mapping[str, Any]) -> List[OrderItem]:
        items = []
        for entry in payload.item_list(data, 'items', required=True):
            product_id = payload.integer(entry, 'product_id', required=True, minimum=1)
            product = db.session.get(Product, product_id)
            if product is None:
                raise ValidationError.for_field('items', f"Product {product_id} not found")
            quantity = payload.integer(entry, 'quantity', required=True, minimum=1)
            unit_price = payload.decimal(entry, 'unit_price', minimum=Decimal('0'))
            if unit_price is None:
                unit_price = Decimal(str(product.price or 0))
            items.append(
                OrderItem(
                    product_id=product.id,
                    quantity=quantity,
                    unit_price=quantize_money(unit_price),
                    total_price=quantize_money(unit_price * quantity),
                )
            )
        return items

    @staticmethod
    def _recalculate_total(order: Order) -> None:
        order.total_amount = quantize_money(
            sum((Decimal(str(item.total_price)) for item in order.items), Decimal('0'))
        )

    @staticmethod
    def create_order(data: Mapping[str, Any]) -> Order:
        client_id = payload.integer(data, 'client_id', required=True, minimum=1)
        if db.session.get(Client, client_id) is None:
            raise ValidationError.for_field('client_id', f"Client {client_id} not found")

        order = Order(
            client_id=client_id,
            status=payload.choice(data, 'status', ORDER_STATUSES, default='pending'),
            notes=payload.text(data, 'notes'),
        )
        order_date = payload.iso_date(data, 'order_date')
        if order_date is not None:
            order.order_date = order_date
        order.items = OrderService._build_items(data)
        OrderService._recalculate_total(order)

        db.session.add(order)
        db.session.commit()
        logger.info("Created order %s for client %s total=%s", order.id, client_id, order.total_amount)
        return order

    @staticmethod
    def update_order(order_id: int, data: Mapping[str, Any]) -> Order:
        """Update header fields; a supplied item list replaces the existing items."""
        order = OrderService.get_order(order_id)
        if 'client_id' in data:
            client_id = payload.integer(data, 'client_id', required=True, minimum=1)
            if db.session.get(Client, client_id) is None:
                raise ValidationError.for_field('client_id', f"Client {client_id} not found")
            order.client_id = client_id
        status = payload.choice(data, 'status', ORDER_STATUSES)
        if status is not None:
            order.status = status
        order_date = payload.iso_date(data, 'order_date')
        if order_date is not None:
            order.order_date = order_date
        if 'notes' in data:
            order.notes = payload.text(data, 'notes')
        if 'items' in data:
            items = OrderService._build_items(data)
            order.items.clear()
            order.items.extend(items)
            OrderService._recalculate_total(order)

        db.session.commit()
        logger.info("Updated order %s", order.id)
        return order

    @staticmethod
    def update_status(order_id: int, status: str) -> Order:
        order = OrderService.get_order(order_id)
        new_status = payload.choice({'status': status}, 'status', ORDER_STATUSES)
        if new_status is None:
            raise ValidationError.for_field('status', 'status is required')
        order.status = new_status
        db.session.commit()
        logger.info("Order %s moved to %s", order.id, order.status)
        return order

    @staticmethod
    def delete_order(order_id: int) -> None:
        order = OrderService.get_order(order_id)
        db.session.delete(order)
        db.session.commit()
        logger.info("Deleted order %s", order_id)
