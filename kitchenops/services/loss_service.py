import logging
from decimal import Decimal
from typing import Any, List, Mapping

from sqlalchemy import func

from ..models import db, LossLog, Product, RawMaterial
from ..utils import payload
from .errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class LossService:
    """Spoilage and wastage records. Logging a loss does not touch stock levels."""

    @staticmethod
    def list_losses() -> List[LossLog]:
        return LossLog.query.order_by(LossLog.loss_date.desc(), LossLog.id.desc()).all()

    @staticmethod
    def create_loss(data: Mapping[str, Any]) -> LossLog:
        raw_material_id = payload.integer(data, 'raw_material_id', minimum=1)
        product_id = payload.integer(data, 'product_id', minimum=1)
        if raw_material_id is None and product_id is None:
            raise ValidationError(
                "Either a raw material or a product is required",
                errors={'raw_material_id': ['required without product_id'],
                        'product_id': ['required without raw_material_id']},
            )
        if raw_material_id is not None and db.session.get(RawMaterial, raw_material_id) is None:
            raise ValidationError.for_field('raw_material_id', f"Raw material {raw_material_id} not found")
        if product_id is not None and db.session.get(Product, product_id) is None:
            raise ValidationError.for_field('product_id', f"Product {product_id} not found")

        loss = LossLog(
            raw_material_id=raw_material_id,
            product_id=product_id,
            quantity_lost=payload.decimal(data, 'quantity_lost', required=True, positive=True,
                                          places=payload.QUANTITY_PLACES),
            loss_reason=payload.text(data, 'loss_reason'),
            estimated_cost=payload.decimal(data, 'estimated_cost', default=0, minimum=Decimal('0')),
        )
        loss_date = payload.iso_date(data, 'loss_date')
        if loss_date is not None:
            loss.loss_date = loss_date

        db.session.add(loss)
        db.session.commit()
        logger.info("Logged loss %s (material=%s product=%s qty=%s)",
                    loss.id, raw_material_id, product_id, loss.quantity_lost)
        return loss

    @staticmethod
    def delete_loss(loss_id: int) -> None:
        loss = db.session.get(LossLog, loss_id)
        if loss is None:
            raise NotFoundError(f"Loss log {loss_id} not found")
        db.session.delete(loss)
        db.session.commit()
        logger.info("Deleted loss log %s", loss_id)

    @staticmethod
    def total_loss_value() -> Decimal:
        total = db.session.query(func.coalesce(func.sum(LossLog.estimated_cost), 0)).scalar()
        return Decimal(str(total or 0))

    @staticmethod
    def average_loss_value() -> Decimal:
        """Mean estimated cost per loss entry; zero when nothing is logged."""
        count = db.session.query(func.count(LossLog.id)).scalar() or 0
        if not count:
            return Decimal('0')
        return LossService.total_loss_value() / count
