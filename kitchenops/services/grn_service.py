"""
Goods receipt (GRN) service

Records vendor deliveries line by line, flags every line where the received
quantity differs from the expected one, and credits stock when the GRN is
marked received.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from ..models import (
    db,
    Discrepancy,
    GoodsReceipt,
    GoodsReceiptItem,
    RawMaterial,
    Vendor,
    DISCREPANCY_TYPES,
    GRN_STATUSES,
)
from ..utils import payload
from ..utils.serialization import as_float, quantize_money
from ..utils.timezone_utils import TimezoneUtils
from .cache_invalidation import invalidate_dashboard_cache
from .errors import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

GRN_PREFIX = 'GRN'


class GoodsReceiptService:
    @staticmethod
    def generate_grn_number(grn_date: Optional[date] = None) -> str:
        """GRN-<YYYYMMDD>-<NNNN>, numbered per day from the highest existing number."""
        grn_date = grn_date or TimezoneUtils.business_today()
        prefix = f"{GRN_PREFIX}-{grn_date.strftime('%Y%m%d')}-"
        latest = (
            db.session.query(GoodsReceipt.grn_number)
            .filter(GoodsReceipt.grn_number.like(f"{prefix}%"))
            .order_by(GoodsReceipt.grn_number.desc())
            .first()
        )
        sequence = 1
        if latest:
            suffix = latest[0][len(prefix):]
            if suffix.isdigit():
                sequence = int(suffix) + 1
        return f"{prefix}{sequence:04d}"

    @staticmethod
    def list_grns() -> List[GoodsReceipt]:
        return (
            GoodsReceipt.query
            .options(
                selectinload(GoodsReceipt.vendor),
                selectinload(GoodsReceipt.items).selectinload(GoodsReceiptItem.raw_material),
                selectinload(GoodsReceipt.discrepancies),
            )
            .order_by(GoodsReceipt.grn_date.desc(), GoodsReceipt.id.desc())
            .all()
        )

    @staticmethod
    def get_grn(grn_id: int) -> GoodsReceipt:
        grn = db.session.get(GoodsReceipt, grn_id)
        if grn is None:
            raise NotFoundError(f"GRN {grn_id} not found")
        return grn

    @staticmethod
    def _build_items(data: Mapping[str, Any]) -> List[GoodsReceiptItem]:
        items = []
        for entry in payload.item_list(data, 'items', required=True):
            material_id = payload.integer(entry, 'raw_material_id', required=True, minimum=1)
            if db.session.get(RawMaterial, material_id) is None:
                raise ValidationError.for_field('items', f"Raw material {material_id} not found")
            expected = payload.decimal(entry, 'expected_quantity', default=0, minimum=Decimal('0'),
                                       places=payload.QUANTITY_PLACES)
            received = payload.decimal(entry, 'received_quantity', default=0, minimum=Decimal('0'),
                                       places=payload.QUANTITY_PLACES)
            unit_price = payload.decimal(entry, 'unit_price', default=0, minimum=Decimal('0'))
            items.append(
                GoodsReceiptItem(
                    raw_material_id=material_id,
                    expected_quantity=expected,
                    received_quantity=received,
                    unit_price=quantize_money(unit_price),
                    total_price=quantize_money(received * unit_price),
                )
            )
        return items

    @staticmethod
    def detect_discrepancies(grn: GoodsReceipt) -> List[Discrepancy]:
        """Rebuild the GRN's discrepancy rows from its items; safe to run repeatedly."""
        grn.discrepancies.clear()
        db.session.flush()
        for item in grn.items:
            expected = Decimal(str(item.expected_quantity or 0))
            received = Decimal(str(item.received_quantity or 0))
            if received == expected:
                continue
            grn.discrepancies.append(
                Discrepancy(
                    raw_material_id=item.raw_material_id,
                    expected_quantity=expected,
                    received_quantity=received,
                    discrepancy_quantity=abs(received - expected),
                    discrepancy_type='shortage' if received < expected else 'excess',
                )
            )
        db.session.flush()
        return list(grn.discrepancies)

    @staticmethod
    def _credit_stock(grn: GoodsReceipt) -> None:
        now = TimezoneUtils.utc_now()
        for item in grn.items:
            received = Decimal(str(item.received_quantity or 0))
            if received <= 0:
                continue
            db.session.execute(
                update(RawMaterial)
                .where(RawMaterial.id == item.raw_material_id)
                .values(stock_quantity=RawMaterial.stock_quantity + received, updated_at=now)
                .execution_options(synchronize_session=False)
            )
        grn.status = 'received'
        grn.received_at = now

    @staticmethod
    def create_grn(data: Mapping[str, Any]) -> GoodsReceipt:
        vendor_id = payload.integer(data, 'vendor_id', required=True, minimum=1)
        if db.session.get(Vendor, vendor_id) is None:
            raise ValidationError.for_field('vendor_id', f"Vendor {vendor_id} not found")
        grn_date = payload.iso_date(data, 'grn_date', default=TimezoneUtils.business_today())
        status = payload.choice(data, 'status', GRN_STATUSES, default='pending')
        items = GoodsReceiptService._build_items(data)

        grn = GoodsReceipt(
            grn_number=GoodsReceiptService.generate_grn_number(grn_date),
            vendor_id=vendor_id,
            grn_date=grn_date,
            notes=payload.text(data, 'notes'),
            status='pending',
        )
        grn.items = items
        grn.total_amount = quantize_money(
            sum((Decimal(str(item.total_price)) for item in items), Decimal('0'))
        )

        try:
            db.session.add(grn)
            db.session.flush()
            discrepancies = GoodsReceiptService.detect_discrepancies(grn)
            if status == 'received':
                GoodsReceiptService._credit_stock(grn)
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            logger.warning("GRN number collision for %s", grn.grn_number)
            raise ConflictError("GRN number already in use, please retry") from None
        except Exception:
            db.session.rollback()
            raise

        if status == 'received':
            invalidate_dashboard_cache()
        logger.info("Created %s for vendor %s with %s items, %s discrepancies",
                    grn.grn_number, vendor_id, len(items), len(discrepancies))
        return grn

    @staticmethod
    def receive_grn(grn_id: int) -> GoodsReceipt:
        """Mark a pending GRN received and add its received quantities to stock."""
        grn = GoodsReceiptService.get_grn(grn_id)
        if grn.status != 'pending':
            logger.warning("Refused to receive %s again", grn.grn_number)
            raise ConflictError(f"{grn.grn_number} has already been received")
        try:
            GoodsReceiptService._credit_stock(grn)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        invalidate_dashboard_cache()
        logger.info("Received %s; stock credited for %s items", grn.grn_number, len(grn.items))
        return grn

    @staticmethod
    def refresh_discrepancies(grn_id: int) -> List[Discrepancy]:
        grn = GoodsReceiptService.get_grn(grn_id)
        discrepancies = GoodsReceiptService.detect_discrepancies(grn)
        db.session.commit()
        return discrepancies

    @staticmethod
    def discrepancy_report(discrepancy_type: Optional[str] = None, date_from: Optional[date] = None,
                           date_to: Optional[date] = None, vendor: Optional[str] = None) -> Dict[str, Any]:
        query = (
            Discrepancy.query
            .join(GoodsReceipt, Discrepancy.grn_id == GoodsReceipt.id)
            .join(Vendor, GoodsReceipt.vendor_id == Vendor.id)
            .options(
                selectinload(Discrepancy.raw_material),
                selectinload(Discrepancy.grn).selectinload(GoodsReceipt.vendor),
            )
        )
        if discrepancy_type and discrepancy_type != 'all':
            if discrepancy_type not in DISCREPANCY_TYPES:
                raise ValidationError.for_field('type', "type must be one of: all, shortage, excess")
            query = query.filter(Discrepancy.discrepancy_type == discrepancy_type)
        if date_from is not None:
            query = query.filter(GoodsReceipt.grn_date >= date_from)
        if date_to is not None:
            query = query.filter(GoodsReceipt.grn_date <= date_to)
        if vendor:
            query = query.filter(func.lower(Vendor.name).contains(vendor.strip().lower(), autoescape=True))

        rows = query.order_by(GoodsReceipt.grn_date.desc(), Discrepancy.id.desc()).all()
        total_quantity = sum((Decimal(str(row.discrepancy_quantity)) for row in rows), Decimal('0'))
        return {
            'discrepancies': [row.to_dict() for row in rows],
            'stats': {
                'shortage': sum(1 for row in rows if row.discrepancy_type == 'shortage'),
                'excess': sum(1 for row in rows if row.discrepancy_type == 'excess'),
                'total': len(rows),
                'total_quantity': as_float(total_quantity),
            },
        }
