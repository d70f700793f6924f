import logging
from decimal import Decimal
from typing import Any, Dict, List, Mapping

from sqlalchemy import func

from ..models import db, GoodsReceipt, GoodsReceiptItem, Vendor
from ..utils import payload
from ..utils.serialization import as_money
from .errors import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


class VendorService:
    @staticmethod
    def list_vendors() -> List[Vendor]:
        return Vendor.query.order_by(Vendor.name.asc()).all()

    @staticmethod
    def get_vendor(vendor_id: int) -> Vendor:
        vendor = db.session.get(Vendor, vendor_id)
        if vendor is None:
            raise NotFoundError(f"Vendor {vendor_id} not found")
        return vendor

    @staticmethod
    def create_vendor(data: Mapping[str, Any]) -> Vendor:
        vendor = Vendor(
            name=payload.text(data, 'name', required=True, max_length=128),
            contact=payload.text(data, 'contact', max_length=255),
            address=payload.text(data, 'address'),
        )
        db.session.add(vendor)
        db.session.commit()
        logger.info("Created vendor %s", vendor.id)
        return vendor

    @staticmethod
    def update_vendor(vendor_id: int, data: Mapping[str, Any]) -> Vendor:
        vendor = VendorService.get_vendor(vendor_id)
        name = payload.text(data, 'name', max_length=128)
        if name is not None:
            vendor.name = name
        if 'contact' in data:
            vendor.contact = payload.text(data, 'contact', max_length=255)
        if 'address' in data:
            vendor.address = payload.text(data, 'address')
        db.session.commit()
        logger.info("Updated vendor %s", vendor.id)
        return vendor

    @staticmethod
    def delete_vendor(vendor_id: int) -> None:
        vendor = VendorService.get_vendor(vendor_id)
        if db.session.query(GoodsReceipt.id).filter_by(vendor_id=vendor.id).first():
            logger.warning("Refused to delete vendor %s: has goods receipts", vendor.id)
            raise ConflictError(f"Vendor '{vendor.name}' has goods receipts and cannot be deleted")
        db.session.delete(vendor)
        db.session.commit()
        logger.info("Deleted vendor %s", vendor_id)

    @staticmethod
    def vendor_stats() -> Dict[int, Dict[str, Any]]:
        """GRN count, received value and distinct materials supplied, per vendor id."""
        stats: Dict[int, Dict[str, Any]] = {}
        grn_rows = (
            db.session.query(
                GoodsReceipt.vendor_id,
                func.count(GoodsReceipt.id),
                func.coalesce(func.sum(GoodsReceipt.total_amount), 0),
            )
            .group_by(GoodsReceipt.vendor_id)
            .all()
        )
        for vendor_id, grn_count, total_value in grn_rows:
            stats[vendor_id] = {
                'total_grns': grn_count,
                'total_value': as_money(Decimal(str(total_value))),
                'materials_supplied': 0,
            }

        material_rows = (
            db.session.query(
                GoodsReceipt.vendor_id,
                func.count(func.distinct(GoodsReceiptItem.raw_material_id)),
            )
            .join(GoodsReceiptItem, GoodsReceiptItem.grn_id == GoodsReceipt.id)
            .group_by(GoodsReceipt.vendor_id)
            .all()
        )
        for vendor_id, material_count in material_rows:
            stats.setdefault(vendor_id, {'total_grns': 0, 'total_value': as_money(0)})
            stats[vendor_id]['materials_supplied'] = material_count
        return stats

    @staticmethod
    def serialize_with_stats(vendors: List[Vendor]) -> List[Dict[str, Any]]:
        stats = VendorService.vendor_stats()
        empty = {'total_grns': 0, 'total_value': as_money(0), 'materials_supplied': 0}
        return [{**vendor.to_dict(), **stats.get(vendor.id, empty)} for vendor in vendors]
