from ..extensions import db
from ..utils.serialization import as_float, as_money, iso
from ..utils.timezone_utils import TimezoneUtils

GRN_STATUSES = ('pending', 'received')
DISCREPANCY_TYPES = ('shortage', 'excess')


class GoodsReceipt(db.Model):
    """Goods Receipt Note: what a vendor actually delivered."""
    __tablename__ = 'grn'
    id = db.Column(db.Integer, primary_key=True)
    grn_number = db.Column(db.String(32), nullable=False, unique=True, index=True)
    vendor_id = db.Column(db.Integer, db.ForeignKey('vendor.id'), nullable=False, index=True)
    grn_date = db.Column(db.Date, nullable=False, default=TimezoneUtils.business_today, index=True)
    total_amount = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    status = db.Column(db.String(16), nullable=False, default='pending')
    notes = db.Column(db.Text, nullable=True)
    received_at = db.Column(db.DateTime(timezone=True), nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=TimezoneUtils.utc_now)

    vendor = db.relationship('Vendor', back_populates='grns')
    items = db.relationship(
        'GoodsReceiptItem',
        back_populates='grn',
        cascade='all, delete-orphan',
        order_by='GoodsReceiptItem.id',
    )
    discrepancies = db.relationship(
        'Discrepancy',
        back_populates='grn',
        cascade='all, delete-orphan',
        order_by='Discrepancy.id',
    )

    def to_dict(self, include_items=True):
        data = {
            'id': self.id,
            'grn_number': self.grn_number,
            'vendor_id': self.vendor_id,
            'vendor_name': self.vendor.name if self.vendor else None,
            'grn_date': iso(self.grn_date),
            'total_amount': as_money(self.total_amount),
            'status': self.status,
            'notes': self.notes,
            'received_at': iso(self.received_at),
            'discrepancy_count': len(self.discrepancies),
            'created_at': iso(self.created_at),
        }
        if include_items:
            data['items'] = [item.to_dict() for item in self.items]
        return data


class GoodsReceiptItem(db.Model):
    __tablename__ = 'grn_item'
    id = db.Column(db.Integer, primary_key=True)
    grn_id = db.Column(db.Integer, db.ForeignKey('grn.id', ondelete='CASCADE'), nullable=False, index=True)
    raw_material_id = db.Column(db.Integer, db.ForeignKey('raw_material.id'), nullable=False, index=True)
    expected_quantity = db.Column(db.Numeric(14, 3), nullable=False, default=0)
    received_quantity = db.Column(db.Numeric(14, 3), nullable=False, default=0)
    unit_price = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    total_price = db.Column(db.Numeric(12, 2), nullable=False, default=0)

    grn = db.relationship('GoodsReceipt', back_populates='items')
    raw_material = db.relationship('RawMaterial')

    def to_dict(self):
        return {
            'id': self.id,
            'raw_material_id': self.raw_material_id,
            'name': self.raw_material.name if self.raw_material else None,
            'unit': self.raw_material.unit if self.raw_material else None,
            'expected_quantity': as_float(self.expected_quantity),
            'received_quantity': as_float(self.received_quantity),
            'unit_price': as_money(self.unit_price),
            'total_price': as_money(self.total_price),
        }


class Discrepancy(db.Model):
    """Mismatch between expected and received quantity on a GRN line."""
    __tablename__ = 'discrepancy'
    id = db.Column(db.Integer, primary_key=True)
    grn_id = db.Column(db.Integer, db.ForeignKey('grn.id', ondelete='CASCADE'), nullable=False, index=True)
    raw_material_id = db.Column(db.Integer, db.ForeignKey('raw_material.id'), nullable=False)
    expected_quantity = db.Column(db.Numeric(14, 3), nullable=False)
    received_quantity = db.Column(db.Numeric(14, 3), nullable=False)
    discrepancy_quantity = db.Column(db.Numeric(14, 3), nullable=False)
    discrepancy_type = db.Column(db.String(16), nullable=False, index=True)
    created_at = db.Column(db.DateTime(timezone=True), default=TimezoneUtils.utc_now)

    grn = db.relationship('GoodsReceipt', back_populates='discrepancies')
    raw_material = db.relationship('RawMaterial')

    def to_dict(self):
        grn = self.grn
        return {
            'id': self.id,
            'grn_id': self.grn_id,
            'grn_number': grn.grn_number if grn else None,
            'grn_date': iso(grn.grn_date) if grn else None,
            'vendor_name': grn.vendor.name if grn and grn.vendor else None,
            'raw_material_id': self.raw_material_id,
            'name': self.raw_material.name if self.raw_material else None,
            'unit': self.raw_material.unit if self.raw_material else None,
            'expected_quantity': as_float(self.expected_quantity),
            'received_quantity': as_float(self.received_quantity),
            'discrepancy_quantity': as_float(self.discrepancy_quantity),
            'discrepancy_type': self.discrepancy_type,
        }
