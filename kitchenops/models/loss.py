from ..extensions import db
from ..utils.serialization import as_float, as_money, iso
from ..utils.timezone_utils import TimezoneUtils


class LossLog(db.Model):
    """Spoilage or wastage of a raw material or finished product."""
    __tablename__ = 'loss_log'
    id = db.Column(db.Integer, primary_key=True)
    raw_material_id = db.Column(db.Integer, db.ForeignKey('raw_material.id'), nullable=True, index=True)
    product_id = db.Column(db.Integer, db.ForeignKey('product.id'), nullable=True, index=True)
    quantity_lost = db.Column(db.Numeric(14, 3), nullable=False)
    loss_reason = db.Column(db.Text, nullable=True)
    estimated_cost = db.Column(db.Numeric(12, 2), nullable=True, default=0)
    loss_date = db.Column(db.Date, nullable=False, default=TimezoneUtils.business_today)
    created_at = db.Column(db.DateTime(timezone=True), default=TimezoneUtils.utc_now)

    raw_material = db.relationship('RawMaterial')
    product = db.relationship('Product')

    def to_dict(self):
        return {
            'id': self.id,
            'raw_material_id': self.raw_material_id,
            'raw_material_name': self.raw_material.name if self.raw_material else None,
            'unit': self.raw_material.unit if self.raw_material else None,
            'product_id': self.product_id,
            'product_name': self.product.name if self.product else None,
            'quantity_lost': as_float(self.quantity_lost),
            'loss_reason': self.loss_reason,
            'estimated_cost': as_money(self.estimated_cost),
            'loss_date': iso(self.loss_date),
            'created_at': iso(self.created_at),
        }
