from decimal import Decimal

from ..extensions import db
from ..utils.serialization import as_float, iso, round_half_up
from ..utils.timezone_utils import TimezoneUtils


class RawMaterial(db.Model):
    """Ingredients and packaging consumed by production"""
    __tablename__ = 'raw_material'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), nullable=False, unique=True, index=True)
    unit = db.Column(db.String(32), nullable=False)
    stock_quantity = db.Column(db.Numeric(14, 3), nullable=False, default=0)
    reorder_level = db.Column(db.Numeric(14, 3), nullable=False, default=0)
    created_at = db.Column(db.DateTime(timezone=True), default=TimezoneUtils.utc_now)
    updated_at = db.Column(db.DateTime(timezone=True), default=TimezoneUtils.utc_now, onupdate=TimezoneUtils.utc_now)

    __table_args__ = (
        db.CheckConstraint('stock_quantity >= 0', name='ck_raw_material_stock_non_negative'),
        db.CheckConstraint('reorder_level >= 0', name='ck_raw_material_reorder_non_negative'),
    )

    @property
    def is_low_stock(self) -> bool:
        return Decimal(self.stock_quantity or 0) <= Decimal(self.reorder_level or 0)

    @property
    def stock_level_pct(self):
        """Stock as a percentage of the reorder level; None when no level is set."""
        reorder = Decimal(self.reorder_level or 0)
        if reorder <= 0:
            return None
        return round_half_up(Decimal(self.stock_quantity or 0) * 100 / reorder)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'unit': self.unit,
            'stock_quantity': as_float(self.stock_quantity),
            'reorder_level': as_float(self.reorder_level),
            'is_low_stock': self.is_low_stock,
            'stock_level_pct': self.stock_level_pct,
            'created_at': iso(self.created_at),
            'updated_at': iso(self.updated_at),
        }

    def __repr__(self):
        return f'<RawMaterial {self.name}>'
