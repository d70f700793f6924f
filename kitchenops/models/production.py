from decimal import Decimal

from ..extensions import db
from ..utils.serialization import as_float, as_money, iso, round_half_up
from ..utils.timezone_utils import TimezoneUtils


class ProductionLog(db.Model):
    """A completed production run and the labour it took."""
    __tablename__ = 'production_log'
    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey('product.id'), nullable=False, index=True)
    recipe_id = db.Column(db.Integer, db.ForeignKey('recipe.id', ondelete='SET NULL'), nullable=True, index=True)
    quantity = db.Column(db.Integer, nullable=False)
    time_spent_mins = db.Column(db.Integer, nullable=True)
    operator_notes = db.Column(db.Text, nullable=True)
    production_cost = db.Column(db.Numeric(12, 2), nullable=True)
    production_date = db.Column(db.Date, nullable=False, default=TimezoneUtils.business_today, index=True)
    created_at = db.Column(db.DateTime(timezone=True), default=TimezoneUtils.utc_now)

    product = db.relationship('Product')
    recipe = db.relationship('Recipe')
    materials = db.relationship(
        'ProductionLogMaterial',
        back_populates='production_log',
        cascade='all, delete-orphan',
        order_by='ProductionLogMaterial.id',
    )

    @property
    def efficiency_pct(self) -> int:
        """Planned recipe time as a percentage of the time actually spent."""
        if not self.recipe or not self.time_spent_mins:
            return 0
        return round_half_up(Decimal(self.recipe.time_required_mins * 100) / self.time_spent_mins)

    @property
    def units_per_hour(self):
        """Output rate to one decimal place; None when no time was recorded."""
        if not self.time_spent_mins:
            return None
        return round_half_up(Decimal(self.quantity * 60) / self.time_spent_mins, places=1)

    def to_dict(self):
        return {
            'id': self.id,
            'product_id': self.product_id,
            'product_name': self.product.name if self.product else None,
            'recipe_id': self.recipe_id,
            'quantity': self.quantity,
            'time_spent_mins': self.time_spent_mins,
            'operator_notes': self.operator_notes,
            'production_cost': as_money(self.production_cost),
            'production_date': iso(self.production_date),
            'efficiency_pct': self.efficiency_pct,
            'units_per_hour': as_float(self.units_per_hour),
            'materials': [material.to_dict() for material in self.materials],
            'created_at': iso(self.created_at),
        }


class ProductionLogMaterial(db.Model):
    __tablename__ = 'production_log_material'
    id = db.Column(db.Integer, primary_key=True)
    production_log_id = db.Column(
        db.Integer, db.ForeignKey('production_log.id', ondelete='CASCADE'), nullable=False, index=True
    )
    raw_material_id = db.Column(db.Integer, db.ForeignKey('raw_material.id'), nullable=False, index=True)
    quantity_used = db.Column(db.Numeric(14, 3), nullable=False)
    cost_per_unit = db.Column(db.Numeric(12, 2), nullable=True, default=0)
    created_at = db.Column(db.DateTime(timezone=True), default=TimezoneUtils.utc_now)

    production_log = db.relationship('ProductionLog', back_populates='materials')
    raw_material = db.relationship('RawMaterial')

    def to_dict(self):
        return {
            'raw_material_id': self.raw_material_id,
            'name': self.raw_material.name if self.raw_material else None,
            'unit': self.raw_material.unit if self.raw_material else None,
            'quantity_used': as_float(self.quantity_used),
            'cost_per_unit': as_money(self.cost_per_unit),
        }
