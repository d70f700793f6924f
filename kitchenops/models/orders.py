from ..extensions import db
from ..utils.serialization import as_money, iso
from ..utils.timezone_utils import TimezoneUtils

ORDER_STATUSES = ('pending', 'confirmed', 'in_production', 'completed', 'cancelled')


class Order(db.Model):
    __tablename__ = 'client_order'
    id = db.Column(db.Integer, primary_key=True)
    client_id = db.Column(db.Integer, db.ForeignKey('client.id'), nullable=False, index=True)
    order_date = db.Column(db.Date, nullable=False, default=TimezoneUtils.business_today)
    status = db.Column(db.String(32), nullable=False, default='pending', index=True)
    notes = db.Column(db.Text, nullable=True)
    total_amount = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    created_at = db.Column(db.DateTime(timezone=True), default=TimezoneUtils.utc_now)
    updated_at = db.Column(db.DateTime(timezone=True), default=TimezoneUtils.utc_now, onupdate=TimezoneUtils.utc_now)

    client = db.relationship('Client', back_populates='orders')
    items = db.relationship(
        'OrderItem',
        back_populates='order',
        cascade='all, delete-orphan',
        order_by='OrderItem.id',
    )

    def to_dict(self):
        return {
            'id': self.id,
            'client_id': self.client_id,
            'client_name': self.client.name if self.client else None,
            'order_date': iso(self.order_date),
            'status': self.status,
            'notes': self.notes,
            'total_amount': as_money(self.total_amount),
            'items': [item.to_dict() for item in self.items],
            'created_at': iso(self.created_at),
            'updated_at': iso(self.updated_at),
        }


class OrderItem(db.Model):
    __tablename__ = 'order_item'
    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey('client_order.id', ondelete='CASCADE'), nullable=False, index=True)
    product_id = db.Column(db.Integer, db.ForeignKey('product.id'), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    unit_price = db.Column(db.Numeric(12, 2), nullable=False)
    total_price = db.Column(db.Numeric(12, 2), nullable=False)

    order = db.relationship('Order', back_populates='items')
    product = db.relationship('Product')

    def to_dict(self):
        return {
            'id': self.id,
            'product_id': self.product_id,
            'product_name': self.product.name if self.product else None,
            'quantity': self.quantity,
            'unit_price': as_money(self.unit_price),
            'total_price': as_money(self.total_price),
        }
