from ..extensions import db
from ..utils.serialization import as_money, iso
from ..utils.timezone_utils import TimezoneUtils

DELIVERY_STATUSES = ('pending', 'in_transit', 'completed', 'failed')


class TransportLog(db.Model):
    """A delivery run: one vehicle, one driver, several client drops."""
    __tablename__ = 'transport_log'
    id = db.Column(db.Integer, primary_key=True)
    vehicle_no = db.Column(db.String(32), nullable=False)
    driver_name = db.Column(db.String(128), nullable=True)
    cost = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    transport_date = db.Column(db.Date, nullable=False, default=TimezoneUtils.business_today, index=True)
    notes = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=TimezoneUtils.utc_now)

    deliveries = db.relationship(
        'TransportDelivery',
        back_populates='transport_log',
        cascade='all, delete-orphan',
        order_by='TransportDelivery.id',
    )

    def to_dict(self):
        return {
            'id': self.id,
            'vehicle_no': self.vehicle_no,
            'driver_name': self.driver_name,
            'cost': as_money(self.cost),
            'transport_date': iso(self.transport_date),
            'notes': self.notes,
            'clients': [delivery.to_dict() for delivery in self.deliveries],
            'created_at': iso(self.created_at),
        }


class TransportDelivery(db.Model):
    __tablename__ = 'transport_delivery'
    id = db.Column(db.Integer, primary_key=True)
    transport_log_id = db.Column(
        db.Integer, db.ForeignKey('transport_log.id', ondelete='CASCADE'), nullable=False, index=True
    )
    client_id = db.Column(db.Integer, db.ForeignKey('client.id'), nullable=False, index=True)
    delivery_address = db.Column(db.Text, nullable=True)
    delivery_status = db.Column(db.String(16), nullable=False, default='pending')

    __table_args__ = (
        db.UniqueConstraint('transport_log_id', 'client_id', name='_transport_client_uc'),
    )

    transport_log = db.relationship('TransportLog', back_populates='deliveries')
    client = db.relationship('Client')

    def to_dict(self):
        return {
            'id': self.id,
            'client_id': self.client_id,
            'client_name': self.client.name if self.client else None,
            'delivery_address': self.delivery_address,
            'delivery_status': self.delivery_status,
        }
