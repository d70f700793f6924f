import logging
from decimal import Decimal
from typing import Any, List, Mapping

from sqlalchemy.orm import selectinload

from ..models import db, Client, TransportDelivery, TransportLog, DELIVERY_STATUSES
from ..utils import payload
from ..utils.serialization import quantize_money
from .errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class TransportService:
    @staticmethod
    def list_runs() -> List[TransportLog]:
        return (
            TransportLog.query
            .options(selectinload(TransportLog.deliveries).selectinload(TransportDelivery.client))
            .order_by(TransportLog.transport_date.desc(), TransportLog.id.desc())
            .all()
        )

    @staticmethod
    def get_run(run_id: int) -> TransportLog:
        run = db.session.get(TransportLog, run_id)
        if run is None:
            raise NotFoundError(f"Transport log {run_id} not found")
        return run

    @staticmethod
    def _build_deliveries(data: Mapping[str, Any]) -> List[TransportDelivery]:
        deliveries = []
        seen = set()
        for entry in payload.item_list(data, 'clients'):
            client_id = payload.integer(entry, 'client_id', required=True, minimum=1)
            client = db.session.get(Client, client_id)
            if client is None:
                raise ValidationError.for_field('clients', f"Client {client_id} not found")
            if client_id in seen:
                raise ValidationError.for_field('clients', f"Client {client_id} is listed twice")
            seen.add(client_id)
            deliveries.append(
                TransportDelivery(
                    client_id=client_id,
                    delivery_address=payload.text(entry, 'delivery_address', default=client.address),
                    delivery_status=payload.choice(entry, 'delivery_status', DELIVERY_STATUSES, default='pending'),
                )
            )
        return deliveries

    @staticmethod
    def create_run(data: Mapping[str, Any]) -> TransportLog:
        run = TransportLog(
            vehicle_no=payload.text(data, 'vehicle_no', required=True, max_length=32),
            driver_name=payload.text(data, 'driver_name', max_length=128),
            cost=quantize_money(payload.decimal(data, 'cost', default=0, minimum=Decimal('0'))),
            notes=payload.text(data, 'notes'),
        )
        transport_date = payload.iso_date(data, 'transport_date')
        if transport_date is not None:
            run.transport_date = transport_date
        run.deliveries = TransportService._build_deliveries(data)

        db.session.add(run)
        db.session.commit()
        logger.info("Logged transport run %s (%s) with %s deliveries",
                    run.id, run.vehicle_no, len(run.deliveries))
        return run

    @staticmethod
    def update_delivery_status(run_id: int, delivery_id: int, status: str) -> TransportDelivery:
        delivery = db.session.get(TransportDelivery, delivery_id)
        if delivery is None or delivery.transport_log_id != run_id:
            raise NotFoundError(f"Delivery {delivery_id} not found on transport log {run_id}")
        new_status = payload.choice({'delivery_status': status}, 'delivery_status', DELIVERY_STATUSES)
        if new_status is None:
            raise ValidationError.for_field('delivery_status', 'delivery_status is required')
        delivery.delivery_status = new_status
        db.session.commit()
        logger.info("Delivery %s on run %s is now %s", delivery.id, run_id, new_status)
        return delivery

    @staticmethod
    def delete_run(run_id: int) -> None:
        run = TransportService.get_run(run_id)
        db.session.delete(run)
        db.session.commit()
        logger.info("Deleted transport log %s", run_id)
