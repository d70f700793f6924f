import logging
from decimal import Decimal
from typing import Any, Dict, List, Mapping

from sqlalchemy import func

from ..models import db, Client, Order, TransportDelivery
from ..utils import payload
from ..utils.serialization import as_money
from .errors import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


class ClientService:
    @staticmethod
    def list_clients() -> List[Client]:
        return Client.query.order_by(Client.name.asc()).all()

    @staticmethod
    def get_client(client_id: int) -> Client:
        client = db.session.get(Client, client_id)
        if client is None:
            raise NotFoundError(f"Client {client_id} not found")
        return client

    @staticmethod
    def create_client(data: Mapping[str, Any]) -> Client:
        client = Client(
            name=payload.text(data, 'name', required=True, max_length=128),
            email=payload.text(data, 'email', max_length=255),
            phone=payload.text(data, 'phone', max_length=32),
            address=payload.text(data, 'address'),
        )
        db.session.add(client)
        db.session.commit()
        logger.info("Created client %s", client.id)
        return client

    @staticmethod
    def update_client(client_id: int, data: Mapping[str, Any]) -> Client:
        client = ClientService.get_client(client_id)
        name = payload.text(data, 'name', max_length=128)
        if name is not None:
            client.name = name
        for field, max_length in (('email', 255), ('phone', 32), ('address', None)):
            if field in data:
                setattr(client, field, payload.text(data, field, max_length=max_length))
        db.session.commit()
        logger.info("Updated client %s", client.id)
        return client

    @staticmethod
    def delete_client(client_id: int) -> None:
        client = ClientService.get_client(client_id)
        has_orders = db.session.query(Order.id).filter_by(client_id=client.id).first()
        has_deliveries = db.session.query(TransportDelivery.id).filter_by(client_id=client.id).first()
        if has_orders or has_deliveries:
            logger.warning("Refused to delete client %s: has orders or deliveries", client.id)
            raise ConflictError(f"Client '{client.name}' has orders or deliveries and cannot be deleted")
        db.session.delete(client)
        db.session.commit()
        logger.info("Deleted client %s", client_id)

    @staticmethod
    def client_stats() -> Dict[int, Dict[str, Any]]:
        """Order count and revenue per client id."""
        rows = (
            db.session.query(
                Order.client_id,
                func.count(Order.id),
                func.coalesce(func.sum(Order.total_amount), 0),
            )
            .group_by(Order.client_id)
            .all()
        )
        return {
            client_id: {'total_orders': count, 'total_revenue': as_money(Decimal(str(revenue)))}
            for client_id, count, revenue in rows
        }

    @staticmethod
    def serialize_with_stats(clients: List[Client]) -> List[Dict[str, Any]]:
        stats = ClientService.client_stats()
        empty = {'total_orders': 0, 'total_revenue': as_money(0)}
        return [{**client.to_dict(), **stats.get(client.id, empty)} for client in clients]
