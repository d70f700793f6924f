import logging
from decimal import Decimal
from typing import Any, List, Mapping

from sqlalchemy import func

from ..models import db, GoodsReceiptItem, LossLog, ProductionLogMaterial, RawMaterial, RecipeIngredient
from ..utils import payload
from .cache_invalidation import invalidate_dashboard_cache
from .errors import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


class RawMaterialService:
    @staticmethod
    def list_materials() -> List[RawMaterial]:
        return RawMaterial.query.order_by(RawMaterial.name.asc()).all()

    @staticmethod
    def list_low_stock() -> List[RawMaterial]:
        return (
            RawMaterial.query
            .filter(RawMaterial.stock_quantity <= RawMaterial.reorder_level)
            .order_by(RawMaterial.name.asc())
            .all()
        )

    @staticmethod
    def get_material(material_id: int) -> RawMaterial:
        material = db.session.get(RawMaterial, material_id)
        if material is None:
            raise NotFoundError(f"Raw material {material_id} not found")
        return material

    @staticmethod
    def _ensure_unique_name(name: str, exclude_id: int = None) -> None:
        query = RawMaterial.query.filter(func.lower(RawMaterial.name) == name.lower())
        if exclude_id is not None:
            query = query.filter(RawMaterial.id != exclude_id)
        if query.first() is not None:
            raise ConflictError(f"A raw material named '{name}' already exists")

    @staticmethod
    def create_material(data: Mapping[str, Any]) -> RawMaterial:
        name = payload.text(data, 'name', required=True, max_length=128)
        unit = payload.text(data, 'unit', required=True, max_length=32)
        stock = payload.decimal(data, 'stock_quantity', default=0, minimum=Decimal('0'),
                                places=payload.QUANTITY_PLACES)
        reorder = payload.decimal(data, 'reorder_level', default=0, minimum=Decimal('0'),
                                  places=payload.QUANTITY_PLACES)
        RawMaterialService._ensure_unique_name(name)

        material = RawMaterial(name=name, unit=unit, stock_quantity=stock, reorder_level=reorder)
        db.session.add(material)
        db.session.commit()
        invalidate_dashboard_cache()
        logger.info("Created raw material %s (%s %s)", material.name, stock, unit)
        return material

    @staticmethod
    def update_material(material_id: int, data: Mapping[str, Any]) -> RawMaterial:
        material = RawMaterialService.get_material(material_id)
        name = payload.text(data, 'name', max_length=128)
        unit = payload.text(data, 'unit', max_length=32)
        stock = payload.decimal(data, 'stock_quantity', minimum=Decimal('0'),
                                places=payload.QUANTITY_PLACES)
        reorder = payload.decimal(data, 'reorder_level', minimum=Decimal('0'),
                                  places=payload.QUANTITY_PLACES)

        if name is not None and name != material.name:
            RawMaterialService._ensure_unique_name(name, exclude_id=material.id)
            material.name = name
        if unit is not None:
            material.unit = unit
        if stock is not None:
            material.stock_quantity = stock
        if reorder is not None:
            material.reorder_level = reorder

        db.session.commit()
        invalidate_dashboard_cache()
        logger.info("Updated raw material %s", material.id)
        return material

    @staticmethod
    def delete_material(material_id: int) -> None:
        material = RawMaterialService.get_material(material_id)
        references = (
            (RecipeIngredient, 'recipes'),
            (GoodsReceiptItem, 'goods receipts'),
            (LossLog, 'loss logs'),
            (ProductionLogMaterial, 'production logs'),
        )
        for model, label in references:
            if db.session.query(model.id).filter(model.raw_material_id == material.id).first():
                logger.warning("Refused to delete raw material %s: used in %s", material.id, label)
                raise ConflictError(f"Raw material '{material.name}' is used in {label} and cannot be deleted")

        db.session.delete(material)
        db.session.commit()
        invalidate_dashboard_cache()
        logger.info("Deleted raw material %s", material_id)
