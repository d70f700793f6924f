"""Stock overview figures and the raw-material CSV export."""

import csv
import io
import logging
from decimal import Decimal
from typing import Any, Dict

from ..models import RawMaterial
from ..utils.serialization import as_float, round_half_up
from ..utils.timezone_utils import TimezoneUtils

logger = logging.getLogger(__name__)

CSV_HEADER = ('Name', 'Stock Quantity', 'Unit', 'Reorder Level', 'Status')


def _format_quantity(value) -> str:
    quantity = Decimal(str(value or 0))
    if quantity == quantity.to_integral_value():
        return str(quantity.quantize(Decimal(1)))
    return format(quantity.normalize(), 'f')


def stock_status(material: RawMaterial) -> str:
    return 'Low Stock' if material.is_low_stock else 'In Stock'


def stock_summary() -> Dict[str, Any]:
    materials = RawMaterial.query.order_by(RawMaterial.name.asc()).all()
    total = len(materials)
    low_stock = [material for material in materials if material.is_low_stock]
    in_stock_pct = round_half_up(Decimal((total - len(low_stock)) * 100) / total) if total else 0
    total_quantity = sum((Decimal(str(m.stock_quantity or 0)) for m in materials), Decimal('0'))

    return {
        'total_materials': total,
        'low_stock_count': len(low_stock),
        'in_stock_pct': in_stock_pct,
        'total_stock_quantity': as_float(total_quantity),
        'low_stock_items': [material.to_dict() for material in low_stock],
        'materials': [
            {**material.to_dict(), 'status': stock_status(material)}
            for material in materials
        ],
    }


def export_filename() -> str:
    return f"raw_materials_stock_{TimezoneUtils.business_today().isoformat()}.csv"


def write_stock_csv(stream) -> int:
    """Write the stock sheet to a text stream; returns the number of data rows."""
    writer = csv.writer(stream)
    writer.writerow(CSV_HEADER)
    count = 0
    for material in RawMaterial.query.order_by(RawMaterial.name.asc()).all():
        writer.writerow([
            material.name,
            _format_quantity(material.stock_quantity),
            material.unit,
            _format_quantity(material.reorder_level),
            stock_status(material),
        ])
        count += 1
    return count


def export_stock_csv() -> str:
    buffer = io.StringIO()
    rows = write_stock_csv(buffer)
    logger.info("Exported %s raw materials to CSV", rows)
    return buffer.getvalue()
