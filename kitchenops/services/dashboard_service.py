import logging
from typing import Any, Dict

from flask import current_app
from sqlalchemy import func

from ..extensions import cache
from ..models import db, Product, ProductionLog, RawMaterial
from ..utils.timezone_utils import TimezoneUtils
from .cache_invalidation import dashboard_stats_cache_key

logger = logging.getLogger(__name__)


class DashboardService:
    @staticmethod
    def compute_stats() -> Dict[str, Any]:
        today = TimezoneUtils.business_today()
        today_production = (
            db.session.query(func.coalesce(func.sum(ProductionLog.quantity), 0))
            .filter(ProductionLog.production_date == today)
            .scalar()
        )
        low_stock = (
            db.session.query(func.count(RawMaterial.id))
            .filter(RawMaterial.stock_quantity <= RawMaterial.reorder_level)
            .scalar()
        )
        return {
            'total_products': db.session.query(func.count(Product.id)).scalar() or 0,
            'total_raw_materials': db.session.query(func.count(RawMaterial.id)).scalar() or 0,
            'today_production': int(today_production or 0),
            'low_stock_items': low_stock or 0,
            'as_of': today.isoformat(),
        }

    @staticmethod
    def get_stats() -> Dict[str, Any]:
        """Dashboard counters, served from cache for DASHBOARD_CACHE_TTL seconds."""
        cache_key = dashboard_stats_cache_key()
        try:
            cached = cache.get(cache_key)
        except Exception as e:
            logger.warning(f"Dashboard cache retrieval failed: {e}")
            cached = None
        if cached is not None:
            logger.debug("Dashboard cache hit")
            return cached

        stats = DashboardService.compute_stats()
        ttl = current_app.config.get('DASHBOARD_CACHE_TTL', 60)
        try:
            cache.set(cache_key, stats, timeout=ttl)
        except Exception as e:
            logger.warning(f"Failed to cache dashboard stats: {e}")
        return stats
