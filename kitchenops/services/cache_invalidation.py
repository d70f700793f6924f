from __future__ import annotations

import logging

from flask import has_app_context

from ..extensions import cache

logger = logging.getLogger(__name__)

__all__ = [
    "dashboard_stats_cache_key",
    "invalidate_dashboard_cache",
]

_DASHBOARD_STATS_KEY = "dashboard:stats:v1"


def dashboard_stats_cache_key() -> str:
    return _DASHBOARD_STATS_KEY


def invalidate_dashboard_cache() -> None:
    if not has_app_context():
        return
    try:
        cache.delete(dashboard_stats_cache_key())
    except Exception as exc:
        # stale stats still expire on DASHBOARD_CACHE_TTL
        logger.warning("Dashboard cache invalidation failed: %s", exc)
