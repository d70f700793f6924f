"""Extension singletons; create_app() binds them to the application."""

from __future__ import annotations

import re

from flask import current_app
from flask_caching import Cache
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from flask_wtf.csrf import CSRFProtect

__all__ = ["db", "migrate", "csrf", "cache", "limiter", "parse_rate_limits"]

DEFAULT_RATE_LIMITS = "5000 per hour;1000 per minute"
_LIMIT_SEPARATORS = re.compile(r"[;,|]")

db = SQLAlchemy()
# render_as_batch lets the same migrations ALTER tables on SQLite
migrate = Migrate(compare_type=True, render_as_batch=True)
csrf = CSRFProtect()
cache = Cache()


def parse_rate_limits(raw) -> list[str]:
    """Split a RATELIMIT_DEFAULT value written with ';', ',' or '|' separators."""
    if not isinstance(raw, str):
        return []
    return [part.strip() for part in _LIMIT_SEPARATORS.split(raw) if part.strip()]


def _default_rate_limits() -> str:
    limits = parse_rate_limits(current_app.config.get("RATELIMIT_DEFAULT"))
    return ";".join(limits) if limits else DEFAULT_RATE_LIMITS


limiter = Limiter(key_func=get_remote_address, default_limits=[_default_rate_limits])
